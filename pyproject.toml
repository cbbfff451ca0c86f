[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ossim"
version = "0.1.0"
description = "Simulators for classic operating-system algorithms: CPU and disk scheduling, page replacement, memory placement, buddy allocation, the banker's algorithm, synchronisation problems and two small card-driven machines."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating systems",
    "cpu scheduling",
    "disk scheduling",
    "page replacement",
    "memory allocation",
    "buddy system",
    "bankers algorithm",
    "synchronization",
    "simulation",
    "education",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Operating System",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ossim-schedule = "ossim.scheduling:main"
ossim-disk = "ossim.disk:main"
ossim-pages = "ossim.replacement:main"
ossim-placement = "ossim.placement:main"
ossim-buddy = "ossim.buddy:main"
ossim-banker = "ossim.banker:main"
ossim-sync = "ossim.concurrency:main"
ossim-phase1 = "ossim.phase1:main"
ossim-phase2 = "ossim.phase2:main"

[tool.hatch.build.targets.wheel]
packages = ["ossim"]

[tool.hatch.build.targets.sdist]
include = ["ossim", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true

"""A paged card-driven machine with time and line limits and error reporting."""

from __future__ import annotations

import argparse
import random
import sys
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Sequence

_WORDS = 300
_FRAMES = 30
_DIGITS = "0123456789"
_VALID = {"GD", "PD", "H ", "LR", "SR", "CR", "BT"}


class ErrorCode(IntEnum):
    """Termination reasons reported for a job."""

    NO_ERROR = 0
    OUT_OF_DATA = 1
    LINE_LIMIT_EXCEEDED = 2
    TIME_LIMIT_EXCEEDED = 3
    OPERATION_CODE_ERROR = 4
    OPERAND_ERROR = 5
    INVALID_PAGE_FAULT = 6

    @property
    def message(self) -> str:
        return "No Error" if self is ErrorCode.NO_ERROR else self.name.replace("_", " ")


@dataclass
class Job:
    """A job card deck: id, limits, program cards and data cards."""

    job_id: str
    time_limit: int
    line_limit: int
    program: list[str] = field(default_factory=list)
    data: list[str] = field(default_factory=list)


@dataclass
class JobResult:
    """What a job reported and printed."""

    job_id: str
    codes: list[int]
    lines: list[str]
    time_count: int
    line_count: int


class _Halt(Exception):
    pass


def _limit(text: str) -> int:
    if len(text) != 4 or any(ch not in _DIGITS for ch in text):
        raise ValueError(f"invalid limit field {text!r}")
    return int(text)


def parse_jobs(lines: Iterable[str]) -> list[Job]:
    """Split a deck into jobs ($AMJ header, program, $DTA, data, $END)."""
    jobs: list[Job] = []
    job: Job | None = None
    in_data = False
    for raw in lines:
        line = raw.rstrip("\n")
        if line.startswith("$AMJ"):
            if job is not None and not in_data:
                raise ValueError(f"job {job.job_id} has no $DTA card")
            job = Job(line[4:8], _limit(line[8:12]), _limit(line[12:16]))
            jobs.append(job)
            in_data = False
        elif job is None:
            continue
        elif line.startswith("$DTA"):
            in_data = True
        elif line.startswith("$END"):
            job = None
        elif in_data:
            job.data.append(line)
        else:
            job.program.append(line)
    if job is not None and not in_data:
        raise ValueError(f"job {job.job_id} has no $DTA card")
    return jobs


class PagedMachine:
    """300 words of memory in 30 frames, allocated at random per job."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)
        self.output = ""
        self._printed = False

    def _reset(self, job: Job) -> None:
        self.mem = [[" "] * 4 for _ in range(_WORDS)]
        self.ir = [" "] * 4
        self.reg = [" "] * 4
        self.ic = 0
        self.si = self.pi = self.ti = 0
        self.toggle = 0
        self.ttc = self.llc = 0
        self.job = job
        self._frames: set[int] = set()
        self._pages: dict[int, int] = {}
        self._page_count = 0
        self._count = 0
        self._data = iter(job.data)
        self._codes: list[int] = []
        self._lines: list[str] = []
        self._terminated = False

    def _allocate(self) -> int:
        free = [f for f in range(_FRAMES) if f not in self._frames]
        if not free:
            raise RuntimeError("no free memory frames")
        while True:
            frame = self._rng.randrange(_FRAMES)
            if frame not in self._frames:
                self._frames.add(frame)
                return frame

    def _add_page(self, frame: int) -> None:
        entry = self.mem[self.ptr + self._page_count]
        entry[0], entry[2], entry[3] = "1", str(frame // 10), str(frame % 10)
        self._page_count += 1

    def _put(self, index: int, col: int, ch: str) -> None:
        if 0 <= index < _WORDS:
            self.mem[index][col] = ch

    def _error(self, code: int) -> None:
        self._terminated = True
        self._codes.append(ErrorCode(code) if code in ErrorCode._value2member_map_ else code)
        parts = [f"\nJob ID:{self.job.job_id}\n"]
        if code in ErrorCode._value2member_map_:
            parts.append(f"  {ErrorCode(code).message}\n")
        parts.append(
            f"\nPI : {self.pi}\nTI : {self.ti}\nIC : {self.ic}\nIR : {''.join(self.ir)}\n"
            f"TTC : {self.ttc}\nTTL : {self.job.time_limit}\n"
            f"LLC : {self.llc}\nTLL : {self.job.line_limit}\n\n"
        )
        self.output += "".join(parts)

    def _operand(self) -> int | None:
        if self.ir[2] in _DIGITS and self.ir[3] in _DIGITS:
            return int(self.ir[2] + self.ir[3])
        return None

    def _interrupt(self) -> int | None:
        op = "".join(self.ir[:2])
        if self.ti == 0:
            if self.pi == 1:
                self._error(4)
            elif self.pi == 2:
                self._error(5)
            elif self.pi == 3:
                if op in ("GD", "SR"):
                    frame = self._allocate()
                    self._pages[int(self.ir[2] + self.ir[3])] = frame
                    self._add_page(frame)
                    self.pi = 0
                    return frame * 10
                self._error(6)
        elif self.ti == 2:
            if self.pi == 1:
                self._error(7)
            elif self.pi == 2:
                self._error(8)
            elif self.pi == 3:
                self._error(3)
        return None

    def _map(self) -> int | None:
        if "".join(self.ir) == "H   " or "".join(self.ir[:2]) == "BT":
            return None
        address = self._operand()
        if address is None:
            self.pi = 2
            self._interrupt()
            return None
        for key, frame in self._pages.items():
            if key == address // 10 * 10:
                return frame * 10 + address % 10
        self.pi = 3
        return self._interrupt()

    def _address_map(self) -> int:
        if self.ic % 10 == 0 and self.ic != 0:
            self._count += 1
        index = self.ptr + self._count
        if not 0 <= self.ic or index >= _WORDS:
            raise RuntimeError("instruction address outside the page table")
        entry = self.mem[index]
        if entry[2] not in _DIGITS or entry[3] not in _DIGITS:
            raise RuntimeError(f"instruction page {self._count} is not loaded")
        return int(entry[2] + entry[3]) * 10 + self.ic % 10

    def _load(self) -> None:
        self.ptr = self._allocate() * 10
        for i in range(self.ptr, self.ptr + 10):
            self.mem[i][0], self.mem[i][2], self.mem[i][3] = "0", "*", "*"
        for card in self.job.program:
            frame = self._allocate()
            self._add_page(frame)
            for col, ch in enumerate(card):
                if ch == " ":
                    break
                self._put(frame * 10 + col // 4, col % 4, ch)

    def run_job(self, job: Job) -> JobResult:
        """Load and run one job; its reports are appended to ``output``."""
        self._reset(job)
        self._load()
        while True:
            ra = self._address_map()
            self.ir = list(self.mem[ra])
            self.ic += 1
            op = "".join(self.ir[:2])
            self.ttc += 2 if op in ("GD", "SR") else 1
            if self.ttc > job.time_limit:
                self.ti = 2
                self._error(3)
            self._map()
            if self._terminated:
                break
            if op not in _VALID:
                self.pi = 1
                self._interrupt()
                break
            if op == "GD":
                self.si = 1
                self._gd()
            elif op == "PD":
                self.si = 2
                self._pd()
            elif op == "H ":
                self.si = 3
                self._error(0)
            elif op == "LR":
                row = self._map()
                if row is not None:
                    self.reg = list(self.mem[row])
            elif op == "SR":
                row = self._map()
                if row is not None:
                    self.mem[row] = list(self.reg)
            elif op == "CR":
                row = self._map()
                if row is not None:
                    self.toggle = 1 if self.mem[row] == self.reg else 0
            elif op == "BT" and self.toggle == 1:
                target = self._operand()
                if target is None:
                    raise RuntimeError("branch target is not a number")
                self.ic = target
                self.toggle = 0
            if self._terminated:
                break
        return JobResult(job.job_id, self._codes, self._lines, self.ttc, self.llc)

    def _gd(self) -> None:
        row = self._map()
        if row is None:
            return
        card = next(self._data, None)
        if card is None:
            self._error(1)
            return
        for i, ch in enumerate(card[:40]):
            self._put(row + i // 4, i % 4, ch)
        self.si = 0

    def _pd(self) -> None:
        self.llc += 1
        if self.llc > self.job.line_limit:
            self._error(2)
            return
        if self._printed:
            self.output += "\n"
        self._printed = True
        row = self._map()
        if row is None:
            return
        line = "".join("".join(word) for word in self.mem[row : row + 10])
        self.output += line
        self._lines.append(line)
        self.si = 0


def run(lines: Iterable[str], seed: int | None = None) -> str:
    """Run every job in a deck and return the combined output."""
    machine = PagedMachine(seed)
    for job in parse_jobs(lines):
        machine.run_job(job)
    return machine.output


def main(argv: Sequence[str] | None = None) -> int:
    """Run the jobs of an input deck, appending results to the output file."""
    parser = argparse.ArgumentParser(prog="ossim-phase2", description="Run a paged deck.")
    parser.add_argument("input", nargs="?", default="input2.txt")
    parser.add_argument("output", nargs="?", default="output2.txt")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    try:
        with open(args.input, encoding="utf-8") as deck:
            text = run(deck, args.seed)
    except OSError:
        print("not found!!")
        return 1
    except (RuntimeError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    with open(args.output, "a", encoding="utf-8") as out:
        out.write(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
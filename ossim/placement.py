"""Contiguous memory placement: first, next, best and worst fit."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Sequence

_Chooser = Callable[[list[int], int], "int | None"]


class Strategy(Enum):
    """A block placement strategy."""

    FIRST = "first"
    NEXT = "next"
    BEST = "best"
    WORST = "worst"

    @property
    def label(self) -> str:
        return f"{self.name.title()} Fit"


@dataclass(frozen=True)
class PlacementStep:
    """Placement of one process; ``block`` is a zero-based index or None."""

    process: int
    size: int
    block: int | None
    blocks: tuple[int, ...]

    @property
    def allocated(self) -> bool:
        return self.block is not None


@dataclass
class PlacementResult:
    """The steps of a placement run and the free space left in each block."""

    strategy: Strategy
    steps: list[PlacementStep]
    blocks: list[int]

    @property
    def allocation(self) -> list[int | None]:
        return [step.block for step in self.steps]

    @property
    def external_fragmentation(self) -> int:
        """Total free space left over in all blocks."""
        return sum(self.blocks)


def _run(
    strategy: Strategy,
    blocks: Iterable[int],
    processes: Iterable[int],
    choose: _Chooser,
) -> PlacementResult:
    free = list(blocks)
    steps = []
    for index, size in enumerate(processes):
        chosen = choose(free, size)
        if chosen is not None:
            free[chosen] -= size
        steps.append(PlacementStep(index, size, chosen, tuple(free)))
    return PlacementResult(strategy, steps, free)


def _eligible(free: list[int], size: int) -> list[int]:
    return [j for j, space in enumerate(free) if space >= size]


def first_fit(blocks: Iterable[int], processes: Iterable[int]) -> PlacementResult:
    """Place each process in the first block large enough for it."""

    def choose(free: list[int], size: int) -> int | None:
        return next(iter(_eligible(free, size)), None)

    return _run(Strategy.FIRST, blocks, processes, choose)


def next_fit(blocks: Iterable[int], processes: Iterable[int]) -> PlacementResult:
    """Like first fit, but each search starts at the block used last."""
    last = 0

    def choose(free: list[int], size: int) -> int | None:
        nonlocal last
        count = len(free)
        for offset in range(count):
            j = (last + offset) % count
            if free[j] >= size:
                last = j
                return j
        return None

    return _run(Strategy.NEXT, blocks, processes, choose)


def best_fit(blocks: Iterable[int], processes: Iterable[int]) -> PlacementResult:
    """Place each process in the smallest block large enough (first on ties)."""

    def choose(free: list[int], size: int) -> int | None:
        eligible = _eligible(free, size)
        return min(eligible, key=free.__getitem__) if eligible else None

    return _run(Strategy.BEST, blocks, processes, choose)


def worst_fit(blocks: Iterable[int], processes: Iterable[int]) -> PlacementResult:
    """Place each process in the largest block large enough (first on ties)."""

    def choose(free: list[int], size: int) -> int | None:
        eligible = _eligible(free, size)
        return max(eligible, key=free.__getitem__) if eligible else None

    return _run(Strategy.WORST, blocks, processes, choose)


_STRATEGIES: dict[Strategy, Callable[[Iterable[int], Iterable[int]], PlacementResult]] = {
    Strategy.FIRST: first_fit,
    Strategy.NEXT: next_fit,
    Strategy.BEST: best_fit,
    Strategy.WORST: worst_fit,
}


def place(
    strategy: Strategy | str, blocks: Iterable[int], processes: Iterable[int]
) -> PlacementResult:
    """Run the given strategy."""
    return _STRATEGIES[Strategy(strategy)](blocks, processes)


def _print_result(result: PlacementResult) -> None:
    print(f"\n--- {result.strategy.label} Allocation ---")
    for step in result.steps:
        prefix = f"\nAllocating process {step.process + 1} of size {step.size}: "
        if step.block is not None:
            print(f"{prefix}Allocated to block {step.block + 1}")
        else:
            print(f"{prefix}Not allocated (external fragmentation may occur)")
        print("Current Block Sizes: " + "".join(f"{b} " for b in step.blocks))
    print(
        f"External Fragmentation after {result.strategy.label}: "
        f"{result.external_fragmentation}"
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Read blocks and processes from standard input and compare all strategies."""
    parser = argparse.ArgumentParser(
        prog="ossim-placement",
        description="Compare placement strategies. Input: block count, block sizes, "
        "process count, process sizes.",
    )
    parser.parse_args(argv)

    tokens = iter(sys.stdin.read().split())
    try:
        block_count = int(next(tokens))
        blocks = [int(next(tokens)) for _ in range(block_count)]
        process_count = int(next(tokens))
        processes = [int(next(tokens)) for _ in range(process_count)]
    except StopIteration:
        print("error: not enough input", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for strategy in (Strategy.FIRST, Strategy.BEST, Strategy.NEXT, Strategy.WORST):
        _print_result(place(strategy, blocks, processes))
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""Banker's algorithm safety check."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Sequence

Matrix = Sequence[Sequence[int]]
TraceEntry = tuple[int, bool, tuple[int, ...], tuple[int, ...]]


class UnsafeStateError(Exception):
    """No safe sequence exists; carries the progress made before getting stuck."""

    def __init__(self, sequence: list[int], trace: list[TraceEntry]) -> None:
        super().__init__("System is in an UNSAFE state! No safe sequence possible.")
        self.sequence = sequence
        self.trace = trace


@dataclass
class SafetyResult:
    """A safe sequence, the need matrix and the resources available at the end.

    Each trace entry is (process, granted, available before, available after).
    """

    sequence: list[int]
    need: list[list[int]]
    available: list[int]
    trace: list[TraceEntry]


def need_matrix(allocation: Matrix, maximum: Matrix) -> list[list[int]]:
    """Maximum demand minus current allocation, per process and resource."""
    if len(allocation) != len(maximum):
        raise ValueError("allocation and maximum must have the same number of processes")
    need = []
    for held, demand in zip(allocation, maximum):
        if len(held) != len(demand):
            raise ValueError("allocation and maximum rows must have the same length")
        need.append([d - h for h, d in zip(held, demand)])
    widths = {len(row) for row in need}
    if len(widths) > 1:
        raise ValueError("all rows must have the same number of resource types")
    return need


def safe_sequence(
    allocation: Matrix, maximum: Matrix, available: Sequence[int]
) -> SafetyResult:
    """Find a safe sequence, scanning processes in order and repeating passes."""
    need = need_matrix(allocation, maximum)
    avail = list(available)
    if need and len(need[0]) != len(avail):
        raise ValueError("available must list one amount per resource type")

    finished = [False] * len(need)
    sequence: list[int] = []
    trace: list[TraceEntry] = []
    while len(sequence) < len(need):
        found = False
        for process, row in enumerate(need):
            if finished[process]:
                continue
            before = tuple(avail)
            if all(n <= a for n, a in zip(row, avail)):
                avail = [a + held for a, held in zip(avail, allocation[process])]
                finished[process] = True
                sequence.append(process)
                found = True
                trace.append((process, True, before, tuple(avail)))
            else:
                trace.append((process, False, before, before))
        if not found:
            raise UnsafeStateError(sequence, trace)
    return SafetyResult(sequence, need, avail, trace)


def _print_trace(trace: list[TraceEntry]) -> None:
    for process, granted, before, after in trace:
        print(f"\nChecking if Process {process} can be allocated: ", end="")
        if granted:
            print(f"Yes\nAllocating resources to Process {process}.")
            print("Available before execution: " + "".join(f"{a} " for a in before))
            print(f"Process {process} has completed.")
            print("Updated Available Resources: " + "".join(f"{a} " for a in after))
        else:
            print("No (Not enough resources available)")


def main(argv: Sequence[str] | None = None) -> int:
    """Read a resource state from standard input and check it for safety."""
    parser = argparse.ArgumentParser(
        prog="ossim-banker",
        description="Banker's algorithm. Input: process count, resource count, "
        "allocation matrix, maximum matrix, available resources.",
    )
    parser.parse_args(argv)

    tokens = iter(sys.stdin.read().split())
    try:
        processes = int(next(tokens))
        resources = int(next(tokens))
        allocation = [
            [int(next(tokens)) for _ in range(resources)] for _ in range(processes)
        ]
        maximum = [
            [int(next(tokens)) for _ in range(resources)] for _ in range(processes)
        ]
        available = [int(next(tokens)) for _ in range(resources)]
        need = need_matrix(allocation, maximum)
    except StopIteration:
        print("error: not enough input", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print("Banker's Algorithm\n\nCalculated Need Matrix:")
    for process, row in enumerate(need):
        print(f"Need for Process {process}: " + "".join(f"{n} " for n in row))
    print("\n=== Step-by-Step Safe Sequence Check ===")

    try:
        result = safe_sequence(allocation, maximum, available)
    except UnsafeStateError as exc:
        _print_trace(exc.trace)
        print(f"\n{exc}")
        return 1

    _print_trace(result.trace)
    print("\nSystem is in a SAFE state.")
    print("Safe Sequence: " + " -> ".join(f"P{p}" for p in result.sequence))
    return 0


if __name__ == "__main__":
    sys.exit(main())
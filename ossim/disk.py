"""Disk head scheduling: FCFS, SSTF, SCAN and C-SCAN."""

from __future__ import annotations

import argparse
import sys
from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Sequence


class Direction(IntEnum):
    """Initial direction of head movement for SCAN."""

    LEFT = 0
    RIGHT = 1


@dataclass(frozen=True)
class SeekStep:
    """One head movement from ``start`` to ``end``."""

    start: int
    end: int

    @property
    def distance(self) -> int:
        return abs(self.end - self.start)


@dataclass
class SeekResult:
    """The head movements made while serving ``request_count`` requests."""

    steps: list[SeekStep]
    request_count: int

    def total_distance(self) -> int:
        return sum(step.distance for step in self.steps)


def _walk(head: int, targets: Iterable[int]) -> list[SeekStep]:
    steps = []
    for target in targets:
        steps.append(SeekStep(head, target))
        head = target
    return steps


def _check_range(requests: Sequence[int], head: int, disk_size: int) -> None:
    for track in requests:
        if not 0 <= track < disk_size:
            raise ValueError(
                f"Invalid request: {track}. Must be between 0 and {disk_size - 1}."
            )
    if not 0 <= head < disk_size:
        raise ValueError(f"Invalid head position. Must be between 0 and {disk_size - 1}.")


def fcfs_seek(requests: Iterable[int], head: int, disk_size: int) -> SeekResult:
    """Serve requests in the order given."""
    tracks = list(requests)
    _check_range(tracks, head, disk_size)
    return SeekResult(_walk(head, tracks), len(tracks))


def sstf_seek(requests: Iterable[int], head: int) -> SeekResult:
    """Always serve the closest pending request; ties go to the earliest given."""
    pending = list(requests)
    count = len(pending)
    order = []
    position = head
    while pending:
        closest = min(pending, key=lambda track: abs(track - position))
        pending.remove(closest)
        order.append(closest)
        position = closest
    return SeekResult(_walk(head, order), count)


def scan_seek(
    requests: Iterable[int], head: int, disk_size: int, direction: Direction | int
) -> SeekResult:
    """Elevator algorithm: sweep to the end of the disk, then reverse."""
    tracks = sorted(requests)
    _check_range(tracks, head, disk_size)
    try:
        direction = Direction(direction)
    except ValueError:
        raise ValueError("Invalid direction. Enter 1 for right or 0 for left.") from None

    if direction is Direction.RIGHT:
        split = bisect_left(tracks, head)
        first, second = tracks[split:], tracks[:split][::-1]
        edge = disk_size - 1
    else:
        split = bisect_right(tracks, head)
        first, second = tracks[:split][::-1], tracks[split:]
        edge = 0

    position = first[-1] if first else head
    targets = first + ([edge] if position != edge else []) + second
    return SeekResult(_walk(head, targets), len(tracks))


def cscan_seek(requests: Iterable[int], head: int, disk_size: int) -> SeekResult:
    """Serve requests upward from the head, jump to track 0, then continue upward."""
    tracks = list(requests)
    _check_range(tracks, head, disk_size)
    greater = sorted(t for t in tracks if t >= head)
    lesser = sorted(t for t in tracks if t < head)
    targets = greater + ([0] if tracks else []) + lesser
    return SeekResult(_walk(head, targets), len(tracks))


def _average(total: float, count: int) -> float:
    return total / count if count else float("nan")


def _print_steps(label: str, result: SeekResult) -> None:
    print(f"\nSeek Sequence ({label}):")
    print("Step\tFrom\tTo\tSeek Distance")
    for number, step in enumerate(result.steps, 1):
        print(f"{number}\t{step.start}\t{step.end}\t{step.distance}")


def main(argv: Sequence[str] | None = None) -> int:
    """Read a disk request workload from standard input and print the seek sequence."""
    parser = argparse.ArgumentParser(
        prog="ossim-disk",
        description="Simulate disk scheduling. Input: disk size, request count, "
        "requests, head position, latency per track (sstf: seek time per track and "
        "rotational latency per access; scan: then direction 1 or 0).",
    )
    parser.add_argument("algorithm", choices=["fcfs", "sstf", "scan", "cscan"])
    args = parser.parse_args(argv)

    tokens = iter(sys.stdin.read().split())
    try:
        disk_size = int(next(tokens))
        count = int(next(tokens))
        requests = [int(next(tokens)) for _ in range(count)]
        head = int(next(tokens))
        if args.algorithm == "sstf":
            per_track = float(next(tokens))
            per_access = float(next(tokens))
            result = sstf_seek(requests, head)
        else:
            per_track = float(next(tokens))
            if args.algorithm == "fcfs":
                result = fcfs_seek(requests, head, disk_size)
            elif args.algorithm == "scan":
                result = scan_seek(requests, head, disk_size, int(next(tokens)))
            else:
                result = cscan_seek(requests, head, disk_size)
    except StopIteration:
        print("error: not enough input", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(exc)
        return 1

    if args.algorithm == "sstf":
        print("\nSeek Sequence (SSTF):")
        print("Step\tFrom\tTo\tTracks Moved\tSeek Time (ms)")
        total_time = 0.0
        for number, step in enumerate(result.steps, 1):
            seek_time = step.distance * per_track + per_access
            total_time += seek_time
            print(f"{number}\t{step.start}\t{step.end}\t{step.distance}\t\t{seek_time:.2f}")
        print(f"\nTotal Seek Time: {total_time:.2f} ms")
        print(
            "Average Seek Time per request: "
            f"{_average(total_time, len(result.steps)):.2f} ms"
        )
        return 0

    label = {"fcfs": "FCFS", "scan": "SCAN", "cscan": "C-SCAN"}[args.algorithm]
    _print_steps(label, result)
    total = result.total_distance()
    total_time = total * per_track
    if args.algorithm == "cscan":
        print(f"\nTotal Seek Distance (tracks moved): {total}")
    else:
        print(f"\nTotal Tracks Moved (Seek Distance): {total}")
    print(f"Total Seek Time: {total_time:.2f} ms")
    print(f"Average Seek Time: {_average(total_time, result.request_count):.2f} ms")
    return 0


if __name__ == "__main__":
    sys.exit(main())
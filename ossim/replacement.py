"""Page replacement algorithms: FIFO, LRU and optimal."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Iterable, Sequence


@dataclass(frozen=True)
class FrameStep:
    """One page reference and the frame contents after it; None is an empty frame."""

    page: int
    hit: bool
    frames: tuple[int | None, ...]


@dataclass
class ReplacementResult:
    """The frame history of a page replacement run."""

    steps: list[FrameStep]

    def faults(self) -> int:
        return sum(not step.hit for step in self.steps)

    def hits(self) -> int:
        return sum(step.hit for step in self.steps)

    def fault_rate(self) -> float:
        return self.faults() / len(self.steps) if self.steps else float("nan")

    def hit_rate(self) -> float:
        return self.hits() / len(self.steps) if self.steps else float("nan")


def page_numbers(addresses: Iterable[int], page_size: int) -> list[int]:
    """Map logical addresses to page numbers (division truncates toward zero)."""
    if page_size <= 0:
        raise ValueError("page size must be positive")
    result = []
    for address in addresses:
        quotient = abs(address) // page_size
        result.append(quotient if address >= 0 else -quotient)
    return result


def _check_frames(frame_count: int) -> None:
    if frame_count < 1:
        raise ValueError("at least one frame is required")


def fifo_replacement(pages: Iterable[int], frame_count: int) -> ReplacementResult:
    """Replace the page that was loaded earliest."""
    _check_frames(frame_count)
    frames: list[int | None] = [None] * frame_count
    oldest = 0
    steps = []
    for page in pages:
        hit = page in frames
        if not hit:
            frames[oldest] = page
            oldest = (oldest + 1) % frame_count
        steps.append(FrameStep(page, hit, tuple(frames)))
    return ReplacementResult(steps)


def lru_replacement(pages: Iterable[int], frame_count: int) -> ReplacementResult:
    """Replace the page used least recently; empty frames are filled first."""
    _check_frames(frame_count)
    frames: list[int | None] = [None] * frame_count
    last_used = [-1] * frame_count
    steps = []
    for moment, page in enumerate(pages):
        hit = page in frames
        if hit:
            last_used[frames.index(page)] = moment
        else:
            victim = min(range(frame_count), key=last_used.__getitem__)
            frames[victim] = page
            last_used[victim] = moment
        steps.append(FrameStep(page, hit, tuple(frames)))
    return ReplacementResult(steps)


def _optimal_victim(frames: list[int | None], pages: list[int], start: int) -> int:
    farthest = start
    choice = None
    for slot, page in enumerate(frames):
        try:
            next_use = pages.index(page, start)
        except ValueError:
            return slot
        if next_use > farthest:
            farthest, choice = next_use, slot
    return 0 if choice is None else choice


def optimal_replacement(pages: Iterable[int], frame_count: int) -> ReplacementResult:
    """Replace the page whose next use lies farthest ahead (or never comes)."""
    _check_frames(frame_count)
    reference = list(pages)
    frames: list[int | None] = [None] * frame_count
    steps = []
    for moment, page in enumerate(reference):
        hit = page in frames
        if not hit:
            if None in frames:
                slot = frames.index(None)
            else:
                slot = _optimal_victim(frames, reference, moment + 1)
            frames[slot] = page
        steps.append(FrameStep(page, hit, tuple(frames)))
    return ReplacementResult(steps)


_ALGORITHMS = {
    "fifo": (fifo_replacement, "-"),
    "lru": (lru_replacement, "-"),
    "optimal": (optimal_replacement, "X"),
}


def _render_frames(frames: tuple[int | None, ...], empty: str) -> str:
    return " ".join(empty if f is None else str(f) for f in frames)


def main(argv: Sequence[str] | None = None) -> int:
    """Read logical addresses from standard input and simulate page replacement."""
    parser = argparse.ArgumentParser(
        prog="ossim-pages",
        description="Simulate page replacement. Input: address count, addresses, "
        "page size, frame count.",
    )
    parser.add_argument("algorithm", choices=list(_ALGORITHMS))
    args = parser.parse_args(argv)

    tokens = iter(sys.stdin.read().split())
    try:
        count = int(next(tokens))
        addresses = [int(next(tokens)) for _ in range(count)]
        page_size = int(next(tokens))
        frame_count = int(next(tokens))
        pages = page_numbers(addresses, page_size)
        algorithm, empty = _ALGORITHMS[args.algorithm]
        result = algorithm(pages, frame_count)
    except StopIteration:
        print("error: not enough input", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print("\nLogical Address Breakdown:")
    for address, page in zip(addresses, pages):
        offset = address - page * page_size
        print(f"Logical Addr: {address} => Page: {page}, Offset: {offset}")

    print(f"\nPage Frame Status ({args.algorithm.upper()}):")
    for step in result.steps:
        label = "Page Hit:   " if step.hit else "Page Fault: "
        print(f"{label}| Page: {step.page} | Frames: {_render_frames(step.frames, empty)}")

    print("\n--- Summary ---")
    print(f"Total Logical Addresses: {count}")
    print(f"Total Page Faults: {result.faults()}")
    print(f"Total Page Hits: {result.hits()}")
    print(f"Page Fault Rate: {result.fault_rate():.2f}")
    print(f"Page Hit Rate: {result.hit_rate():.2f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
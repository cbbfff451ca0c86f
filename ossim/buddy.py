"""Buddy system memory allocator."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, TextIO

MIN_BLOCK_SIZE = 8


class BuddyError(Exception):
    """An allocation or deallocation could not be carried out."""


def next_power_of_two(n: int) -> int:
    """The smallest power of two that is at least ``n`` and at least 8."""
    power = MIN_BLOCK_SIZE
    while power < n:
        power *= 2
    return power


@dataclass(eq=False)
class BuddyBlock:
    """A node of the buddy tree. A leaf is used when it has an owner."""

    size: int
    start: int
    owner: str | None = None
    left: BuddyBlock | None = None
    right: BuddyBlock | None = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    @property
    def is_free(self) -> bool:
        return self.owner is None

    def split(self) -> None:
        half = self.size // 2
        self.left = BuddyBlock(half, self.start)
        self.right = BuddyBlock(half, self.start + half)

    def lines(self, level: int = 0) -> Iterator[str]:
        indent = "  " * level
        if self.is_leaf:
            state = "Free ()" if self.is_free else f"Used ({self.owner})"
        else:
            state = "Split"
        yield f"{indent}|-- [{self.size} bytes] at {self.start} => {state}"
        for child in (self.left, self.right):
            if child is not None:
                yield from child.lines(level + 1)


class BuddyAllocator:
    """Allocates power-of-two blocks out of a memory of ``total`` bytes."""

    def __init__(self, total: int) -> None:
        if total < MIN_BLOCK_SIZE or total & (total - 1):
            raise ValueError(
                f"Memory size must be a power of 2 and >= {MIN_BLOCK_SIZE}"
            )
        self.total = total
        self.root = BuddyBlock(total, 0)

    def allocate(self, name: str, size: int) -> int:
        """Give ``name`` a block of at least ``size`` bytes; return its address."""
        if not name:
            raise ValueError("process name must not be empty")
        if size < MIN_BLOCK_SIZE or size > self.total:
            raise ValueError(
                f"Invalid size. Must be between {MIN_BLOCK_SIZE} and {self.total} bytes."
            )
        address = self._allocate(self.root, next_power_of_two(size), name)
        if address is None:
            raise BuddyError("Allocation failed: Not enough memory or too fragmented.")
        return address

    def _allocate(self, node: BuddyBlock, size: int, name: str) -> int | None:
        if not node.is_free or node.size < size:
            return None
        if node.is_leaf:
            if node.size == size:
                node.owner = name
                return node.start
            node.split()
        for child in (node.left, node.right):
            if child is not None:
                address = self._allocate(child, size, name)
                if address is not None:
                    return address
        return None

    def deallocate(self, name: str) -> int:
        """Free the first block owned by ``name``, merging free buddies; return its address."""
        address = self._deallocate(self.root, name)
        if address is None:
            raise BuddyError("Deallocation failed: Process not found or already free.")
        return address

    def _deallocate(self, node: BuddyBlock | None, name: str) -> int | None:
        if node is None:
            return None
        if node.is_leaf:
            if node.owner is not None and node.owner == name:
                node.owner = None
                return node.start
            return None
        address = self._deallocate(node.left, name)
        if address is None:
            address = self._deallocate(node.right, name)
        if address is None:
            return None
        children = (node.left, node.right)
        if all(c is not None and c.is_leaf and c.is_free for c in children):
            node.left = node.right = None
        return address

    def render(self) -> str:
        """The memory tree as indented text."""
        return "\n".join(self.root.lines())


def _tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def _ask(tokens: Iterable[str], prompt: str) -> str:
    print(prompt, end="")
    return next(iter(tokens))


_MENU = (
    "\n--- Buddy System Menu ---\n"
    "1. Allocate Memory to Process\n"
    "2. Deallocate Memory of Process\n"
    "3. Show Memory Tree\n"
    "4. Exit"
)


def main(argv: Sequence[str] | None = None) -> int:
    """Interactive buddy allocator driven by a menu on standard input."""
    parser = argparse.ArgumentParser(
        prog="ossim-buddy", description="Interactive buddy system allocator."
    )
    parser.parse_args(argv)

    tokens = _tokens(sys.stdin)
    try:
        try:
            total = int(_ask(tokens, "Enter total memory size (multiple of 8): "))
            allocator = BuddyAllocator(total)
        except ValueError:
            print(f"Memory size must be a power of 2 and >= {MIN_BLOCK_SIZE}")
            return 1

        while True:
            print(_MENU)
            choice = _ask(tokens, "Enter choice: ")
            if choice == "1":
                name = _ask(tokens, "Enter process name (e.g., P1): ")
                raw = _ask(tokens, "Enter size to allocate: ")
                try:
                    size = int(raw)
                    address = allocator.allocate(name, size)
                except (ValueError, BuddyError) as exc:
                    if isinstance(exc, BuddyError):
                        print(exc)
                    else:
                        print(
                            f"Invalid size. Must be between {MIN_BLOCK_SIZE} and "
                            f"{allocator.total} bytes."
                        )
                    continue
                print(
                    f"Allocated {name} ({next_power_of_two(size)} bytes) "
                    f"at address {address}"
                )
            elif choice == "2":
                name = _ask(tokens, "Enter process name to deallocate: ")
                try:
                    address = allocator.deallocate(name)
                except BuddyError as exc:
                    print(exc)
                    continue
                print(f"Deallocated {name} at address {address}")
            elif choice == "3":
                print("\nCurrent Memory Tree:")
                print(allocator.render())
            elif choice == "4":
                print("Exiting...")
                return 0
            else:
                print("Invalid choice.")
    except StopIteration:
        return 0


if __name__ == "__main__":
    sys.exit(main())
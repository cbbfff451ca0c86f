import io

import pytest

from ossim.buddy import (
    MIN_BLOCK_SIZE,
    BuddyAllocator,
    BuddyError,
    main,
    next_power_of_two,
)


def test_next_power_of_two():
    assert next_power_of_two(1) == MIN_BLOCK_SIZE
    assert next_power_of_two(MIN_BLOCK_SIZE) == MIN_BLOCK_SIZE
    assert next_power_of_two(9) == 16
    assert next_power_of_two(64) == 64


@pytest.mark.parametrize("total", [4, 12, 0, 100])
def test_invalid_total(total):
    with pytest.raises(ValueError):
        BuddyAllocator(total)


def test_fresh_render():
    assert BuddyAllocator(64).render() == "|-- [64 bytes] at 0 => Free ()"


def test_render_after_split():
    allocator = BuddyAllocator(16)
    allocator.allocate("P1", 8)
    assert allocator.render().splitlines() == [
        "|-- [16 bytes] at 0 => Split",
        "  |-- [8 bytes] at 0 => Used (P1)",
        "  |-- [8 bytes] at 8 => Free ()",
    ]


def test_allocations_are_aligned_and_disjoint():
    allocator = BuddyAllocator(128)
    requests = [("A", 10), ("B", 8), ("C", 30), ("D", 20)]
    spans = []
    for name, size in requests:
        rounded = next_power_of_two(size)
        address = allocator.allocate(name, size)
        assert address % rounded == 0
        assert 0 <= address and address + rounded <= 128
        spans.append((address, address + rounded))
    spans.sort()
    for (_, end), (start, _) in zip(spans, spans[1:]):
        assert end <= start


@pytest.mark.parametrize("size", [MIN_BLOCK_SIZE - 1, 65])
def test_invalid_size(size):
    with pytest.raises(ValueError):
        BuddyAllocator(64).allocate("P1", size)


def test_out_of_memory():
    allocator = BuddyAllocator(32)
    allocator.allocate("A", 32)
    with pytest.raises(BuddyError):
        allocator.allocate("B", 8)


def test_deallocate_unknown():
    with pytest.raises(BuddyError):
        BuddyAllocator(32).deallocate("nobody")


def test_full_release_restores_tree():
    allocator = BuddyAllocator(64)
    fresh = allocator.render()
    for name in ["A", "B", "C"]:
        allocator.allocate(name, 8)
    for name in ["B", "A", "C"]:
        allocator.deallocate(name)
    assert allocator.render() == fresh
    assert allocator.allocate("Z", 64) == 0


def test_deallocate_returns_address():
    allocator = BuddyAllocator(64)
    allocator.allocate("A", 8)
    address = allocator.allocate("B", 16)
    assert allocator.deallocate("B") == address


def test_duplicate_names_freed_one_at_a_time():
    allocator = BuddyAllocator(64)
    first = allocator.allocate("P", 8)
    second = allocator.allocate("P", 8)
    assert allocator.deallocate("P") == first
    assert allocator.deallocate("P") == second
    with pytest.raises(BuddyError):
        allocator.deallocate("P")


def test_main_session(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("32\n1 P1 8\n3\n2 P1\n4\n"))
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Allocated P1 (8 bytes) at address 0" in out
    assert "Deallocated P1 at address 0" in out
    assert "Exiting..." in out


def test_main_bad_total(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("12\n"))
    assert main([]) == 1
    assert "Memory size must be a power of 2" in capsys.readouterr().out
import io

import pytest

from ossim.placement import (
    Strategy,
    best_fit,
    first_fit,
    main,
    next_fit,
    place,
    worst_fit,
)

BLOCKS = [100, 500, 200, 300, 600]
PROCESSES = [212, 417, 112, 426]
ALL = [first_fit, next_fit, best_fit, worst_fit]


def test_space_is_conserved():
    results = [
        first_fit(BLOCKS, PROCESSES),
        next_fit(BLOCKS, PROCESSES),
        best_fit(BLOCKS, PROCESSES),
        worst_fit(BLOCKS, PROCESSES),
    ]
    for result in results:
        placed = sum(step.size for step in result.steps if step.allocated)
        assert sum(result.blocks) == sum(BLOCKS) - placed
        assert result.external_fragmentation == sum(result.blocks)


def test_no_fit_leaves_blocks_unchanged():
    results = [
        first_fit([10, 20], [50]),
        next_fit([10, 20], [50]),
        best_fit([10, 20], [50]),
        worst_fit([10, 20], [50]),
    ]
    for result in results:
        assert result.steps[0].block is None
        assert result.blocks == [10, 20]
        assert result.allocation == [None]


def test_chosen_block_was_large_enough():
    results = [
        first_fit(BLOCKS, PROCESSES),
        next_fit(BLOCKS, PROCESSES),
        best_fit(BLOCKS, PROCESSES),
        worst_fit(BLOCKS, PROCESSES),
    ]
    for result in results:
        before = list(BLOCKS)
        for step in result.steps:
            if step.block is not None:
                assert before[step.block] >= step.size
            before = list(step.blocks)


def test_best_fit_picks_smallest_eligible():
    result = best_fit([50, 20, 30], [20])
    step = result.steps[0]
    assert [50, 20, 30][step.block] == min(b for b in [50, 20, 30] if b >= 20)


def test_worst_fit_picks_largest_eligible():
    result = worst_fit([30, 50, 20], [20])
    assert [30, 50, 20][result.steps[0].block] == max([30, 50, 20])


def test_first_fit_picks_first_eligible():
    result = first_fit([5, 30, 50], [20])
    assert result.steps[0].block == [5, 30, 50].index(30)


def test_next_fit_continues_from_last_block():
    nxt = next_fit([5, 20], [10, 3])
    first = first_fit([5, 20], [10, 3])
    assert nxt.steps[1].block == nxt.steps[0].block
    assert first.steps[1].block < first.steps[0].block


def test_next_fit_wraps_around():
    result = next_fit([10, 4, 10], [10, 10, 5])
    # The second search starts at the block used first and must wrap past it.
    assert result.steps[1].block != result.steps[0].block
    assert result.steps[2].block == result.steps[1].block or result.steps[2].block is None


@pytest.mark.parametrize("strategy,algorithm", zip(
    [Strategy.FIRST, Strategy.NEXT, Strategy.BEST, Strategy.WORST], ALL))
def test_place_dispatches(strategy, algorithm):
    assert place(strategy, BLOCKS, PROCESSES) == algorithm(BLOCKS, PROCESSES)
    assert place(strategy.value, BLOCKS, PROCESSES).strategy is strategy


def test_input_not_modified():
    blocks = list(BLOCKS)
    first_fit(blocks, PROCESSES)
    assert blocks == BLOCKS


def test_main_runs_all_strategies_in_order(monkeypatch, capsys):
    data = "5\n100 500 200 300 600\n4\n212 417 112 426\n"
    monkeypatch.setattr("sys.stdin", io.StringIO(data))
    assert main([]) == 0
    out = capsys.readouterr().out
    positions = [
        out.index("--- First Fit Allocation ---"),
        out.index("--- Best Fit Allocation ---"),
        out.index("--- Next Fit Allocation ---"),
        out.index("--- Worst Fit Allocation ---"),
    ]
    assert positions == sorted(positions)
    frag = first_fit(BLOCKS, PROCESSES).external_fragmentation
    assert f"External Fragmentation after First Fit: {frag}" in out


def test_main_short_input(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("3\n1 2\n"))
    assert main([]) == 1
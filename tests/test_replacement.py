import io
import math
import random

import pytest

from ossim.replacement import (
    FrameStep,
    ReplacementResult,
    fifo_replacement,
    lru_replacement,
    main,
    optimal_replacement,
    page_numbers,
)

REFERENCE = [7, 0, 1, 2, 0, 3, 0, 4, 2, 3, 0, 3, 2, 1, 2, 0, 1, 7, 0, 1]
BELADY = [1, 2, 3, 4, 1, 2, 5, 1, 2, 3, 4, 5]


def test_page_numbers_divides_by_page_size():
    assert page_numbers([0, 99, 100, 250], 100) == [0, 0, 1, 2]


def test_page_numbers_truncates_toward_zero():
    assert page_numbers([-150], 100) == [-1]


def test_page_numbers_rejects_zero_page_size():
    with pytest.raises(ValueError):
        page_numbers([1, 2], 0)


def test_fifo_reference_string():
    assert fifo_replacement(REFERENCE, 3).faults() == 15


def test_lru_reference_string():
    assert lru_replacement(REFERENCE, 3).faults() == 12


def test_optimal_reference_string():
    assert optimal_replacement(REFERENCE, 3).faults() == 9


def test_fifo_shows_beladys_anomaly():
    assert fifo_replacement(BELADY, 4).faults() > fifo_replacement(BELADY, 3).faults()


def test_hits_and_faults_cover_every_reference():
    results = [
        fifo_replacement(REFERENCE, 3),
        lru_replacement(REFERENCE, 3),
        optimal_replacement(REFERENCE, 3),
    ]
    for result in results:
        assert result.hits() + result.faults() == len(REFERENCE)
        assert result.fault_rate() + result.hit_rate() == pytest.approx(1.0)
        assert result.fault_rate() == result.faults() / len(REFERENCE)


def test_hit_means_page_was_already_loaded():
    results = [
        fifo_replacement(REFERENCE, 3),
        lru_replacement(REFERENCE, 3),
        optimal_replacement(REFERENCE, 3),
    ]
    for result in results:
        previous: tuple = (None, None, None)
        for step in result.steps:
            assert step.hit == (step.page in previous)
            assert step.page in step.frames
            previous = step.frames


def test_enough_frames_means_only_cold_misses():
    distinct = len(set(REFERENCE))
    assert fifo_replacement(REFERENCE, distinct).faults() == distinct
    assert lru_replacement(REFERENCE, distinct).faults() == distinct
    assert optimal_replacement(REFERENCE, distinct).faults() == distinct


def test_empty_frames_filled_left_to_right():
    results = [
        fifo_replacement([5, 6], 3),
        lru_replacement([5, 6], 3),
        optimal_replacement([5, 6], 3),
    ]
    for result in results:
        assert result.steps[0].frames == (5, None, None)
        assert result.steps[1].frames == (5, 6, None)


def test_zero_frames_rejected():
    with pytest.raises(ValueError):
        fifo_replacement([1, 2], 0)
    with pytest.raises(ValueError):
        lru_replacement([1, 2], 0)
    with pytest.raises(ValueError):
        optimal_replacement([1, 2], 0)


def test_empty_reference_rates_are_nan():
    result = fifo_replacement([], 3)
    assert result.faults() == 0
    assert math.isnan(result.fault_rate())
    assert math.isnan(result.hit_rate())


def test_optimal_never_worse_than_others():
    rng = random.Random(7)
    for _ in range(50):
        pages = [rng.randrange(6) for _ in range(25)]
        for frames in (1, 2, 3, 4):
            best = optimal_replacement(pages, frames).faults()
            assert best <= fifo_replacement(pages, frames).faults()
            assert best <= lru_replacement(pages, frames).faults()


def test_lru_more_frames_never_more_faults():
    rng = random.Random(11)
    for _ in range(30):
        pages = [rng.randrange(7) for _ in range(30)]
        faults = [lru_replacement(pages, n).faults() for n in range(1, 8)]
        assert faults == sorted(faults, reverse=True)


def test_lru_evicts_least_recently_used():
    result = lru_replacement([1, 2, 1, 3], 2)
    assert result.steps[-1].frames == (1, 3)


def test_fifo_evicts_oldest_loaded():
    result = fifo_replacement([1, 2, 1, 3], 2)
    assert result.steps[-1].frames == (3, 2)


def test_optimal_evicts_page_never_used_again():
    result = optimal_replacement([1, 2, 3, 1], 2)
    assert result.steps[2].frames == (1, 3)


def test_result_counts_from_steps():
    result = ReplacementResult([FrameStep(1, False, (1,)), FrameStep(1, True, (1,))])
    assert result.hits() == result.faults() == 1


def test_main_prints_summary(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("3 0 100 205 100 2"))
    assert main(["lru"]) == 0
    out = capsys.readouterr().out
    assert "Logical Addr: 205 => Page: 2, Offset: 5" in out
    assert "--- Summary ---" in out


def test_main_optimal_marks_empty_frames(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("1 0 100 2"))
    assert main(["optimal"]) == 0
    assert "Frames: 0 X" in capsys.readouterr().out


def test_main_rejects_bad_page_size(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("1 5 0 2"))
    assert main(["fifo"]) == 1
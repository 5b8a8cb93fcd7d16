from datetime import timedelta

import pytest

from myopicbot.timing import TimeAllocator, expected_half_moves_remaining


def dummy_half_moves_remaining(moves_played):
    return float(moves_played)


def ms(value):
    return timedelta(milliseconds=value)


def test_remaining_less_than_increment_threshold():
    timing = TimeAllocator(
        half_moves_remaining=dummy_half_moves_remaining,
        min_compute_time=ms(500),
        latency=ms(200),
        increment_only_threshold=ms(5000),
    )
    assert timing.allocate(20, ms(4999), ms(1000)) == ms(800)


def test_remaining_less_than_latency():
    timing = TimeAllocator(
        half_moves_remaining=dummy_half_moves_remaining,
        min_compute_time=ms(1100),
        latency=ms(200),
        increment_only_threshold=ms(100),
    )
    assert timing.allocate(20, ms(100), ms(0)) == ms(1100)


def test_estimated_greater_than_min():
    timing = TimeAllocator(
        half_moves_remaining=dummy_half_moves_remaining,
        min_compute_time=ms(1100),
        latency=ms(200),
        increment_only_threshold=ms(100),
    )
    assert timing.allocate(20, ms(40000), ms(999)) == ms(4979)


def test_estimated_less_than_min():
    timing = TimeAllocator(
        half_moves_remaining=dummy_half_moves_remaining,
        min_compute_time=ms(1100),
        latency=ms(200),
        increment_only_threshold=ms(100),
    )
    assert timing.allocate(200, timedelta(seconds=10), ms(999)) == ms(1100)


def test_default_allocator_uses_expected_half_moves():
    allocator = TimeAllocator()
    assert allocator.half_moves_remaining is expected_half_moves_remaining
    assert allocator.latency == ms(200)
    assert allocator.min_compute_time == ms(200)
    assert allocator.increment_only_threshold == ms(5000)


def test_default_allocation_never_below_minimum():
    allocator = TimeAllocator()
    for played in range(0, 300, 7):
        assert allocator.allocate(played, ms(300), ms(0)) >= allocator.min_compute_time


def test_more_time_gives_longer_allocation():
    allocator = TimeAllocator()
    short = allocator.allocate(30, timedelta(minutes=1), ms(0))
    long = allocator.allocate(30, timedelta(minutes=10), ms(0))
    assert long > short


def test_expected_half_moves_remaining_positive_and_decreasing_early():
    values = [expected_half_moves_remaining(k) for k in range(0, 500)]
    assert all(v > 0 for v in values)
    assert expected_half_moves_remaining(0) > expected_half_moves_remaining(40)
    assert expected_half_moves_remaining(40) > expected_half_moves_remaining(100)


def test_non_positive_expectation_is_rejected():
    allocator = TimeAllocator(half_moves_remaining=dummy_half_moves_remaining)
    with pytest.raises(ValueError):
        allocator.allocate(0, timedelta(minutes=5), ms(0))
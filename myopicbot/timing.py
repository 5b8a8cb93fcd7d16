"""Allocation of thinking time for a single move."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable

DEFAULT_MOVE_LATENCY = timedelta(milliseconds=200)
DEFAULT_MIN_COMPUTE_TIME = timedelta(milliseconds=200)
INCREMENT_ONLY_THRESHOLD = timedelta(milliseconds=5000)

_ZERO = timedelta(0)
_MILLISECOND = timedelta(milliseconds=1)


def expected_half_moves_remaining(moves_played: int) -> float:
    """Expected number of half moves still to be played after ``moves_played``."""
    k = float(moves_played)
    return 59.3 + (72830.0 - 2330.0 * k) / (2644.0 + k * (10.0 + k))


def _round_half_away_from_zero(value: float) -> int:
    return int(math.floor(value + 0.5)) if value >= 0 else int(math.ceil(value - 0.5))


@dataclass(frozen=True)
class TimeAllocator:
    """Decides how long to think about a move given the clock state."""

    half_moves_remaining: Callable[[int], float] = expected_half_moves_remaining
    latency: timedelta = DEFAULT_MOVE_LATENCY
    min_compute_time: timedelta = DEFAULT_MIN_COMPUTE_TIME
    increment_only_threshold: timedelta = INCREMENT_ONLY_THRESHOLD

    def allocate(
        self,
        half_moves_played: int,
        remaining_time: timedelta,
        increment: timedelta,
    ) -> timedelta:
        """Return the time to spend computing the next move."""
        if remaining_time < self.increment_only_threshold and increment > _ZERO:
            return max(self.min_compute_time, increment - self.latency)

        available = max(remaining_time - self.latency, _ZERO)

        # Only half of the remaining half moves are ours to think about.
        expected_remaining = self.half_moves_remaining(half_moves_played) / 2.0
        if expected_remaining <= 0:
            raise ValueError(
                f"expected remaining half moves must be positive, got {expected_remaining * 2}"
            )
        available_ms = available // _MILLISECOND
        estimate_ms = max(_round_half_away_from_zero(available_ms / expected_remaining), 0)
        estimated = timedelta(milliseconds=estimate_ms) + increment
        return max(estimated, self.min_compute_time)
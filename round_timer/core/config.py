from __future__ import annotations

import math
from dataclasses import dataclass

from round_timer.core.errors import InvalidConfigError


DEFAULT_WORK_SEC = 180
DEFAULT_REST_SEC = 60
DEFAULT_ROUNDS = 5

DURATION_STEP_SEC = 30
MIN_ADJUSTABLE_SEC = 30
ROUNDS_STEP = 1

REFRESH_INTERVAL_MS = 100
# Gaps longer than this between two refreshes mean the app was suspended.
RECONCILE_GAP_SEC = 2.0


@dataclass(frozen=True)
class SessionConfig:
    work_duration: int = DEFAULT_WORK_SEC
    rest_duration: int = DEFAULT_REST_SEC
    total_rounds: int = DEFAULT_ROUNDS

    def __post_init__(self) -> None:
        for duration in (self.work_duration, self.rest_duration):
            if isinstance(duration, bool) or not isinstance(duration, (int, float)):
                raise InvalidConfigError("Durations must be numbers of seconds")
            if not math.isfinite(duration) or duration <= 0:
                raise InvalidConfigError("Durations must be positive and finite")
        if isinstance(self.total_rounds, bool) or not isinstance(self.total_rounds, int):
            raise InvalidConfigError("Round count must be an integer")
        if self.total_rounds < 1:
            raise InvalidConfigError("Round count must be at least 1")


def adjust_duration(value: int, direction: int) -> int:
    """Moves a duration one step up or down, never below the 30 s floor."""
    if direction < 0:
        return max(MIN_ADJUSTABLE_SEC, value - DURATION_STEP_SEC) if value > MIN_ADJUSTABLE_SEC else value
    if direction > 0:
        return value + DURATION_STEP_SEC
    return value


def adjust_rounds(value: int, direction: int) -> int:
    if direction < 0:
        return value - ROUNDS_STEP if value > 1 else value
    if direction > 0:
        return value + ROUNDS_STEP
    return value

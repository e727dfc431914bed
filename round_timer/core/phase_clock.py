from __future__ import annotations

import math


def remaining(start_time: float, duration: float, now: float) -> int:
    """Whole seconds left in a phase that started at `start_time`.

    A wall clock stepping backwards counts as zero elapsed time.
    """
    elapsed = max(0, math.floor(now - start_time))
    return max(0, int(duration - elapsed))


def has_elapsed(start_time: float, duration: float, now: float) -> bool:
    return now - start_time >= duration

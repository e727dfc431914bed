from __future__ import annotations


class TimerError(Exception):
    """Base error of the round timer core."""


class InvalidStateError(TimerError, RuntimeError):
    """Transition requested from a state that forbids it."""


class InvalidConfigError(TimerError, ValueError):
    """Non-positive duration or round count."""

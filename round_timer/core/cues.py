from __future__ import annotations

"""Последовательности звуковых и вибро-сигналов.

Ядро не проигрывает звук само: события несут список пар
`(смещение в секундах, сигнал)`, а хост планирует их своим таймером.
"""

from enum import Enum


class CueId(str, Enum):
    VIBRATE = "vibrate"
    TONE_HIGH = "tone_high"
    TONE_LOW = "tone_low"
    CHIME = "chime"


CueSequence = tuple[tuple[float, CueId], ...]

PHASE_CHANGE_TONE_GAP_SEC = 0.4
PHASE_CHANGE_TONES = (CueId.TONE_HIGH, CueId.TONE_LOW, CueId.TONE_HIGH, CueId.TONE_LOW)

COMPLETION_TONES: tuple[tuple[float, CueId], ...] = (
    (0.0, CueId.TONE_HIGH),
    (0.3, CueId.TONE_LOW),
    (0.6, CueId.TONE_HIGH),
    (0.9, CueId.TONE_LOW),
    (1.2, CueId.TONE_HIGH),
    (1.8, CueId.CHIME),
    (2.1, CueId.CHIME),
    (2.4, CueId.CHIME),
)
COMPLETION_VIBRATION_OFFSETS = (0.0, 1.2)


def _ordered(pairs: list[tuple[float, CueId]]) -> CueSequence:
    return tuple(sorted(pairs, key=lambda pair: pair[0]))


def phase_change_cues() -> CueSequence:
    """Вибрация и четыре чередующихся тона с шагом 0.4 с."""
    pairs: list[tuple[float, CueId]] = [(0.0, CueId.VIBRATE)]
    for index, tone in enumerate(PHASE_CHANGE_TONES):
        offset = round(index * PHASE_CHANGE_TONE_GAP_SEC, 3)
        pairs.append((offset, tone))
        if index % 2 == 0:
            pairs.append((offset, CueId.VIBRATE))
    return _ordered(pairs)


def completion_cues() -> CueSequence:
    """Длинная праздничная последовательность в конце тренировки."""
    pairs: list[tuple[float, CueId]] = [(0.0, CueId.VIBRATE)]
    for offset, tone in COMPLETION_TONES:
        pairs.append((offset, tone))
        if offset in COMPLETION_VIBRATION_OFFSETS:
            pairs.append((offset, CueId.VIBRATE))
    return _ordered(pairs)

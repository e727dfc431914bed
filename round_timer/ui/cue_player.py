from __future__ import annotations

"""Планирование сигналов смены фазы и окончания тренировки."""

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from round_timer.core.cues import CueId, CueSequence


class CuePlayer(QObject):
    """Schedules each `(offset, cue)` pair on the Qt event loop.

    The window turns fired cues into sound; a muted player fires nothing.
    """

    cue_fired = pyqtSignal(str)

    def __init__(self, parent: QObject | None = None, muted: bool = False) -> None:
        super().__init__(parent)
        self.muted = muted

    def set_muted(self, muted: bool) -> None:
        self.muted = bool(muted)

    def play(self, cues: CueSequence) -> None:
        for offset, cue in cues:
            QTimer.singleShot(int(offset * 1000), lambda cue=cue: self._fire(cue))

    def _fire(self, cue: CueId) -> None:
        if self.muted:
            return
        self.cue_fired.emit(cue.value)

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from round_timer.core import config as settings
from round_timer.core.config import SessionConfig
from round_timer.core.errors import TimerError
from round_timer.core.session import (
    Phase,
    PhaseChanged,
    SessionController,
    SessionEnded,
    SessionEvent,
    SessionSnapshot,
    StateChanged,
)


logger = logging.getLogger(__name__)


def format_time(seconds: int) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def phase_description(snapshot: SessionSnapshot) -> str:
    if snapshot.phase == Phase.WORK:
        return f"Round {snapshot.current_round} of {snapshot.total_rounds}"
    if snapshot.phase == Phase.REST:
        return "Rest"
    if snapshot.phase == Phase.PAUSED:
        return "Paused"
    return "Ready to start"


class TimerViewModel(QObject):
    """Qt-facing wrapper that feeds the controller with clock readings."""

    state_changed = pyqtSignal()
    phase_changed = pyqtSignal(object)
    session_ended = pyqtSignal(bool)
    cues_requested = pyqtSignal(object)

    def __init__(
        self,
        controller: SessionController | None = None,
        clock: Callable[[], float] = time.time,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller or SessionController()
        self._clock = clock
        self._snapshot = self._controller.snapshot()
        self._last_refresh: float | None = None
        self._controller.subscribe(self._on_event)

    @property
    def controller(self) -> SessionController:
        return self._controller

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    @property
    def phase(self) -> Phase:
        return self._snapshot.phase

    @property
    def active_phase(self) -> Phase | None:
        return self._snapshot.active_phase

    @property
    def current_round(self) -> int:
        return self._snapshot.current_round

    @property
    def total_rounds(self) -> int:
        return self._snapshot.total_rounds

    @property
    def time_remaining(self) -> int:
        return self._snapshot.time_remaining

    @property
    def time_text(self) -> str:
        return format_time(self._snapshot.time_remaining)

    @property
    def progress(self) -> float:
        return self._snapshot.progress

    @property
    def description(self) -> str:
        return phase_description(self._snapshot)

    @property
    def work_duration(self) -> int:
        return self._controller.config.work_duration

    @property
    def rest_duration(self) -> int:
        return self._controller.config.rest_duration

    @property
    def is_running(self) -> bool:
        return self._controller.is_running

    @property
    def can_edit_settings(self) -> bool:
        return self._snapshot.phase == Phase.STOPPED

    def start(self) -> None:
        now = self._clock()
        if self._attempt("start", self._controller.start, now):
            self._last_refresh = now

    def pause(self) -> None:
        self._attempt("pause", self._controller.pause, self._clock())

    def resume(self) -> None:
        now = self._clock()
        if self._attempt("resume", self._controller.resume, now):
            self._last_refresh = now

    def stop(self) -> None:
        self._controller.stop(self._clock())
        self._last_refresh = None

    def toggle(self) -> None:
        if self.phase == Phase.STOPPED:
            self.start()
        elif self.phase == Phase.PAUSED:
            self.resume()
        else:
            self.pause()

    def refresh(self) -> None:
        """Called by the host refresh loop; catches up after long gaps."""
        if not self._controller.is_running:
            return
        now = self._clock()
        gap = now - self._last_refresh if self._last_refresh is not None else 0.0
        self._last_refresh = now
        if gap > settings.RECONCILE_GAP_SEC:
            logger.info("Refresh gap of %.1fs, reconciling", gap)
            self._controller.reconcile(now)
        else:
            self._controller.tick(now)

    def on_application_state_changed(self, is_active: bool) -> None:
        if not is_active or not self._controller.is_running:
            return
        now = self._clock()
        self._last_refresh = now
        self._controller.reconcile(now)

    def adjust_work(self, direction: int) -> None:
        config = self._controller.config
        self._configure(replace(config, work_duration=settings.adjust_duration(config.work_duration, direction)))

    def adjust_rest(self, direction: int) -> None:
        config = self._controller.config
        self._configure(replace(config, rest_duration=settings.adjust_duration(config.rest_duration, direction)))

    def adjust_rounds(self, direction: int) -> None:
        config = self._controller.config
        self._configure(replace(config, total_rounds=settings.adjust_rounds(config.total_rounds, direction)))

    def _configure(self, config: SessionConfig) -> None:
        self._attempt("configure", self._controller.configure, config)

    def _attempt(self, name: str, operation: Callable, argument) -> bool:
        try:
            operation(argument)
        except TimerError as exc:
            logger.warning("Ignored %s request: %s", name, exc)
            return False
        return True

    def _on_event(self, event: SessionEvent) -> None:
        if isinstance(event, StateChanged):
            self._snapshot = event.snapshot
            self.state_changed.emit()
        elif isinstance(event, PhaseChanged):
            self.phase_changed.emit(event)
            self.cues_requested.emit(event.cues)
        elif isinstance(event, SessionEnded):
            self.session_ended.emit(event.completed)
            if event.cues:
                self.cues_requested.emit(event.cues)

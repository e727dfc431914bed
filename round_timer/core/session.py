from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Union

from round_timer.core import phase_clock
from round_timer.core.config import SessionConfig
from round_timer.core.cues import CueSequence, completion_cues, phase_change_cues
from round_timer.core.errors import InvalidStateError


logger = logging.getLogger(__name__)


class Phase(str, Enum):
    STOPPED = "stopped"
    WORK = "work"
    REST = "rest"
    PAUSED = "paused"


RUNNING_PHASES = frozenset({Phase.WORK, Phase.REST})


@dataclass
class SessionState:
    phase: Phase = Phase.STOPPED
    current_round: int = 1
    phase_start_time: float | None = None
    current_phase_duration: float = 0.0
    paused_remaining: float = 0.0
    resume_phase: Phase | None = None


@dataclass(frozen=True)
class SessionSnapshot:
    phase: Phase
    active_phase: Phase | None
    current_round: int
    total_rounds: int
    time_remaining: int
    phase_duration: int
    progress: float


@dataclass(frozen=True)
class PhaseChanged:
    from_phase: Phase
    to_phase: Phase
    round: int
    cues: CueSequence = field(default_factory=phase_change_cues)


@dataclass(frozen=True)
class SessionEnded:
    completed: bool
    cues: CueSequence = ()


@dataclass(frozen=True)
class StateChanged:
    snapshot: SessionSnapshot


SessionEvent = Union[PhaseChanged, SessionEnded, StateChanged]
Listener = Callable[[SessionEvent], None]


class SessionController:
    """Work/rest round state machine driven by caller-supplied timestamps.

    The controller owns no timer. The host calls `tick(now)` while a phase
    runs and `reconcile(now)` after a gap it did not observe (suspension).
    Boundary crossings are published to subscribed listeners.
    """

    def __init__(self, config: SessionConfig | None = None) -> None:
        self._config = config or SessionConfig()
        self._state = SessionState()
        self._time_remaining = self._config.work_duration
        self._listeners: list[Listener] = []

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def state(self) -> SessionState:
        return replace(self._state)

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def current_round(self) -> int:
        return self._state.current_round

    @property
    def time_remaining(self) -> int:
        return self._time_remaining

    @property
    def is_running(self) -> bool:
        return self._state.phase in RUNNING_PHASES

    @property
    def is_active(self) -> bool:
        return self._state.phase is not Phase.STOPPED

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def configure(self, config: SessionConfig) -> None:
        if self._state.phase is not Phase.STOPPED:
            raise InvalidStateError("Settings can only change while the timer is stopped")
        self._config = config
        self._time_remaining = config.work_duration
        self._publish_state()

    def start(self, now: float) -> SessionSnapshot:
        if self._state.phase is not Phase.STOPPED:
            raise InvalidStateError(f"Cannot start from {self._state.phase.value}")
        self._state = SessionState(current_round=1)
        self._enter_phase(Phase.WORK, self._config.work_duration, now)
        self._time_remaining = self._config.work_duration
        logger.info(
            "Session started: %s x (%ss work / %ss rest)",
            self._config.total_rounds,
            self._config.work_duration,
            self._config.rest_duration,
        )
        self._publish_state()
        return self.snapshot()

    def pause(self, now: float) -> SessionSnapshot:
        state = self._state
        if state.phase not in RUNNING_PHASES or state.phase_start_time is None:
            raise InvalidStateError(f"Cannot pause from {state.phase.value}")
        state.paused_remaining = phase_clock.remaining(state.phase_start_time, state.current_phase_duration, now)
        state.resume_phase = state.phase
        state.phase = Phase.PAUSED
        state.phase_start_time = None
        self._time_remaining = int(state.paused_remaining)
        self._publish_state()
        return self.snapshot()

    def resume(self, now: float) -> SessionSnapshot:
        state = self._state
        if state.phase is not Phase.PAUSED or state.resume_phase is None:
            raise InvalidStateError(f"Cannot resume from {state.phase.value}")
        self._enter_phase(state.resume_phase, state.paused_remaining, now)
        self._time_remaining = int(state.current_phase_duration)
        self._publish_state()
        return self.snapshot()

    def stop(self, now: float | None = None) -> SessionSnapshot:
        was_active = self.is_active
        self._reset()
        if was_active:
            logger.info("Session stopped before completion")
            self._emit(SessionEnded(completed=False))
        self._publish_state()
        return self.snapshot()

    def tick(self, now: float) -> SessionSnapshot:
        """Advances at most one phase boundary."""
        state = self._require_running("tick")
        if phase_clock.has_elapsed(state.phase_start_time, state.current_phase_duration, now):
            self._cross_boundary()
        self._refresh_remaining(now)
        self._publish_state()
        return self.snapshot()

    def reconcile(self, now: float) -> SessionSnapshot:
        self._require_running("reconcile")
        crossed = 0
        # Each round holds two phases, so this bounds the catch-up.
        for _ in range(self._config.total_rounds * 2):
            state = self._state
            if state.phase not in RUNNING_PHASES:
                break
            if not phase_clock.has_elapsed(state.phase_start_time, state.current_phase_duration, now):
                break
            self._cross_boundary()
            crossed += 1
        if crossed:
            logger.info("Reconciled %s missed phase boundaries", crossed)
        self._refresh_remaining(now)
        self._publish_state()
        return self.snapshot()

    def snapshot(self, now: float | None = None) -> SessionSnapshot:
        state = self._state
        time_remaining = self._time_remaining
        if now is not None and state.phase_start_time is not None:
            time_remaining = phase_clock.remaining(state.phase_start_time, state.current_phase_duration, now)
        active_phase = state.resume_phase if state.phase is Phase.PAUSED else state.phase
        if active_phase is Phase.STOPPED:
            active_phase = None
        if active_phase is Phase.REST:
            phase_duration = self._config.rest_duration
        else:
            phase_duration = self._config.work_duration
        progress = (phase_duration - time_remaining) / phase_duration if active_phase else 0.0
        return SessionSnapshot(
            phase=state.phase,
            active_phase=active_phase,
            current_round=state.current_round,
            total_rounds=self._config.total_rounds,
            time_remaining=time_remaining,
            phase_duration=phase_duration,
            progress=max(0.0, min(1.0, progress)),
        )

    def _cross_boundary(self) -> None:
        state = self._state
        boundary = state.phase_start_time + state.current_phase_duration
        if state.phase is Phase.WORK:
            self._enter_phase(Phase.REST, self._config.rest_duration, boundary)
            logger.debug("Round %s: work -> rest", state.current_round)
            self._emit(PhaseChanged(from_phase=Phase.WORK, to_phase=Phase.REST, round=state.current_round))
            return
        if state.current_round < self._config.total_rounds:
            state.current_round += 1
            self._enter_phase(Phase.WORK, self._config.work_duration, boundary)
            logger.debug("Round %s: rest -> work", state.current_round)
            self._emit(PhaseChanged(from_phase=Phase.REST, to_phase=Phase.WORK, round=state.current_round))
            return
        final_round = state.current_round
        self._reset()
        logger.info("Session completed: %s rounds", self._config.total_rounds)
        self._emit(PhaseChanged(from_phase=Phase.REST, to_phase=Phase.STOPPED, round=final_round))
        self._emit(SessionEnded(completed=True, cues=completion_cues()))

    def _enter_phase(self, phase: Phase, duration: float, started_at: float) -> None:
        state = self._state
        state.phase = phase
        state.current_phase_duration = duration
        state.phase_start_time = started_at
        state.paused_remaining = 0.0
        state.resume_phase = None

    def _refresh_remaining(self, now: float) -> None:
        state = self._state
        if state.phase_start_time is None:
            return
        self._time_remaining = phase_clock.remaining(state.phase_start_time, state.current_phase_duration, now)

    def _require_running(self, operation: str) -> SessionState:
        state = self._state
        if state.phase not in RUNNING_PHASES or state.phase_start_time is None:
            raise InvalidStateError(f"Cannot {operation} from {state.phase.value}")
        return state

    def _reset(self) -> None:
        self._state = SessionState()
        self._time_remaining = self._config.work_duration

    def _publish_state(self) -> None:
        self._emit(StateChanged(self.snapshot()))

    def _emit(self, event: SessionEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

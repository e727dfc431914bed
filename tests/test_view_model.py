import pytest

from round_timer.core.config import SessionConfig
from round_timer.core.session import Phase, SessionController
from round_timer.core.view_model import TimerViewModel, format_time


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1000.0)


@pytest.fixture
def view_model(qt_app, clock) -> TimerViewModel:
    controller = SessionController(SessionConfig(work_duration=180, rest_duration=60, total_rounds=2))
    return TimerViewModel(controller=controller, clock=clock)


def test_format_time() -> None:
    assert format_time(180) == "03:00"
    assert format_time(65) == "01:05"
    assert format_time(0) == "00:00"
    assert format_time(-3) == "00:00"


def test_start_and_refresh_updates_published_state(view_model, clock) -> None:
    changes: list[int] = []
    view_model.state_changed.connect(lambda: changes.append(view_model.time_remaining))

    view_model.start()
    assert view_model.description == "Round 1 of 2"
    assert view_model.time_text == "03:00"

    clock.now += 1.0
    view_model.refresh()

    assert view_model.time_remaining == 179
    assert changes[-1] == 179


def test_phase_change_requests_cues(view_model, clock) -> None:
    cue_batches: list = []
    view_model.cues_requested.connect(cue_batches.append)
    view_model.start()

    for _ in range(180):
        clock.now += 1.0
        view_model.refresh()

    assert view_model.phase == Phase.REST
    assert view_model.description == "Rest"
    assert len(cue_batches) == 1


def test_long_refresh_gap_reconciles(view_model, clock) -> None:
    ended: list[bool] = []
    view_model.session_ended.connect(ended.append)
    view_model.start()

    clock.now += 10_000.0
    view_model.refresh()

    assert ended == [True]
    assert view_model.phase == Phase.STOPPED
    assert view_model.description == "Ready to start"


def test_becoming_active_reconciles(view_model, clock) -> None:
    view_model.start()

    clock.now += 300.0
    view_model.on_application_state_changed(False)
    assert view_model.phase == Phase.WORK
    assert view_model.current_round == 1

    view_model.on_application_state_changed(True)
    assert view_model.current_round == 2
    assert view_model.time_remaining == 120


def test_toggle_cycles_through_pause(view_model, clock) -> None:
    view_model.toggle()
    assert view_model.phase == Phase.WORK

    clock.now += 100.0
    view_model.toggle()
    assert view_model.phase == Phase.PAUSED
    assert view_model.description == "Paused"
    assert view_model.time_remaining == 80

    clock.now += 400.0
    view_model.toggle()
    assert view_model.phase == Phase.WORK
    assert view_model.time_remaining == 80


def test_rejected_requests_are_ignored(view_model) -> None:
    view_model.pause()
    view_model.resume()

    assert view_model.phase == Phase.STOPPED


def test_settings_editable_only_while_stopped(view_model) -> None:
    view_model.adjust_work(1)
    view_model.adjust_rest(-1)
    view_model.adjust_rounds(1)
    assert (view_model.work_duration, view_model.rest_duration, view_model.total_rounds) == (210, 30, 3)
    assert view_model.time_text == "03:30"

    view_model.start()
    assert view_model.can_edit_settings is False
    view_model.adjust_work(1)
    assert view_model.work_duration == 210


def test_stop_resets_and_reports_incomplete(view_model, clock) -> None:
    ended: list[bool] = []
    view_model.session_ended.connect(ended.append)
    view_model.start()
    clock.now += 30.0
    view_model.refresh()

    view_model.stop()

    assert ended == [False]
    assert view_model.phase == Phase.STOPPED
    assert view_model.progress == 0.0

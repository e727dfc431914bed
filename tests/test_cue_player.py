from PyQt6.QtCore import QElapsedTimer

from round_timer.core.cues import CueId, phase_change_cues
from round_timer.ui.cue_player import CuePlayer


def run_event_loop(app, ms: int) -> None:
    timer = QElapsedTimer()
    timer.start()
    while timer.elapsed() < ms:
        app.processEvents()


def test_scheduled_cues_fire_in_offset_order(qt_app) -> None:
    player = CuePlayer()
    fired: list[str] = []
    player.cue_fired.connect(fired.append)

    player.play(((0.05, CueId.TONE_LOW), (0.0, CueId.VIBRATE), (0.0, CueId.TONE_HIGH)))
    run_event_loop(qt_app, 300)

    assert sorted(fired) == sorted(["vibrate", "tone_high", "tone_low"])
    assert fired[-1] == "tone_low"


def test_muted_player_fires_nothing(qt_app) -> None:
    player = CuePlayer()
    fired: list[str] = []
    player.cue_fired.connect(fired.append)
    player.set_muted(True)

    player.play(phase_change_cues()[:3])
    run_event_loop(qt_app, 100)

    assert fired == []

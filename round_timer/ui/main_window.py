from __future__ import annotations

import logging

from PyQt6.QtCore import QRect, QTimer, Qt
from PyQt6.QtGui import QAction, QColor, QFont, QGuiApplication, QKeySequence, QPainter, QPen
from PyQt6.QtWidgets import (
    QApplication,
    QCheckBox,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from round_timer.core.config import REFRESH_INTERVAL_MS
from round_timer.core.cues import CueId
from round_timer.core.session import Phase
from round_timer.core.view_model import TimerViewModel, format_time
from round_timer.ui.cue_player import CuePlayer
from round_timer.ui.styles import REST_COLOR, TRACK_COLOR, WORK_COLOR


logger = logging.getLogger(__name__)


class ProgressRing(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(270, 270)
        self._progress = 0.0
        self._is_rest = False
        self._remaining_text = "00:00"

    def set_state(self, progress: float, is_rest: bool, remaining_text: str) -> None:
        self._progress = progress
        self._is_rest = is_rest
        self._remaining_text = remaining_text
        self.update()

    def paintEvent(self, event) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        diameter = min(self.width(), self.height()) - 20
        circle_rect = QRect(
            (self.width() - diameter) // 2,
            (self.height() - diameter) // 2,
            diameter,
            diameter,
        )
        accent = QColor(REST_COLOR if self._is_rest else WORK_COLOR)

        painter.setPen(QPen(QColor(TRACK_COLOR), 8))
        painter.drawEllipse(circle_rect)
        pen = QPen(accent, 8)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        painter.setPen(pen)
        painter.drawArc(circle_rect, 90 * 16, int(-360 * 16 * self._progress))

        time_font = QFont("monospace", 40)
        time_font.setBold(True)
        painter.setFont(time_font)
        painter.setPen(QColor("#262838"))
        painter.drawText(circle_rect.adjusted(0, -20, 0, -20), Qt.AlignmentFlag.AlignCenter, self._remaining_text)

        label_font = QFont()
        label_font.setPointSize(13)
        label_font.setBold(True)
        painter.setFont(label_font)
        painter.setPen(accent)
        painter.drawText(circle_rect.adjusted(0, 60, 0, 60), Qt.AlignmentFlag.AlignCenter, "REST" if self._is_rest else "WORK")


class MainWindow(QMainWindow):
    def __init__(self, view_model: TimerViewModel) -> None:
        super().__init__()
        self.setWindowTitle("Round Timer")
        self.resize(460, 720)

        self.view_model = view_model
        self.cue_player = CuePlayer(self)

        self._build_ui()
        self._connect_signals()

        self.refresh_timer = QTimer(self)
        self.refresh_timer.setInterval(REFRESH_INTERVAL_MS)
        self.refresh_timer.timeout.connect(self.view_model.refresh)
        self.refresh_timer.start()

        self._render()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setSpacing(24)

        title = QLabel("Round Timer")
        title.setObjectName("Heading")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)

        self.description_label = QLabel()
        self.description_label.setObjectName("PhaseDescription")
        self.description_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.description_label)

        self.ring = ProgressRing()
        layout.addWidget(self.ring, 1)

        self.settings_panel = QFrame()
        self.settings_panel.setObjectName("SettingsPanel")
        grid = QGridLayout(self.settings_panel)
        self.work_value = self._add_setting_row(grid, 0, "Work time:", self.view_model.adjust_work)
        self.rest_value = self._add_setting_row(grid, 1, "Rest time:", self.view_model.adjust_rest)
        self.rounds_value = self._add_setting_row(grid, 2, "Rounds:", self.view_model.adjust_rounds)
        layout.addWidget(self.settings_panel)

        controls = QHBoxLayout()
        self.start_btn = QPushButton("Start")
        self.start_btn.setObjectName("StartButton")
        self.pause_btn = QPushButton("Pause")
        self.pause_btn.setObjectName("PauseButton")
        self.resume_btn = QPushButton("Resume")
        self.resume_btn.setObjectName("ResumeButton")
        self.stop_btn = QPushButton("Stop")
        self.stop_btn.setObjectName("StopButton")
        controls.addStretch()
        for button in (self.start_btn, self.pause_btn, self.resume_btn, self.stop_btn):
            controls.addWidget(button)
        controls.addStretch()
        layout.addLayout(controls)

        self.mute_box = QCheckBox("Mute cues")
        layout.addWidget(self.mute_box, 0, Qt.AlignmentFlag.AlignHCenter)

        space_action = QAction(self)
        space_action.setShortcut(QKeySequence(Qt.Key.Key_Space))
        space_action.triggered.connect(self.view_model.toggle)
        self.addAction(space_action)

    def _add_setting_row(self, grid: QGridLayout, row: int, caption: str, adjust) -> QLabel:
        minus = QPushButton("-")
        minus.setObjectName("StepDown")
        plus = QPushButton("+")
        plus.setObjectName("StepUp")
        value = QLabel()
        value.setObjectName("SettingValue")
        minus.clicked.connect(lambda: adjust(-1))
        plus.clicked.connect(lambda: adjust(1))
        grid.addWidget(QLabel(caption), row, 0)
        grid.addWidget(minus, row, 1)
        grid.addWidget(value, row, 2)
        grid.addWidget(plus, row, 3)
        return value

    def _connect_signals(self) -> None:
        self.start_btn.clicked.connect(self.view_model.start)
        self.pause_btn.clicked.connect(self.view_model.pause)
        self.resume_btn.clicked.connect(self.view_model.resume)
        self.stop_btn.clicked.connect(self.view_model.stop)
        self.view_model.state_changed.connect(self._render)
        self.view_model.cues_requested.connect(self.cue_player.play)
        self.cue_player.cue_fired.connect(self._on_cue_fired)
        self.mute_box.toggled.connect(self.cue_player.set_muted)
        self.view_model.session_ended.connect(self._on_session_ended)
        app = QGuiApplication.instance()
        if app is not None:
            app.applicationStateChanged.connect(self._on_application_state_changed)

    def _on_application_state_changed(self, state: Qt.ApplicationState) -> None:
        self.view_model.on_application_state_changed(state == Qt.ApplicationState.ApplicationActive)

    def _on_cue_fired(self, cue: str) -> None:
        if cue == CueId.VIBRATE.value:
            # No vibration motor on desktop.
            logger.debug("Vibration cue")
            return
        QApplication.beep()

    def _on_session_ended(self, completed: bool) -> None:
        if completed:
            QTimer.singleShot(0, self._show_completed)

    def _show_completed(self) -> None:
        QMessageBox.information(self, "Workout complete", f"All {self.view_model.total_rounds} rounds done!")

    def _render(self) -> None:
        vm = self.view_model
        self.description_label.setText(vm.description)
        self.ring.set_state(vm.progress, vm.active_phase == Phase.REST, vm.time_text)

        self.settings_panel.setVisible(vm.can_edit_settings)
        self.work_value.setText(format_time(vm.work_duration))
        self.rest_value.setText(format_time(vm.rest_duration))
        self.rounds_value.setText(str(vm.total_rounds))

        phase = vm.phase
        self.start_btn.setVisible(phase == Phase.STOPPED)
        self.pause_btn.setVisible(phase in {Phase.WORK, Phase.REST})
        self.resume_btn.setVisible(phase == Phase.PAUSED)
        self.stop_btn.setVisible(phase != Phase.STOPPED)

    def closeEvent(self, event) -> None:  # noqa: N802
        if self.view_model.phase != Phase.STOPPED:
            answer = QMessageBox.question(
                self,
                "Exit",
                "A workout is in progress. Stop it and exit?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            )
            if answer != QMessageBox.StandardButton.Yes:
                event.ignore()
                return
            self.view_model.stop()
        self.refresh_timer.stop()
        event.accept()

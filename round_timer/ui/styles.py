from __future__ import annotations

from PyQt6.QtWidgets import QApplication


WORK_COLOR = "#43a047"
REST_COLOR = "#fb8c00"
TRACK_COLOR = "#d7dbe8"

THEME_QSS = """
QWidget {
    background: #eef0fa;
    color: #262838;
    font-size: 13px;
}

QLabel {
    background: transparent;
}

QLabel#Heading {
    font-size: 26px;
    font-weight: 700;
}

QLabel#PhaseDescription {
    font-size: 17px;
    color: #5d6078;
}

QLabel#SettingValue {
    font-size: 17px;
    font-weight: 600;
    min-width: 70px;
    qproperty-alignment: AlignCenter;
}

QFrame#SettingsPanel {
    background: #e2e5f2;
    border: none;
    border-radius: 15px;
}

QPushButton {
    border: none;
    border-radius: 16px;
    padding: 8px 14px;
    font-weight: 600;
    color: #ffffff;
}

QPushButton#StepDown {
    background: #e53935;
    min-width: 32px;
}

QPushButton#StepUp {
    background: #43a047;
    min-width: 32px;
}

QPushButton#StartButton, QPushButton#ResumeButton {
    background: #43a047;
    border-radius: 22px;
    padding: 12px 30px;
    font-size: 15px;
}

QPushButton#PauseButton {
    background: #fb8c00;
    border-radius: 22px;
    padding: 12px 30px;
    font-size: 15px;
}

QPushButton#StopButton {
    background: #e53935;
    border-radius: 22px;
    padding: 12px 30px;
    font-size: 15px;
}

QPushButton:pressed {
    background: #8e90a6;
}
"""


def apply_theme(app: QApplication) -> None:
    app.setStyleSheet(THEME_QSS)

from __future__ import annotations

"""Точка входа приложения Round Timer.

Настраивает логирование, создает Qt-приложение, модель таймера
и главное окно.
"""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication


from round_timer.core.view_model import TimerViewModel
from round_timer.ui.main_window import MainWindow
from round_timer.ui.styles import apply_theme


LOG_LEVEL_ENV = "ROUND_TIMER_LOG_LEVEL"


def configure_logging() -> None:
    """Уровень логов берется из переменной окружения `ROUND_TIMER_LOG_LEVEL`."""
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> int:
    """Создает зависимости приложения и запускает главный UI-цикл."""
    configure_logging()
    app = QApplication(sys.argv)
    apply_theme(app)

    view_model = TimerViewModel()
    window = MainWindow(view_model=view_model)

    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())

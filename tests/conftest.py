import pytest
from PyQt6.QtCore import QCoreApplication


@pytest.fixture(scope="session")
def qt_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app

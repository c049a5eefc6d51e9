"""Application entry point and setup for the six7typing trainer."""

import logging
import sys

from PySide6.QtGui import QFont, QGuiApplication
from PySide6.QtWidgets import QApplication

from six7typing.config import AppConfig, build_leaderboard, configure_logging
from six7typing.core.profile import ProfileStore
from six7typing.core.texts import TextBank, TextGenerator
from six7typing.ui.main_window import MainWindow


def run() -> None:
    """Initialize the application, load resources, and start the main window."""
    config = AppConfig.from_env()
    configure_logging(config.log_level)
    app = QApplication(sys.argv)
    app.setApplicationName("six7typing")
    app.setApplicationDisplayName("six7typing")

    app_font = QFont()
    app_font.setPointSize(11)
    app.setFont(app_font)

    texts = TextGenerator(TextBank.load())
    profile = ProfileStore(config.home)
    leaderboard = build_leaderboard(config)
    logging.info("Data directory: %s", config.home)

    window = MainWindow(config=config, texts=texts, profile=profile, leaderboard=leaderboard)
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.resize(int(geometry.width() * 0.7), int(geometry.height() * 0.7))
    window.show()

    sys.exit(app.exec())

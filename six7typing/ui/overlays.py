"""In-window game-over overlay."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, QEvent, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QGridLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from six7typing.core.session import RoundSummary
from six7typing.ui.colors import TypingColors


def _card_container(object_name: str) -> QFrame:
    container = QFrame()
    container.setObjectName(object_name)
    container.setMinimumWidth(380)
    container.setMaximumWidth(460)
    container.setStyleSheet(
        f"""
        QFrame#{object_name} {{
            background: #ffffff;
            border: 1px solid rgba(0, 131, 143, 0.12);
            border-radius: 20px;
        }}
        """
    )
    shadow = QGraphicsDropShadowEffect(container)
    shadow.setBlurRadius(20)
    shadow.setOffset(0, 6)
    shadow.setColor(QColor(0, 80, 100, 25))
    container.setGraphicsEffect(shadow)
    return container


def _primary_button_style() -> str:
    return f"""
        QPushButton {{
            background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
                stop:0 {TypingColors.PRIMARY_LIGHT}, stop:1 {TypingColors.PRIMARY});
            color: white;
            padding: 10px 16px;
            border: none;
            border-radius: 12px;
            font-weight: 600;
            font-size: 13px;
        }}
        QPushButton:hover {{ background: {TypingColors.PRIMARY}; }}
    """


class GameOverOverlay(QWidget):
    """Dimmed overlay with the round summary and a play-again button."""

    restart_requested = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        layout = QGridLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        background = QWidget(self)
        background.setStyleSheet("background: rgba(0, 0, 0, 0.25);")
        background.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        layout.addWidget(background, 0, 0)

        container = _card_container("gameOverContainer")
        content = QVBoxLayout(container)
        content.setContentsMargins(28, 24, 28, 24)
        content.setSpacing(18)

        title = QLabel("Time's up!")
        title.setStyleSheet(f"color: {TypingColors.PRIMARY}; font-size: 20px; font-weight: 800;")
        content.addWidget(title)

        self._stats_label = QLabel("")
        self._stats_label.setStyleSheet(f"color: {TypingColors.TEXT_PRIMARY}; font-size: 15px;")
        self._stats_label.setWordWrap(True)
        content.addWidget(self._stats_label)

        again_btn = QPushButton("Play again")
        again_btn.setStyleSheet(_primary_button_style())
        again_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        again_btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        again_btn.clicked.connect(self.restart_requested.emit)
        content.addWidget(again_btn)

        layout.addWidget(container, 0, 0, 1, 1, Qt.AlignCenter)
        self.hide()

    def show_summary(self, summary: RoundSummary) -> None:
        self._stats_label.setText(summary.headline)
        self._update_geometry()
        self.raise_()
        self.show()

    def _update_geometry(self) -> None:
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())

    def eventFilter(self, obj: QWidget, event: QEvent) -> bool:
        if obj is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self._update_geometry()
        return super().eventFilter(obj, event)

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self._update_geometry()
        parent = self.parentWidget()
        if parent is not None:
            parent.installEventFilter(self)

    def hideEvent(self, event) -> None:
        parent = self.parentWidget()
        if parent is not None:
            parent.removeEventFilter(self)
        super().hideEvent(event)

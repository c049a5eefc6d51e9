from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent, QKeyEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QHeaderView,
    QInputDialog,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QProgressBar,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from six7typing.config import TIME_LIMIT_CHOICES, AppConfig
from six7typing.core.clock import RealClock
from six7typing.core.leaderboard import DEFAULT_LIMIT, Leaderboard
from six7typing.core.profile import ProfileStore
from six7typing.core.render import split_lines
from six7typing.core.session import Phase, RoundSummary, SessionView, TypingSession
from six7typing.core.texts import Mode, TextSource
from six7typing.ui.colors import TypingColors, timer_color
from six7typing.ui.keys import key_press_from_event
from six7typing.ui.markup import cells_to_html
from six7typing.ui.overlays import GameOverOverlay
from six7typing.ui.timer import QtScheduler

logger = logging.getLogger(__name__)

_MODE_LABELS = {Mode.WORDS: "Words", Mode.SENTENCES: "Sentences"}


def _toggle_button_style() -> str:
    return f"""
        QPushButton {{
            background: {TypingColors.CARD_BG};
            color: {TypingColors.TEXT_PRIMARY};
            padding: 6px 14px;
            border: 1px solid #e0e0e0;
            border-radius: 10px;
            font-weight: 600;
        }}
        QPushButton:checked {{
            background: {TypingColors.PRIMARY};
            color: white;
            border-color: {TypingColors.PRIMARY};
        }}
    """


class MainWindow(QMainWindow):
    """Single-screen typing trainer.

    The window owns no typing state: it forwards key events to the
    :class:`TypingSession` and redraws from the views the session pushes
    back through ``on_update`` / ``on_round_end``.
    """

    def __init__(
        self,
        config: AppConfig,
        texts: TextSource,
        profile: ProfileStore,
        leaderboard: Leaderboard,
    ) -> None:
        super().__init__()
        self._config = config
        self._profile = profile
        self._leaderboard = leaderboard

        self._mode_buttons: dict[Mode, QPushButton] = {}
        self._time_buttons: dict[int, QPushButton] = {}
        self._timer_label: Optional[QLabel] = None
        self._time_progress: Optional[QProgressBar] = None
        self._text_label: Optional[QLabel] = None
        self._live_stats_label: Optional[QLabel] = None
        self._player_label: Optional[QLabel] = None
        self._scores_table: Optional[QTableWidget] = None
        self._game_over: Optional[GameOverOverlay] = None

        self._session = TypingSession(
            texts=texts,
            clock=RealClock(),
            scheduler=QtScheduler(self),
            mode=profile.mode or config.mode,
            time_limit_s=profile.time_limit_s or config.time_limit_s,
            leaderboard=leaderboard,
            player_name=profile.username,
        )

        self._build_ui()
        self._session.listener = self
        self._refresh_leaderboard()
        if not profile.username:
            QTimer.singleShot(0, self._ask_username)

    # -- layout ---------------------------------------------------------

    def _build_ui(self) -> None:
        self.setWindowTitle("six7typing")
        self.setMinimumSize(900, 560)

        central = QWidget()
        central.setStyleSheet(
            f"background: qlineargradient(x1:0, y1:0, x2:0, y2:1,"
            f" stop:0 {TypingColors.BG_TOP}, stop:1 {TypingColors.BG_BOTTOM});"
        )
        root = QVBoxLayout(central)
        root.setContentsMargins(32, 24, 32, 24)
        root.setSpacing(16)

        settings = QHBoxLayout()
        settings.setSpacing(8)
        for mode, label in _MODE_LABELS.items():
            btn = self._toggle_button(label)
            btn.clicked.connect(lambda _=False, m=mode: self._on_mode_clicked(m))
            self._mode_buttons[mode] = btn
            settings.addWidget(btn)
        settings.addSpacing(24)
        for seconds in TIME_LIMIT_CHOICES:
            btn = self._toggle_button(f"{seconds}s")
            btn.clicked.connect(lambda _=False, s=seconds: self._on_time_clicked(s))
            self._time_buttons[seconds] = btn
            settings.addWidget(btn)
        settings.addStretch(1)
        self._player_label = QLabel("")
        self._player_label.setStyleSheet(f"color: {TypingColors.TEXT_MUTED};")
        settings.addWidget(self._player_label)
        restart_btn = QPushButton("Restart")
        restart_btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        restart_btn.setStyleSheet(_toggle_button_style())
        restart_btn.clicked.connect(self._session.restart)
        settings.addWidget(restart_btn)
        root.addLayout(settings)

        self._timer_label = QLabel("")
        self._timer_label.setAlignment(Qt.AlignCenter)
        self._timer_label.setStyleSheet(f"color: {TypingColors.PRIMARY}; font-size: 40px; font-weight: 800;")
        root.addWidget(self._timer_label)

        self._time_progress = QProgressBar()
        self._time_progress.setTextVisible(False)
        self._time_progress.setFixedHeight(8)
        self._time_progress.setRange(0, 1000)
        root.addWidget(self._time_progress)

        self._text_label = QLabel("")
        self._text_label.setTextFormat(Qt.TextFormat.RichText)
        self._text_label.setAlignment(Qt.AlignCenter)
        self._text_label.setStyleSheet(
            f"background: {TypingColors.CARD_BG}; border-radius: 16px; padding: 24px;"
            " font-family: monospace; font-size: 24px;"
        )
        root.addWidget(self._text_label, 1)

        self._live_stats_label = QLabel("")
        self._live_stats_label.setAlignment(Qt.AlignCenter)
        self._live_stats_label.setStyleSheet(f"color: {TypingColors.TEXT_PRIMARY}; font-size: 16px;")
        root.addWidget(self._live_stats_label)

        self._scores_table = QTableWidget(0, 2)
        self._scores_table.setHorizontalHeaderLabels(["Name", "WPM"])
        self._scores_table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self._scores_table.verticalHeader().setVisible(False)
        self._scores_table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self._scores_table.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self._scores_table.setMaximumHeight(220)
        root.addWidget(self._scores_table)

        self.setCentralWidget(central)

        self._game_over = GameOverOverlay(central)
        self._game_over.restart_requested.connect(self._session.restart)
        self._update_player_label()

    def _toggle_button(self, label: str) -> QPushButton:
        btn = QPushButton(label)
        btn.setCheckable(True)
        btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        btn.setCursor(Qt.CursorShape.PointingHandCursor)
        btn.setStyleSheet(_toggle_button_style())
        return btn

    # -- session listener -----------------------------------------------

    def on_update(self, view: SessionView) -> None:
        for mode, btn in self._mode_buttons.items():
            btn.setChecked(mode is view.mode)
        for seconds, btn in self._time_buttons.items():
            btn.setChecked(seconds == view.time_limit_s)

        if self._timer_label is not None:
            self._timer_label.setText(f"{view.time_remaining_s}")
            color = timer_color(view.time_remaining_s, view.time_limit_s)
            self._timer_label.setStyleSheet(f"color: {color}; font-size: 40px; font-weight: 800;")
        if self._time_progress is not None:
            fraction = view.time_remaining_s / view.time_limit_s if view.time_limit_s else 0.0
            self._time_progress.setValue(int(round(fraction * 1000)))
        if self._text_label is not None:
            self._text_label.setText(cells_to_html(split_lines(view.cells)))
        if self._live_stats_label is not None:
            self._live_stats_label.setText(f"{view.stats.wpm} WPM  ·  {view.stats.accuracy_percent}% accuracy")
        if self._game_over is not None and view.phase is not Phase.ENDED:
            self._game_over.hide()

    def on_round_end(self, summary: RoundSummary) -> None:
        if self._game_over is not None:
            self._game_over.show_summary(summary)
        # the session submits the score after this callback returns
        QTimer.singleShot(0, self._refresh_leaderboard)

    # -- events ---------------------------------------------------------

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if self._session.handle_key(key_press_from_event(event)):
            event.accept()
            return
        super().keyPressEvent(event)

    def closeEvent(self, event: QCloseEvent) -> None:
        self._session.restart()
        super().closeEvent(event)

    def _on_mode_clicked(self, mode: Mode) -> None:
        self._session.set_mode(mode)
        self._profile.update_settings(self._session.mode, self._session.time_limit_s)

    def _on_time_clicked(self, seconds: int) -> None:
        self._session.set_time_limit(seconds)
        self._profile.update_settings(self._session.mode, self._session.time_limit_s)

    # -- leaderboard / player -------------------------------------------

    def _refresh_leaderboard(self) -> None:
        if self._scores_table is None:
            return
        entries = self._leaderboard.list_scores(DEFAULT_LIMIT)
        self._scores_table.setRowCount(len(entries))
        for row, entry in enumerate(entries):
            self._scores_table.setItem(row, 0, QTableWidgetItem(entry.name))
            score_item = QTableWidgetItem(str(entry.score))
            score_item.setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
            self._scores_table.setItem(row, 1, score_item)

    def _ask_username(self) -> None:
        while True:
            value, ok = QInputDialog.getText(
                self, "Welcome", "Pick a username for the leaderboard:", QLineEdit.EchoMode.Normal, ""
            )
            if not ok:
                logger.info("No username given; scores will not be submitted")
                return
            try:
                name = self._profile.set_username(value)
            except ValueError as e:
                QMessageBox.warning(self, "Username", str(e))
                continue
            self._session.player_name = name
            self._update_player_label()
            return

    def _update_player_label(self) -> None:
        if self._player_label is not None:
            name = self._session.player_name
            self._player_label.setText(f"Playing as {name}" if name else "Not signed in")

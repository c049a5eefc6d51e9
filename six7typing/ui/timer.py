from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer

logger = logging.getLogger(__name__)


class QtTimerHandle:
    def __init__(self, timer: QTimer) -> None:
        self._timer: Optional[QTimer] = timer

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None


class QtScheduler:
    """Repeating callbacks on the Qt event loop, so ticks never interleave with key handling."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent

    def schedule_repeating(self, interval_s: float, callback: Callable[[], None]) -> QtTimerHandle:
        timer = QTimer(self._parent)
        timer.setInterval(max(1, int(round(interval_s * 1000))))
        timer.timeout.connect(callback)
        timer.start()
        logger.debug("Started %.0f ms timer", interval_s * 1000)
        return QtTimerHandle(timer)

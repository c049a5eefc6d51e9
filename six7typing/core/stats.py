from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from six7typing.core.grading import Outcome

CHARS_PER_WORD = 5


@dataclass(frozen=True)
class RoundStats:
    """Statistics derived from the keystroke log at one instant."""

    correct: int
    total: int
    accuracy_percent: int
    wpm: int
    elapsed_s: float

    @property
    def errors(self) -> int:
        return self.total - self.correct


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def accuracy_percent(correct: int, total: int) -> int:
    if total <= 0:
        return 0
    return max(0, min(100, round_half_up(correct / total * 100.0)))


def words_per_minute(correct: int, elapsed_s: float) -> int:
    """Correct characters / 5 per minute; 0 until time has actually passed."""
    if elapsed_s <= 0.0:
        return 0
    return round_half_up((correct / CHARS_PER_WORD) / (elapsed_s / 60.0))


def compute_stats(
    outcomes: Iterable[Outcome],
    started_at: Optional[float],
    now: float,
) -> RoundStats:
    """Recompute the statistics from scratch over *outcomes*.

    *started_at* and *now* are clock seconds; a round that has not started
    yet (``started_at is None``) reports zero WPM.
    """
    correct = 0
    total = 0
    for outcome in outcomes:
        total += 1
        if outcome is Outcome.CORRECT:
            correct += 1
    elapsed_s = 0.0 if started_at is None else max(0.0, now - started_at)
    return RoundStats(
        correct=correct,
        total=total,
        accuracy_percent=accuracy_percent(correct, total),
        wpm=words_per_minute(correct, elapsed_s),
        elapsed_s=elapsed_s,
    )

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from six7typing.core.keys import SPACE
from six7typing.core.sequence import ExpectedUnit, TargetSequence

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"


@dataclass
class GradeSlot:
    """Grade state of one position in the working sequence.

    Target positions carry their ``unit``; extras have ``unit=None`` and
    ``is_extra=True`` and only exist while they are graded.
    """

    unit: Optional[ExpectedUnit]
    is_extra: bool = False
    graded: bool = False
    correct: bool = False
    typed: str = ""

    @property
    def is_separator(self) -> bool:
        return self.unit is not None and self.unit.is_separator

    def commit(self, typed: str, correct: bool) -> Outcome:
        self.graded = True
        self.correct = correct
        self.typed = typed
        return Outcome.CORRECT if correct else Outcome.INCORRECT

    def undo(self) -> None:
        self.graded = False
        self.correct = False
        self.typed = ""


class KeystrokeLog:
    """Ordered outcomes, one per graded slot, for the whole round."""

    def __init__(self) -> None:
        self._outcomes: list[Outcome] = []

    def append(self, outcome: Outcome) -> None:
        self._outcomes.append(outcome)

    def pop(self) -> Outcome:
        return self._outcomes.pop()

    def clear(self) -> None:
        self._outcomes.clear()

    @property
    def correct_count(self) -> int:
        return sum(1 for o in self._outcomes if o is Outcome.CORRECT)

    @property
    def total_count(self) -> int:
        return len(self._outcomes)

    def __len__(self) -> int:
        return len(self._outcomes)

    def __iter__(self) -> Iterator[Outcome]:
        return iter(self._outcomes)


class GradingEngine:
    """Cursor, working sequence and keystroke log for one round.

    The working sequence holds one slot per target unit plus any extras
    typed while a separator was pending. Every slot before the cursor is
    graded, every slot from the cursor on is not; each graded slot has
    exactly one log entry.

    Loading the next text keeps the log (statistics span the round) but
    fences it: backspace never reaches back into a previous text.
    """

    def __init__(self, sequence: Optional[TargetSequence] = None) -> None:
        self._log = KeystrokeLog()
        self._sequence: Optional[TargetSequence] = None
        self._slots: list[GradeSlot] = []
        self._cursor = 0
        self._log_fence = 0
        if sequence is not None:
            self.load(sequence)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def sequence(self) -> Optional[TargetSequence]:
        """Target sequence currently being typed."""
        return self._sequence

    @property
    def slots(self) -> tuple[GradeSlot, ...]:
        """Working sequence: target slots interleaved with live extras."""
        return tuple(self._slots)

    @property
    def log(self) -> KeystrokeLog:
        return self._log

    @property
    def is_exhausted(self) -> bool:
        """True once every slot of the current text has been graded."""
        return self._sequence is not None and self._cursor >= len(self._slots)

    def graded_count(self) -> int:
        """Number of graded slots in the working sequence."""
        return sum(1 for s in self._slots if s.graded)

    def live_log_length(self) -> int:
        """Log entries that belong to the current text."""
        return len(self._log) - self._log_fence

    def load(self, sequence: TargetSequence) -> None:
        """Install the next text of the round; the log is kept."""
        self._sequence = sequence
        self._slots = [GradeSlot(unit=u) for u in sequence]
        self._cursor = 0
        self._log_fence = len(self._log)

    def reset(self, sequence: Optional[TargetSequence] = None) -> None:
        """Drop everything, log included, and optionally load *sequence*."""
        self._log.clear()
        self._log_fence = 0
        self._sequence = None
        self._slots = []
        self._cursor = 0
        if sequence is not None:
            self.load(sequence)

    def on_printable(self, ch: str) -> Optional[Outcome]:
        """Grade *ch* against the slot under the cursor.

        Returns the logged outcome, or ``None`` when nothing was graded.
        """
        if self._cursor >= len(self._slots):
            return None
        slot = self._slots[self._cursor]
        if slot.graded:
            logger.debug("Slot %d already graded; ignoring %r", self._cursor, ch)
            return None

        unit = slot.unit
        if unit is None:
            # extras never sit at the cursor
            return None
        if unit.is_separator and ch != SPACE:
            return self._insert_extra(ch)

        outcome = slot.commit(ch, ch == unit.expected_char)
        self._log.append(outcome)
        self._cursor += 1
        return outcome

    def on_backspace(self) -> bool:
        """Undo the slot before the cursor. Returns False at the start of the text."""
        if self._cursor <= 0:
            return False
        index = self._cursor - 1
        prev = self._slots[index]
        if prev.graded and self.live_log_length() > 0:
            self._log.pop()
        prev.undo()
        if prev.is_extra:
            del self._slots[index]
        # after an extra removal index is also the shifted position of the separator
        self._cursor = index
        return True

    def _insert_extra(self, ch: str) -> Outcome:
        extra = GradeSlot(unit=None, is_extra=True)
        outcome = extra.commit(ch, correct=False)
        self._slots.insert(self._cursor, extra)
        self._log.append(outcome)
        self._cursor += 1
        return outcome

"""Pure projection of grading state into display cells.

The display never stores grade state itself; it redraws from
``render(engine)`` after every mutation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

from six7typing.core.grading import GradeSlot, GradingEngine

NBSP = "\u00a0"


class CellState(str, Enum):
    PENDING = "pending"
    CURRENT = "current"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    EXTRA = "extra"


@dataclass(frozen=True)
class DisplayCell:
    text: str
    state: CellState
    is_separator: bool = False


def _cell_for(slot: GradeSlot, is_current: bool) -> DisplayCell:
    if slot.is_extra or slot.unit is None:
        return DisplayCell(text=slot.typed, state=CellState.EXTRA)
    text = NBSP if slot.is_separator else slot.unit.expected_char
    if slot.graded:
        state = CellState.CORRECT if slot.correct else CellState.INCORRECT
    elif is_current:
        state = CellState.CURRENT
    else:
        state = CellState.PENDING
    return DisplayCell(text=text, state=state, is_separator=slot.is_separator)


def render(engine: GradingEngine) -> List[DisplayCell]:
    """One cell per working-sequence slot; the slot under the cursor is CURRENT."""
    cursor = engine.cursor
    return [_cell_for(slot, idx == cursor) for idx, slot in enumerate(engine.slots)]


def split_lines(cells: Sequence[DisplayCell], lines: int = 2) -> List[List[DisplayCell]]:
    """Break *cells* into *lines* rows at word boundaries.

    The word list is cut at its midpoint (integer division), each row but
    the last keeping the separator that ends it. Extras stay with the word
    they follow.
    """
    if lines <= 1 or not cells:
        return [list(cells)]

    separators = [idx for idx, cell in enumerate(cells) if cell.is_separator]
    words = len(separators) + 1
    rows: List[List[DisplayCell]] = []
    start = 0
    for row in range(1, lines):
        # number of words that end before this cut
        cut_words = (words * row) // lines
        if cut_words <= 0 or cut_words > len(separators):
            continue
        end = separators[cut_words - 1] + 1
        if end <= start:
            continue
        rows.append(list(cells[start:end]))
        start = end
    rows.append(list(cells[start:]))
    return rows

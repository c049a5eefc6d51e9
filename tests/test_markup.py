"""Tests for six7typing.ui.markup – rich-text rendering of display cells."""

from __future__ import annotations

from six7typing.core.render import NBSP, CellState, DisplayCell
from six7typing.ui.colors import TypingColors
from six7typing.ui.markup import cells_to_html


def test_one_div_per_line():
    lines = [[DisplayCell("a", CellState.PENDING)], [DisplayCell("b", CellState.PENDING)]]
    out = cells_to_html(lines)
    assert out.count("<div>") == 2
    assert out.count("<span") == 2


def test_text_is_escaped():
    out = cells_to_html([[DisplayCell("<", CellState.PENDING), DisplayCell("&", CellState.PENDING)]])
    assert "&lt;" in out
    assert "&amp;" in out


def test_state_colors_applied():
    out = cells_to_html([[DisplayCell("a", CellState.CORRECT), DisplayCell("b", CellState.INCORRECT)]])
    assert TypingColors.CORRECT in out
    assert TypingColors.INCORRECT in out


def test_current_cell_highlighted():
    out = cells_to_html([[DisplayCell("a", CellState.CURRENT)]])
    assert TypingColors.CURRENT_BG in out
    assert "underline" in out


def test_wrong_separator_gets_background():
    out = cells_to_html([[DisplayCell(NBSP, CellState.INCORRECT, is_separator=True)]])
    assert TypingColors.INCORRECT_BG in out


def test_extra_struck_through():
    out = cells_to_html([[DisplayCell("x", CellState.EXTRA)]])
    assert "line-through" in out


def test_empty():
    assert cells_to_html([]) == ""

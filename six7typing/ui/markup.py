"""Qt rich-text markup for rendered typing text."""

from __future__ import annotations

import html
from typing import Sequence

from six7typing.core.render import CellState, DisplayCell
from six7typing.ui.colors import TypingColors, state_color


def _cell_style(cell: DisplayCell) -> str:
    parts = [f"color:{state_color(cell.state)};"]
    if cell.state is CellState.CURRENT:
        parts.append(f"background-color:{TypingColors.CURRENT_BG}; text-decoration:underline;")
    elif cell.state is CellState.INCORRECT and cell.is_separator:
        parts.append(f"background-color:{TypingColors.INCORRECT_BG};")
    elif cell.state is CellState.EXTRA:
        parts.append("text-decoration:line-through;")
    return " ".join(parts)


def cells_to_html(lines: Sequence[Sequence[DisplayCell]]) -> str:
    """One ``<div>`` per line, one ``<span>`` per cell."""
    rows = []
    for line in lines:
        spans = "".join(
            f'<span style="{_cell_style(cell)}">{html.escape(cell.text)}</span>' for cell in line
        )
        rows.append(f"<div>{spans}</div>")
    return "".join(rows)

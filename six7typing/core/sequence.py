from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from six7typing.core.keys import SPACE


class UnitKind(str, Enum):
    LETTER = "letter"
    SEPARATOR = "separator"


@dataclass(frozen=True)
class ExpectedUnit:
    """A single character the user has to type."""

    expected_char: str
    kind: UnitKind = UnitKind.LETTER

    @property
    def is_separator(self) -> bool:
        return self.kind is UnitKind.SEPARATOR


SEPARATOR = ExpectedUnit(expected_char=SPACE, kind=UnitKind.SEPARATOR)


class TargetSequence:
    """Ordered, immutable list of expected units for one piece of text.

    Words are joined by exactly one separator unit; runs of whitespace in
    the source text collapse into a single separator.
    """

    def __init__(self, units: tuple[ExpectedUnit, ...], text: str) -> None:
        self._units = units
        self._text = text

    @classmethod
    def from_text(cls, text: str) -> "TargetSequence":
        words = text.split()
        if not words:
            raise ValueError("target text is empty")
        units: list[ExpectedUnit] = []
        for idx, word in enumerate(words):
            if idx:
                units.append(SEPARATOR)
            units.extend(ExpectedUnit(expected_char=ch) for ch in word)
        return cls(tuple(units), SPACE.join(words))

    @property
    def text(self) -> str:
        """The normalized text this sequence was built from."""
        return self._text

    @property
    def units(self) -> tuple[ExpectedUnit, ...]:
        return self._units

    @property
    def word_count(self) -> int:
        return sum(1 for u in self._units if u.is_separator) + 1

    def __len__(self) -> int:
        return len(self._units)

    def __getitem__(self, index: int) -> ExpectedUnit:
        return self._units[index]

    def __iter__(self) -> Iterator[ExpectedUnit]:
        return iter(self._units)

    def __repr__(self) -> str:
        return f"TargetSequence({self._text!r})"

"""Tests for six7typing.core.sequence – target sequences."""

from __future__ import annotations

import pytest

from six7typing.core.sequence import SEPARATOR, ExpectedUnit, TargetSequence, UnitKind


class TestExpectedUnit:
    def test_letter_default(self):
        unit = ExpectedUnit(expected_char="a")
        assert unit.kind is UnitKind.LETTER
        assert not unit.is_separator

    def test_separator_expects_plain_space(self):
        assert SEPARATOR.expected_char == " "
        assert SEPARATOR.is_separator

    def test_frozen(self):
        unit = ExpectedUnit(expected_char="a")
        with pytest.raises(AttributeError):
            unit.expected_char = "b"  # type: ignore[misc]


class TestFromText:
    def test_units_and_separators(self):
        seq = TargetSequence.from_text("ab cd")
        assert [u.expected_char for u in seq] == ["a", "b", " ", "c", "d"]
        assert [u.kind for u in seq][2] is UnitKind.SEPARATOR
        assert len(seq) == 5

    def test_single_word_has_no_separator(self):
        seq = TargetSequence.from_text("hello")
        assert not any(u.is_separator for u in seq)
        assert seq.word_count == 1

    def test_whitespace_runs_collapse(self):
        seq = TargetSequence.from_text("  the   quick\tfox ")
        assert seq.text == "the quick fox"
        assert sum(1 for u in seq if u.is_separator) == 2
        assert seq.word_count == 3

    def test_punctuation_is_letter_unit(self):
        seq = TargetSequence.from_text("hi, there.")
        assert seq[2] == ExpectedUnit(expected_char=",")
        assert seq[-1].expected_char == "."

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_empty_text_rejected(self, text):
        with pytest.raises(ValueError):
            TargetSequence.from_text(text)

    def test_units_tuple_is_immutable(self):
        seq = TargetSequence.from_text("ab")
        assert isinstance(seq.units, tuple)

    def test_length_matches_text(self):
        text = "the quick brown fox"
        assert len(TargetSequence.from_text(text)) == len(text)

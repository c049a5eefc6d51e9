from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Protocol

import yaml

logger = logging.getLogger(__name__)

MIN_WORD_CHARS = 75
SMALL_WORD_CHANCE = 0.25

DEFAULT_BANK_PATH = Path(__file__).resolve().parent.parent / "data" / "texts.yaml"


class Mode(str, Enum):
    WORDS = "words"
    SENTENCES = "sentences"


class TextSource(Protocol):
    def generate(self, mode: Mode) -> str:
        ...


def _string_list(raw: dict, field: str, source: str) -> List[str]:
    value = raw.get(field)
    if not isinstance(value, list):
        raise ValueError(f"{source}: '{field}' must be a list")
    items = [str(item).strip() for item in value if str(item).strip()]
    if not items:
        raise ValueError(f"{source}: '{field}' has no entries")
    return items


@dataclass(frozen=True)
class TextBank:
    dictionary: List[str]
    small_words: List[str]
    sentences: List[str]

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "TextBank":
        """Read a bank from YAML with ``dictionary``, ``small_words`` and ``sentences`` lists."""
        path = path or DEFAULT_BANK_PATH
        if not path.exists():
            raise FileNotFoundError(f"Text bank not found: {path}")
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        if not raw or not isinstance(raw, dict):
            raise ValueError(f"{path.name}: expected YAML with 'dictionary', 'small_words' and 'sentences'")

        dictionary = _string_list(raw, "dictionary", path.name)
        small_words = _string_list(raw, "small_words", path.name)
        for word in dictionary + small_words:
            if len(word.split()) != 1:
                raise ValueError(f"{path.name}: word {word!r} contains whitespace")
        if len(set(dictionary) | set(small_words)) < 2:
            raise ValueError(f"{path.name}: need at least two distinct words")
        sentences = _string_list(raw, "sentences", path.name)

        logger.info(
            "Loaded text bank %s: %d words, %d small words, %d sentences",
            path, len(dictionary), len(small_words), len(sentences),
        )
        return cls(dictionary=dictionary, small_words=small_words, sentences=sentences)


class TextGenerator:
    """Supplies the text for each round.

    Words mode joins random words until they hold at least
    ``MIN_WORD_CHARS`` non-space characters, drawing from the short-word
    list a quarter of the time and never repeating the previous word.
    Sentences mode returns one sentence from the bank verbatim.
    """

    def __init__(self, bank: TextBank, rng: Optional[random.Random] = None) -> None:
        self._bank = bank
        self._rng = rng or random.Random()

    def generate(self, mode: Mode) -> str:
        if mode is Mode.SENTENCES:
            return self._rng.choice(self._bank.sentences)
        return self._random_words()

    def _random_words(self) -> str:
        words: List[str] = []
        chars = 0
        last = ""
        while chars < MIN_WORD_CHARS:
            if self._rng.random() < SMALL_WORD_CHANCE:
                word = self._rng.choice(self._bank.small_words)
            else:
                word = self._rng.choice(self._bank.dictionary)
            if word == last:
                continue
            words.append(word)
            chars += len(word)
            last = word
        return " ".join(words)

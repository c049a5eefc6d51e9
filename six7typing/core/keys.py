"""Key normalization: raw key presses to canonical characters."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Optional

SPACE = " "
BACKSPACE = "Backspace"

_DEAD_KEYS = frozenset({"Dead", "Compose"})
_SPACE_NAMES = frozenset({"Space", "Spacebar"})

_NUMPAD_CODES = {
    "NumpadDecimal": ".",
    "NumpadComma": ",",
    **{f"Numpad{d}": str(d) for d in range(10)},
}


@dataclass(frozen=True)
class KeyPress:
    """One keyboard event as reported by the input layer.

    ``key`` is the produced value (``"a"``, ``" "``, ``"Backspace"``,
    ``"Dead"``, ``"Unidentified"`` ...) and ``code`` the physical key name
    (``"KeyA"``, ``"Space"``, ``"Numpad5"`` ...).
    """

    key: str
    code: str = ""
    ctrl: bool = False
    alt: bool = False
    meta: bool = False

    @property
    def is_backspace(self) -> bool:
        return self.key == BACKSPACE


def _is_space_like(value: str) -> bool:
    return len(value) == 1 and unicodedata.category(value) == "Zs"


def normalize_key(press: KeyPress) -> Optional[str]:
    """Return the single character *press* types, or ``None`` to ignore it."""
    if press.ctrl or press.alt or press.meta:
        return None
    key = press.key or ""
    if key in _DEAD_KEYS:
        return None

    if press.code == "Space" or key in _SPACE_NAMES or _is_space_like(key):
        return SPACE

    normalized = unicodedata.normalize("NFKC", key)
    if len(normalized) == 1:
        if unicodedata.category(normalized) == "Cc":
            return None
        # NFKC can turn a wide space into a plain one
        return SPACE if _is_space_like(normalized) else normalized

    if key == "Unidentified":
        return _NUMPAD_CODES.get(press.code)
    return None

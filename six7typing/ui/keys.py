"""Translate Qt key events into engine key presses."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeyEvent

from six7typing.core.keys import BACKSPACE, KeyPress

_KEYPAD_CODES = {
    Qt.Key.Key_Period: "NumpadDecimal",
    Qt.Key.Key_Comma: "NumpadComma",
    **{getattr(Qt.Key, f"Key_{d}"): f"Numpad{d}" for d in range(10)},
}


def _is_dead_key(key: int) -> bool:
    try:
        name = Qt.Key(key).name
    except ValueError:
        return False
    return bool(name) and name.startswith(("Key_Dead_", "Key_Multi_key"))


def key_press_from_event(event: QKeyEvent) -> KeyPress:
    key = event.key()
    mods = event.modifiers()

    code = ""
    if key == Qt.Key.Key_Space:
        code = "Space"
    elif mods & Qt.KeyboardModifier.KeypadModifier:
        for qt_key, name in _KEYPAD_CODES.items():
            if key == qt_key:
                code = name
                break

    if key == Qt.Key.Key_Backspace:
        value = BACKSPACE
    elif _is_dead_key(key):
        value = "Dead"
    else:
        value = event.text() or "Unidentified"

    return KeyPress(
        key=value,
        code=code,
        ctrl=bool(mods & Qt.KeyboardModifier.ControlModifier),
        alt=bool(mods & Qt.KeyboardModifier.AltModifier),
        meta=bool(mods & Qt.KeyboardModifier.MetaModifier),
    )

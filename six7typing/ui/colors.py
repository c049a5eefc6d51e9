"""Theme colors and color utilities for the UI."""

from six7typing.core.render import CellState


class TypingColors:
    """Light theme palette."""

    BG_TOP = "#e0f7fa"
    BG_BOTTOM = "#80deea"

    PRIMARY = "#00838f"
    PRIMARY_LIGHT = "#4fb3bf"
    CORAL = "#ff8a65"

    CARD_BG = "rgba(255, 255, 255, 0.85)"

    TEXT_PRIMARY = "#1a3a3a"
    TEXT_MUTED = "#78909c"

    # graded text
    CORRECT = "#2e7d32"
    INCORRECT = "#c62828"
    INCORRECT_BG = "#ffebee"
    EXTRA = "#ad1457"
    CURRENT_BG = "#b2ebf2"


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    a = a.strip()
    b = b.strip()
    if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
        return a
    try:
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
    except ValueError:
        return a
    t = max(0.0, min(1.0, float(t)))
    r = int(ar + (br - ar) * t)
    g = int(ag + (bg - ag) * t)
    bl = int(ab + (bb - ab) * t)
    return f"#{r:02X}{g:02X}{bl:02X}"


def timer_color(remaining_s: float, limit_s: float) -> str:
    """Countdown colour: primary with a full clock, coral as it runs out."""
    if limit_s <= 0:
        return TypingColors.CORAL
    used = 1.0 - max(0.0, min(1.0, remaining_s / limit_s))
    return blend_hex(TypingColors.PRIMARY, TypingColors.CORAL, used)


def state_color(state: CellState) -> str:
    return {
        CellState.PENDING: TypingColors.TEXT_MUTED,
        CellState.CURRENT: TypingColors.TEXT_PRIMARY,
        CellState.CORRECT: TypingColors.CORRECT,
        CellState.INCORRECT: TypingColors.INCORRECT,
        CellState.EXTRA: TypingColors.EXTRA,
    }[state]

"""Theme colors and color utilities for the practice window."""


class PracticeColors:
    """Light theme palette."""

    BG_TOP = "#eef4ff"
    BG_BOTTOM = "#dfe9fb"

    PRIMARY = "#2f6fdb"
    PRIMARY_LIGHT = "#6d9cf0"

    CARD_BG = "rgba(255, 255, 255, 0.9)"
    CARD_BORDER = "rgba(255, 255, 255, 0.6)"

    TEXT_PRIMARY = "#1b2536"
    TEXT_MUTED = "#8a94a6"

    # letter states on the word display
    LETTER_PENDING = "#9aa3b2"
    LETTER_CURRENT = "#1b2536"
    LETTER_CORRECT = "#22a55b"
    LETTER_WRONG = "#e0454b"


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except ValueError:
        return a

"""Theme palettes and color utilities for the UI."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    BG_TOP: str
    BG_BOTTOM: str

    PRIMARY: str
    PRIMARY_LIGHT: str
    PRIMARY_DARK: str

    CARD_BG: str
    CARD_BORDER: str

    TEXT_PRIMARY: str
    TEXT_SECONDARY: str
    TEXT_MUTED: str

    CORRECT: str
    CORRECT_BG: str
    INCORRECT: str
    INCORRECT_BG: str


LIGHT = Palette(
    BG_TOP="#e3f2fd",
    BG_BOTTOM="#bbdefb",
    PRIMARY="#4a90e2",
    PRIMARY_LIGHT="#7fb3f0",
    PRIMARY_DARK="#2c6cb8",
    CARD_BG="#ffffff",
    CARD_BORDER="#d6e4f5",
    TEXT_PRIMARY="#1c2b3a",
    TEXT_SECONDARY="#4a5d70",
    TEXT_MUTED="#8796a5",
    CORRECT="#2e7d32",
    CORRECT_BG="#e8f5e9",
    INCORRECT="#c62828",
    INCORRECT_BG="#ffebee",
)

DARK = Palette(
    BG_TOP="#121a24",
    BG_BOTTOM="#1e2a38",
    PRIMARY="#64a8f0",
    PRIMARY_LIGHT="#8cc0f5",
    PRIMARY_DARK="#3d7fc4",
    CARD_BG="#243244",
    CARD_BORDER="#33475e",
    TEXT_PRIMARY="#e8eef5",
    TEXT_SECONDARY="#b0bfcf",
    TEXT_MUTED="#7a8a9b",
    CORRECT="#81c784",
    CORRECT_BG="#1f3b24",
    INCORRECT="#e57373",
    INCORRECT_BG="#4a2326",
)


def palette_for(theme: str) -> Palette:
    return DARK if theme == "dark" else LIGHT


def theme_toggle_icon(theme: str) -> str:
    """Icon for the theme button: a sun in dark mode, half moon in light mode."""
    return "☀️" if theme == "dark" else "🌓"


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

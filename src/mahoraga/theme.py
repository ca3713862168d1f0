"""Fixed colour palette for the terminal UI."""

from __future__ import annotations

COLORS: dict[str, str] = {
    "primary": "#D4AF37",
    "secondary": "#B0B0B0",
    "muted": "#666666",
    "success": "#22C55E",
    "error": "#EF4444",
    "white": "#FFFFFF",
    "dim": "#888888",
}


def score_color(score: float) -> str:
    """Colour band for a score: success >= 0.8, primary >= 0.5, else error."""
    if score >= 0.8:
        return COLORS["success"]
    if score >= 0.5:
        return COLORS["primary"]
    return COLORS["error"]

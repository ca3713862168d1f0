"""Logo and version banner shown at the top of every screen."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from ..theme import COLORS

LOGO = (
    "◯─◯─◯",
    "◯ ◎ ◯",
    "◯─◯─◯",
)


class Banner(Static):
    """Three-line logo with the product name and version beside it."""

    DEFAULT_CSS = """
    Banner {
        height: auto;
        margin-bottom: 1;
    }
    """

    def __init__(self, version: str, **kwargs: object) -> None:
        super().__init__(self.build_text(version), **kwargs)  # type: ignore[arg-type]

    @staticmethod
    def build_text(version: str) -> Text:
        side = ("", "MAHORAGA", f"v{version}")
        text = Text()
        for index, (logo_line, label) in enumerate(zip(LOGO, side)):
            if index:
                text.append("\n")
            text.append(logo_line, style=COLORS["primary"])
            text.append("  ")
            if index == 1:
                text.append(label, style=f"bold {COLORS['primary']}")
            else:
                text.append(label, style=COLORS["muted"])
        return text

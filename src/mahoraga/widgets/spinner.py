"""Animated "Analyzing prompt..." indicator."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from ..theme import COLORS

SPINNER_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")


class AnalyzingIndicator(Static):
    """Spinner line shown while a request is in flight."""

    DEFAULT_CSS = """
    AnalyzingIndicator {
        height: auto;
        margin: 1 0;
    }
    """

    def __init__(self, label: str = "Analyzing prompt...", **kwargs: object) -> None:
        super().__init__("", **kwargs)  # type: ignore[arg-type]
        self._label = label
        self._frame = 0

    def on_mount(self) -> None:
        self._render_frame()
        self.set_interval(0.08, self._advance)

    def _advance(self) -> None:
        if not self.display:
            return
        self._frame = (self._frame + 1) % len(SPINNER_FRAMES)
        self._render_frame()

    def _render_frame(self) -> None:
        text = Text()
        text.append(SPINNER_FRAMES[self._frame], style=COLORS["primary"])
        text.append(f" {self._label}")
        self.update(text)

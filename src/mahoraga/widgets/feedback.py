"""Score bar and feedback lists for a finished analysis."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from ..providers.base import AnalysisResult
from ..theme import COLORS, score_color

BAR_WIDTH = 20
FILLED_CELL = "█"
EMPTY_CELL = "░"
ALL_CLEAR_MESSAGE = "Your prompt is clear and well-structured!"


def render_score_bar(score: float, width: int = BAR_WIDTH) -> tuple[str, str]:
    """Return the filled and empty halves of a ``width``-cell progress bar."""
    filled = max(0, min(width, round(score * width)))
    return FILLED_CELL * filled, EMPTY_CELL * (width - filled)


def _append_section(text: Text, title: str, items: tuple[str, ...]) -> None:
    text.append(f"\n{title}", style=f"bold {COLORS['primary']}")
    for item in items:
        text.append(f"\n  - {item}", style=COLORS["white"])


def build_result_text(result: AnalysisResult) -> Text:
    """Rich text for the score line followed by improvements and unclear parts."""
    color = score_color(result.score)
    filled, empty = render_score_bar(result.score)

    text = Text()
    text.append("Score: ")
    text.append(filled, style=color)
    text.append(empty, style=COLORS["muted"])
    text.append(f" {result.score:.2f}", style=color)
    text.append("\n")

    if result.improvements:
        _append_section(text, "Areas to Improve:", result.improvements)
    if result.unclear_parts:
        if result.improvements:
            text.append("\n")
        _append_section(text, "Unclear Parts:", result.unclear_parts)
    if not result.improvements and not result.unclear_parts:
        text.append(f"\n{ALL_CLEAR_MESSAGE}", style=COLORS["success"])
    return text


class ResultPanel(Static):
    """Bordered panel holding the latest analysis result."""

    DEFAULT_CSS = """
    ResultPanel {
        height: auto;
        border: solid #666666;
        padding: 0 1;
        margin-top: 1;
    }
    """

    def show_result(self, result: AnalysisResult) -> None:
        self.update(build_result_text(result))

"""Notice shown when a prompt is submitted before the connection is configured."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from ..theme import COLORS

_FIELD_HINTS = (
    ("url", "Your Azure OpenAI endpoint"),
    ("apiKey", "Your API key"),
    ("deployment", "Your model deployment name"),
    ("apiVersion", "API version (e.g., 2024-02-15-preview)"),
)


def build_notice_text() -> Text:
    text = Text()
    text.append("Configuration Required\n\n", style=f"bold {COLORS['error']}")
    text.append(
        "To use Mahoraga, you need to configure your API settings.\n\n",
        style=COLORS["white"],
    )
    text.append("Run ", style=COLORS["white"])
    text.append("/settings", style=f"bold {COLORS['primary']}")
    text.append(" to configure:", style=COLORS["white"])
    for name, hint in _FIELD_HINTS:
        text.append("\n  - ", style=COLORS["muted"])
        text.append(name, style=COLORS["white"])
        text.append(f": {hint}", style=COLORS["muted"])
    return text


class ConfigRequiredNotice(Static):
    """Static explanation of the four settings the user must fill in."""

    DEFAULT_CSS = """
    ConfigRequiredNotice {
        height: auto;
        margin: 1 0;
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs: object) -> None:
        super().__init__(build_notice_text(), **kwargs)  # type: ignore[arg-type]

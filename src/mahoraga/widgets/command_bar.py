"""Key hint bar rendered at the bottom of each screen."""

from __future__ import annotations

from textual.widgets import Static

MAIN_HINTS = "/settings  /default  /clear  Ctrl+C"
SETTINGS_HINTS = "Tab next  Enter save  Esc cancel"


class CommandBar(Static):
    """Single-line list of available keys for the current screen."""

    DEFAULT_CSS = """
    CommandBar {
        height: auto;
        margin-top: 1;
        padding: 0 1;
        color: #D4AF37;
    }
    """

    def __init__(self, settings: bool = False, **kwargs: object) -> None:
        super().__init__(SETTINGS_HINTS if settings else MAIN_HINTS, **kwargs)  # type: ignore[arg-type]

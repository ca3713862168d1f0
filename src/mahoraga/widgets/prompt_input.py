"""Prompt field with its slash-command palette."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Input, Static

from ..commands import Command
from ..theme import COLORS


class PromptField(Input):
    """Single-line prompt input that forwards palette keys to the app.

    Up/Down/Tab are claimed with priority so the palette can be driven
    without the field losing focus; the session decides whether they mean
    anything in the current state.
    """

    BINDINGS = [
        Binding("down", "palette('down')", "Next command", show=False, priority=True),
        Binding("up", "palette('up')", "Previous command", show=False, priority=True),
        Binding("tab", "palette('accept')", "Complete command", show=False, priority=True),
    ]

    class PaletteKey(Message):
        """Posted for palette navigation: ``down``, ``up`` or ``accept``."""

        def __init__(self, action: str) -> None:
            super().__init__()
            self.action = action

    def action_palette(self, action: str) -> None:
        self.post_message(self.PaletteKey(action))


def build_palette_text(commands: list[Command], selected: int) -> Text:
    text = Text()
    for index, command in enumerate(commands):
        if index:
            text.append("\n")
        color = COLORS["primary"] if index == selected else COLORS["secondary"]
        text.append(command.name.ljust(20), style=color)
        text.append(command.description, style=COLORS["muted"])
    return text


class CommandPalette(Static):
    """Filtered command list with the current selection highlighted."""

    DEFAULT_CSS = """
    CommandPalette {
        height: auto;
        margin-top: 1;
    }
    """

    def show_commands(self, commands: list[Command], selected: int) -> None:
        self.update(build_palette_text(commands, selected))


class PromptInput(Vertical):
    """Rounded input row (``>`` prefix) stacked above the command palette."""

    DEFAULT_CSS = """
    PromptInput {
        height: auto;
    }

    #prompt_row {
        height: auto;
        border: round #666666;
        padding: 0 1;
    }

    #prompt_marker {
        width: 2;
        color: #D4AF37;
    }

    #prompt_field {
        width: 1fr;
        height: 1;
        border: none;
        padding: 0;
    }
    """

    def compose(self) -> ComposeResult:
        with Horizontal(id="prompt_row"):
            yield Static(">", id="prompt_marker")
            yield PromptField(placeholder="", id="prompt_field")
        yield CommandPalette("", id="command_palette")

"""Settings editor screen for the four connection fields."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Input, Label, Static

from .config import Config
from .session import (
    SETTINGS_FIELDS,
    Event,
    SettingsCancel,
    SettingsEdited,
    SettingsFocused,
    SettingsNext,
    SettingsPrevious,
    SettingsSubmit,
)
from .widgets.banner import Banner
from .widgets.command_bar import CommandBar


@dataclass(frozen=True)
class FieldSpec:
    """Label and placeholder for one settings input."""

    name: str
    label: str
    placeholder: str
    masked: bool = False


FIELD_SPECS: tuple[FieldSpec, ...] = (
    FieldSpec("url", "URL", "https://your-resource.openai.azure.com"),
    FieldSpec("api_key", "API Key", "Your Azure API key", masked=True),
    FieldSpec("deployment", "Deployment", "Your model deployment name"),
    FieldSpec("api_version", "API Version", "2024-02-15-preview"),
)


def _input_id(field_name: str) -> str:
    return f"settings-{field_name}"


class SettingsScreen(Screen[None]):
    """Edit the connection config; every key is forwarded to the session."""

    CSS = """
    SettingsScreen {
        padding: 1;
    }

    #settings-title {
        text-style: bold;
        color: #D4AF37;
    }

    #settings-subtitle {
        color: #666666;
        margin-bottom: 1;
    }

    .settings-row {
        height: auto;
    }

    .settings-label {
        width: 12;
        padding-top: 1;
        color: #666666;
    }

    .settings-label.active {
        color: #D4AF37;
    }

    .settings-row Input {
        width: 1fr;
    }
    """

    BINDINGS = [
        Binding("tab", "next_field", "Next", show=False, priority=True),
        Binding("shift+tab", "previous_field", "Previous", show=False, priority=True),
        Binding("escape", "cancel", "Cancel", show=False, priority=True),
    ]

    def __init__(
        self,
        draft: Config,
        dispatch: Callable[[Event], None],
        *,
        version: str = "",
        field_index: int = 0,
    ) -> None:
        super().__init__()
        self._draft = draft
        self._dispatch = dispatch
        self._version = version
        self._field_index = field_index

    def compose(self) -> ComposeResult:
        yield Banner(self._version)
        yield Static("Settings", id="settings-title")
        yield Static("Configure your Azure OpenAI connection", id="settings-subtitle")
        with Vertical(id="settings-fields"):
            for spec in FIELD_SPECS:
                with Horizontal(classes="settings-row"):
                    yield Label(f"{spec.label}:", classes="settings-label")
                    yield Input(
                        value=getattr(self._draft, spec.name),
                        placeholder=spec.placeholder,
                        password=spec.masked,
                        id=_input_id(spec.name),
                    )
        yield CommandBar(settings=True)

    def on_mount(self) -> None:
        self.focus_field(self._field_index)

    def focus_field(self, index: int) -> None:
        """Move keyboard focus to the input at ``index`` and highlight its label."""
        self._field_index = index
        if not self.is_mounted:
            return
        for position, label in enumerate(self.query(".settings-label").results(Label)):
            label.set_class(position == index, "active")
        self.query_one(f"#{_input_id(SETTINGS_FIELDS[index])}", Input).focus()

    def action_next_field(self) -> None:
        self._dispatch(SettingsNext())

    def action_previous_field(self) -> None:
        self._dispatch(SettingsPrevious())

    def action_cancel(self) -> None:
        self._dispatch(SettingsCancel())

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        field_name = (event.input.id or "").removeprefix("settings-")
        if field_name in SETTINGS_FIELDS:
            self._dispatch(SettingsEdited(field_name, event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._dispatch(SettingsSubmit())

    def on_descendant_focus(self, event: events.DescendantFocus) -> None:
        if event.widget is not self.focused:
            return
        field_name = (event.widget.id or "").removeprefix("settings-")
        if field_name not in SETTINGS_FIELDS:
            return
        index = SETTINGS_FIELDS.index(field_name)
        if index != self._field_index:
            self._field_index = index
            self._dispatch(SettingsFocused(index))

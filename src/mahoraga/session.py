"""Session state machine for the interactive prompt validator.

The controller is a pure reducer: :func:`reduce` takes the current
:class:`SessionState` and one input event and returns a :class:`Transition`
holding the next state plus the side effects the shell must perform.
Nothing in this module does I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
import logging
from typing import Union

from .commands import (
    CLEAR,
    DEFAULT,
    EXIT,
    SETTINGS,
    Command,
    filter_commands,
    find_command,
)
from .config import Config, default_config, is_configured
from .providers.base import AnalysisResult

LOGGER = logging.getLogger(__name__)

EXIT_DELAY_SECONDS = 0.5

# Settings editor focus order.
SETTINGS_FIELDS: tuple[str, ...] = ("url", "api_key", "deployment", "api_version")


class Screen(str, Enum):
    """Top-level screens of the session."""

    MAIN = "main"
    SETTINGS = "settings"


@dataclass(frozen=True)
class SessionState:
    """Single source of truth for everything the UI renders."""

    config: Config = field(default_factory=default_config)
    screen: Screen = Screen.MAIN
    input_buffer: str = ""
    is_analyzing: bool = False
    last_result: AnalysisResult | None = None
    last_error: str | None = None
    palette_selection: int = 0
    is_exiting: bool = False
    config_required: bool = False
    request_id: int = 0
    input_generation: int = 0
    settings_draft: Config = field(default_factory=default_config)
    settings_field: int = 0

    @classmethod
    def initial(cls, config: Config) -> SessionState:
        """Fresh session on the main screen using ``config``."""
        return cls(config=config, settings_draft=config)

    @property
    def is_configured(self) -> bool:
        return is_configured(self.config)


# -- events -----------------------------------------------------------------


@dataclass(frozen=True)
class InputChanged:
    value: str


@dataclass(frozen=True)
class PaletteDown:
    pass


@dataclass(frozen=True)
class PaletteUp:
    pass


@dataclass(frozen=True)
class PaletteAccept:
    pass


@dataclass(frozen=True)
class Submitted:
    value: str


@dataclass(frozen=True)
class SettingsEdited:
    field: str
    value: str


@dataclass(frozen=True)
class SettingsNext:
    pass


@dataclass(frozen=True)
class SettingsPrevious:
    pass


@dataclass(frozen=True)
class SettingsFocused:
    """The user moved focus to the field at ``index`` directly."""

    index: int


@dataclass(frozen=True)
class SettingsSubmit:
    pass


@dataclass(frozen=True)
class SettingsCancel:
    pass


@dataclass(frozen=True)
class AnalysisFinished:
    """Completion of the analysis started under ``request_id``."""

    request_id: int
    result: AnalysisResult | None = None
    error: str | None = None


@dataclass(frozen=True)
class ExitTimerFired:
    pass


@dataclass(frozen=True)
class Interrupt:
    pass


Event = Union[
    InputChanged,
    PaletteDown,
    PaletteUp,
    PaletteAccept,
    Submitted,
    SettingsEdited,
    SettingsNext,
    SettingsPrevious,
    SettingsFocused,
    SettingsSubmit,
    SettingsCancel,
    AnalysisFinished,
    ExitTimerFired,
    Interrupt,
]


# -- effects ----------------------------------------------------------------


@dataclass(frozen=True)
class StartAnalysis:
    request_id: int
    prompt: str
    config: Config


@dataclass(frozen=True)
class SaveConfig:
    config: Config


@dataclass(frozen=True)
class ResetConfig:
    pass


@dataclass(frozen=True)
class ScheduleExit:
    delay: float = EXIT_DELAY_SECONDS


@dataclass(frozen=True)
class ExitApp:
    pass


Effect = Union[StartAnalysis, SaveConfig, ResetConfig, ScheduleExit, ExitApp]


@dataclass(frozen=True)
class Transition:
    """Result of one reducer step."""

    state: SessionState
    effects: tuple[Effect, ...] = ()


# -- derived views ----------------------------------------------------------


def palette_commands(state: SessionState) -> list[Command]:
    """Commands the palette shows for the current state (empty when hidden)."""
    if (
        state.is_exiting
        or state.is_analyzing
        or state.screen is not Screen.MAIN
        or not state.input_buffer.startswith("/")
    ):
        return []
    return filter_commands(state.input_buffer)


def palette_visible(state: SessionState) -> bool:
    return bool(palette_commands(state))


# -- reducer ----------------------------------------------------------------


def reduce(state: SessionState, event: Event) -> Transition:
    """Apply ``event`` to ``state``."""
    if isinstance(event, Interrupt):
        return Transition(replace(state, is_exiting=True), (ExitApp(),))
    if state.is_exiting:
        if isinstance(event, ExitTimerFired):
            return Transition(state, (ExitApp(),))
        return Transition(state)

    if isinstance(event, AnalysisFinished):
        return _finish_analysis(state, event)
    if state.screen is Screen.SETTINGS:
        return _reduce_settings(state, event)
    return _reduce_main(state, event)


def _reduce_main(state: SessionState, event: Event) -> Transition:
    if isinstance(event, InputChanged):
        if event.value == state.input_buffer:
            return Transition(state)
        return Transition(
            replace(
                state,
                input_buffer=event.value,
                palette_selection=0,
                config_required=False,
            )
        )
    if isinstance(event, (PaletteDown, PaletteUp, PaletteAccept)):
        return _navigate_palette(state, event)
    if isinstance(event, Submitted):
        return _submit(state, event.value.strip())
    return Transition(state)


def _navigate_palette(
    state: SessionState, event: PaletteDown | PaletteUp | PaletteAccept
) -> Transition:
    commands = palette_commands(state)
    if not commands:
        return Transition(state)
    count = len(commands)
    index = state.palette_selection % count
    if isinstance(event, PaletteDown):
        return Transition(replace(state, palette_selection=(index + 1) % count))
    if isinstance(event, PaletteUp):
        return Transition(replace(state, palette_selection=(index - 1 + count) % count))
    selected = commands[index]
    return Transition(
        replace(
            state,
            input_buffer=selected.name,
            palette_selection=0,
            input_generation=state.input_generation + 1,
        )
    )


def _submit(state: SessionState, value: str) -> Transition:
    command = find_command(value)
    if command is SETTINGS:
        return Transition(
            replace(
                state,
                input_buffer="",
                palette_selection=0,
                config_required=False,
                screen=Screen.SETTINGS,
                settings_draft=state.config,
                settings_field=0,
            )
        )
    if command is DEFAULT:
        defaults = default_config()
        return Transition(
            replace(
                state,
                input_buffer="",
                palette_selection=0,
                config=defaults,
                settings_draft=defaults,
                last_result=None,
                last_error=None,
            ),
            (ResetConfig(),),
        )
    if command is CLEAR:
        return Transition(
            replace(
                state,
                input_buffer="",
                palette_selection=0,
                last_result=None,
                last_error=None,
            )
        )
    if command is EXIT:
        return Transition(
            replace(state, is_exiting=True), (ScheduleExit(EXIT_DELAY_SECONDS),)
        )
    if not value or value.startswith("/"):
        return Transition(state)

    if not state.is_configured:
        return Transition(replace(state, config_required=True))
    if state.is_analyzing:
        LOGGER.debug("session.submit.rejected_busy")
        return Transition(state)

    request_id = state.request_id + 1
    return Transition(
        replace(
            state,
            input_buffer="",
            palette_selection=0,
            is_analyzing=True,
            last_result=None,
            last_error=None,
            request_id=request_id,
        ),
        (StartAnalysis(request_id=request_id, prompt=value, config=state.config),),
    )


def _finish_analysis(state: SessionState, event: AnalysisFinished) -> Transition:
    if event.request_id != state.request_id or not state.is_analyzing:
        LOGGER.debug(
            "session.analysis.stale",
            extra={
                "event": "session.analysis.stale",
                "request_id": event.request_id,
                "current_request_id": state.request_id,
            },
        )
        return Transition(state)
    if event.result is not None:
        return Transition(
            replace(state, is_analyzing=False, last_result=event.result, last_error=None)
        )
    return Transition(
        replace(
            state,
            is_analyzing=False,
            last_result=None,
            last_error=event.error or "Analysis failed",
        )
    )


def _reduce_settings(state: SessionState, event: Event) -> Transition:
    last_field = len(SETTINGS_FIELDS) - 1
    if isinstance(event, SettingsEdited):
        if event.field not in SETTINGS_FIELDS:
            return Transition(state)
        draft = state.settings_draft.model_copy(update={event.field: event.value})
        return Transition(replace(state, settings_draft=draft))
    if isinstance(event, SettingsNext) or (
        isinstance(event, SettingsSubmit) and state.settings_field < last_field
    ):
        next_field = (state.settings_field + 1) % len(SETTINGS_FIELDS)
        return Transition(replace(state, settings_field=next_field))
    if isinstance(event, SettingsPrevious):
        previous_field = (state.settings_field - 1) % len(SETTINGS_FIELDS)
        return Transition(replace(state, settings_field=previous_field))
    if isinstance(event, SettingsFocused):
        if not 0 <= event.index <= last_field or event.index == state.settings_field:
            return Transition(state)
        return Transition(replace(state, settings_field=event.index))
    if isinstance(event, SettingsSubmit):
        committed = Config.model_validate(state.settings_draft.to_json_dict())
        return Transition(
            replace(
                state,
                screen=Screen.MAIN,
                config=committed,
                settings_draft=committed,
                settings_field=0,
            ),
            (SaveConfig(committed),),
        )
    if isinstance(event, SettingsCancel):
        return Transition(
            replace(
                state,
                screen=Screen.MAIN,
                settings_draft=state.config,
                settings_field=0,
            )
        )
    return Transition(state)

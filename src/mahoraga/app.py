"""Textual shell around the session reducer."""

from __future__ import annotations

from collections.abc import Callable
import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Static

from . import get_version
from .config import Config, ConfigStore
from .exceptions import MahoragaError
from .providers import AnalysisProvider, create_provider
from .screens import SettingsScreen
from .session import (
    AnalysisFinished,
    Effect,
    Event,
    ExitApp,
    ExitTimerFired,
    InputChanged,
    Interrupt,
    PaletteAccept,
    PaletteDown,
    PaletteUp,
    ResetConfig,
    SaveConfig,
    ScheduleExit,
    Screen,
    SessionState,
    StartAnalysis,
    Submitted,
    palette_commands,
    reduce,
)
from .task_manager import TaskManager
from .theme import COLORS
from .widgets.banner import Banner
from .widgets.command_bar import CommandBar
from .widgets.feedback import ResultPanel
from .widgets.notice import ConfigRequiredNotice
from .widgets.prompt_input import CommandPalette, PromptField, PromptInput
from .widgets.spinner import AnalyzingIndicator

LOGGER = logging.getLogger(__name__)

ProviderFactory = Callable[[Config], AnalysisProvider]

ANALYSIS_TASK = "analysis"

_PALETTE_EVENTS = {
    "down": PaletteDown,
    "up": PaletteUp,
    "accept": PaletteAccept,
}


class MahoragaApp(App[None]):
    """Interactive prompt validator.

    All behaviour lives in :func:`mahoraga.session.reduce`; this class turns
    widget messages into session events, runs the resulting effects and
    re-derives every widget from the new state.
    """

    TITLE = "Mahoraga"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        layout: vertical;
        padding: 1;
    }

    #main {
        height: auto;
    }

    #error_line {
        height: auto;
        margin: 1 0;
    }

    #farewell {
        color: #666666;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "interrupt", "Exit", show=False, priority=True),
    ]

    def __init__(
        self,
        *,
        store: ConfigStore | None = None,
        provider_factory: ProviderFactory | None = None,
        version: str | None = None,
    ) -> None:
        super().__init__()
        self.store = store or ConfigStore()
        self.session = SessionState.initial(self.store.load())
        self._provider_factory: ProviderFactory = provider_factory or create_provider
        self._task_manager = TaskManager()
        self._version = version or get_version()
        self._settings_screen: SettingsScreen | None = None
        self._rendered_buffer = ""
        self._rendered_generation = 0
        self._view_ready = False

    # -- layout -------------------------------------------------------------

    def compose(self) -> ComposeResult:
        with Vertical(id="main"):
            yield Banner(self._version, id="banner")
            yield ConfigRequiredNotice(id="config_required")
            yield PromptInput(id="prompt_input")
            yield AnalyzingIndicator(id="analyzing")
            yield Static("", id="error_line")
            yield ResultPanel("", id="result_panel")
            yield CommandBar(id="command_bar")
        yield Static("disintegrated", id="farewell")

    def on_mount(self) -> None:
        self._w_main = self.query_one("#main", Vertical)
        self._w_notice = self.query_one("#config_required", ConfigRequiredNotice)
        self._w_field = self.query_one("#prompt_field", PromptField)
        self._w_palette = self.query_one("#command_palette", CommandPalette)
        self._w_analyzing = self.query_one("#analyzing", AnalyzingIndicator)
        self._w_error = self.query_one("#error_line", Static)
        self._w_result = self.query_one("#result_panel", ResultPanel)
        self._w_farewell = self.query_one("#farewell", Static)
        self._view_ready = True
        LOGGER.info(
            "app.started",
            extra={
                "event": "app.started",
                "configured": self.session.is_configured,
                "config_path": str(self.store.path),
            },
        )
        self.refresh_view()
        self._w_field.focus()

    async def on_unmount(self) -> None:
        """Cancel the in-flight analysis, if any, during shutdown."""
        LOGGER.info(
            "app.shutdown",
            extra={"event": "app.shutdown", "pending_tasks": self._task_manager.active},
        )
        await self._task_manager.cancel_all()

    # -- event plumbing -----------------------------------------------------

    def handle_event(self, event: Event) -> None:
        """Feed ``event`` through the reducer, run its effects and re-render."""
        transition = reduce(self.session, event)
        self.session = transition.state
        for effect in transition.effects:
            self._run_effect(effect)
        self.refresh_view()

    def on_input_changed(self, event: PromptField.Changed) -> None:
        if event.input.id != "prompt_field":
            return
        # Already on screen; refresh_view must not rewrite it.
        self._rendered_buffer = event.value
        self.handle_event(InputChanged(event.value))

    def on_input_submitted(self, event: PromptField.Submitted) -> None:
        if event.input.id != "prompt_field":
            return
        self.handle_event(Submitted(event.value))

    def on_prompt_field_palette_key(self, event: PromptField.PaletteKey) -> None:
        event_type = _PALETTE_EVENTS.get(event.action)
        if event_type is not None:
            self.handle_event(event_type())

    def action_interrupt(self) -> None:
        self.handle_event(Interrupt())

    # -- effects ------------------------------------------------------------

    def _run_effect(self, effect: Effect) -> None:
        if isinstance(effect, StartAnalysis):
            self._task_manager.spawn(ANALYSIS_TASK, self._run_analysis(effect))
        elif isinstance(effect, SaveConfig):
            self._persist(lambda: self.store.save(effect.config))
        elif isinstance(effect, ResetConfig):
            self._persist(self.store.reset)
        elif isinstance(effect, ScheduleExit):
            self.set_timer(effect.delay, lambda: self.handle_event(ExitTimerFired()))
        elif isinstance(effect, ExitApp):
            LOGGER.info("app.exit", extra={"event": "app.exit"})
            self.exit()

    def _persist(self, write: Callable[[], object]) -> None:
        try:
            write()
        except OSError as exc:
            LOGGER.error(
                "config.save_failed",
                extra={"event": "config.save_failed", "reason": str(exc)},
            )
            self.notify(f"Could not save settings: {exc}", severity="error")

    async def _run_analysis(self, request: StartAnalysis) -> None:
        try:
            provider = self._provider_factory(request.config)
            result = await provider.analyze(request.prompt)
        except MahoragaError as exc:
            LOGGER.warning(
                "analysis.failed",
                extra={
                    "event": "analysis.failed",
                    "request_id": request.request_id,
                    "error_type": type(exc).__name__,
                },
            )
            self.handle_event(AnalysisFinished(request.request_id, error=str(exc)))
            return
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception(
                "analysis.crashed",
                extra={"event": "analysis.crashed", "request_id": request.request_id},
            )
            self.handle_event(
                AnalysisFinished(request.request_id, error=f"Analysis failed: {exc}")
            )
            return
        self.handle_event(AnalysisFinished(request.request_id, result=result))

    # -- rendering ----------------------------------------------------------

    def refresh_view(self) -> None:
        """Re-derive every widget from :attr:`session`."""
        if not self._view_ready:
            return
        state = self.session
        self._sync_settings_screen(state)

        self._w_main.display = not state.is_exiting
        self._w_farewell.display = state.is_exiting
        self._w_notice.display = state.config_required

        if (
            state.input_buffer != self._rendered_buffer
            or state.input_generation != self._rendered_generation
        ):
            self._w_field.value = state.input_buffer
            self._w_field.cursor_position = len(state.input_buffer)
            self._rendered_buffer = state.input_buffer
            self._rendered_generation = state.input_generation

        commands = palette_commands(state)
        self._w_palette.display = bool(commands)
        if commands:
            self._w_palette.show_commands(commands, state.palette_selection)

        self._w_analyzing.display = state.is_analyzing

        self._w_error.display = state.last_error is not None
        if state.last_error is not None:
            self._w_error.update(Text(f"Error: {state.last_error}", style=COLORS["error"]))

        self._w_result.display = state.last_result is not None
        if state.last_result is not None:
            self._w_result.show_result(state.last_result)

    def _sync_settings_screen(self, state: SessionState) -> None:
        if state.screen is Screen.SETTINGS and not state.is_exiting:
            if self._settings_screen is None:
                self._settings_screen = SettingsScreen(
                    state.settings_draft,
                    self.handle_event,
                    version=self._version,
                    field_index=state.settings_field,
                )
                self.push_screen(self._settings_screen)
            else:
                self._settings_screen.focus_field(state.settings_field)
            return

        if self._settings_screen is not None:
            screen, self._settings_screen = self._settings_screen, None
            if self.screen is screen:
                self.pop_screen()
            self._w_field.focus()

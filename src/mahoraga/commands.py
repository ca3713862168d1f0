"""Slash command registry and palette filtering."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Command:
    """A slash command shown in the palette."""

    name: str
    description: str


SETTINGS = Command("/settings", "Configure API settings")
DEFAULT = Command("/default", "Reset settings to defaults")
CLEAR = Command("/clear", "Clear current analysis")
EXIT = Command("/exit", "Exit the application")

# Registration order drives palette display and filter tie-breaks.
COMMANDS: tuple[Command, ...] = (SETTINGS, DEFAULT, CLEAR, EXIT)


def filter_commands(prefix: str) -> list[Command]:
    """Return commands whose name starts with ``prefix``, case-insensitively."""
    needle = prefix.lower()
    return [command for command in COMMANDS if command.name.lower().startswith(needle)]


def find_command(name: str) -> Command | None:
    """Return the command registered under exactly ``name``."""
    for command in COMMANDS:
        if command.name == name:
            return command
    return None

"""Mahoraga: a terminal prompt validator backed by Azure OpenAI."""

from __future__ import annotations

from importlib import metadata
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .app import MahoragaApp
    from .commands import COMMANDS, Command, filter_commands
    from .config import Config, ConfigStore, is_configured
    from .exceptions import (
        ConfigurationError,
        MahoragaError,
        ProviderError,
        ProviderProtocolError,
        ProviderTransportError,
    )
    from .providers import AnalysisProvider, AnalysisResult, create_provider
    from .session import SessionState, reduce

FALLBACK_VERSION = "1.0.0"

__all__ = [
    "COMMANDS",
    "AnalysisProvider",
    "AnalysisResult",
    "Command",
    "Config",
    "ConfigStore",
    "ConfigurationError",
    "MahoragaApp",
    "MahoragaError",
    "ProviderError",
    "ProviderProtocolError",
    "ProviderTransportError",
    "SessionState",
    "create_provider",
    "filter_commands",
    "get_version",
    "is_configured",
    "reduce",
]

_LAZY_EXPORTS = {
    "MahoragaApp": ".app",
    "COMMANDS": ".commands",
    "Command": ".commands",
    "filter_commands": ".commands",
    "Config": ".config",
    "ConfigStore": ".config",
    "is_configured": ".config",
    "ConfigurationError": ".exceptions",
    "MahoragaError": ".exceptions",
    "ProviderError": ".exceptions",
    "ProviderProtocolError": ".exceptions",
    "ProviderTransportError": ".exceptions",
    "AnalysisProvider": ".providers",
    "AnalysisResult": ".providers",
    "create_provider": ".providers",
    "SessionState": ".session",
    "reduce": ".session",
}


def get_version() -> str:
    """Installed package version, or the release constant when running from source."""
    try:
        return metadata.version("mahoraga")
    except metadata.PackageNotFoundError:
        return FALLBACK_VERSION


def __getattr__(name: str) -> Any:
    """Lazily import symbols so the CLI can print help without loading Textual."""
    module_name = _LAZY_EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    from importlib import import_module

    return getattr(import_module(module_name, __name__), name)

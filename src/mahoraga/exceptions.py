"""Domain exception hierarchy for the Mahoraga prompt validator."""

from __future__ import annotations


class MahoragaError(RuntimeError):
    """Base class for all domain-level errors."""


class ConfigurationError(MahoragaError):
    """Raised when the connection configuration is incomplete or unusable."""


class ProviderError(MahoragaError):
    """Raised when the analysis provider fails; the message is shown to the user."""


class ProviderTransportError(ProviderError):
    """Raised on network failures and non-success HTTP responses."""


class ProviderProtocolError(ProviderError):
    """Raised when the provider response cannot be interpreted."""

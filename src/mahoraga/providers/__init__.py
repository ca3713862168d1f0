"""Analysis providers and their construction function."""

from __future__ import annotations

import httpx

from ..config import Config
from ..exceptions import ConfigurationError
from .azure import AzureOpenAIProvider
from .base import SYSTEM_PROMPT, AnalysisProvider, AnalysisResult

DEFAULT_PROVIDER = "azure"


def create_provider(
    config: Config,
    provider: str = DEFAULT_PROVIDER,
    *,
    client: httpx.AsyncClient | None = None,
) -> AnalysisProvider:
    """Build the provider selected by ``provider`` for ``config``.

    Only Azure OpenAI exists today; other selectors are rejected.
    """
    selector = provider.strip().lower()
    if selector == "azure":
        return AzureOpenAIProvider(config, client=client)
    raise ConfigurationError(f"Unsupported provider: {provider!r}")


__all__ = [
    "AnalysisProvider",
    "AnalysisResult",
    "AzureOpenAIProvider",
    "DEFAULT_PROVIDER",
    "SYSTEM_PROMPT",
    "create_provider",
]

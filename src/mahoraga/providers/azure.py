"""Azure OpenAI chat-completions provider."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Config
from ..exceptions import ProviderProtocolError, ProviderTransportError
from .base import SYSTEM_PROMPT, AnalysisProvider, AnalysisResult

LOGGER = logging.getLogger(__name__)

TEMPERATURE = 0.3
MAX_TOKENS = 1000
REQUEST_TIMEOUT_SECONDS = 60.0


class AzureOpenAIProvider(AnalysisProvider):
    """Send the prompt to an Azure OpenAI deployment and parse its JSON verdict."""

    def __init__(
        self,
        config: Config,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        super().__init__(config)
        self._client = client
        self._timeout = timeout

    @property
    def endpoint(self) -> str:
        """Chat-completions URL for the configured deployment (without query)."""
        base = self.config.url.rstrip("/")
        return f"{base}/openai/deployments/{self.config.deployment}/chat/completions"

    def build_payload(self, prompt: str) -> dict[str, Any]:
        """Return the JSON request body for ``prompt``."""
        return {
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_TOKENS,
        }

    async def analyze(self, prompt: str) -> AnalysisResult:
        if not prompt.strip():
            raise ValueError("prompt must not be empty")

        LOGGER.info(
            "provider.analyze.start",
            extra={
                "event": "provider.analyze.start",
                "deployment": self.config.deployment,
                "prompt_chars": len(prompt),
            },
        )
        response = await self._post(prompt)

        if not response.is_success:
            raise ProviderTransportError(
                f"Azure API error: {response.status_code} - {response.text}"
            )

        result = self.parse_response(response)
        LOGGER.info(
            "provider.analyze.done",
            extra={"event": "provider.analyze.done", "score": result.score},
        )
        return result

    async def _post(self, prompt: str) -> httpx.Response:
        headers = {"Content-Type": "application/json", "api-key": self.config.api_key}
        params = {"api-version": self.config.api_version}
        payload = self.build_payload(prompt)
        try:
            if self._client is not None:
                return await self._client.post(
                    self.endpoint, params=params, headers=headers, json=payload
                )
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                return await client.post(
                    self.endpoint, params=params, headers=headers, json=payload
                )
        except httpx.HTTPError as exc:
            LOGGER.warning(
                "provider.analyze.transport_error",
                extra={
                    "event": "provider.analyze.transport_error",
                    "error_type": type(exc).__name__,
                },
            )
            raise ProviderTransportError(f"Azure API request failed: {exc}") from exc

    @staticmethod
    def parse_response(response: httpx.Response) -> AnalysisResult:
        """Extract and validate the assessment from a chat-completions response."""
        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderProtocolError("Azure API returned a non-JSON response") from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        if not isinstance(content, str) or not content.strip():
            raise ProviderProtocolError("No response from Azure API")

        try:
            payload = json.loads(content)
        except ValueError as exc:
            raise ProviderProtocolError("Failed to parse API response as JSON") from exc
        if not isinstance(payload, dict):
            raise ProviderProtocolError("Failed to parse API response as JSON")

        try:
            return AnalysisResult.model_validate(payload)
        except ValidationError as exc:
            raise ProviderProtocolError("Invalid score in response") from exc

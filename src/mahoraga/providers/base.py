"""Analysis result model and the provider contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import Config, is_configured
from ..exceptions import ConfigurationError

SYSTEM_PROMPT = """You are a prompt analysis expert. Your task is to evaluate prompts that will be given to AI agents and provide structured feedback.

Analyze the user's prompt and respond with a JSON object containing:
1. "score": A number between 0 and 1 indicating how well an AI agent would understand and execute the prompt (1 = perfect clarity)
2. "improvements": An array of specific suggestions to make the prompt clearer or more effective
3. "unclearParts": An array of phrases or sections that are ambiguous or vague

Consider these factors when scoring:
- Clarity of instructions
- Specificity of requirements
- Defined output format
- Edge case handling
- Context provided

Respond ONLY with valid JSON, no markdown or additional text.

Example response:
{
  "score": 0.72,
  "improvements": ["Specify the expected output format", "Define what 'handle errors appropriately' means"],
  "unclearParts": ["'as needed' is vague", "'good performance' lacks metrics"]
}"""


class AnalysisResult(BaseModel):
    """Structured quality assessment of a single prompt.

    ``score`` is strict (a number within ``[0, 1]``); the two feedback lists
    are lenient and collapse to empty tuples when missing or malformed.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    score: float = Field(ge=0.0, le=1.0)
    improvements: tuple[str, ...] = ()
    unclear_parts: tuple[str, ...] = Field(default=(), alias="unclearParts")

    @field_validator("score", mode="before")
    @classmethod
    def _require_number(cls, value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("score must be a number.")
        return float(value)

    @field_validator("improvements", "unclear_parts", mode="before")
    @classmethod
    def _lenient_strings(cls, value: Any) -> tuple[str, ...]:
        if not isinstance(value, (list, tuple)):
            return ()
        return tuple(item for item in value if isinstance(item, str))


class AnalysisProvider(ABC):
    """A text-generation backend that can score a prompt."""

    def __init__(self, config: Config) -> None:
        if not is_configured(config):
            raise ConfigurationError(
                "Configuration required: set url, apiKey, deployment and apiVersion via /settings."
            )
        self.config = config

    @abstractmethod
    async def analyze(self, prompt: str) -> AnalysisResult:
        """Score ``prompt``; raise :class:`ProviderError` on any failure."""

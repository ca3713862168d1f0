"""Tests for the Azure OpenAI analysis provider."""

from __future__ import annotations

import json
from typing import Any
import unittest

import httpx

from mahoraga.config import Config
from mahoraga.exceptions import (
    ConfigurationError,
    ProviderError,
    ProviderProtocolError,
    ProviderTransportError,
)
from mahoraga.providers import (
    SYSTEM_PROMPT,
    AnalysisResult,
    AzureOpenAIProvider,
    create_provider,
)

CONFIG = Config(
    url="https://example.openai.azure.com/",
    api_key="secret",
    deployment="gpt-4o",
    api_version="2024-02-15-preview",
)


def _completion(content: Any) -> dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class _Recorder:
    """MockTransport handler that records requests and replays a response."""

    def __init__(self, response: httpx.Response | Exception) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class AzureProviderTests(unittest.IsolatedAsyncioTestCase):
    """Request construction and response validation."""

    async def _analyze(
        self, response: httpx.Response | Exception, prompt: str = "Summarize this."
    ) -> tuple[AnalysisResult, _Recorder]:
        recorder = _Recorder(response)
        async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
            provider = AzureOpenAIProvider(CONFIG, client=client)
            result = await provider.analyze(prompt)
        return result, recorder

    async def _analyze_error(self, response: httpx.Response | Exception) -> ProviderError:
        with self.assertRaises(ProviderError) as ctx:
            await self._analyze(response)
        return ctx.exception

    async def test_request_shape(self) -> None:
        payload = {"score": 0.72, "improvements": ["a"], "unclearParts": ["b"]}
        _, recorder = await self._analyze(
            httpx.Response(200, json=_completion(json.dumps(payload)))
        )
        self.assertEqual(len(recorder.requests), 1)
        request = recorder.requests[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(
            request.url.path, "/openai/deployments/gpt-4o/chat/completions"
        )
        self.assertEqual(request.url.host, "example.openai.azure.com")
        self.assertEqual(request.url.params["api-version"], "2024-02-15-preview")
        self.assertEqual(request.headers["api-key"], "secret")
        body = json.loads(request.content)
        self.assertEqual(
            body["messages"],
            [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": "Summarize this."},
            ],
        )
        self.assertEqual(body["temperature"], 0.3)
        self.assertEqual(body["max_tokens"], 1000)

    async def test_parses_result(self) -> None:
        payload = {"score": 0.72, "improvements": ["a"], "unclearParts": ["b", "c"]}
        result, _ = await self._analyze(
            httpx.Response(200, json=_completion(json.dumps(payload)))
        )
        self.assertEqual(result.score, 0.72)
        self.assertEqual(result.improvements, ("a",))
        self.assertEqual(result.unclear_parts, ("b", "c"))

    async def test_missing_lists_become_empty(self) -> None:
        result, _ = await self._analyze(
            httpx.Response(200, json=_completion(json.dumps({"score": 1})))
        )
        self.assertEqual(result, AnalysisResult(score=1.0))

    async def test_non_list_feedback_becomes_empty(self) -> None:
        payload = {"score": 0.5, "improvements": "be clearer", "unclearParts": None}
        result, _ = await self._analyze(
            httpx.Response(200, json=_completion(json.dumps(payload)))
        )
        self.assertEqual(result.improvements, ())
        self.assertEqual(result.unclear_parts, ())

    async def test_score_bounds_inclusive(self) -> None:
        for score in (0, 1, 0.0, 1.0):
            with self.subTest(score=score):
                result, _ = await self._analyze(
                    httpx.Response(200, json=_completion(json.dumps({"score": score})))
                )
                self.assertEqual(result.score, float(score))

    async def test_out_of_range_score_rejected(self) -> None:
        for score in (-0.1, 1.5, 72, "0.5", None, True):
            with self.subTest(score=score):
                error = await self._analyze_error(
                    httpx.Response(200, json=_completion(json.dumps({"score": score})))
                )
                self.assertIsInstance(error, ProviderProtocolError)
                self.assertEqual(str(error), "Invalid score in response")

    async def test_missing_score_rejected(self) -> None:
        error = await self._analyze_error(
            httpx.Response(200, json=_completion(json.dumps({"improvements": []})))
        )
        self.assertIsInstance(error, ProviderProtocolError)

    async def test_http_error_status(self) -> None:
        error = await self._analyze_error(httpx.Response(401, text="Access denied"))
        self.assertIsInstance(error, ProviderTransportError)
        self.assertEqual(str(error), "Azure API error: 401 - Access denied")

    async def test_transport_failure(self) -> None:
        error = await self._analyze_error(httpx.ConnectError("connection refused"))
        self.assertIsInstance(error, ProviderTransportError)
        self.assertIn("connection refused", str(error))

    async def test_missing_content(self) -> None:
        for body in ({}, {"choices": []}, _completion(None), _completion("")):
            with self.subTest(body=body):
                error = await self._analyze_error(httpx.Response(200, json=body))
                self.assertIsInstance(error, ProviderProtocolError)
                self.assertEqual(str(error), "No response from Azure API")

    async def test_fenced_or_prose_content_rejected(self) -> None:
        for content in ('```json\n{"score": 0.5}\n```', "Score: 0.5", "[0.5]"):
            with self.subTest(content=content):
                error = await self._analyze_error(
                    httpx.Response(200, json=_completion(content))
                )
                self.assertIsInstance(error, ProviderProtocolError)
                self.assertEqual(str(error), "Failed to parse API response as JSON")

    async def test_non_json_envelope(self) -> None:
        error = await self._analyze_error(httpx.Response(200, text="<html>oops</html>"))
        self.assertIsInstance(error, ProviderProtocolError)

    async def test_empty_prompt_rejected(self) -> None:
        with self.assertRaises(ValueError):
            await self._analyze(httpx.Response(200, json={}), prompt="   ")


class ProviderFactoryTests(unittest.TestCase):
    def test_default_is_azure(self) -> None:
        self.assertIsInstance(create_provider(CONFIG), AzureOpenAIProvider)

    def test_unknown_selector(self) -> None:
        with self.assertRaises(ConfigurationError):
            create_provider(CONFIG, "anthropic")

    def test_unconfigured_config_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            create_provider(CONFIG.model_copy(update={"api_key": ""}))

    def test_endpoint_strips_trailing_slash(self) -> None:
        provider = AzureOpenAIProvider(CONFIG)
        self.assertEqual(
            provider.endpoint,
            "https://example.openai.azure.com/openai/deployments/gpt-4o/chat/completions",
        )


if __name__ == "__main__":
    unittest.main()

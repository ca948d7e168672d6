"""Unit tests for the Gemini completion client.

Uses httpx.MockTransport so no network access is needed.
"""

import json
from collections.abc import Callable

import httpx
import pytest
import pytest_check as check

from chatpdfy.client.config import GeminiConfig
from chatpdfy.client.gemini import (
    ERROR_FALLBACK,
    UNDERSTAND_FALLBACK,
    GeminiClient,
    build_request_body,
    extract_reply,
)
from chatpdfy.models.schemas import OutgoingMessage

MESSAGES = [
    OutgoingMessage(role="user", text="Hello"),
    OutgoingMessage(role="model", text="Hi"),
    OutgoingMessage(role="user", text="Summarize"),
]


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> GeminiClient:
    config = GeminiConfig(
        api_key="test-key",
        base_url="https://gemini.test/v1beta/",
        model_name="gemini-test",
    )
    return GeminiClient(config, httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def _reply(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


class TestRequest:
    """Tests for the outgoing HTTP request."""

    async def test_posts_contents_to_generate_content(self) -> None:
        """Messages are sent as role-tagged contents to the model endpoint."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_reply("fine"))

        await _client(handler).complete(MESSAGES)

        request = seen[0]
        check.equal(request.method, "POST")
        check.equal(request.url.path, "/v1beta/models/gemini-test:generateContent")
        check.equal(request.url.params["key"], "test-key")
        check.equal(
            json.loads(request.content),
            {
                "contents": [
                    {"role": "user", "parts": [{"text": "Hello"}]},
                    {"role": "model", "parts": [{"text": "Hi"}]},
                    {"role": "user", "parts": [{"text": "Summarize"}]},
                ]
            },
        )

    def test_build_request_body_empty(self) -> None:
        assert build_request_body([]) == {"contents": []}


class TestResponses:
    """Tests for mapping responses onto reply strings."""

    async def test_success_returns_trimmed_text(self) -> None:
        client = _client(lambda request: httpx.Response(200, json=_reply("  Hi there \n")))

        assert await client.complete(MESSAGES) == "Hi there"

    @pytest.mark.parametrize("status_code", [400, 403, 429, 500, 503])
    async def test_error_status(self, status_code: int) -> None:
        """Non-2xx responses report the status code."""
        client = _client(lambda request: httpx.Response(status_code, json={"error": {}}))

        assert await client.complete(MESSAGES) == f"API request failed with status {status_code}"

    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        assert await _client(handler).complete(MESSAGES) == ERROR_FALLBACK

    async def test_invalid_json(self) -> None:
        client = _client(lambda request: httpx.Response(200, content=b"<html>not json</html>"))

        assert await client.complete(MESSAGES) == ERROR_FALLBACK

    async def test_unexpected_shape(self) -> None:
        client = _client(lambda request: httpx.Response(200, json={"promptFeedback": {}}))

        assert await client.complete(MESSAGES) == UNDERSTAND_FALLBACK


class TestExtractReply:
    """Tests for extract_reply on assorted response bodies."""

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"candidates": []},
            {"candidates": [{}]},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{}]}}]},
            {"candidates": [{"content": {"parts": [{"text": "   "}]}}]},
            {"candidates": "nope"},
            ["not", "an", "object"],
            None,
        ],
    )
    def test_unexpected_shapes_fall_back(self, data: object) -> None:
        assert extract_reply(data) == UNDERSTAND_FALLBACK

    def test_first_candidate_first_part(self) -> None:
        data = {
            "candidates": [
                {"content": {"parts": [{"text": "first"}, {"text": "second"}]}},
                {"content": {"parts": [{"text": "other"}]}},
            ]
        }

        assert extract_reply(data) == "first"


class TestClientLifecycle:
    """Tests for HTTP client ownership."""

    async def test_does_not_close_shared_client(self) -> None:
        http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        client = GeminiClient(GeminiConfig(api_key="k"), http)

        await client.aclose()

        check.is_false(http.is_closed)
        await http.aclose()

    async def test_closes_owned_client(self) -> None:
        client = GeminiClient(GeminiConfig(api_key="k"))

        await client.aclose()

        check.is_true(client._http.is_closed)

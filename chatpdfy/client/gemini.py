"""Gemini completion client over the generateContent REST endpoint.

Every outcome is a string. Callers never see transport exceptions:

- success: first candidate's first text part, trimmed
- unexpected response shape or empty text: "Sorry, I couldn't understand that."
- non-2xx status: "API request failed with status <code>"
- transport or JSON decoding error: "Oops! Something went wrong while getting the answer."

No retries are attempted.
"""

import logging
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from chatpdfy.client.config import GeminiConfig, get_gemini_config
from chatpdfy.models.schemas import OutgoingMessage

logger = logging.getLogger(__name__)

UNDERSTAND_FALLBACK = "Sorry, I couldn't understand that."
ERROR_FALLBACK = "Oops! Something went wrong while getting the answer."


class GeminiPart(BaseModel):
    text: str | None = None


class GeminiContent(BaseModel):
    role: str | None = None
    parts: list[GeminiPart] = []


class GeminiCandidate(BaseModel):
    content: GeminiContent | None = None


class GeminiResponse(BaseModel):
    candidates: list[GeminiCandidate] = []


def build_request_body(messages: Sequence[OutgoingMessage]) -> dict[str, Any]:
    """Map outgoing messages to the generateContent request body."""
    return {
        "contents": [
            {"role": message.role, "parts": [{"text": message.text}]}
            for message in messages
        ]
    }


def extract_reply(data: Any) -> str:
    """Pull the first candidate's first text part out of a response body."""
    try:
        response = GeminiResponse.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Unexpected Gemini response shape: {e}")
        return UNDERSTAND_FALLBACK

    if not response.candidates:
        return UNDERSTAND_FALLBACK
    content = response.candidates[0].content
    if content is None or not content.parts:
        return UNDERSTAND_FALLBACK
    text = (content.parts[0].text or "").strip()
    return text or UNDERSTAND_FALLBACK


class GeminiClient:
    """Async client for Gemini's generateContent endpoint."""

    def __init__(
        self,
        config: GeminiConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            http_client: Optional shared httpx client. One is created and
                    owned by this instance if not provided.
        """
        self._config = config or get_gemini_config()
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=self._config.timeout)

    @property
    def endpoint(self) -> str:
        return f"{self._config.base_url}/models/{self._config.model_name}:generateContent"

    async def complete(self, messages: Sequence[OutgoingMessage]) -> str:
        """Request a completion for the given messages.

        Args:
            messages: Role-tagged messages in conversation order.

        Returns:
            The reply text, or a human readable failure message.
        """
        try:
            response = await self._http.post(
                self.endpoint,
                params={"key": self._config.api_key},
                headers={"Content-Type": "application/json"},
                json=build_request_body(messages),
            )
            if not response.is_success:
                logger.error(f"Gemini API request failed with status {response.status_code}")
                return f"API request failed with status {response.status_code}"
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error calling Gemini API: {e!r}")
            return ERROR_FALLBACK

        return extract_reply(data)

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance owns it."""
        if self._owns_http:
            await self._http.aclose()

"""Gemini client configuration with environment variable loading.

Pydantic-based configuration for the completion client. The API key is
optional. Without one, requests fail upstream and the failure shows up in
the conversation like any other API error.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GeminiConfig(BaseModel):
    """Configuration for the Gemini completion client.

    Attributes:
        api_key: API key sent with every request.
        base_url: Generative Language API base URL.
        model_name: Model identifier to use.
        timeout: Request timeout in seconds.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv(
            "GEMINI_API_KEY", os.getenv("NEXT_PUBLIC_GEMINI_API_KEY", "")
        ),
        description="API key for the Gemini API",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("GEMINI_BASE_URL") or DEFAULT_BASE_URL,
        description="Generative Language API base URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
        description="Model to use",
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("GEMINI_TIMEOUT", "60")),
        gt=0.0,
        description="Request timeout in seconds",
    )

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        """Strip surrounding whitespace from the API key."""
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


def get_gemini_config() -> GeminiConfig:
    """Create client configuration from environment.

    Returns:
        Configured GeminiConfig instance.
    """
    return GeminiConfig()

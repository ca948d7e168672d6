"""Remote completion client for the chat.

Responsibilities:
    - Environment-driven configuration (API key, model, base URL, timeout)
    - Mapping outgoing messages to Gemini's generateContent request body
    - Turning every response or failure into a reply string

Keeps the HTTP details out of the conversation logic.
"""

from chatpdfy.client.config import GeminiConfig, get_gemini_config
from chatpdfy.client.gemini import GeminiClient

__all__ = ["GeminiClient", "GeminiConfig", "get_gemini_config"]

"""Transport to the remote generative-language API.

Handles prompt submission to Google Gemini over HTTP.

Responsibilities:
    - Client configuration from environment variables
    - Request shaping for text and inline-image prompts
    - Reply and citation extraction
    - Mapping network and HTTP failures to TransportError

Knows nothing about parsing, reveal or the view.
"""

from src.agent.config import ClientConfig, get_client_config
from src.agent.gemini_client import (
    GeminiClient,
    SharedGeminiClient,
    TransportError,
    get_gemini_client,
    set_gemini_client,
)

__all__ = [
    "ClientConfig",
    "GeminiClient",
    "SharedGeminiClient",
    "TransportError",
    "get_client_config",
    "get_gemini_client",
    "set_gemini_client",
]

"""Language-model client configuration with environment variable loading.

Pydantic-based configuration for the Gemini REST client.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class ClientConfig(BaseModel):
    """Configuration for the Gemini ``generateContent`` client.

    Attributes:
        api_key: API key for model access.
        base_url: API base URL.
        model_name: Model identifier to use.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        top_k: Number of highest-probability tokens considered when sampling.
        top_p: Cumulative probability cutoff for sampling.
        max_output_tokens: Maximum tokens in generated response.
        timeout: Request timeout in seconds.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY") or os.getenv("LLM_API_KEY", ""),
        validate_default=True,
        description="API key for the Gemini API",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("GEMINI_BASE_URL") or GEMINI_BASE_URL,
        validate_default=True,
        description="API base URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
        description="Model to use",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    top_k: int = Field(default=40, ge=1, description="Top-k sampling cutoff")
    top_p: float = Field(default=0.95, gt=0.0, le=1.0, description="Nucleus sampling cutoff")
    max_output_tokens: int = Field(
        default=8192,
        ge=1,
        le=65536,
        description="Maximum tokens in generated response",
    )
    timeout: float = Field(default=120.0, gt=0.0, description="Request timeout in seconds")

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set GEMINI_API_KEY or LLM_API_KEY in .env")
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def endpoint(self) -> str:
        """URL of the ``generateContent`` method for the configured model."""
        return f"{self.base_url}/models/{self.model_name}:generateContent"


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return ClientConfig()

"""Gemini REST client for single-shot prompt completion.

Sends a text prompt, optionally with an inline image, to the
``generateContent`` method and returns the whole reply at once. The reply
is revealed client-side; nothing here streams.
"""

import logging
from typing import Any
from urllib.parse import urlsplit

import httpx

from src.agent.config import ClientConfig, get_client_config
from src.models.schemas import ChatReply, Prompt, Source

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Raised when the language-model request fails.

    Attributes:
        status_code: HTTP status of the failed response, if there was one.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def build_request_body(prompt: Prompt, config: ClientConfig) -> dict[str, Any]:
    """Build the ``generateContent`` JSON body for a prompt.

    Args:
        prompt: Prompt text and optional image.
        config: Sampling settings.

    Returns:
        Request body ready to be sent as JSON.
    """
    parts: list[dict[str, Any]] = [{"text": prompt.text}]
    if prompt.image is not None:
        parts.append(
            {
                "inlineData": {
                    "mimeType": prompt.image.mime_type,
                    "data": prompt.image.base64_data,
                }
            }
        )

    return {
        "contents": [{"parts": parts}],
        "generationConfig": {
            "temperature": config.temperature,
            "topK": config.top_k,
            "topP": config.top_p,
            "maxOutputTokens": config.max_output_tokens,
        },
    }


def _source_from_uri(uri: str) -> Source:
    try:
        netloc = urlsplit(uri).netloc
    except ValueError:
        netloc = ""
    favicon = f"https://{netloc}/favicon.ico" if netloc else ""
    return Source(title=netloc or uri, url=uri, favicon=favicon)


def extract_reply(data: dict[str, Any]) -> ChatReply:
    """Pull the reply text and cited sources out of a response body.

    Text is the concatenation of the first candidate's string text parts.
    Citation entries that are not objects with a string ``uri`` are skipped.

    Raises:
        TransportError: If the body has no candidate text or is not shaped
            like a ``generateContent`` response.
    """
    try:
        candidate = data["candidates"][0]
        parts = candidate["content"]["parts"]
        texts = [
            part["text"]
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        ]
        metadata = candidate.get("citationMetadata") or {}
        citations = metadata.get("citationSources") or []
        uris = [
            citation["uri"]
            for citation in citations
            if isinstance(citation, dict) and isinstance(citation.get("uri"), str)
        ]
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise TransportError(f"Malformed response: unexpected body shape ({e!r})") from e

    if not texts:
        raise TransportError("Malformed response: candidate has no text")

    sources: list[Source] = []
    seen: set[str] = set()
    for uri in uris:
        if uri and uri not in seen:
            seen.add(uri)
            sources.append(_source_from_uri(uri))

    return ChatReply(text="".join(texts), sources=sources)


class GeminiClient:
    """Async client for the Gemini ``generateContent`` endpoint.

    Args:
        config: Client configuration. Loads from environment if not provided.
        http_client: Optional shared ``httpx.AsyncClient``. When omitted a
            short-lived client is opened per request.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or get_client_config()
        self._http = http_client

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def generate(self, prompt: Prompt) -> ChatReply:
        """Send a prompt and return the complete reply.

        Args:
            prompt: Prompt text and optional image.

        Returns:
            Reply text with any cited sources.

        Raises:
            TransportError: On network failure, non-success status or a
                response without reply text.
        """
        body = build_request_body(prompt, self._config)
        logger.info(
            f"Sending prompt to {self._config.model_name} "
            f"({len(prompt.text)} chars, image={'yes' if prompt.image else 'no'})"
        )

        if self._http is not None:
            response = await self._post(self._http, body)
        else:
            async with httpx.AsyncClient(timeout=self._config.timeout) as client:
                response = await self._post(client, body)

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(f"Response is not valid JSON: {e}") from e

        reply = extract_reply(data)
        logger.info(f"Received reply ({len(reply.text)} chars, {len(reply.sources)} sources)")
        return reply

    async def _post(self, client: httpx.AsyncClient, body: dict[str, Any]) -> httpx.Response:
        try:
            response = await client.post(
                self._config.endpoint,
                params={"key": self._config.api_key},
                json=body,
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            raise TransportError(
                f"API request failed with status {status_code}", status_code=status_code
            ) from e
        except httpx.RequestError as e:
            raise TransportError(f"Connection failed: {e}") from e
        return response


# Module-level singleton instance
_gemini_client: GeminiClient | None = None


def get_gemini_client() -> GeminiClient:
    """Get or create the global Gemini client.

    Returns:
        The GeminiClient instance.

    Raises:
        ValueError: If no API key is configured.
    """
    global _gemini_client
    if _gemini_client is None:
        _gemini_client = GeminiClient()
    return _gemini_client


def set_gemini_client(client: GeminiClient | None) -> None:
    """Replace the global Gemini client, or reset it with None."""
    global _gemini_client
    _gemini_client = client


class SharedGeminiClient:
    """Transport that resolves the global client on every call.

    Missing configuration is reported as a ``TransportError`` at send time
    rather than when the chat view is built.
    """

    async def generate(self, prompt: Prompt) -> ChatReply:
        try:
            client = get_gemini_client()
        except ValueError as e:
            logger.error(f"Gemini client is not configured: {e}")
            raise TransportError("Language model is not configured") from e
        return await client.generate(prompt)

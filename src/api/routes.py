"""Content parsing and chat endpoints.

Exposes the message-content parser and a single-shot chat completion that
returns the reply together with its parsed blocks.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from src.agent.gemini_client import GeminiClient, TransportError, get_gemini_client
from src.models.schemas import ChatRequest, ChatResponse, ParseRequest, ParseResponse, Prompt
from src.parsing.content_parser import parse
from src.parsing.images import DEFAULT_IMAGE_PROMPT

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


def _get_client() -> GeminiClient:
    """Resolve the Gemini client, reporting missing configuration as 503."""
    try:
        return get_gemini_client()
    except ValueError as e:
        logger.error(f"Gemini client is not configured: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Language model is not configured",
        ) from e


@router.post("/content/parse", response_model=ParseResponse)
async def parse_content(request: ParseRequest) -> ParseResponse:
    """Parse reply text into render-ready content blocks.

    Args:
        request: The text to parse.

    Returns:
        ParseResponse with blocks in document order.
    """
    return ParseResponse(blocks=parse(request.text))


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    client: Annotated[GeminiClient, Depends(_get_client)],
) -> ChatResponse:
    """Send a prompt to the language model and return the parsed reply.

    Args:
        request: Prompt text and optional inline image.
        client: Gemini client.

    Returns:
        ChatResponse with reply text, parsed blocks and sources.

    Raises:
        422: Neither message nor image given.
        502: The language model request failed.
        503: The language model is not configured.
    """
    prompt = Prompt(text=request.message or DEFAULT_IMAGE_PROMPT, image=request.image)

    try:
        reply = await client.generate(prompt)
    except TransportError as e:
        logger.warning(f"Chat request failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        ) from e

    return ChatResponse(reply=reply.text, blocks=parse(reply.text), sources=reply.sources)

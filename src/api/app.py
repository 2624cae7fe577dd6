"""FastAPI application for Aura Chat.

The lifespan opens one pooled ``httpx.AsyncClient`` and installs a Gemini
client bound to it as the process-wide client, so the API routes and the
chat view share connections. Without an API key the app still starts;
chat requests then fail with 503 (API) or an apology message (view).
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.agent.config import get_client_config
from src.agent.gemini_client import GeminiClient, set_gemini_client
from src.api.routes import router as chat_router

logger = logging.getLogger(__name__)

SERVICE_NAME = "aura-chat"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Own the shared HTTP connection pool for the app's lifetime."""
    try:
        config = get_client_config()
    except ValueError as e:
        logger.warning(f"Language model not configured; chat is unavailable: {e}")
        yield
        return

    async with httpx.AsyncClient(timeout=config.timeout) as http_client:
        set_gemini_client(GeminiClient(config, http_client=http_client))
        logger.info(f"Gemini client ready for model {config.model_name}")
        try:
            yield
        finally:
            set_gemini_client(None)
    logger.info("Closed Gemini connection pool")


def create_app() -> FastAPI:
    """Build the API app with CORS, the chat routes and `/health`."""
    application = FastAPI(
        title="Aura Chat API",
        description=(
            "Parses model replies into structured content blocks (code, tables, "
            "headings, lists, paragraphs) and relays text and image prompts to Gemini."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "service": SERVICE_NAME}

    return application


app = create_app()

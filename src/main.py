"""Command-line entry point for Aura Chat.

Serves the chat view and the HTTP API from one uvicorn process. The view is
mounted on the FastAPI app with ``ui.run_with`` so both share the lifespan
and its Gemini connection pool.
"""

import logging
import os
import sys

from dotenv import load_dotenv
from fastapi import FastAPI

# Settings modules read the environment at import time
load_dotenv()

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def build_app() -> FastAPI:
    """Create the API app and mount the chat page on it."""
    from nicegui import ui

    from src.api.app import create_app
    from src.ui.chat_page import APP_TITLE  # importing registers the "/" page

    app = create_app()
    ui.run_with(app, title=APP_TITLE, favicon="∞", dark=True)
    return app


def main() -> None:
    import uvicorn

    configure_logging()
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Aura Chat on http://{host}:{port}/ (API docs at /docs)")

    uvicorn.run(
        build_app(),
        host=host,
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()

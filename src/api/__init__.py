"""FastAPI endpoints for the chat client.

Endpoints:
    - GET /health: Service health status
    - POST /content/parse: Parse reply text into content blocks
    - POST /chat: Single-shot chat completion with parsed reply
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]

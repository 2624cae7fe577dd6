"""Aura Chat - chat client for a generative-language model.

Combines NiceGUI for the chat view, httpx for the Gemini REST API,
FastAPI for HTTP endpoints, and Pydantic for data validation.

Components:
    - parsing: Reply text to typed content blocks
    - reveal: Incremental reveal and auto-scroll policy
    - agent: Language-model transport and configuration
    - ui: Web interface for chat interactions
    - api: HTTP endpoints
    - models: Content blocks, messages and request/response schemas
"""

__version__ = "0.1.0"

"""Integration tests for components working together as a system.

Coverage:
    - API endpoints with real HTTP requests through ASGITransport
    - Parsing of replies returned by the chat endpoint

The remote language model is swapped out through dependency overrides.
"""

"""Test package for Aura Chat.

Structure:
    - unit/: Parser, reveal, session, transport and config tests
    - integration/: HTTP API tests through the real FastAPI app

Leverages pytest with pytest-check for soft assertions.
"""

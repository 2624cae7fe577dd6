"""Pytest fixtures and shared test configuration.

Fixtures:
    - view_config: View settings with an immediate reveal tick
    - fake_transport: In-memory reply transport recording prompts
    - async_client: HTTPX client for API testing
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from src.agent.gemini_client import TransportError
from src.api import app
from src.models.schemas import ChatReply, Prompt
from src.ui.config import ViewConfig


class FakeTransport:
    """Reply transport that returns a canned reply or raises.

    Attributes:
        prompts: Every prompt received, in order.
    """

    def __init__(self, reply: str = "Hello **there**", error: Exception | None = None) -> None:
        self.reply = ChatReply(text=reply)
        self.error = error
        self.prompts: list[Prompt] = []

    async def generate(self, prompt: Prompt) -> ChatReply:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def view_config() -> ViewConfig:
    """View settings that reveal as fast as the event loop allows."""
    return ViewConfig(reveal_interval=0.0, scroll_threshold=100)


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def failing_transport() -> FakeTransport:
    return FakeTransport(error=TransportError("API request failed with status 500", 500))


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

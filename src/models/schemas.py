import uuid
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.models.content import ContentBlock


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class Role(str, Enum):
    """Speaker of a transcript message."""

    USER = "user"
    ASSISTANT = "assistant"


class Source(BaseModel):
    """A web source cited by an assistant reply.

    Attributes:
        title: Display title for the source.
        url: Link to the source.
        favicon: URL of the site's icon.
    """

    title: str
    url: str
    favicon: str = ""


class Message(BaseModel):
    """An immutable snapshot of one transcript message.

    Updates go through ``model_copy(update=...)`` and ``Transcript.update``;
    the message id stays the same across snapshots.

    Attributes:
        id: Stable identity of the message.
        role: Who sent the message.
        content: Message text (assistant content grows during reveal).
        image: Attached image as a data URI.
        timestamp: ISO-8601 creation time.
        is_error: Whether this is a synthetic transport-failure message.
        sources: Sources cited by an assistant reply.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: Role
    content: str = ""
    image: str | None = None
    timestamp: str = Field(default_factory=_now_iso)
    is_error: bool = False
    sources: tuple[Source, ...] = ()


class InlineImage(BaseModel):
    """Image payload sent to the language model alongside the prompt text."""

    mime_type: str
    base64_data: str


class Prompt(BaseModel):
    """Outbound request to the transport.

    Attributes:
        text: The prompt text.
        image: Optional image attached to the prompt.
    """

    text: str
    image: InlineImage | None = None


class ChatReply(BaseModel):
    """A completed reply from the language model."""

    text: str
    sources: list[Source] = Field(default_factory=list)


class ParseRequest(BaseModel):
    """Request payload for the content parsing endpoint."""

    text: str


class ParseResponse(BaseModel):
    """Parsed content blocks in document order."""

    blocks: list[ContentBlock]


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        message: User's question or prompt.
        image: Optional image attached to the prompt.
    """

    message: str = ""
    image: InlineImage | None = None

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v

    @model_validator(mode="after")
    def require_message_or_image(self) -> "ChatRequest":
        """Reject requests that carry neither text nor an image."""
        if not self.message and self.image is None:
            raise ValueError("Either message or image is required")
        return self


class ChatResponse(BaseModel):
    """Reply text together with its parsed blocks and sources."""

    reply: str
    blocks: list[ContentBlock]
    sources: list[Source] = Field(default_factory=list)

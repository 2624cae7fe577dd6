"""Pydantic models for content blocks, transcript messages and API payloads.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ContentBlock: CodeBlock, Table, Heading, ListItem, Paragraph, Blank
    - Message: Immutable transcript message snapshot
    - Prompt / InlineImage: Outbound request to the language model
    - ChatReply / Source: Completed reply with cited sources
    - ParseRequest / ChatRequest / ChatResponse: HTTP API payloads
"""

from src.models.content import (
    DEFAULT_CODE_LANGUAGE,
    Alignment,
    Blank,
    CodeBlock,
    ContentBlock,
    Heading,
    ListItem,
    Paragraph,
    Table,
)
from src.models.schemas import (
    ChatReply,
    ChatRequest,
    ChatResponse,
    InlineImage,
    Message,
    ParseRequest,
    ParseResponse,
    Prompt,
    Role,
    Source,
)

__all__ = [
    "DEFAULT_CODE_LANGUAGE",
    "Alignment",
    "Blank",
    "ChatReply",
    "ChatRequest",
    "ChatResponse",
    "CodeBlock",
    "ContentBlock",
    "Heading",
    "InlineImage",
    "ListItem",
    "Message",
    "Paragraph",
    "ParseRequest",
    "ParseResponse",
    "Prompt",
    "Role",
    "Source",
    "Table",
]

"""Chat session state and the prompt submission flow.

Holds everything one browser tab needs: the transcript, the pending image
attachment, the auto-scroll policy and the reveal controller. Contains no
view code so the flow can be driven directly.
"""

import logging
import uuid
from typing import Protocol

from src.agent.gemini_client import TransportError
from src.models.schemas import ChatReply, Message, Prompt, Role
from src.parsing.images import DEFAULT_IMAGE_PROMPT, ImageAttachment, ImageAttachmentError
from src.reveal.controller import RevealController
from src.reveal.scroll import ScrollPolicy
from src.reveal.state import Transcript
from src.ui.config import ViewConfig, get_view_config

logger = logging.getLogger(__name__)

ERROR_APOLOGY = "I'm sorry, I encountered an error processing your request. Please try again."


class ReplyTransport(Protocol):
    """Produces a completed reply for a prompt."""

    async def generate(self, prompt: Prompt) -> ChatReply: ...


class Clipboard(Protocol):
    """Writes text to a shared buffer."""

    def write(self, text: str) -> None: ...


class ChatSession:
    """Manages chat state for a user session.

    Args:
        transport: Sends prompts to the language model.
        config: View timing and limits. Loads from environment if not provided.
    """

    def __init__(self, transport: ReplyTransport, config: ViewConfig | None = None) -> None:
        self._transport = transport
        self._config = config or get_view_config()
        self.session_id: str = str(uuid.uuid4())
        self.transcript = Transcript()
        self.scroll = ScrollPolicy(self._config.scroll_threshold)
        self.reveal = RevealController(
            self.transcript, self.scroll, interval=self._config.reveal_interval
        )
        self.attachment = ImageAttachment(self._config.max_image_bytes)
        self.is_loading: bool = False

    def can_submit(self, text: str) -> bool:
        """Whether a prompt with this text may be sent now."""
        if self.is_loading:
            return False
        return bool(text.strip()) or bool(self.attachment)

    async def submit(self, text: str) -> Message | None:
        """Send a prompt and start revealing the reply.

        The user message is appended and the viewport pinned to the bottom
        before the request goes out. A transport failure is turned into a
        single error message that appears at once.

        Args:
            text: Prompt text as typed.

        Returns:
            The assistant (or error) message, or None if nothing was sent.
        """
        if not self.can_submit(text):
            return None

        try:
            image = self.attachment.to_inline_image()
        except ImageAttachmentError as e:
            logger.warning(f"Dropping unusable attachment: {e}")
            self.attachment.clear()
            image = None
            if not text.strip():
                return None

        self.is_loading = True
        self.transcript.append(
            Message(role=Role.USER, content=text, image=self.attachment.preview)
        )
        self.scroll.pin_to_bottom()

        prompt = Prompt(text=text or DEFAULT_IMAGE_PROMPT, image=image)
        try:
            reply = await self._transport.generate(prompt)
        except TransportError as e:
            logger.error(f"Prompt failed for session {self.session_id[:8]}: {e}")
            return self.transcript.append(
                Message(role=Role.ASSISTANT, content=ERROR_APOLOGY, is_error=True)
            )
        else:
            return self.reveal.start(reply.text, reply.sources)
        finally:
            self.is_loading = False
            self.attachment.clear()

    def copy_message(self, message: Message, clipboard: Clipboard) -> bool:
        """Copy a message's text; empty messages are ignored."""
        if not message.content:
            return False
        clipboard.write(message.content)
        return True

    def new_chat(self) -> None:
        """Drop the conversation and start a fresh one."""
        self.reveal.cancel()
        self.transcript.clear()
        self.attachment.clear()
        self.session_id = str(uuid.uuid4())
        self.scroll.pin_to_bottom()

    def close(self) -> None:
        """Release the reveal task when the view goes away."""
        self.reveal.cancel()

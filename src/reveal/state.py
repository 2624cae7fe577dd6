"""Reveal progress and the conversation transcript.

The displayed assistant message is derived from a ``RevealState`` and
committed into the ``Transcript`` through an explicit update on each tick.
"""

import logging
from collections.abc import Callable, Iterator

from pydantic import BaseModel, ConfigDict

from src.models.schemas import Message

logger = logging.getLogger(__name__)

TranscriptListener = Callable[[Message], None]


class RevealState(BaseModel):
    """Progress of revealing one reply.

    Attributes:
        message_id: The assistant message being revealed.
        full_text: The complete reply.
        revealed_length: Number of code points shown so far.
        active: False once the whole reply is shown.
    """

    model_config = ConfigDict(frozen=True)

    message_id: str
    full_text: str
    revealed_length: int = 0
    active: bool = True

    @property
    def prefix(self) -> str:
        return self.full_text[: self.revealed_length]

    def advance(self) -> "RevealState":
        """Next state, one code point further (or finished)."""
        length = min(self.revealed_length + 1, len(self.full_text))
        return self.model_copy(
            update={
                "revealed_length": length,
                "active": length < len(self.full_text),
            }
        )

    def finish(self) -> "RevealState":
        return self.model_copy(
            update={"revealed_length": len(self.full_text), "active": False}
        )

    def apply_to(self, message: Message) -> Message:
        """The message as it should be displayed for this state."""
        return message.model_copy(update={"content": self.prefix})


class Transcript:
    """Append-only ordered sequence of messages.

    The only in-place change allowed is swapping in a new snapshot of an
    existing message through ``update``. Listeners are called after every
    append and update.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._listeners: list[TranscriptListener] = []

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def subscribe(self, listener: TranscriptListener) -> None:
        self._listeners.append(listener)

    def get(self, message_id: str) -> Message | None:
        for message in self._messages:
            if message.id == message_id:
                return message
        return None

    def append(self, message: Message) -> Message:
        self._messages.append(message)
        self._notify(message)
        return message

    def update(self, message: Message) -> Message:
        """Replace the stored snapshot that has the same id.

        Raises:
            KeyError: If no message with that id exists.
        """
        for i in range(len(self._messages) - 1, -1, -1):
            if self._messages[i].id == message.id:
                self._messages[i] = message
                self._notify(message)
                return message
        raise KeyError(message.id)

    def clear(self) -> None:
        self._messages.clear()

    def _notify(self, message: Message) -> None:
        for listener in self._listeners:
            listener(message)

"""Incremental reveal of completed replies.

A reply arrives whole from the transport. The controller shows it one code
point per tick by committing a growing prefix into the transcript, and asks
the viewport to follow along while auto-scroll is on.
"""

import asyncio
import contextlib
import logging
from collections.abc import Iterable

from src.models.schemas import Message, Role, Source
from src.reveal.scroll import ScrollPolicy
from src.reveal.state import RevealState, Transcript

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL = 0.01  # seconds


class RevealController:
    """Owns the single reveal task and its state.

    Only one reveal runs at a time. Starting a new one finishes the previous
    message at its full text and cancels the previous task first, so two
    tasks never write to the transcript tail.

    Args:
        transcript: Transcript that receives the assistant messages.
        scroll: Viewport policy notified on every tick.
        interval: Seconds between ticks.
    """

    def __init__(
        self,
        transcript: Transcript,
        scroll: ScrollPolicy,
        interval: float = DEFAULT_TICK_INTERVAL,
    ) -> None:
        self._transcript = transcript
        self._scroll = scroll
        self.interval = interval
        self._state: RevealState | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> RevealState | None:
        return self._state

    @property
    def active(self) -> bool:
        return self._state is not None and self._state.active

    def begin(self, full_text: str, sources: Iterable[Source] = ()) -> Message:
        """Append an empty assistant message and prepare to reveal ``full_text``.

        Does not schedule anything; ``tick`` drives the reveal. Use ``start``
        to run it on the event loop.
        """
        self._supersede()
        message = self._transcript.append(
            Message(role=Role.ASSISTANT, sources=tuple(sources))
        )
        self._state = RevealState(message_id=message.id, full_text=full_text)
        logger.debug(f"Revealing {len(full_text)} characters into message {message.id}")
        return message

    def start(self, full_text: str, sources: Iterable[Source] = ()) -> Message:
        """Begin a reveal and schedule its ticks on the running event loop."""
        message = self.begin(full_text, sources)
        self._task = asyncio.get_running_loop().create_task(self._run(message.id))
        return message

    def tick(self) -> bool:
        """Reveal one more code point.

        Returns:
            True while more text remains to be revealed.
        """
        state = self._state
        if state is None or not state.active:
            return False

        state = state.advance()
        if not self._commit(state):
            self._state = None
            return False

        self._scroll.follow()
        if state.active:
            self._state = state
        else:
            logger.debug(f"Reveal of message {state.message_id} complete")
            self._state = None
        return state.active

    def cancel(self) -> None:
        """Stop the running task, leaving the message as currently shown."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._state = None

    async def wait(self) -> None:
        """Wait for the running reveal task, if any, to finish."""
        task = self._task
        if task is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await task

    def _supersede(self) -> None:
        state = self._state
        self.cancel()
        if state is not None and state.active:
            logger.info(f"Reveal of message {state.message_id} superseded by a new reply")
            self._commit(state.finish())

    def _commit(self, state: RevealState) -> bool:
        message = self._transcript.get(state.message_id)
        if message is None:
            logger.warning(f"Message {state.message_id} left the transcript during reveal")
            return False
        self._transcript.update(state.apply_to(message))
        return True

    async def _run(self, message_id: str) -> None:
        while True:
            await asyncio.sleep(self.interval)
            state = self._state
            if state is None or state.message_id != message_id:
                return
            if not self.tick():
                return

"""Unit tests for reveal state, the transcript and the reveal controller."""

import asyncio

import pytest
import pytest_check as check

from src.models.schemas import Message, Role, Source
from src.reveal.controller import RevealController
from src.reveal.scroll import ScrollPolicy
from src.reveal.state import RevealState, Transcript


@pytest.fixture
def transcript() -> Transcript:
    return Transcript()


@pytest.fixture
def scroll() -> ScrollPolicy:
    return ScrollPolicy()


@pytest.fixture
def controller(transcript: Transcript, scroll: ScrollPolicy) -> RevealController:
    return RevealController(transcript, scroll, interval=0.0)


class TestRevealState:
    """Tests for RevealState transitions."""

    def test_advance_grows_by_one(self) -> None:
        state = RevealState(message_id="m", full_text="abc")

        state = state.advance()

        assert state.revealed_length == 1
        assert state.prefix == "a"
        assert state.active is True

    def test_advance_to_end_deactivates(self) -> None:
        state = RevealState(message_id="m", full_text="ab").advance().advance()

        assert state.prefix == "ab"
        assert state.active is False

    def test_advance_never_overshoots(self) -> None:
        state = RevealState(message_id="m", full_text="a")
        for _ in range(5):
            state = state.advance()

        assert state.revealed_length == 1

    def test_empty_text_finishes_on_first_advance(self) -> None:
        state = RevealState(message_id="m", full_text="").advance()

        assert state.revealed_length == 0
        assert state.active is False

    def test_advance_counts_code_points(self) -> None:
        state = RevealState(message_id="m", full_text="né😀").advance().advance()

        assert state.prefix == "né"

    def test_apply_to_is_pure(self) -> None:
        message = Message(role=Role.ASSISTANT)
        state = RevealState(message_id=message.id, full_text="hey").advance()

        shown = state.apply_to(message)

        assert shown.content == "h"
        assert shown.id == message.id
        assert message.content == ""


class TestTranscript:
    """Tests for the append-only transcript."""

    def test_append_and_update(self, transcript: Transcript) -> None:
        message = transcript.append(Message(role=Role.USER, content="hi"))

        transcript.update(message.model_copy(update={"content": "hello"}))

        assert len(transcript) == 1
        assert transcript.last is not None
        assert transcript.last.content == "hello"

    def test_update_unknown_message_raises(self, transcript: Transcript) -> None:
        with pytest.raises(KeyError):
            transcript.update(Message(role=Role.USER, content="orphan"))

    def test_listeners_see_appends_and_updates(self, transcript: Transcript) -> None:
        seen: list[str] = []
        transcript.subscribe(lambda m: seen.append(m.content))

        message = transcript.append(Message(role=Role.USER, content="a"))
        transcript.update(message.model_copy(update={"content": "ab"}))

        assert seen == ["a", "ab"]

    def test_messages_are_immutable(self) -> None:
        message = Message(role=Role.USER, content="x")

        with pytest.raises(ValueError):
            message.content = "y"  # type: ignore[misc]


class TestRevealControllerTicks:
    """Tests for tick-by-tick reveal."""

    def test_begin_appends_empty_assistant_message(
        self, controller: RevealController, transcript: Transcript
    ) -> None:
        sources = [Source(title="example.com", url="https://example.com/a")]

        message = controller.begin("hello", sources)

        assert transcript.last == message
        assert message.role is Role.ASSISTANT
        assert message.content == ""
        assert message.sources == tuple(sources)
        assert controller.active is True

    def test_revealed_length_after_n_ticks(
        self, controller: RevealController, transcript: Transcript
    ) -> None:
        full_text = "hello"
        controller.begin(full_text)

        for n in range(1, 9):
            controller.tick()
            assert transcript.last is not None
            check.equal(transcript.last.content, full_text[: min(n, len(full_text))])

    def test_full_text_committed_exactly_once(
        self, controller: RevealController, transcript: Transcript
    ) -> None:
        full_contents: list[str] = []
        transcript.subscribe(
            lambda m: full_contents.append(m.content) if m.content == "abc" else None
        )
        controller.begin("abc")

        results = [controller.tick() for _ in range(6)]

        assert results == [True, True, False, False, False, False]
        assert full_contents == ["abc"]
        assert controller.active is False
        assert controller.state is None

    def test_empty_reply_finishes_on_first_tick(
        self, controller: RevealController, transcript: Transcript
    ) -> None:
        controller.begin("")

        assert controller.tick() is False
        assert transcript.last is not None
        assert transcript.last.content == ""
        assert controller.active is False

    def test_tick_requests_scroll_when_following(
        self, controller: RevealController, scroll: ScrollPolicy
    ) -> None:
        controller.begin("abc")

        controller.tick()
        controller.tick()

        assert scroll.take_request() is True
        assert scroll.take_request() is False

    def test_tick_does_not_scroll_after_user_scrolls_away(
        self, controller: RevealController, scroll: ScrollPolicy
    ) -> None:
        scroll.observe(500)
        controller.begin("abc")

        controller.tick()

        assert scroll.scroll_requested is False
        assert scroll.take_request() is False

    def test_new_reveal_finishes_previous_message(
        self, controller: RevealController, transcript: Transcript
    ) -> None:
        first = controller.begin("abc")
        controller.tick()

        second = controller.begin("xyz")
        controller.tick()

        assert transcript.get(first.id).content == "abc"
        assert transcript.get(second.id).content == "x"

    def test_tick_stops_when_message_leaves_transcript(
        self, controller: RevealController, transcript: Transcript
    ) -> None:
        controller.begin("abc")
        transcript.clear()

        assert controller.tick() is False
        assert controller.active is False


class TestRevealControllerTask:
    """Tests for the scheduled reveal task."""

    async def test_start_reveals_whole_reply(
        self, controller: RevealController, transcript: Transcript
    ) -> None:
        message = controller.start("hey there")

        await controller.wait()

        assert transcript.get(message.id).content == "hey there"
        assert controller.active is False

    async def test_cancel_stops_task(self, transcript: Transcript, scroll: ScrollPolicy) -> None:
        controller = RevealController(transcript, scroll, interval=10.0)
        message = controller.start("never shown")

        controller.cancel()
        await asyncio.sleep(0)

        assert transcript.get(message.id).content == ""
        assert controller.active is False

    async def test_start_supersedes_running_reveal(
        self, transcript: Transcript, scroll: ScrollPolicy
    ) -> None:
        controller = RevealController(transcript, scroll, interval=10.0)
        first = controller.start("first reply")

        controller.interval = 0.0
        second = controller.start("second")
        await controller.wait()

        assert transcript.get(first.id).content == "first reply"
        assert transcript.get(second.id).content == "second"

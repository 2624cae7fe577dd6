"""Unit tests for the auto-scroll policy."""

import pytest

from src.reveal.scroll import ScrollPolicy


class TestObservation:
    """Tests for viewport observation."""

    def test_starts_following(self) -> None:
        assert ScrollPolicy().auto_scroll is True

    @pytest.mark.parametrize(
        ("distance", "expected"),
        [(0, True), (99, True), (100, False), (450, False)],
    )
    def test_threshold(self, distance: float, expected: bool) -> None:
        policy = ScrollPolicy(threshold=100)

        assert policy.observe(distance) is expected
        assert policy.auto_scroll is expected

    def test_latest_observation_wins(self) -> None:
        policy = ScrollPolicy()

        policy.observe(300)
        policy.observe(20)

        assert policy.auto_scroll is True

    def test_observe_viewport_measures_distance_from_bottom(self) -> None:
        policy = ScrollPolicy()

        assert policy.observe_viewport(scroll_top=900, scroll_height=1000, client_height=50) is True
        assert policy.observe_viewport(scroll_top=200, scroll_height=1000, client_height=50) is False


class TestRequests:
    """Tests for coalesced scroll requests."""

    def test_requests_coalesce(self) -> None:
        policy = ScrollPolicy()

        for _ in range(5):
            policy.request_scroll()

        assert policy.take_request() is True
        assert policy.take_request() is False

    def test_follow_only_when_auto_scroll(self) -> None:
        policy = ScrollPolicy()
        policy.observe(1000)

        assert policy.follow() is False
        assert policy.scroll_requested is False

    def test_pending_request_dropped_while_scrolled_away(self) -> None:
        policy = ScrollPolicy()
        policy.request_scroll()
        policy.observe(1000)

        assert policy.take_request() is False
        assert policy.scroll_requested is False

    def test_pin_to_bottom_resets_manual_scroll(self) -> None:
        policy = ScrollPolicy()
        policy.observe(1000)

        policy.pin_to_bottom()

        assert policy.auto_scroll is True
        assert policy.take_request() is True
        assert policy.take_request() is False

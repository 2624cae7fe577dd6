"""Viewport auto-scroll policy.

Tracks whether the viewport follows new content and coalesces
scroll-to-bottom requests so that at most one scroll happens per frame.
"""

import logging

logger = logging.getLogger(__name__)

SCROLL_THRESHOLD_PX = 100


class ScrollPolicy:
    """Auto-scroll state plus a pending scroll-to-bottom flag.

    Args:
        threshold: Distance from the bottom, in pixels, beyond which the
            user is considered to have scrolled away.
    """

    def __init__(self, threshold: float = SCROLL_THRESHOLD_PX) -> None:
        self.threshold = threshold
        self.auto_scroll = True
        self._pending = False

    @property
    def scroll_requested(self) -> bool:
        return self._pending

    def observe(self, distance_from_bottom: float) -> bool:
        """Record a viewport observation and return the new auto-scroll state."""
        following = distance_from_bottom < self.threshold
        if following != self.auto_scroll:
            logger.debug(f"Auto-scroll {'enabled' if following else 'disabled'}")
        self.auto_scroll = following
        return following

    def observe_viewport(
        self, scroll_top: float, scroll_height: float, client_height: float
    ) -> bool:
        return self.observe(scroll_height - scroll_top - client_height)

    def request_scroll(self) -> None:
        """Ask for a scroll to the bottom at the next frame."""
        self._pending = True

    def follow(self) -> bool:
        """Request a scroll only when auto-scroll is on."""
        if self.auto_scroll:
            self.request_scroll()
        return self.auto_scroll

    def pin_to_bottom(self) -> None:
        """Re-enable auto-scroll and request a scroll, as when a new turn starts."""
        self.auto_scroll = True
        self.request_scroll()

    def take_request(self) -> bool:
        """Consume pending requests; True means scroll once this frame."""
        pending, self._pending = self._pending, False
        return pending and self.auto_scroll

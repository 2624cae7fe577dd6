"""Client-side incremental reveal of replies.

Responsibilities:
    - Growing a displayed prefix of a completed reply, one code point per tick
    - Keeping the transcript of immutable message snapshots
    - Auto-scroll policy with coalesced scroll-to-bottom requests
"""

from src.reveal.controller import DEFAULT_TICK_INTERVAL, RevealController
from src.reveal.scroll import SCROLL_THRESHOLD_PX, ScrollPolicy
from src.reveal.state import RevealState, Transcript

__all__ = [
    "DEFAULT_TICK_INTERVAL",
    "SCROLL_THRESHOLD_PX",
    "RevealController",
    "RevealState",
    "ScrollPolicy",
    "Transcript",
]

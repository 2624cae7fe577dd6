"""View configuration with environment variable loading."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from src.parsing.images import MAX_IMAGE_SIZE
from src.reveal.controller import DEFAULT_TICK_INTERVAL
from src.reveal.scroll import SCROLL_THRESHOLD_PX

load_dotenv()


def _env_ms(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) / 1000 if value else default


class ViewConfig(BaseModel):
    """Timing and limits for the chat view.

    Attributes:
        reveal_interval: Seconds between reveal ticks.
        scroll_threshold: Pixels from the bottom beyond which auto-scroll stops.
        frame_interval: Seconds between scroll flushes.
        scroll_duration: Seconds a smooth scroll to the bottom takes.
        max_image_bytes: Largest image that can be attached.
    """

    reveal_interval: float = Field(
        default_factory=lambda: _env_ms("REVEAL_INTERVAL_MS", DEFAULT_TICK_INTERVAL),
        ge=0.0,
    )
    scroll_threshold: float = Field(
        default_factory=lambda: float(os.getenv("AUTO_SCROLL_THRESHOLD_PX", SCROLL_THRESHOLD_PX)),
        gt=0.0,
    )
    frame_interval: float = Field(default=0.05, gt=0.0)
    scroll_duration: float = Field(default=0.3, ge=0.0)
    max_image_bytes: int = Field(default=MAX_IMAGE_SIZE, ge=1)


def get_view_config() -> ViewConfig:
    return ViewConfig()

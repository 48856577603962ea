"""Runtime modules."""

from spaceloop.runtime.bitmap_form import BitmapForm, parse_color
from spaceloop.runtime.bitmap_space import BitmapSpace
from spaceloop.runtime.config import SpaceConfig, load_space_config
from spaceloop.runtime.frame_host import ManualFrameHost, TimerFrameHost
from spaceloop.runtime.logging import (
    configure_space_logging,
    setup_space_logging,
    shutdown_space_logging,
)
from spaceloop.runtime.space import Space

__all__ = [
    "BitmapForm",
    "BitmapSpace",
    "ManualFrameHost",
    "Space",
    "SpaceConfig",
    "TimerFrameHost",
    "configure_space_logging",
    "load_space_config",
    "parse_color",
    "setup_space_logging",
    "shutdown_space_logging",
]

"""Render-loop coordinator for interactive sketches."""

from spaceloop.api.geometry import Bound, Pt
from spaceloop.runtime.bitmap_space import BitmapSpace
from spaceloop.runtime.frame_host import ManualFrameHost, TimerFrameHost
from spaceloop.runtime.space import Space

__all__ = ["BitmapSpace", "Bound", "ManualFrameHost", "Pt", "Space", "TimerFrameHost"]

"""Frame-callback contracts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable

FrameCallback = Callable[[float], object]
LoopState = Literal["idle", "running", "paused", "stopped"]


@runtime_checkable
class FrameHost(Protocol):
    """Host facility invoking a callback once per display refresh."""

    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule callback for the next frame and return its handle."""

    def cancel_frame(self, handle: int) -> None:
        """Cancel a pending frame callback if it exists."""


@dataclass(slots=True)
class FrameTimer:
    """Per-space frame timing bookkeeping."""

    previous: float = 0.0
    delta: float = 0.0
    end: float = -1.0

    def advance(self, time: float) -> float:
        self.delta = time - self.previous
        self.previous = time
        return self.delta

    def expired(self, time: float) -> bool:
        return self.end >= 0.0 and time > self.end


@dataclass(frozen=True, slots=True)
class FrameOutcome:
    """Result of running one frame's players."""

    time: float
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


__all__ = ["FrameCallback", "FrameHost", "FrameOutcome", "FrameTimer", "LoopState"]

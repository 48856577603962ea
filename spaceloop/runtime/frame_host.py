"""Frame-callback hosts emulating requestAnimationFrame outside a browser."""

from __future__ import annotations

import logging
from collections.abc import Callable
from time import monotonic, sleep

from spaceloop.api.frames import FrameCallback

_LOG = logging.getLogger("spaceloop.frames")


class ManualFrameHost:
    """Frame host pumped explicitly with timestamps.

    Callbacks requested while a tick is running are deferred to the next tick,
    matching how a display refresh batches animation frames.
    """

    def __init__(self) -> None:
        self._next_handle = 1
        self._pending: dict[int, FrameCallback] = {}
        self._tick_count = 0
        self._last_timestamp: float | None = None

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def last_timestamp(self) -> float | None:
        return self._last_timestamp

    def is_pending(self, handle: int) -> bool:
        return handle in self._pending

    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule callback for the next tick."""
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        """Cancel a pending callback if it exists."""
        self._pending.pop(handle, None)

    def tick(self, timestamp: float) -> int:
        """Run callbacks pending at tick start; return number executed."""
        self._tick_count += 1
        self._last_timestamp = timestamp
        due = tuple(self._pending)
        executed = 0
        for handle in due:
            callback = self._pending.pop(handle, None)
            if callback is None:
                continue
            callback(timestamp)
            executed += 1
        return executed


class TimerFrameHost(ManualFrameHost):
    """Blocking frame host paced at a target frame rate."""

    def __init__(
        self,
        *,
        fps: float = 60.0,
        time_source: Callable[[], float] | None = None,
        sleep_fn: Callable[[float], None] | None = None,
    ) -> None:
        if fps <= 0.0:
            raise ValueError("fps must be > 0")
        super().__init__()
        self._interval_seconds = 1.0 / fps
        self._time_source = time_source or monotonic
        self._sleep = sleep_fn or sleep
        self._running = False

    @property
    def interval_ms(self) -> float:
        return self._interval_seconds * 1000.0

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Ask a running loop to return after the current tick."""
        self._running = False

    def run(self, max_frames: int | None = None) -> int:
        """Tick until no callback is pending; return the number of ticks."""
        if max_frames is not None and max_frames < 0:
            raise ValueError("max_frames must be >= 0")
        origin = self._time_source()
        next_due = origin
        ticks = 0
        self._running = True
        _LOG.debug("frame_host_run_start interval_ms=%.3f", self.interval_ms)
        try:
            while self._running and self.pending_count > 0:
                if max_frames is not None and ticks >= max_frames:
                    break
                now = self._time_source()
                wait = next_due - now
                if wait > 0.0:
                    self._sleep(wait)
                    now = self._time_source()
                self.tick((now - origin) * 1000.0)
                ticks += 1
                next_due = max(next_due + self._interval_seconds, now)
        finally:
            self._running = False
        _LOG.debug("frame_host_run_end ticks=%d", ticks)
        return ticks


__all__ = ["ManualFrameHost", "TimerFrameHost"]

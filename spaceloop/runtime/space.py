"""Space: frame-loop coordinator and player registry."""

from __future__ import annotations

import itertools
import logging
from abc import ABC, abstractmethod
from typing import Self

from spaceloop.api.frames import FrameHost, FrameOutcome, FrameTimer, LoopState
from spaceloop.api.geometry import Bound, Pt
from spaceloop.api.player import PlayerHandle, PlayerRecord, as_player, capability
from spaceloop.runtime.config import SpaceConfig
from spaceloop.runtime.frame_host import TimerFrameHost

_LOG = logging.getLogger("spaceloop.space")
_SPACE_OWNERS = itertools.count(1)


class Space(ABC):
    """Abstract drawing context that animates registered players.

    Players are invoked once per frame in registration order. The loop is
    driven by a :class:`~spaceloop.api.frames.FrameHost`; each frame
    reschedules the next one until the end time passes, a player raises, or
    the loop is stopped. Concrete subclasses own the surface and implement
    ``resize``, ``clear`` and ``get_form``.
    """

    def __init__(
        self,
        *,
        frame_host: FrameHost | None = None,
        config: SpaceConfig | None = None,
        space_id: str | None = None,
    ) -> None:
        self._config = config or SpaceConfig()
        self.id = space_id or self._config.space_id
        self._owner = next(_SPACE_OWNERS)
        self._frame_host = frame_host or TimerFrameHost(fps=self._config.fps)
        self._bound = Bound()
        self._bound_initialized = False
        self._time = FrameTimer()
        self._records: dict[int, PlayerRecord] = {}
        self._player_count = 0
        self._frame_handle: int | None = None
        self._played = False
        self._paused = False
        self._refresh: bool | None = self._config.refresh
        self._pointer = Pt()

    @property
    def config(self) -> SpaceConfig:
        return self._config

    @property
    def frame_host(self) -> FrameHost:
        return self._frame_host

    @property
    def timer(self) -> FrameTimer:
        return self._time

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def refreshing(self) -> bool | None:
        return self._refresh

    @property
    def frame_handle(self) -> int | None:
        return self._frame_handle

    @property
    def state(self) -> LoopState:
        if not self._played:
            return "idle"
        if self._frame_handle is None:
            return "stopped"
        if self._paused:
            return "paused"
        return "running"

    # Registry

    @property
    def player_count(self) -> int:
        return len(self._records)

    @property
    def handles(self) -> tuple[PlayerHandle, ...]:
        return tuple(record.handle for record in self._records.values())

    def refresh(self, flag: bool) -> Self:
        """Set whether the surface is cleared before each frame."""
        self._refresh = bool(flag)
        return self

    def add(self, player: object) -> Self:
        """Register a player object or a bare ``(time, delta, space)`` callable."""
        target = as_player(player)
        handle = PlayerHandle(self.id, self._player_count, self._owner)
        self._player_count += 1
        record = PlayerRecord(handle=handle, player=target, source=player)
        self._records[handle.index] = record

        resize = capability(target, "resize")
        if resize is not None and self._bound_initialized:
            resize(self.size, None)

        if self._refresh is None:
            self._refresh = True

        _LOG.debug("player_added space=%s player_id=%s", self.id, handle.id)
        self._on_player_added(record)
        return self

    def remove(self, player: object) -> Self:
        """Remove a player by handle, object, or the function originally added."""
        if isinstance(player, PlayerHandle):
            if player.owner != self._owner:
                return self
            record = self._records.get(player.index)
            if record is not None and record.handle == player:
                del self._records[player.index]
                _LOG.debug("player_removed space=%s player_id=%s", self.id, player.id)
            return self
        stale = [index for index, record in self._records.items() if record.matches(player)]
        for index in stale:
            record = self._records.pop(index)
            _LOG.debug("player_removed space=%s player_id=%s", self.id, record.handle.id)
        return self

    def remove_all(self) -> Self:
        self._records = {}
        _LOG.debug("players_cleared space=%s", self.id)
        return self

    def player_handle(self, player: object) -> PlayerHandle | None:
        """Return the latest handle assigned to ``player`` in this space."""
        for record in reversed(tuple(self._records.values())):
            if record.matches(player):
                return record.handle
        return None

    def player_id(self, player: object) -> str | None:
        handle = self.player_handle(player)
        return None if handle is None else handle.id

    # Loop lifecycle

    def play(self, time: float = 0.0) -> Self:
        """Run one frame and schedule the next one.

        Errors raised by players cancel the scheduled frame and propagate.
        """
        self._played = True
        if self._frame_handle is not None:
            self._frame_host.cancel_frame(self._frame_handle)
        self._frame_handle = self._frame_host.request_frame(self._on_frame)
        if self._paused:
            return self

        self._time.advance(time)
        outcome = self._run_frame(time)
        if not outcome.ok:
            self._cancel_loop()
            _LOG.error(
                "frame_failed space=%s time=%.3f error=%s",
                self.id,
                outcome.time,
                type(outcome.error).__name__,
                exc_info=outcome.error,
            )
            raise outcome.error
        return self

    def play_items(self, time: float) -> None:
        """Clear if refreshing, animate every player, then honor the end time."""
        if self._refresh:
            self.clear()

        for record in tuple(self._records.values()):
            # Skip players removed earlier in this frame.
            if self._records.get(record.handle.index) is not record:
                continue
            animate = capability(record.player, "animate")
            if animate is not None:
                animate(time, self._time.delta, self)

        if self._time.expired(time):
            _LOG.debug("loop_ended space=%s time=%.3f end=%.3f", self.id, time, self._time.end)
            self._cancel_loop()

    def replay(self) -> Self:
        """Clear the end time and restart the loop."""
        self._time.end = -1.0
        return self.play()

    def pause(self, toggle: bool = False) -> Self:
        self._paused = (not self._paused) if toggle else True
        _LOG.debug("loop_paused space=%s paused=%s", self.id, self._paused)
        return self

    def resume(self) -> Self:
        self._paused = False
        _LOG.debug("loop_resumed space=%s", self.id)
        return self

    def stop(self, t: float = 0.0) -> Self:
        """Stop once loop time exceeds ``t``; ``0`` stops next frame, ``-1`` never."""
        self._time.end = float(t)
        _LOG.debug("loop_stop_armed space=%s end=%.3f", self.id, self._time.end)
        return self

    def play_once(self, duration: float | None = None) -> Self:
        """Play, then stop after ``duration`` (config default when omitted)."""
        self.play()
        self.stop(self._config.play_once_ms if duration is None else duration)
        return self

    def _on_frame(self, time: float) -> None:
        # The host has consumed this handle; nothing is pending until play reschedules.
        self._frame_handle = None
        self.play(time)

    def _run_frame(self, time: float) -> FrameOutcome:
        try:
            self.play_items(time)
        except Exception as exc:
            return FrameOutcome(time=time, error=exc)
        return FrameOutcome(time=time)

    def _cancel_loop(self) -> None:
        if self._frame_handle is None:
            return
        self._frame_host.cancel_frame(self._frame_handle)
        self._frame_handle = None

    # Geometry

    @property
    def bound_initialized(self) -> bool:
        return self._bound_initialized

    @property
    def outer_bound(self) -> Bound:
        return self._bound.clone()

    @property
    def inner_bound(self) -> Bound:
        size = self.size
        return Bound(Pt.make(size.length, 0.0), size)

    @property
    def size(self) -> Pt:
        return self._bound.size.clone()

    @property
    def center(self) -> Pt:
        return self.size.divide(2)

    @property
    def width(self) -> float:
        return self._bound.width

    @property
    def height(self) -> float:
        return self._bound.height

    @property
    def pointer(self) -> Pt:
        return self._pointer

    def _set_bound(self, bound: Bound) -> None:
        self._bound = bound
        self._bound_initialized = True

    def _set_pointer(self, x: float, y: float) -> None:
        self._pointer = Pt.make(x, y)

    def _on_player_added(self, record: PlayerRecord) -> None:
        """Hook for surfaces that start players once ready."""

    # Surface contract

    @abstractmethod
    def resize(self, size: Pt, event: object | None = None) -> Self:
        """Resize the surface."""

    @abstractmethod
    def clear(self) -> Self:
        """Clear all surface contents."""

    @abstractmethod
    def get_form(self) -> object:
        """Return the drawing handle for this surface."""


__all__ = ["Space"]

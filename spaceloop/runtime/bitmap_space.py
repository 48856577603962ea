"""Concrete space rendering into an in-memory RGBA bitmap."""

from __future__ import annotations

import logging
from typing import Self

from spaceloop.api.frames import FrameHost
from spaceloop.api.geometry import Bound, Pt
from spaceloop.api.player import PlayerRecord, capability
from spaceloop.runtime.bitmap_form import BitmapForm, Color, parse_color
from spaceloop.runtime.config import SpaceConfig
from spaceloop.runtime.space import Space

_LOG = logging.getLogger("spaceloop.space")


class BitmapSpace(Space):
    """Space backed by a numpy framebuffer; headless unless presented."""

    def __init__(
        self,
        *,
        frame_host: FrameHost | None = None,
        config: SpaceConfig | None = None,
        space_id: str | None = None,
        background: Color | None = None,
    ) -> None:
        super().__init__(frame_host=frame_host, config=config, space_id=space_id)
        self._background = parse_color(
            background if background is not None else self.config.background
        )
        self._form = BitmapForm()
        self._ready = False
        self._clear_count = 0

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def clear_count(self) -> int:
        return self._clear_count

    @property
    def background(self) -> tuple[int, int, int, int]:
        return self._background

    def setup(self, size: Pt, event: object | None = None) -> Self:
        """Size the surface and start every registered player."""
        self.resize(size, event)
        self._ready = True
        bound = self.outer_bound
        for record in tuple(self._records.values()):
            self._start_player(record, bound)
        _LOG.debug("space_ready space=%s width=%.1f height=%.1f", self.id, self.width, self.height)
        return self

    def resize(self, size: Pt, event: object | None = None) -> Self:
        self._set_bound(Bound(self.outer_bound.position, size.clone()))
        self._form.reallocate(int(round(size.x)), int(round(size.y)))
        self._form.fill(self._background)
        for record in tuple(self._records.values()):
            resize = capability(record.player, "resize")
            if resize is not None:
                resize(self.size, event)
        return self

    def clear(self) -> Self:
        self._form.fill(self._background)
        self._clear_count += 1
        return self

    def get_form(self) -> BitmapForm:
        return self._form

    def dispatch_action(
        self,
        action_type: str,
        x: float,
        y: float,
        event: object | None = None,
    ) -> int:
        """Record the pointer and forward an input action; return players notified."""
        self._set_pointer(x, y)
        notified = 0
        for record in tuple(self._records.values()):
            action = capability(record.player, "action")
            if action is None:
                continue
            action(action_type, float(x), float(y), event)
            notified += 1
        return notified

    def _on_player_added(self, record: PlayerRecord) -> None:
        if self.ready:
            self._start_player(record, self.outer_bound)

    def _start_player(self, record: PlayerRecord, bound: Bound) -> None:
        start = capability(record.player, "start")
        if start is not None:
            start(bound, self)


__all__ = ["BitmapSpace"]

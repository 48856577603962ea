from __future__ import annotations

from dataclasses import dataclass, field
from typing import Self

from spaceloop.api.geometry import Bound, Pt
from spaceloop.runtime.frame_host import ManualFrameHost
from spaceloop.runtime.space import Space


class StubSpace(Space):
    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("frame_host", ManualFrameHost())
        super().__init__(**kwargs)
        self.clear_calls = 0
        self.resize_calls: list[tuple[Pt, object | None]] = []

    @property
    def host(self) -> ManualFrameHost:
        return self.frame_host  # type: ignore[return-value]

    def resize(self, size: Pt, event: object | None = None) -> Self:
        self._set_bound(Bound(Pt(), size))
        self.resize_calls.append((size, event))
        return self

    def clear(self) -> Self:
        self.clear_calls += 1
        return self

    def get_form(self) -> object:
        return None


@dataclass
class RecordingPlayer:
    frames: list[tuple[float, float]] = field(default_factory=list)
    sizes: list[Pt] = field(default_factory=list)
    actions: list[tuple[str, float, float]] = field(default_factory=list)
    starts: list[Bound] = field(default_factory=list)

    def animate(self, time: float, frame_delta: float, space: Space) -> None:
        _ = space
        self.frames.append((time, frame_delta))

    def resize(self, size: Pt, event: object | None = None) -> None:
        _ = event
        self.sizes.append(size)

    def action(self, action_type: str, x: float, y: float, event: object | None) -> None:
        _ = event
        self.actions.append((action_type, x, y))

    def start(self, bound: Bound, space: Space) -> None:
        _ = space
        self.starts.append(bound)


class FakeBitmapContext:
    def __init__(self) -> None:
        self.bitmaps: list[object] = []

    def set_bitmap(self, bitmap: object) -> None:
        self.bitmaps.append(bitmap)


class FakeCanvas:
    def __init__(self, size: tuple[float, float] = (320.0, 200.0)) -> None:
        self.size = size
        self.draw_function = None
        self.draw_requests = 0
        self.handlers: dict[str, list] = {}
        self.context = FakeBitmapContext()
        self.titles: list[str] = []

    def request_draw(self, draw_function=None) -> None:
        if draw_function is not None:
            self.draw_function = draw_function
        self.draw_requests += 1

    def add_event_handler(self, handler, *event_types) -> None:
        for event_type in event_types:
            self.handlers.setdefault(event_type, []).append(handler)

    def emit(self, event_type: str, event: dict) -> None:
        for handler in self.handlers.get(event_type, []):
            handler(event)

    def get_context(self, kind: str) -> FakeBitmapContext:
        assert kind == "bitmap"
        return self.context

    def get_logical_size(self) -> tuple[float, float]:
        return self.size

    def set_title(self, title: str) -> None:
        self.titles.append(title)

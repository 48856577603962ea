"""Rendercanvas-backed frame host and bitmap presentation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from time import perf_counter
from typing import Any

from spaceloop.api.frames import FrameCallback
from spaceloop.api.geometry import Pt
from spaceloop.runtime.bitmap_form import BitmapForm
from spaceloop.runtime.bitmap_space import BitmapSpace
from spaceloop.runtime.config import SpaceConfig, load_space_config
from spaceloop.runtime.errors import BACKEND_HOOK_ERRORS, call_backend_hook, log_recoverable

_LOG = logging.getLogger("spaceloop.window")


class RenderCanvasFrameHost:
    """Frame host driven by a rendercanvas canvas's draw requests.

    Timestamps passed to callbacks are milliseconds since the first draw.
    """

    def __init__(
        self,
        canvas: Any,
        *,
        time_source: Callable[[], float] | None = None,
    ) -> None:
        self._canvas = canvas
        self._time_source = time_source or perf_counter
        self._origin: float | None = None
        self._next_handle = 1
        self._pending: dict[int, FrameCallback] = {}
        self._after_frame: list[Callable[[], object]] = []
        self._draw_bound = False

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        self._request_draw()
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def add_after_frame(self, hook: Callable[[], object]) -> None:
        """Register a hook run after each frame's callbacks (e.g. presentation)."""
        self._after_frame.append(hook)

    def draw(self) -> int:
        """Run pending frame callbacks; invoked by the canvas draw cycle."""
        now = self._time_source()
        if self._origin is None:
            self._origin = now
        timestamp = (now - self._origin) * 1000.0
        executed = 0
        try:
            for handle in tuple(self._pending):
                callback = self._pending.pop(handle, None)
                if callback is None:
                    continue
                callback(timestamp)
                executed += 1
        finally:
            for hook in self._after_frame:
                hook()
        return executed

    def _request_draw(self) -> None:
        request_draw = getattr(self._canvas, "request_draw", None)
        if not callable(request_draw):
            raise RuntimeError("canvas does not expose request_draw()")
        if self._draw_bound:
            request_draw()
            return
        request_draw(self.draw)
        self._draw_bound = True


class BitmapPresenter:
    """Pushes a bitmap form's framebuffer into the canvas bitmap context."""

    def __init__(self, canvas: Any, form: BitmapForm) -> None:
        self._canvas = canvas
        self._form = form
        self._context: Any | None = None

    def present(self) -> bool:
        pixels = self._form.pixels
        if pixels.size == 0:
            return False
        context = self._resolve_context()
        if context is None:
            return False
        if callable(getattr(context, "set_bitmap", None)):
            return call_backend_hook(_LOG, context, "set_bitmap", pixels)
        return call_backend_hook(_LOG, context, "set_image", pixels)

    def _resolve_context(self) -> Any | None:
        if self._context is not None:
            return self._context
        get_context = getattr(self._canvas, "get_context", None)
        if not callable(get_context):
            return None
        try:
            self._context = get_context("bitmap")
        except BACKEND_HOOK_ERRORS:
            log_recoverable(_LOG, "bitmap_context_unavailable", level=logging.WARNING)
            return None
        return self._context


def bind_canvas_resize(canvas: Any, space: BitmapSpace) -> bool:
    """Forward canvas resize events to ``space.resize``."""

    def _on_resize(event: object) -> None:
        size = _event_size(event)
        if size is None:
            return
        space.resize(size, event)

    return call_backend_hook(_LOG, canvas, "add_event_handler", _on_resize, "resize")


@dataclass(frozen=True, slots=True)
class CanvasSpace:
    """A bitmap space wired to a rendercanvas canvas."""

    canvas: Any
    space: BitmapSpace
    host: RenderCanvasFrameHost
    presenter: BitmapPresenter
    rc_auto: Any | None = None

    def run(self) -> None:
        run_canvas_loop(self.rc_auto)


def create_canvas_space(
    canvas: Any | None = None,
    *,
    width: int = 800,
    height: int = 600,
    title: str = "spaceloop",
    config: SpaceConfig | None = None,
) -> CanvasSpace:
    """Create (or adopt) a canvas and bind a ready ``BitmapSpace`` to it."""
    cfg = config or load_space_config()
    rc_auto: Any | None = None
    if canvas is None:
        try:
            import rendercanvas.auto as rc_auto
        except ImportError as exc:
            raise RuntimeError(
                "Render canvas backend unavailable. Install a desktop backend such as glfw."
            ) from exc
        canvas_cls = getattr(rc_auto, "RenderCanvas", None)
        if canvas_cls is None:
            raise RuntimeError("rendercanvas.auto did not expose RenderCanvas.")
        canvas = canvas_cls(
            size=(int(width), int(height)),
            title=title,
            update_mode="ondemand",
            max_fps=float(cfg.fps),
        )
    else:
        call_backend_hook(_LOG, canvas, "set_title", title)

    host = RenderCanvasFrameHost(canvas)
    space = BitmapSpace(frame_host=host, config=cfg)
    presenter = BitmapPresenter(canvas, space.get_form())
    host.add_after_frame(presenter.present)
    bind_canvas_resize(canvas, space)
    space.setup(_initial_size(canvas, width, height))
    _LOG.info("canvas_space_created space=%s size=%dx%d", space.id, space.width, space.height)
    return CanvasSpace(canvas=canvas, space=space, host=host, presenter=presenter, rc_auto=rc_auto)


def run_canvas_loop(rc_auto: Any | None = None) -> None:
    """Run the rendercanvas backend loop."""
    if rc_auto is None:
        import rendercanvas.auto as rc_auto
    loop = getattr(rc_auto, "loop", None)
    if loop is not None and hasattr(loop, "run"):
        loop.run()
        return
    run_func = getattr(rc_auto, "run", None)
    if callable(run_func):
        run_func()
        return
    raise RuntimeError("rendercanvas.auto did not expose a runnable loop.")


def _initial_size(canvas: Any, width: int, height: int) -> Pt:
    get_size = getattr(canvas, "get_logical_size", None)
    if callable(get_size):
        try:
            lw, lh = get_size()
            return Pt.make(lw, lh)
        except BACKEND_HOOK_ERRORS:
            log_recoverable(_LOG, "canvas_logical_size_unavailable")
    return Pt.make(width, height)


def _event_size(event: object) -> Pt | None:
    size = _event_value(event, "size")
    if isinstance(size, (tuple, list)) and len(size) >= 2:
        lw, lh = size[0], size[1]
    else:
        lw = _event_value(event, "width")
        lh = _event_value(event, "height")
    if not isinstance(lw, (int, float)) or not isinstance(lh, (int, float)):
        return None
    return Pt.make(max(0.0, float(lw)), max(0.0, float(lh)))


def _event_value(event: object, key: str, default: object | None = None) -> object | None:
    if isinstance(event, dict):
        return event.get(key, default)
    return getattr(event, key, default)


__all__ = [
    "BitmapPresenter",
    "CanvasSpace",
    "RenderCanvasFrameHost",
    "bind_canvas_resize",
    "create_canvas_space",
    "run_canvas_loop",
]

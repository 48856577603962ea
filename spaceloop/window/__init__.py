"""Window/canvas adapters."""

from spaceloop.window.rendercanvas import (
    BitmapPresenter,
    CanvasSpace,
    RenderCanvasFrameHost,
    bind_canvas_resize,
    create_canvas_space,
    run_canvas_loop,
)

__all__ = [
    "BitmapPresenter",
    "CanvasSpace",
    "RenderCanvasFrameHost",
    "bind_canvas_resize",
    "create_canvas_space",
    "run_canvas_loop",
]

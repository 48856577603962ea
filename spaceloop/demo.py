"""Demo sketch: points orbiting the space center, headless or in a window."""

from __future__ import annotations

import argparse
import logging
import math
from dataclasses import dataclass, field

from spaceloop.api.geometry import Bound, Pt
from spaceloop.runtime.bitmap_space import BitmapSpace
from spaceloop.runtime.config import SpaceConfig, load_space_config
from spaceloop.runtime.frame_host import TimerFrameHost
from spaceloop.runtime.logging import setup_space_logging, shutdown_space_logging
from spaceloop.runtime.space import Space

_LOG = logging.getLogger("spaceloop.demo")


@dataclass(slots=True)
class OrbitPlayer:
    """Draws ``count`` points orbiting the center of the space."""

    count: int = 12
    radius_ratio: float = 0.35
    color: str = "#123"
    frames: int = 0
    radius: float = field(default=0.0, init=False)

    def start(self, bound: Bound, space: Space) -> None:
        _ = space
        self.radius = min(bound.width, bound.height) * self.radius_ratio

    def resize(self, size: Pt, event: object | None = None) -> None:
        _ = event
        self.radius = min(size.x, size.y) * self.radius_ratio

    def animate(self, time: float, frame_delta: float, space: Space) -> None:
        _ = frame_delta
        form = space.get_form()
        center = space.center
        phase = time / 1000.0
        for i in range(self.count):
            angle = phase + (2.0 * math.pi * i) / self.count
            pt = Pt(
                center.x + math.cos(angle) * self.radius,
                center.y + math.sin(angle) * self.radius,
            )
            form.point(pt, 3.0, self.color)
        form.point(space.pointer, 5.0, "#f03")
        self.frames += 1


def run_headless(
    *,
    width: int,
    height: int,
    duration_ms: float,
    max_frames: int | None,
    config: SpaceConfig | None = None,
) -> int:
    """Run the demo without a window; return frames drawn."""
    config = config or load_space_config()
    host = TimerFrameHost(fps=config.fps)
    space = BitmapSpace(frame_host=host, config=config)
    player = OrbitPlayer()
    space.add(player).setup(Pt.make(width, height))
    space.play_once(duration_ms)
    host.run(max_frames=max_frames)
    _LOG.info("demo_finished frames=%d state=%s", player.frames, space.state)
    return player.frames


def run_windowed(
    *, width: int, height: int, duration_ms: float, config: SpaceConfig | None = None
) -> None:
    from spaceloop.window.rendercanvas import create_canvas_space

    canvas_space = create_canvas_space(
        width=width, height=height, title="spaceloop demo", config=config
    )
    canvas_space.space.add(OrbitPlayer())
    if duration_ms < 0:
        canvas_space.space.play()
    else:
        canvas_space.space.play_once(duration_ms)
    canvas_space.run()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the spaceloop orbit demo.")
    parser.add_argument("--width", type=int, default=400)
    parser.add_argument("--height", type=int, default=300)
    parser.add_argument("--duration-ms", type=float, default=2000.0)
    parser.add_argument("--max-frames", type=int, default=None)
    parser.add_argument("--window", action="store_true", help="Render into a rendercanvas window.")
    args = parser.parse_args(argv)

    config = load_space_config()
    setup_space_logging(config)
    try:
        if args.window:
            run_windowed(
                width=args.width,
                height=args.height,
                duration_ms=args.duration_ms,
                config=config,
            )
        else:
            run_headless(
                width=args.width,
                height=args.height,
                duration_ms=args.duration_ms,
                max_frames=args.max_frames,
                config=config,
            )
    finally:
        shutdown_space_logging()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

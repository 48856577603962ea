"""Minimal numpy-backed drawing form for bitmap surfaces."""

from __future__ import annotations

import numpy as np

from spaceloop.api.geometry import Bound, Pt

Color = str | tuple[int, int, int] | tuple[int, int, int, int]


def parse_color(color: Color) -> tuple[int, int, int, int]:
    """Parse ``#rgb``, ``#rrggbb``, ``#rrggbbaa`` or an RGB(A) tuple."""
    if isinstance(color, str):
        text = color.strip().lstrip("#")
        if len(text) == 3:
            text = "".join(ch * 2 for ch in text)
        if len(text) not in {6, 8}:
            raise ValueError(f"unsupported color: {color!r}")
        try:
            channels = [int(text[i : i + 2], 16) for i in range(0, len(text), 2)]
        except ValueError as exc:
            raise ValueError(f"unsupported color: {color!r}") from exc
    else:
        channels = [int(value) for value in color]
        if len(channels) not in {3, 4}:
            raise ValueError(f"unsupported color: {color!r}")
    if len(channels) == 3:
        channels.append(255)
    if any(value < 0 or value > 255 for value in channels):
        raise ValueError(f"color channel out of range: {color!r}")
    return (channels[0], channels[1], channels[2], channels[3])


class BitmapForm:
    """Draws primitives into an RGBA ``uint8`` framebuffer shaped ``(h, w, 4)``."""

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self._pixels = np.zeros((max(0, int(height)), max(0, int(width)), 4), dtype=np.uint8)

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    def reallocate(self, width: int, height: int) -> None:
        self._pixels = np.zeros((max(0, int(height)), max(0, int(width)), 4), dtype=np.uint8)

    def fill(self, color: Color) -> BitmapForm:
        self._pixels[:, :] = parse_color(color)
        return self

    def rect(self, bound: Bound, color: Color) -> BitmapForm:
        x0, y0 = self._clip(bound.position.x, bound.position.y)
        x1, y1 = self._clip(bound.position.x + bound.width, bound.position.y + bound.height)
        if x1 > x0 and y1 > y0:
            self._pixels[y0:y1, x0:x1] = parse_color(color)
        return self

    def point(self, pt: Pt, radius: float, color: Color) -> BitmapForm:
        """Draw a filled circle."""
        if radius <= 0.0:
            return self
        x0, y0 = self._clip(pt.x - radius, pt.y - radius)
        x1, y1 = self._clip(pt.x + radius + 1, pt.y + radius + 1)
        if x1 <= x0 or y1 <= y0:
            return self
        ys, xs = np.ogrid[y0:y1, x0:x1]
        mask = (xs - pt.x) ** 2 + (ys - pt.y) ** 2 <= radius * radius
        self._pixels[y0:y1, x0:x1][mask] = parse_color(color)
        return self

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        r, g, b, a = (int(value) for value in self._pixels[int(y), int(x)])
        return (r, g, b, a)

    def _clip(self, x: float, y: float) -> tuple[int, int]:
        cx = min(max(int(np.floor(x)), 0), self.width)
        cy = min(max(int(np.floor(y)), 0), self.height)
        return cx, cy


__all__ = ["BitmapForm", "Color", "parse_color"]

"""Immutable 2D geometry values shared by spaces and players."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Pt:
    """2D point or vector."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def make(cls, x: float, y: float) -> Pt:
        return cls(float(x), float(y))

    @property
    def length(self) -> float:
        """Return vector magnitude."""
        return math.hypot(self.x, self.y)

    def divide(self, value: float) -> Pt:
        return Pt(self.x / value, self.y / value)

    def clone(self) -> Pt:
        return Pt(self.x, self.y)


@dataclass(frozen=True, slots=True)
class Bound:
    """Axis-aligned rectangle described by origin and size."""

    position: Pt = field(default_factory=Pt)
    size: Pt = field(default_factory=Pt)

    def __post_init__(self) -> None:
        if self.size.x < 0.0 or self.size.y < 0.0:
            raise ValueError("bound size must be >= 0")

    @classmethod
    def from_size(cls, width: float, height: float) -> Bound:
        return cls(Pt(), Pt.make(width, height))

    @property
    def width(self) -> float:
        return self.size.x

    @property
    def height(self) -> float:
        return self.size.y

    def clone(self) -> Bound:
        return Bound(self.position.clone(), self.size.clone())


__all__ = ["Bound", "Pt"]

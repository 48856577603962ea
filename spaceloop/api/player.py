"""Player capability contracts and presence-checked dispatch helpers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from spaceloop.api.geometry import Bound, Pt

if TYPE_CHECKING:
    from spaceloop.runtime.space import Space

AnimateFunction = Callable[[float, float, "Space"], None]


@runtime_checkable
class AnimatePlayer(Protocol):
    def animate(self, time: float, frame_delta: float, space: Space) -> None:
        """Draw or update for one frame."""


@runtime_checkable
class ResizePlayer(Protocol):
    def resize(self, size: Pt, event: object | None = None) -> None:
        """React to a new surface size."""


@runtime_checkable
class ActionPlayer(Protocol):
    def action(self, action_type: str, x: float, y: float, event: object | None) -> None:
        """React to a pointer/input action."""


@runtime_checkable
class StartPlayer(Protocol):
    def start(self, bound: Bound, space: Space) -> None:
        """Initialize once the space surface is ready."""


@dataclass(frozen=True, slots=True)
class PlayerHandle:
    """Stable registry handle; `index` is never reused within a space.

    `owner` identifies the issuing space instance, so spaces sharing an id
    never accept each other's handles. It is not part of `id`.
    """

    space_id: str
    index: int
    owner: int = 0

    @property
    def id(self) -> str:
        return f"{self.space_id}{self.index}"


@dataclass(frozen=True, slots=True)
class FunctionPlayer:
    """Player wrapper exposing only the animate capability."""

    function: AnimateFunction

    def animate(self, time: float, frame_delta: float, space: Space) -> None:
        self.function(time, frame_delta, space)


@dataclass(frozen=True, slots=True)
class PlayerRecord:
    handle: PlayerHandle
    player: object
    source: object

    def matches(self, target: object) -> bool:
        return self.source is target or self.player is target


_CAPABILITIES: dict[str, type] = {
    "animate": AnimatePlayer,
    "resize": ResizePlayer,
    "action": ActionPlayer,
    "start": StartPlayer,
}


def capability(player: object, name: str) -> Callable[..., object] | None:
    """Return the bound capability if ``player`` satisfies its protocol.

    Protocol checks only test presence, so non-callable members are rejected too.
    """
    protocol = _CAPABILITIES.get(name)
    if protocol is None:
        raise KeyError(f"unknown player capability: {name}")
    if not isinstance(player, protocol):
        return None
    member = getattr(player, name)
    return member if callable(member) else None


def as_player(target: object) -> object:
    """Wrap bare callables so every registry entry is a player object."""
    if capability(target, "animate") is None and callable(target):
        return FunctionPlayer(target)
    return target


__all__ = [
    "ActionPlayer",
    "AnimateFunction",
    "AnimatePlayer",
    "FunctionPlayer",
    "PlayerHandle",
    "PlayerRecord",
    "ResizePlayer",
    "StartPlayer",
    "as_player",
    "capability",
]

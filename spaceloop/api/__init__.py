"""Public spaceloop API contracts."""

from spaceloop.api.frames import FrameCallback, FrameHost, FrameOutcome, FrameTimer, LoopState
from spaceloop.api.geometry import Bound, Pt
from spaceloop.api.logging import SpaceLoggingConfig
from spaceloop.api.player import (
    ActionPlayer,
    AnimateFunction,
    AnimatePlayer,
    FunctionPlayer,
    PlayerHandle,
    PlayerRecord,
    ResizePlayer,
    StartPlayer,
)

__all__ = [
    "ActionPlayer",
    "AnimateFunction",
    "AnimatePlayer",
    "Bound",
    "FrameCallback",
    "FrameHost",
    "FrameOutcome",
    "FrameTimer",
    "FunctionPlayer",
    "LoopState",
    "PlayerHandle",
    "PlayerRecord",
    "Pt",
    "ResizePlayer",
    "SpaceLoggingConfig",
    "StartPlayer",
]

"""Space configuration sourced from environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_SPACE_ID = "space"
DEFAULT_BACKGROUND = "#e2e6ef"
DEFAULT_FPS = 60.0
DEFAULT_PLAY_ONCE_MS = 5000.0


@dataclass(frozen=True, slots=True)
class SpaceConfig:
    """Immutable space configuration."""

    space_id: str = DEFAULT_SPACE_ID
    refresh: bool | None = None
    background: str = DEFAULT_BACKGROUND
    fps: float = DEFAULT_FPS
    play_once_ms: float = DEFAULT_PLAY_ONCE_MS
    log_level: str = "INFO"
    log_format: str = "text"
    log_file: str | None = None


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _optional_flag(name: str, *, env: Mapping[str, str] | None = None) -> bool | None:
    raw = _raw(name, env=env)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return None


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def _normalize_log_format(raw: str, fallback: str) -> str:
    value = str(raw).strip().lower()
    if value not in {"text", "json"}:
        return str(fallback)
    return value


def resolve_log_level_name(
    default: str = "INFO", *, env: Mapping[str, str] | None = None
) -> str:
    """Resolve log level with package-prefixed override."""
    value = _raw("SPACELOOP_LOG_LEVEL", env=env)
    if value is None:
        value = _raw("LOG_LEVEL", env=env) or default
    return value.strip().upper()


def load_space_config(env: Mapping[str, str] | None = None) -> SpaceConfig:
    """Load immutable space configuration from env vars."""
    return SpaceConfig(
        space_id=_text("SPACELOOP_SPACE_ID", DEFAULT_SPACE_ID, env=env),
        refresh=_optional_flag("SPACELOOP_REFRESH", env=env),
        background=_text("SPACELOOP_BACKGROUND", DEFAULT_BACKGROUND, env=env),
        fps=_float("SPACELOOP_FPS", DEFAULT_FPS, minimum=1.0, env=env),
        play_once_ms=_float("SPACELOOP_PLAY_ONCE_MS", DEFAULT_PLAY_ONCE_MS, minimum=-1.0, env=env),
        log_level=resolve_log_level_name(env=env),
        log_format=_normalize_log_format(_text("SPACELOOP_LOG_FORMAT", "text", env=env), "text"),
        log_file=_text("SPACELOOP_LOG_FILE", "", env=env) or None,
    )


__all__ = ["SpaceConfig", "load_space_config", "resolve_log_level_name"]

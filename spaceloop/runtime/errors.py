"""Exception policy for optional surface/backend hooks.

Player callbacks are never routed through here: a failing player stops the
loop and the error reaches the caller of ``Space.play``. Only optional backend
integration points (canvas titles, bitmap presentation, event binding) are
allowed to fail softly.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeAlias

BackendErrors: TypeAlias = tuple[type[BaseException], ...]
BACKEND_HOOK_ERRORS: BackendErrors = (
    RuntimeError,
    OSError,
    ValueError,
    TypeError,
    AttributeError,
)


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.DEBUG,
) -> None:
    """Record a tolerated backend failure with its traceback."""
    logger.log(level, message, exc_info=True)


def call_backend_hook(
    logger: logging.Logger,
    target: object,
    name: str,
    *args: object,
) -> bool:
    """Call ``target.name(*args)`` when present; return whether it succeeded."""
    hook = getattr(target, name, None)
    if not callable(hook):
        return False
    try:
        hook(*args)
    except BACKEND_HOOK_ERRORS:
        log_recoverable(logger, f"backend_hook_failed hook={name}")
        return False
    return True


__all__ = ["BACKEND_HOOK_ERRORS", "call_backend_hook", "log_recoverable"]

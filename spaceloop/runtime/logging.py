"""Logging pipeline for spaceloop processes.

Messages follow ``event key=value ...``; the JSON formatter splits the
leading event name out so file logs can be filtered per lifecycle event.
"""

from __future__ import annotations

import json
import logging
import queue
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from spaceloop.api.logging import SpaceLoggingConfig
from spaceloop.runtime.config import SpaceConfig, load_space_config

_LISTENER: QueueListener | None = None
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` values land under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": message.partition(" ")[0],
            "msg": message,
        }
        fields = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=repr)


def logging_config_for(config: SpaceConfig) -> SpaceLoggingConfig:
    """Map space configuration onto the logging pipeline settings."""
    return SpaceLoggingConfig(
        level_name=config.log_level,
        console_format=config.log_format,
        file_path=config.log_file,
        file_format="json",
    )


def configure_space_logging(config: SpaceLoggingConfig) -> None:
    """Replace root handlers; file output is streamed through a queue listener."""
    global _LISTENER

    shutdown_space_logging()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(_level(config.level_name))

    console = _with_format(logging.StreamHandler(), config.console_format)
    if not config.file_path:
        root.addHandler(console)
        return

    path = Path(config.file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = _with_format(
        logging.FileHandler(path, mode="a", encoding="utf-8", delay=True),
        config.file_format,
    )
    records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(records))
    _LISTENER = QueueListener(records, console, file_handler, respect_handler_level=True)
    _LISTENER.start()


def setup_space_logging(config: SpaceConfig | None = None) -> None:
    """Configure logging from ``config`` unless the root logger already has handlers."""
    if logging.getLogger().handlers:
        return
    configure_space_logging(logging_config_for(config or load_space_config()))


def shutdown_space_logging() -> None:
    """Stop the queue listener, flushing queued records to their handlers."""
    global _LISTENER

    if _LISTENER is None:
        return
    _LISTENER.stop()
    _LISTENER = None


def get_space_logger(name: str) -> logging.Logger:
    """Return a logger under the ``spaceloop`` namespace."""
    if name == "spaceloop" or name.startswith("spaceloop."):
        return logging.getLogger(name)
    return logging.getLogger(f"spaceloop.{name}")


def _level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _with_format(handler: logging.Handler, kind: str) -> logging.Handler:
    if kind.strip().lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    return handler


__all__ = [
    "JsonFormatter",
    "configure_space_logging",
    "get_space_logger",
    "logging_config_for",
    "setup_space_logging",
    "shutdown_space_logging",
]

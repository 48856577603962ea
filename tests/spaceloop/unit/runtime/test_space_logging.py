from __future__ import annotations

import json
import logging
import sys

from spaceloop.api.logging import SpaceLoggingConfig
from spaceloop.runtime.config import SpaceConfig
from spaceloop.runtime.errors import call_backend_hook
from spaceloop.runtime.logging import (
    JsonFormatter,
    configure_space_logging,
    get_space_logger,
    logging_config_for,
    setup_space_logging,
    shutdown_space_logging,
)


def _restore(root: logging.Logger, handlers: list[logging.Handler], level: int) -> None:
    root.handlers.clear()
    root.handlers.extend(handlers)
    root.setLevel(level)


def test_setup_space_logging_adds_handler_when_missing(monkeypatch) -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        root.handlers.clear()
        root.setLevel(logging.NOTSET)
        monkeypatch.setenv("SPACELOOP_LOG_LEVEL", "DEBUG")
        setup_space_logging()
        assert root.handlers
        assert root.level == logging.DEBUG
    finally:
        _restore(root, original_handlers, original_level)


def test_setup_space_logging_reads_level_from_space_config(monkeypatch) -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        root.handlers.clear()
        monkeypatch.setenv("SPACELOOP_LOG_LEVEL", "DEBUG")
        setup_space_logging(SpaceConfig(log_level="WARNING"))
        assert root.level == logging.WARNING
    finally:
        _restore(root, original_handlers, original_level)


def test_setup_space_logging_streams_to_configured_file(tmp_path) -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    log_path = tmp_path / "space.jsonl"
    try:
        root.handlers.clear()
        setup_space_logging(SpaceConfig(log_level="DEBUG", log_file=str(log_path)))
        get_space_logger("space").debug("player_added space=%s player_id=%s", "demo", "demo0")
        shutdown_space_logging()
        lines = log_path.read_text(encoding="utf-8").splitlines()
    finally:
        _restore(root, original_handlers, original_level)

    payload = json.loads(lines[-1])
    assert payload["level"] == "DEBUG"
    assert payload["event"] == "player_added"
    assert payload["msg"] == "player_added space=demo player_id=demo0"


def test_logging_config_for_maps_space_config() -> None:
    cfg = logging_config_for(SpaceConfig(log_level="ERROR", log_format="json", log_file="x.log"))
    assert cfg == SpaceLoggingConfig(
        level_name="ERROR", console_format="json", file_path="x.log", file_format="json"
    )


def test_setup_space_logging_does_not_override_existing_handlers() -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    sentinel = logging.NullHandler()
    try:
        root.handlers.clear()
        root.addHandler(sentinel)
        root.setLevel(logging.WARNING)
        setup_space_logging()
        assert root.handlers == [sentinel]
        assert root.level == logging.WARNING
    finally:
        _restore(root, original_handlers, original_level)


def test_configure_space_logging_streams_json_to_file(tmp_path) -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    log_path = tmp_path / "logs" / "space.jsonl"
    try:
        configure_space_logging(
            SpaceLoggingConfig(level_name="INFO", file_path=str(log_path), file_format="json")
        )
        get_space_logger("space").info("loop_ended", extra={"space_id": "demo"})
        # Reconfiguring stops the queue listener and flushes pending records.
        configure_space_logging(SpaceLoggingConfig())
        lines = log_path.read_text(encoding="utf-8").splitlines()
    finally:
        _restore(root, original_handlers, original_level)

    payload = json.loads(lines[-1])
    assert payload["logger"] == "spaceloop.space"
    assert payload["msg"] == "loop_ended"
    assert payload["fields"]["space_id"] == "demo"


def test_json_formatter_includes_exception_text() -> None:
    logger = logging.getLogger("spaceloop.space")
    try:
        raise ValueError("bad frame")
    except ValueError:
        record = logger.makeRecord(
            "spaceloop.space", logging.ERROR, __file__, 1, "frame_failed", (), sys.exc_info()
        )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "ERROR"
    assert payload["msg"] == "frame_failed"
    assert "bad frame" in payload["exc_info"]


def test_get_space_logger_namespaces_names() -> None:
    assert get_space_logger("window").name == "spaceloop.window"
    assert get_space_logger("spaceloop.frames").name == "spaceloop.frames"


def test_call_backend_hook_tolerates_failures(caplog) -> None:
    logger = logging.getLogger("spaceloop.window")

    class Target:
        def __init__(self) -> None:
            self.titles: list[str] = []

        def set_title(self, title: str) -> None:
            self.titles.append(title)

        def present(self) -> None:
            raise TypeError("unsupported")

    target = Target()
    assert call_backend_hook(logger, target, "set_title", "demo") is True
    assert target.titles == ["demo"]
    assert call_backend_hook(logger, target, "missing") is False
    with caplog.at_level(logging.DEBUG, logger="spaceloop.window"):
        assert call_backend_hook(logger, target, "present") is False
    assert any("backend_hook_failed" in record.getMessage() for record in caplog.records)

from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the QueueListener architecture, idempotency of configuration,
log file rotation and the debug traces emitted by the entry points.
"""

import logging
from pathlib import Path

import pytest

from linewise import build_string_reader
from linewise.infra.logging import LoggingConfig, configure_logging, shutdown_logging
from linewise.infra.logging.core import _QUEUE_LISTENER_ATTR
from linewise.infra.logging.handlers import _HANDLER_TAG_ATTR


@pytest.fixture(autouse=True)
def reset_logging():
    """Tear down whatever configure_logging() installed on the package logger."""
    shutdown_logging()
    yield
    shutdown_logging()
    logging.getLogger("linewise").setLevel(logging.NOTSET)


def test_logging_idempotency() -> None:
    """TC-01: Repeated configuration does not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    logger = configure_logging(cfg)
    initial_handler_count = len(logger.handlers)
    configure_logging(cfg)

    assert logger.name == "linewise"
    assert len(logger.handlers) == initial_handler_count == 1
    assert getattr(logger.handlers[0], _HANDLER_TAG_ATTR) is True


def test_force_replaces_listener() -> None:
    """TC-02: force=True swaps the listener instead of stacking a new one."""
    logger = configure_logging(LoggingConfig(console=True))
    first = getattr(logger, _QUEUE_LISTENER_ATTR)

    configure_logging(LoggingConfig(console=True), force=True)

    assert getattr(logger, _QUEUE_LISTENER_ATTR) is not first
    assert len(logger.handlers) == 1


def test_foreign_handlers_survive() -> None:
    """TC-03: Handlers we did not install are left alone."""
    logger = logging.getLogger("linewise")
    foreign = logging.NullHandler()
    logger.addHandler(foreign)
    try:
        configure_logging(LoggingConfig(console=True))
        configure_logging(LoggingConfig(console=False), force=True)
        assert foreign in logger.handlers
    finally:
        logger.removeHandler(foreign)


def test_log_rotation(tmp_path: Path) -> None:
    """TC-04: File rotation kicks in when the size limit is exceeded."""
    log_file = tmp_path / "rotate.log"
    cfg = LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    )
    configure_logging(cfg)

    logger = logging.getLogger("linewise.test_rotate")
    for _ in range(10):
        logger.debug("A long message to push the log file over its size limit. " * 3)

    shutdown_logging()

    assert log_file.exists()
    assert (tmp_path / "rotate.log.1").exists()


def test_dispatch_is_traced_at_debug(tmp_path: Path) -> None:
    """TC-05: Entry points emit a debug trace of the dispatch."""
    log_file = tmp_path / "trace.log"
    configure_logging(LoggingConfig(level="DEBUG", console=False, log_file=str(log_file)))

    class Sink:
        def read_handle(self, handle, *args):
            return handle.read()

    build_string_reader()(Sink(), "payload", 1, 2)
    shutdown_logging()

    assert "Dispatching stream to read_handle() with 2 extra args" in log_file.read_text(encoding="utf-8")

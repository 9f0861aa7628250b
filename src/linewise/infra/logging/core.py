from __future__ import annotations

"""
Logging Core.

Idempotent setup of the package logger. Records go through a
QueueHandler so file writes happen on the QueueListener thread rather
than inside the reader calls being traced.
"""

import atexit
import logging
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from linewise.infra.logging.config import _LEVEL_MAP, LoggingConfig
from linewise.infra.logging.handlers import (
    _create_console_handler,
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_linewise_configured"
_QUEUE_LISTENER_ATTR: str = "_linewise_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the target logger once.

    Repeated calls are no-ops unless force=True, in which case our
    previous handlers and listener are torn down first. Handlers added by
    other code are left alone.

    Args:
        cfg: Logging settings.
        force: Re-initialize even if already configured.

    Returns:
        logging.Logger: The configured logger.
    """
    target = logging.getLogger(cfg.logger_name)

    if getattr(target, _CONFIGURED_FLAG_ATTR, False) and not force:
        return target

    level_int = _parse_level(cfg.level)
    target.setLevel(level_int)

    _remove_our_handlers(target)
    _stop_existing_listener(target)

    handlers_list: List[logging.Handler] = []
    if cfg.console:
        handlers_list.append(
            _create_console_handler(level_int, logging.Formatter(cfg.console_fmt))
        )
    if cfg.log_file:
        fh = _create_rotating_file_handler(
            cfg.log_file,
            level_int,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh:
            handlers_list.append(fh)

    setattr(target, _CONFIGURED_FLAG_ATTR, True)
    if not handlers_list:
        return target

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    queue_handler = QueueHandler(log_queue)
    _tag_handler(queue_handler)

    listener = QueueListener(log_queue, *handlers_list, respect_handler_level=True)
    listener.start()

    target.addHandler(queue_handler)
    setattr(target, _QUEUE_LISTENER_ATTR, listener)
    atexit.register(_safe_stop_listener, listener)

    return target


def shutdown_logging(logger_name: str = "linewise") -> None:
    """Flush and detach everything configure_logging() installed."""
    target = logging.getLogger(logger_name)
    _stop_existing_listener(target)
    _remove_our_handlers(target)
    if hasattr(target, _CONFIGURED_FLAG_ATTR):
        delattr(target, _CONFIGURED_FLAG_ATTR)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a level name to its numeric constant, defaulting to WARNING."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _remove_our_handlers(target: logging.Logger) -> None:
    for h in list(target.handlers):
        if _is_our_handler(h):
            target.removeHandler(h)
            h.close()


def _stop_existing_listener(target: logging.Logger) -> None:
    listener = getattr(target, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(target, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a QueueListener, tolerating one that was already stopped."""
    if listener is None:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()

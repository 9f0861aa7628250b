from __future__ import annotations

"""
Linewise readers: file and string entry points for line-oriented consumers.

    from linewise import LinewiseReaders

    class CommentStripper(LinewiseReaders):
        def read_handle(self, handle):
            return [line for line in handle if not line.startswith("#")]

    CommentStripper().read_file("settings.conf")
    CommentStripper().read_string("# skipped\nkept\n")
"""

from linewise.core.factory import (
    build_file_reader,
    build_reader,
    build_string_reader,
    config_from_options,
    resolve_config,
)
from linewise.domain.config import (
    DEFAULT_BINMODE,
    DEFAULT_HANDLER_NAME,
    CallOptions,
    GenerationTarget,
    ReaderConfig,
)
from linewise.domain.errors import (
    InvalidArgumentError,
    LinewiseError,
    NotFoundError,
    ReaderIOError,
)
from linewise.mixin import EntryPoint, LinewiseReaders, install_readers, linewise_readers

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_BINMODE",
    "DEFAULT_HANDLER_NAME",
    "CallOptions",
    "EntryPoint",
    "GenerationTarget",
    "InvalidArgumentError",
    "LinewiseError",
    "LinewiseReaders",
    "NotFoundError",
    "ReaderConfig",
    "ReaderIOError",
    "build_file_reader",
    "build_reader",
    "build_string_reader",
    "config_from_options",
    "install_readers",
    "linewise_readers",
    "resolve_config",
]

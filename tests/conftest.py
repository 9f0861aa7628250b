from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A recording consumer shared by the entry point tests.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
class RecordingConsumer:
    """
    Consumer that drains every stream it receives.

    Each handler call is recorded as a dict with the lines read, the
    stream type and the pass-through arguments. The return value is a
    fresh sentinel so tests can check identity forwarding.
    """

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []

    def _record(self, handler: str, handle: Any, args: Any, kwargs: Any) -> object:
        result = object()
        self.calls.append({
            "handler": handler,
            "lines": list(handle),
            "handle": handle,
            "args": args,
            "kwargs": kwargs,
            "result": result,
        })
        return result

    def read_handle(self, handle: Any, *args: Any, **kwargs: Any) -> object:
        return self._record("read_handle", handle, args, kwargs)

    def ingest(self, handle: Any, *args: Any, **kwargs: Any) -> object:
        return self._record("ingest", handle, args, kwargs)


@pytest.fixture
def consumer() -> RecordingConsumer:
    """Return a fresh recording consumer."""
    return RecordingConsumer()


@pytest.fixture
def three_line_file(tmp_path: Path) -> Path:
    """Write a UTF-8 file with three lines and return its path."""
    f = tmp_path / "three.txt"
    f.write_bytes("alpha\nbéta\ngamma\n".encode("utf-8"))
    return f

from __future__ import annotations

"""
Unit tests for the error taxonomy.
"""

from linewise.domain.errors import (
    InvalidArgumentError,
    LinewiseError,
    NotFoundError,
    ReaderIOError,
)


def test_hierarchy_matches_builtin_categories() -> None:
    assert issubclass(InvalidArgumentError, ValueError)
    assert issubclass(NotFoundError, FileNotFoundError)
    assert issubclass(ReaderIOError, OSError)

    for cls in (InvalidArgumentError, NotFoundError, ReaderIOError):
        assert issubclass(cls, LinewiseError)


def test_categories_are_distinct() -> None:
    assert not issubclass(NotFoundError, InvalidArgumentError)
    assert not issubclass(InvalidArgumentError, OSError)
    assert not issubclass(ReaderIOError, FileNotFoundError)

from __future__ import annotations

"""
Reader Error Taxonomy.

Every precondition violated by an entry point maps to exactly one of the
classes below, so callers can tell bad input from I/O trouble. Failures
raised by a consumer's own handler never pass through this module.
"""

# -----------------------------------------------------------------------------
# EXCEPTION HIERARCHY
# -----------------------------------------------------------------------------

class LinewiseError(Exception):
    """Base class for all errors raised by the reader entry points."""


class InvalidArgumentError(LinewiseError, ValueError):
    """
    A required argument is missing or unusable.

    Raised for a missing/empty filename, an absent string, a path that
    exists but is not a plain file, and malformed option mappings.
    """


class NotFoundError(LinewiseError, FileNotFoundError):
    """The referenced file path does not exist."""


class ReaderIOError(LinewiseError, OSError):
    """
    The platform refused to open the resource or build the stream.

    Always chained to the underlying OSError, LookupError or layer error.
    """

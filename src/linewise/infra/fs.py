from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Pre-flight validation of filenames handed to file entry points. The checks
run in a fixed order and each maps to a distinct error, so a missing
argument, a missing file and a non-regular file are never confused.
"""

import os
from typing import Any, Optional, Union

from linewise.domain.errors import InvalidArgumentError, NotFoundError

PathArg = Union[str, "os.PathLike[str]"]

# -----------------------------------------------------------------------------
# FILESYSTEM VALIDATION API
# -----------------------------------------------------------------------------

def coerce_path(path: Any) -> Optional[str]:
    """
    Convert a path argument to a plain string.

    Args:
        path: str, os.PathLike or None.

    Returns:
        Optional[str]: The filesystem path, or None if none was given.

    Raises:
        InvalidArgumentError: If the argument is neither a str nor a path.
    """
    if path is None:
        return None
    try:
        result = os.fspath(path)
    except TypeError as e:
        raise InvalidArgumentError(
            f"filename must be a str or os.PathLike, not {type(path).__name__}"
        ) from e
    if isinstance(result, bytes):
        result = os.fsdecode(result)
    return result


def check_plain_file(path: Any) -> str:
    """
    Verify that a path names an existing regular file.

    Symbolic links are followed, so a link to a regular file passes and a
    dangling link counts as missing.

    Args:
        path: Raw filename argument.

    Returns:
        str: The validated path.

    Raises:
        InvalidArgumentError: If no filename was given or it is not a
            plain file.
        NotFoundError: If nothing exists at the path.
    """
    filename = coerce_path(path)
    if not filename:
        raise InvalidArgumentError("no filename specified")
    if not os.path.exists(filename):
        raise NotFoundError(f"file '{filename}' does not exist")
    if not os.path.isfile(filename):
        raise InvalidArgumentError(f"'{filename}' is not a plain file")
    return filename

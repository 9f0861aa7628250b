from __future__ import annotations

"""
Decoded Stream Construction.

Opens files and wraps in-memory content as sequential, line-oriented
streams under a parsed decoding mode. Text streams yield str lines,
binary streams yield bytes lines; both are positioned at the start.
"""

import io
import logging
from typing import IO, Any, Union

from linewise.core.layers import DecodingMode

logger = logging.getLogger(__name__)

Content = Union[str, bytes, bytearray, memoryview]

# -----------------------------------------------------------------------------
# STREAM OPENING OPERATIONS
# -----------------------------------------------------------------------------

def open_file_stream(path: str, mode: DecodingMode) -> IO[Any]:
    """
    Open a file for sequential reading.

    The caller owns the returned handle and must close it.

    Args:
        path: Validated path to a regular file.
        mode: Parsed decoding mode.

    Returns:
        IO[Any]: A binary or text file object.

    Raises:
        OSError: If the platform refuses to open the file.
    """
    if mode.binary:
        logger.debug(f"Opening '{path}' in binary mode")
        return open(path, "rb")

    logger.debug(f"Opening '{path}' as {mode.encoding} text")
    return open(
        path,
        "r",
        encoding=mode.encoding,
        errors=mode.errors,
        newline=mode.newline,
    )


def open_string_stream(content: Content, mode: DecodingMode) -> IO[Any]:
    """
    Wrap in-memory content as a readable stream.

    bytes content is decoded with the mode's codec; str content is
    already decoded and is served as is. In binary modes str content is
    encoded as UTF-8 first.

    Args:
        content: Text or bytes to expose as a virtual file.
        mode: Parsed decoding mode.

    Returns:
        IO[Any]: An in-memory binary or text stream.
    """
    if mode.binary:
        if isinstance(content, str):
            return io.BytesIO(content.encode("utf-8"))
        return io.BytesIO(bytes(content))

    if isinstance(content, str):
        return io.StringIO(content, newline=mode.newline)

    return io.TextIOWrapper(
        io.BytesIO(bytes(content)),
        encoding=mode.encoding,
        errors=mode.errors,
        newline=mode.newline,
    )

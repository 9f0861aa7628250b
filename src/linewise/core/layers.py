from __future__ import annotations

"""
Decoding Layer Parser.

Translates a decoding mode string (a colon-separated I/O layer stack such
as 'encoding(UTF-8)', 'raw' or 'encoding(UTF-16LE):crlf') into the
parameters Python's io layer understands. Layers apply left to right on
top of a plain binary stream.
"""

import codecs
import re
from dataclasses import dataclass, replace
from typing import Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

# Undecodable bytes become U+FFFD instead of aborting the read
DECODE_ERRORS: str = "replace"

_ENCODING_LAYER = re.compile(r"^encoding\((?P<name>[^()]+)\)$")
_NOOP_LAYERS = frozenset({"unix", "perlio", "stdio"})
_BINARY_LAYERS = frozenset({"raw", "bytes"})
_UTF8_LAYERS = frozenset({"utf8", "utf-8"})


class LayerError(ValueError):
    """A decoding mode names an unknown layer or codec."""


# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DecodingMode:
    """
    Concrete open parameters for one decoding mode.

    Attributes:
        binary: True when lines are delivered as bytes.
        encoding: Codec name for text streams, None when binary.
        newline: Value for the 'newline' argument of text streams. '\n'
            splits on LF only and keeps endings untouched, None
            translates CRLF.
        errors: Codec error strategy for text streams.
    """
    binary: bool = True
    encoding: Optional[str] = None
    newline: Optional[str] = "\n"
    errors: str = DECODE_ERRORS


BINARY_MODE = DecodingMode()

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_binmode(binmode: str) -> DecodingMode:
    """
    Parse a normalized decoding mode into open parameters.

    An empty mode yields a binary stream.

    Args:
        binmode: Layer stack without its leading colon.

    Returns:
        DecodingMode: The resolved parameters.

    Raises:
        LayerError: If a layer or codec name is not recognized.
    """
    mode = BINARY_MODE
    for raw_layer in binmode.split(":"):
        layer = raw_layer.strip()
        if not layer:
            continue
        mode = _apply_layer(mode, layer)
    return mode


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _apply_layer(mode: DecodingMode, layer: str) -> DecodingMode:
    lowered = layer.lower()

    if lowered in _NOOP_LAYERS:
        return mode

    if lowered in _BINARY_LAYERS:
        return replace(mode, binary=True, encoding=None, newline="\n")

    if lowered == "crlf":
        return replace(mode, newline=None)

    if lowered in _UTF8_LAYERS:
        return replace(mode, binary=False, encoding="utf-8")

    match = _ENCODING_LAYER.match(layer)
    if match:
        return replace(mode, binary=False, encoding=_lookup_codec(match.group("name")))

    raise LayerError(f"Unknown decoding layer '{layer}'")


def _lookup_codec(name: str) -> str:
    try:
        info = codecs.lookup(name.strip())
    except LookupError as e:
        raise LayerError(f"Cannot find encoding '{name}'") from e
    # bytes-to-bytes codecs (base64, zlib, hex) cannot back a text stream
    if not getattr(info, "_is_text_encoding", True):
        raise LayerError(f"'{name}' is not a text encoding")
    return info.name

from __future__ import annotations

"""
Reader Configuration Models.

Defines the immutable build-time configuration of an entry point, the
per-call override and the generation target selector.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

DEFAULT_HANDLER_NAME: str = "read_handle"
DEFAULT_BINMODE: str = "encoding(UTF-8)"


def normalize_binmode(binmode: str) -> str:
    """
    Strip a single leading colon from a decoding mode.

    ':raw' and 'raw' name the same layer stack.
    """
    if binmode.startswith(":"):
        return binmode[1:]
    return binmode


# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

class GenerationTarget(str, Enum):
    """Resource-opening strategy of a generated entry point."""
    FILE = "file"
    STRING = "string"


@dataclass(frozen=True)
class ReaderConfig:
    """
    Build-time configuration of one generated entry point.

    Attributes:
        handler_name: Name of the consumer method receiving the stream.
        binmode: Decoding mode (I/O layer stack), already normalized.
    """
    handler_name: str = DEFAULT_HANDLER_NAME
    binmode: str = DEFAULT_BINMODE

    def __post_init__(self) -> None:
        # Frozen: normalization has to go through object.__setattr__
        object.__setattr__(self, "binmode", normalize_binmode(self.binmode))


@dataclass(frozen=True)
class CallOptions:
    """
    Per-call override accepted by file entry points.

    Attributes:
        binmode: Decoding mode for this call only, or None to keep the
            build-time value.
    """
    binmode: Optional[str] = None

    def __post_init__(self) -> None:
        if self.binmode is not None:
            from linewise.validate_options import _as_str

            object.__setattr__(self, "binmode", normalize_binmode(_as_str(self.binmode, "binmode")))

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "CallOptions":
        """Build call options from a plain mapping such as {"binmode": "raw"}."""
        from linewise.validate_options import CALL_OPTION_KEYS, validate_options

        validate_options(options, allowed=CALL_OPTION_KEYS)
        return cls(binmode=options.get("binmode"))

    def effective_binmode(self, config: ReaderConfig) -> str:
        """Resolve the decoding mode of a single call against its config."""
        if self.binmode is None:
            return config.binmode
        return self.binmode


CallOptionsLike = Union[CallOptions, Mapping[str, Any]]

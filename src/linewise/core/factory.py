from __future__ import annotations

"""
Entry Point Factory.

Builds the two alternate entry points of a consumer type: one reading a
named file, one reading an in-memory string. Both resolve the decoding
mode, open a stream and hand it to the consumer's handler method together
with any pass-through arguments. Handler outcomes are returned or
propagated untouched.
"""

import logging
from typing import Any, Callable, Mapping, Optional, Tuple

from linewise.core.layers import LayerError, parse_binmode
from linewise.core.streams import open_file_stream, open_string_stream
from linewise.domain.config import (
    DEFAULT_BINMODE,
    DEFAULT_HANDLER_NAME,
    CallOptions,
    GenerationTarget,
    ReaderConfig,
)
from linewise.domain.errors import InvalidArgumentError, ReaderIOError
from linewise.infra.fs import check_plain_file
from linewise.validate_options import BUILD_OPTION_KEYS, validate_options

logger = logging.getLogger(__name__)

EntryPointFunc = Callable[..., Any]

# Distinguishes "no content argument" from an explicit None
_MISSING: Any = object()

# -----------------------------------------------------------------------------
# CONFIGURATION RESOLUTION
# -----------------------------------------------------------------------------

def resolve_config(method: Optional[str] = None, binmode: Optional[str] = None) -> ReaderConfig:
    """
    Apply defaults to build-time options.

    Args:
        method: Handler method name, or None for 'read_handle'.
        binmode: Decoding mode, or None for 'encoding(UTF-8)'.

    Returns:
        ReaderConfig: Immutable, normalized configuration.
    """
    return ReaderConfig(
        handler_name=method if method is not None else DEFAULT_HANDLER_NAME,
        binmode=binmode if binmode is not None else DEFAULT_BINMODE,
    )


def config_from_options(options: Optional[Mapping[str, Any]] = None, *, strict: bool = False) -> ReaderConfig:
    """Validate a {method, binmode} mapping and resolve it to a ReaderConfig."""
    normalized, _ = validate_options(options, allowed=BUILD_OPTION_KEYS, strict=strict)
    return resolve_config(normalized.get("method"), normalized.get("binmode"))


# -----------------------------------------------------------------------------
# ENTRY POINT BUILDERS
# -----------------------------------------------------------------------------

def build_file_reader(config: Optional[ReaderConfig] = None) -> EntryPointFunc:
    """
    Build the 'read from a named file' entry point.

    The returned callable has the shape
    ``read_file(invocant, [options], path, *args, **kwargs)``. ``options``
    is a CallOptions or a mapping such as ``{"binmode": "raw"}`` and only
    affects that call.

    Args:
        config: Build-time configuration; defaults apply when omitted.

    Returns:
        EntryPointFunc: The file entry point.
    """
    cfg = config or ReaderConfig()

    def read_file(invocant: Any, *args: Any, **kwargs: Any) -> Any:
        options, path, extra = _split_file_args(args)
        binmode = options.effective_binmode(cfg)

        filename = check_plain_file(path)

        try:
            mode = parse_binmode(binmode)
            handle = open_file_stream(filename, mode)
        except (OSError, LookupError, LayerError) as e:
            raise ReaderIOError(f"couldn't read file '{filename}': {_reason(e)}") from e

        with handle:
            return _dispatch(invocant, cfg, handle, extra, kwargs)

    read_file.__doc__ = (
        f"Open a file under '{cfg.binmode}' and pass it to {cfg.handler_name}()."
    )
    return read_file


def build_string_reader(config: Optional[ReaderConfig] = None) -> EntryPointFunc:
    """
    Build the 'read from an in-memory string' entry point.

    The returned callable has the shape
    ``read_string(invocant, content, *args, **kwargs)``. There is no
    per-call options slot; the build-time decoding mode always applies.

    Args:
        config: Build-time configuration; defaults apply when omitted.

    Returns:
        EntryPointFunc: The string entry point.
    """
    cfg = config or ReaderConfig()

    def read_string(invocant: Any, content: Any = _MISSING, *args: Any, **kwargs: Any) -> Any:
        if content is _MISSING or content is None:
            raise InvalidArgumentError("no string provided")
        if not isinstance(content, (str, bytes, bytearray, memoryview)):
            raise InvalidArgumentError(
                f"string content must be str or bytes, not {type(content).__name__}"
            )

        try:
            mode = parse_binmode(cfg.binmode)
            handle = open_string_stream(content, mode)
        except (OSError, LookupError, LayerError) as e:
            raise ReaderIOError(f"error opening string for reading: {_reason(e)}") from e

        return _dispatch(invocant, cfg, handle, args, kwargs)

    read_string.__doc__ = (
        f"Wrap a string under '{cfg.binmode}' and pass it to {cfg.handler_name}()."
    )
    return read_string


def build_reader(target: GenerationTarget, config: Optional[ReaderConfig] = None) -> EntryPointFunc:
    """
    Build the entry point for a generation target.

    Args:
        target: GenerationTarget or its string value ('file' / 'string').
        config: Build-time configuration.

    Returns:
        EntryPointFunc: The requested entry point.

    Raises:
        InvalidArgumentError: If the target is unknown.
    """
    try:
        kind = GenerationTarget(target)
    except ValueError as e:
        raise InvalidArgumentError(f"unknown generation target '{target}'") from e

    builder = _BUILDERS[kind]
    return builder(config)


_BUILDERS = {
    GenerationTarget.FILE: build_file_reader,
    GenerationTarget.STRING: build_string_reader,
}

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _split_file_args(args: Tuple[Any, ...]) -> Tuple[CallOptions, Any, Tuple[Any, ...]]:
    """Separate an optional leading options object from the path and the rest."""
    if args and isinstance(args[0], CallOptions):
        return args[0], _at(args, 1), args[2:]
    if args and isinstance(args[0], Mapping):
        return CallOptions.from_mapping(args[0]), _at(args, 1), args[2:]
    return CallOptions(), _at(args, 0), args[1:]


def _at(args: Tuple[Any, ...], index: int) -> Any:
    return args[index] if len(args) > index else None


def _dispatch(
        invocant: Any,
        cfg: ReaderConfig,
        handle: Any,
        args: Tuple[Any, ...],
        kwargs: Mapping[str, Any],
) -> Any:
    handler = getattr(invocant, cfg.handler_name)
    logger.debug(f"Dispatching stream to {cfg.handler_name}() with {len(args)} extra args")
    return handler(handle, *args, **kwargs)


def _reason(exc: BaseException) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)

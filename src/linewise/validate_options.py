from __future__ import annotations

"""
Reader Option Validation.

Normalizes the option mappings accepted at build time ({method, binmode})
and at call time ({binmode}) so the factory can work with plain,
well-typed values. Never touches the filesystem.
"""

import logging
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from linewise.domain.config import normalize_binmode
from linewise.domain.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

BUILD_OPTION_KEYS: FrozenSet[str] = frozenset({"method", "binmode"})
CALL_OPTION_KEYS: FrozenSet[str] = frozenset({"binmode"})

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_options(
        options: Optional[Mapping[str, Any]],
        *,
        allowed: FrozenSet[str] = BUILD_OPTION_KEYS,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a reader option mapping.

    None values are dropped so that defaults apply downstream. 'binmode'
    loses its leading colon. Type errors are always fatal; unknown keys
    are reported as warnings unless strict mode is requested.

    Args:
        options: Raw option mapping, or None for "no options".
        allowed: Keys accepted in this context.
        strict: If True, unknown keys raise instead of warning.

    Returns:
        Tuple[Dict[str, Any], List[str]]: (normalized options, warnings).

    Raises:
        InvalidArgumentError: On a non-mapping input, a non-string value,
            an empty method name or, in strict mode, an unknown key.
    """
    warnings: List[str] = []
    if options is None:
        return {}, warnings

    if not isinstance(options, Mapping):
        raise InvalidArgumentError(
            f"reader options must be a mapping, not {type(options).__name__}"
        )

    normalized: Dict[str, Any] = {}
    for key, value in options.items():
        if key not in allowed:
            msg = f"unknown reader option '{key}' (allowed: {', '.join(sorted(allowed))})"
            if strict:
                raise InvalidArgumentError(msg)
            warnings.append(msg)
            logger.warning(msg)
            continue

        if value is None:
            continue

        normalized[key] = _as_str(value, key)

    if "method" in normalized and not normalized["method"].strip():
        raise InvalidArgumentError("option 'method' must not be empty")

    if "binmode" in normalized:
        normalized["binmode"] = normalize_binmode(normalized["binmode"])

    return normalized, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _as_str(value: Any, field: str) -> str:
    if isinstance(value, str):
        return value
    raise InvalidArgumentError(
        f"option '{field}' must be a str, not {type(value).__name__}"
    )

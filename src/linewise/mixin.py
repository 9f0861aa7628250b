from __future__ import annotations

"""
Entry Point Composition.

Installs generated entry points on consumer classes. A class either
inherits LinewiseReaders for the default 'read_file' / 'read_string'
pair, or is decorated with linewise_readers() to pick the handler name,
the decoding mode, the subset of targets and the installed names.
"""

import functools
import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, TypeVar

from linewise.core.factory import EntryPointFunc, build_reader, resolve_config
from linewise.domain.config import GenerationTarget, ReaderConfig
from linewise.domain.errors import InvalidArgumentError
from linewise.validate_options import validate_options

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)

DEFAULT_NAMES: Dict[GenerationTarget, str] = {
    GenerationTarget.FILE: "read_file",
    GenerationTarget.STRING: "read_string",
}

# -----------------------------------------------------------------------------
# BINDING DESCRIPTOR
# -----------------------------------------------------------------------------

class EntryPoint:
    """
    Descriptor binding a generated entry point to its invocant.

    Accessed on an instance, the instance is the invocant; accessed on the
    class, the class itself is. The handler is looked up on the invocant,
    so class-level calls need a classmethod or staticmethod handler.
    """

    def __init__(self, target: GenerationTarget, config: Optional[ReaderConfig] = None) -> None:
        self.target = GenerationTarget(target)
        self.config = config or ReaderConfig()
        self.func: EntryPointFunc = build_reader(self.target, self.config)
        self.__doc__ = self.func.__doc__
        self.name: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Callable[..., Any]:
        invocant = instance if instance is not None else owner
        return functools.partial(self.func, invocant)

    def __repr__(self) -> str:
        return (
            f"<EntryPoint {self.name or self.target.value} -> "
            f"{self.config.handler_name}() [{self.config.binmode}]>"
        )


# -----------------------------------------------------------------------------
# COMPOSITION API
# -----------------------------------------------------------------------------

class LinewiseReaders:
    """
    Mixin adding 'read_file' and 'read_string' with default settings.

    Subclasses implement ``read_handle(self, handle, *args)``.
    """
    read_file = EntryPoint(GenerationTarget.FILE)
    read_string = EntryPoint(GenerationTarget.STRING)


def install_readers(
        cls: T,
        *,
        method: Optional[str] = None,
        binmode: Optional[str] = None,
        names: Optional[Mapping[str, str]] = None,
        targets: Optional[Iterable[str]] = None,
        strict: bool = False,
) -> T:
    """
    Install entry points on a class.

    Args:
        cls: Consumer class to extend.
        method: Handler method name (default 'read_handle').
        binmode: Decoding mode (default 'encoding(UTF-8)').
        names: Installed attribute name per target, e.g. {"file": "load"}.
        targets: Targets to install; both when omitted.
        strict: Refuse to replace attributes defined on the class itself.

    Returns:
        The same class, extended in place.

    Raises:
        InvalidArgumentError: On bad options or a refused replacement.
    """
    options, _ = validate_options({"method": method, "binmode": binmode})
    config = resolve_config(options.get("method"), options.get("binmode"))

    selected = _resolve_targets(targets)
    renamed = _resolve_names(names)

    plan = [(target, renamed.get(target, DEFAULT_NAMES[target])) for target in selected]

    # All collisions are checked before the first setattr
    if strict:
        taken = [attr for _, attr in plan if attr in vars(cls)]
        if taken:
            raise InvalidArgumentError(
                f"{cls.__name__} already defines '{taken[0]}'"
            )

    for target, attr in plan:
        entry = EntryPoint(target, config)
        entry.__set_name__(cls, attr)
        setattr(cls, attr, entry)
        logger.debug(f"Installed {entry!r} on {cls.__name__}")

    return cls


def linewise_readers(**kwargs: Any) -> Callable[[T], T]:
    """
    Class decorator form of install_readers().

        @linewise_readers(method="ingest", binmode="raw")
        class Loader:
            def ingest(self, handle, *args): ...
    """
    def _decorate(cls: T) -> T:
        return install_readers(cls, **kwargs)

    return _decorate


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _resolve_names(names: Optional[Mapping[str, str]]) -> Dict[GenerationTarget, str]:
    resolved: Dict[GenerationTarget, str] = {}
    for key, attr in (names or {}).items():
        try:
            target = GenerationTarget(key)
        except ValueError as e:
            raise InvalidArgumentError(f"unknown generation target '{key}'") from e
        if not isinstance(attr, str) or not attr.isidentifier():
            raise InvalidArgumentError(f"invalid entry point name {attr!r}")
        resolved[target] = attr
    return resolved


def _resolve_targets(targets: Optional[Iterable[str]]) -> List[GenerationTarget]:
    if targets is None:
        return list(GenerationTarget)
    selected: List[GenerationTarget] = []
    for key in targets:
        try:
            selected.append(GenerationTarget(key))
        except ValueError as e:
            raise InvalidArgumentError(f"unknown generation target '{key}'") from e
    return selected

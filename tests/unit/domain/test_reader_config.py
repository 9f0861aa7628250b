from __future__ import annotations

"""
Unit tests for the reader configuration models.
"""

import dataclasses

import pytest

from linewise.domain.config import (
    DEFAULT_BINMODE,
    DEFAULT_HANDLER_NAME,
    CallOptions,
    GenerationTarget,
    ReaderConfig,
    normalize_binmode,
)
from linewise.domain.errors import InvalidArgumentError


def test_defaults() -> None:
    cfg = ReaderConfig()

    assert cfg.handler_name == DEFAULT_HANDLER_NAME == "read_handle"
    assert cfg.binmode == DEFAULT_BINMODE == "encoding(UTF-8)"


def test_leading_colon_is_stripped() -> None:
    assert ReaderConfig(binmode=":raw") == ReaderConfig(binmode="raw")
    assert normalize_binmode(":encoding(UTF-8)") == "encoding(UTF-8)"
    assert normalize_binmode("raw") == "raw"


def test_config_is_immutable() -> None:
    cfg = ReaderConfig()

    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.binmode = "raw"  # type: ignore[misc]


def test_call_options_resolution() -> None:
    cfg = ReaderConfig(binmode="raw")

    assert CallOptions().effective_binmode(cfg) == "raw"
    assert CallOptions(binmode=":utf8").effective_binmode(cfg) == "utf8"


def test_call_options_from_mapping() -> None:
    assert CallOptions.from_mapping({"binmode": ":raw"}) == CallOptions(binmode="raw")
    assert CallOptions.from_mapping({}) == CallOptions()


def test_call_options_from_mapping_rejects_bad_types() -> None:
    with pytest.raises(InvalidArgumentError):
        CallOptions.from_mapping({"binmode": 5})


def test_generation_target_values() -> None:
    assert GenerationTarget("file") is GenerationTarget.FILE
    assert GenerationTarget("string") is GenerationTarget.STRING


@pytest.mark.parametrize("binmode", [5, b"raw", ["raw"]])
def test_call_options_rejects_non_string_binmode(binmode) -> None:
    with pytest.raises(InvalidArgumentError, match="option 'binmode' must be a str"):
        CallOptions(binmode=binmode)  # type: ignore[arg-type]


def test_call_options_normalizes_on_construction() -> None:
    assert CallOptions(binmode=":raw").binmode == "raw"

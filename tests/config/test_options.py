# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for parse options and their YAML loader."""

from datetime import timedelta
from pathlib import Path

import pytest
from pydantic import ValidationError

from strictoml.config import DEFAULT_OPTIONS, OptionsError, ParseOptions, load_parse_options

# ###############
# Helpers
# ###############


def _write_options(tmp_path: Path, content: str) -> Path:
    """Write an options file and return its path."""
    options_file = tmp_path / "strictoml.yaml"
    options_file.write_text(content, encoding="utf-8")
    return options_file


# ###############
# Model
# ###############


def test_defaults() -> None:
    """Default options ask the system for the offset and keep no comments."""
    assert DEFAULT_OPTIONS.local_offset_minutes is None
    assert DEFAULT_OPTIONS.local_offset is None
    assert DEFAULT_OPTIONS.max_depth == 64
    assert DEFAULT_OPTIONS.keep_comments is False


def test_local_offset_as_timedelta() -> None:
    """local_offset converts the configured minutes to a timedelta."""
    assert ParseOptions(local_offset_minutes=-90).local_offset == timedelta(minutes=-90)


def test_field_names_and_aliases() -> None:
    """Fields are accepted under their Python names and hyphenated aliases."""
    by_name = ParseOptions(max_depth=8)
    by_alias = ParseOptions.model_validate({"max-depth": 8})
    assert by_name == by_alias


def test_options_are_frozen() -> None:
    """Options cannot be mutated after construction."""
    options = ParseOptions()
    with pytest.raises(ValidationError):
        options.max_depth = 3  # type: ignore[misc]


@pytest.mark.parametrize("minutes", [-1440, 1440])
def test_offset_out_of_range(minutes: int) -> None:
    """Offsets must stay within a day."""
    with pytest.raises(ValidationError):
        ParseOptions(local_offset_minutes=minutes)


def test_max_depth_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        ParseOptions(max_depth=0)


# ###############
# Loader: Normal Cases
# ###############


def test_load_full_options(tmp_path: Path) -> None:
    """All settings are read from hyphenated YAML keys."""
    content = """\
local-offset-minutes: 120
max-depth: 16
keep-comments: true
"""
    options = load_parse_options(_write_options(tmp_path, content))

    assert options.local_offset == timedelta(hours=2)
    assert options.max_depth == 16
    assert options.keep_comments is True


def test_load_partial_options(tmp_path: Path) -> None:
    """Unspecified settings keep their defaults."""
    options = load_parse_options(_write_options(tmp_path, "max-depth: 4\n"))
    assert options.max_depth == 4
    assert options.local_offset_minutes is None


def test_load_empty_file(tmp_path: Path) -> None:
    """An empty file yields the default options."""
    assert load_parse_options(_write_options(tmp_path, "")) == DEFAULT_OPTIONS


# ###############
# Loader: Error Cases
# ###############


def test_file_not_found(tmp_path: Path) -> None:
    """Loading a non-existent file raises OptionsError."""
    with pytest.raises(OptionsError, match="not found"):
        load_parse_options(tmp_path / "missing.yaml")


def test_invalid_yaml_syntax(tmp_path: Path) -> None:
    """A file with invalid YAML raises OptionsError."""
    with pytest.raises(OptionsError, match="Invalid YAML"):
        load_parse_options(_write_options(tmp_path, "max-depth: [unclosed\n"))


def test_not_a_mapping(tmp_path: Path) -> None:
    """A YAML file that is not a mapping raises OptionsError."""
    with pytest.raises(OptionsError, match="must be a YAML mapping"):
        load_parse_options(_write_options(tmp_path, "- a\n- b\n"))


def test_unknown_key(tmp_path: Path) -> None:
    """Unknown settings are rejected."""
    with pytest.raises(OptionsError, match="invalid parse options"):
        load_parse_options(_write_options(tmp_path, "strict-mode: yes\n"))


def test_wrong_value_type(tmp_path: Path) -> None:
    """A non-integer depth is rejected."""
    with pytest.raises(OptionsError, match="max-depth|max_depth"):
        load_parse_options(_write_options(tmp_path, "max-depth: deep\n"))

# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parse options and their YAML loader."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class OptionsError(Exception):
    """Raised when a parse options file is invalid or cannot be loaded."""


class ParseOptions(BaseModel):
    """Settings that influence a single parse.

    Attributes:
        local_offset_minutes: UTC offset, in minutes, applied to date/time
            literals that carry none. ``None`` asks the system clock.
        max_depth: Maximum nesting of arrays, inline tables and arrays of
            tables before the parse fails.
        keep_comments: Whether the tokenizer emits comment tokens.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=lambda name: name.replace("_", "-"),
        populate_by_name=True,
    )

    local_offset_minutes: int | None = _Field(default=None, ge=-1439, le=1439)
    max_depth: int = _Field(default=64, ge=1)
    keep_comments: bool = False

    @property
    def local_offset(self) -> timedelta | None:
        """The configured local offset, or ``None`` to use the system's."""
        if self.local_offset_minutes is None:
            return None
        return timedelta(minutes=self.local_offset_minutes)


DEFAULT_OPTIONS = ParseOptions()


def load_parse_options(path: Path) -> ParseOptions:
    """Load parse options from a YAML mapping.

    Keys use hyphens, for example::

        local-offset-minutes: 120
        max-depth: 32
        keep-comments: false

    Args:
        path: Path to the YAML file.

    Returns:
        The validated options.

    Raises:
        OptionsError: If the file cannot be read, is not a YAML mapping, or
            holds invalid settings.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise OptionsError(f"Options file not found: {path}") from None
    except OSError as exc:
        raise OptionsError(f"Cannot read options file: {exc}") from exc

    return _parse_options(text, source_label=str(path))


# ################
# Implementation
# ################


def _parse_options(text: str, source_label: str = "<string>") -> ParseOptions:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise OptionsError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return ParseOptions()
    if not isinstance(data, dict):
        raise OptionsError(f"{source_label}: parse options must be a YAML mapping")

    try:
        return ParseOptions.model_validate(data)
    except ValidationError as exc:
        raise OptionsError(f"{source_label}: invalid parse options: {exc}") from exc

# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""strictoml: a strict TOML reader with a queryable document model."""

from __future__ import annotations

from pathlib import Path

from strictoml.config import OptionsError, ParseOptions, load_parse_options
from strictoml.errors import (
    DuplicateKeyError,
    InvalidDateFormatError,
    InvalidEscapeSequenceError,
    InvalidUnicodeCharacterError,
    MixedArrayTypeError,
    TomlError,
    TomlKeyError,
    TomlSyntaxError,
    TypeMismatchError,
)
from strictoml.model import Document, KeyPath, ValueKind
from strictoml.parser import parse
from strictoml.serialization import dump, dumps

__version__ = "0.1.0"


def loads(text: str, options: ParseOptions | None = None) -> Document:
    """Parse a TOML document from a string."""
    return parse(text, options)


def load(path: str | Path, encoding: str = "utf-8", options: ParseOptions | None = None) -> Document:
    """Read a file and parse its full contents as a TOML document.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid in *encoding*.
        TomlError: If its contents are not a valid document.
    """
    return parse(Path(path).read_text(encoding=encoding), options)


__all__ = [
    "Document",
    "DuplicateKeyError",
    "InvalidDateFormatError",
    "InvalidEscapeSequenceError",
    "InvalidUnicodeCharacterError",
    "KeyPath",
    "MixedArrayTypeError",
    "OptionsError",
    "ParseOptions",
    "TomlError",
    "TomlKeyError",
    "TomlSyntaxError",
    "TypeMismatchError",
    "ValueKind",
    "dump",
    "dumps",
    "load",
    "load_parse_options",
    "loads",
]

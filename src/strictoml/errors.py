# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error taxonomy raised while parsing and querying TOML documents.

Every error that aborts a parse derives from :class:`TomlError`. Query-time
failures (:class:`TomlKeyError`, :class:`TypeMismatchError`) also derive from
the matching built-in exception so that callers may catch ``KeyError`` or
``TypeError`` directly.
"""

from __future__ import annotations

from collections.abc import Sequence

# ###############
# Public Interface
# ###############


class TomlError(Exception):
    """Base class for all strictoml errors."""


class TomlSyntaxError(TomlError):
    """Raised when input text or token structure cannot be placed.

    Attributes:
        context: The offending remainder of the input, or a description of the
            malformed construct.
        line: 1-based line number, when the tokenizer knows it.
        column: 1-based column number, when the tokenizer knows it.
    """

    def __init__(self, context: str, line: int | None = None, column: int | None = None) -> None:
        if line is not None and column is not None:
            super().__init__(f"Line {line}, column {column}: {context}")
        else:
            super().__init__(context)
        self.context = context
        self.line = line
        self.column = column


class DuplicateKeyError(TomlError):
    """Raised when a value or table path is defined a second time."""

    def __init__(self, path: Sequence[str]) -> None:
        super().__init__(f"Duplicate key: {_dotted(path)}")
        self.path = tuple(path)


class MixedArrayTypeError(TomlError):
    """Raised when array elements are not all of the expected kind."""

    def __init__(self, expected_kind: str) -> None:
        super().__init__(f"Mixed array types: expected only {expected_kind} elements")
        self.expected_kind = expected_kind


class InvalidDateFormatError(TomlError):
    """Raised when a date/time literal matches lexically but is not a real date."""

    def __init__(self, literal: str) -> None:
        super().__init__(f"Invalid date format: {literal}")
        self.literal = literal


class InvalidEscapeSequenceError(TomlError):
    """Raised for an unknown backslash escape inside a basic string."""

    def __init__(self, sequence: str) -> None:
        super().__init__(f"Invalid escape sequence: {sequence}")
        self.sequence = sequence


class InvalidUnicodeCharacterError(TomlError):
    """Raised when a \\u or \\U escape names a surrogate or out-of-range code point."""

    def __init__(self, code_point: int) -> None:
        super().__init__(f"Invalid unicode character: {code_point:#x}")
        self.code_point = code_point


class TomlKeyError(TomlError, KeyError):
    """Raised when a query addresses a path absent from the document."""

    def __init__(self, path: Sequence[str]) -> None:
        super().__init__(f"Key not found: {_dotted(path)}")
        self.path = tuple(path)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0])


class TypeMismatchError(TomlError, TypeError):
    """Raised when a value exists but is not of the requested type."""

    def __init__(self, path: Sequence[str], expected: str, actual: str) -> None:
        super().__init__(f"Value at {_dotted(path)} is {actual}, not {expected}")
        self.path = tuple(path)
        self.expected = expected
        self.actual = actual


# ################
# Implementation
# ################


def _dotted(path: Sequence[str]) -> str:
    return ".".join(path) if path else "<root>"

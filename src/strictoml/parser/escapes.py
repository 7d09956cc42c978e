# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Backslash escape decoding for TOML basic strings."""

from __future__ import annotations

from strictoml.errors import InvalidEscapeSequenceError, InvalidUnicodeCharacterError

# ###############
# Public Interface
# ###############


def decode_escapes(text: str, multiline: bool = False) -> str:
    """Replace the escape sequences in *text* with the characters they denote.

    Supported escapes are ``\\b \\t \\n \\f \\r \\" \\\\``, ``\\uXXXX`` and
    ``\\UXXXXXXXX``. In multi-line strings a backslash followed by whitespace
    that contains a newline is a line continuation: the backslash and all
    whitespace up to the next non-whitespace character are removed.

    Args:
        text: Raw string content between the quotes.
        multiline: Whether line continuations are permitted.

    Returns:
        The decoded string.

    Raises:
        InvalidEscapeSequenceError: On an unknown escape, or a unicode escape
            with too few hex digits.
        InvalidUnicodeCharacterError: When a unicode escape names a surrogate
            or a code point above U+10FFFF.
    """
    if "\\" not in text:
        return text
    chars: list[str] = []
    pos = 0
    length = len(text)
    while pos < length:
        ch = text[pos]
        if ch != "\\":
            chars.append(ch)
            pos += 1
            continue
        if pos + 1 >= length:
            raise InvalidEscapeSequenceError("\\")
        esc = text[pos + 1]
        if esc in _SIMPLE_ESCAPES:
            chars.append(_SIMPLE_ESCAPES[esc])
            pos += 2
        elif esc in _UNICODE_WIDTHS:
            width = _UNICODE_WIDTHS[esc]
            digits = text[pos + 2 : pos + 2 + width]
            if len(digits) != width or not all(d in _HEX_DIGITS for d in digits):
                raise InvalidEscapeSequenceError(f"\\{esc}{digits}")
            chars.append(_code_point(int(digits, 16)))
            pos += 2 + width
        elif multiline and esc in " \t\r\n":
            end = _skip_continuation(text, pos + 1)
            if end < 0:
                raise InvalidEscapeSequenceError(f"\\{esc}")
            pos = end
        else:
            raise InvalidEscapeSequenceError(f"\\{esc}")
    return "".join(chars)


# ################
# Implementation
# ################

_SIMPLE_ESCAPES: dict[str, str] = {
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "f": "\f",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}

_UNICODE_WIDTHS: dict[str, int] = {"u": 4, "U": 8}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _code_point(code: int) -> str:
    if 0xD800 <= code <= 0xDFFF or code > 0x10FFFF:
        raise InvalidUnicodeCharacterError(code)
    return chr(code)


def _skip_continuation(text: str, pos: int) -> int:
    """Return the index after a line continuation, or -1 if no newline follows."""
    saw_newline = False
    while pos < len(text) and text[pos] in " \t\r\n":
        if text[pos] == "\n":
            saw_newline = True
        pos += 1
    return pos if saw_newline else -1

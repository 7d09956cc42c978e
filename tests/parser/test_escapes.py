# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for basic-string escape decoding."""

import pytest

from strictoml.errors import InvalidEscapeSequenceError, InvalidUnicodeCharacterError
from strictoml.parser.escapes import decode_escapes

# ###############
# Simple Escapes
# ###############


class TestSimpleEscapes:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("\\b", "\b"),
            ("\\t", "\t"),
            ("\\n", "\n"),
            ("\\f", "\f"),
            ("\\r", "\r"),
            ('\\"', '"'),
            ("\\\\", "\\"),
        ],
    )
    def test_known_escape(self, raw: str, expected: str) -> None:
        assert decode_escapes(raw) == expected

    def test_text_without_backslash_is_unchanged(self) -> None:
        assert decode_escapes("plain text") == "plain text"

    def test_escaped_backslash_before_u_is_not_unicode(self) -> None:
        assert decode_escapes("a \\\\u escape") == "a \\u escape"
        assert decode_escapes("a \\\\\\u0075 escape") == "a \\u escape"

    @pytest.mark.parametrize("raw", ["\\a", "\\x33", "\\xAg", "\\/", "\\ "])
    def test_unknown_escape_raises(self, raw: str) -> None:
        with pytest.raises(InvalidEscapeSequenceError):
            decode_escapes(raw)

    def test_trailing_backslash_raises(self) -> None:
        with pytest.raises(InvalidEscapeSequenceError):
            decode_escapes("oops\\")


# ###############
# Unicode Escapes
# ###############


class TestUnicodeEscapes:
    def test_four_digit_escape(self) -> None:
        assert decode_escapes("\\u03B4") == "δ"

    def test_eight_digit_escape(self) -> None:
        assert decode_escapes("\\U000003B4") == "δ"

    def test_astral_code_point(self) -> None:
        assert decode_escapes("\\U0001F600") == "\U0001f600"

    def test_too_few_digits_raises(self) -> None:
        with pytest.raises(InvalidEscapeSequenceError):
            decode_escapes("\\u12")

    def test_non_hex_digits_raise(self) -> None:
        with pytest.raises(InvalidEscapeSequenceError) as exc_info:
            decode_escapes("\\u12G4")
        assert exc_info.value.sequence == "\\u12G4"

    def test_surrogate_raises(self) -> None:
        with pytest.raises(InvalidUnicodeCharacterError) as exc_info:
            decode_escapes("\\uD800")
        assert exc_info.value.code_point == 0xD800

    def test_beyond_unicode_range_raises(self) -> None:
        with pytest.raises(InvalidUnicodeCharacterError):
            decode_escapes("\\U00110000")


# ###############
# Line Continuations
# ###############


class TestLineContinuation:
    def test_backslash_newline_joins_lines(self) -> None:
        raw = "The quick brown \\\n\n\n  fox jumps over \\\n    the lazy dog."
        assert decode_escapes(raw, multiline=True) == "The quick brown fox jumps over the lazy dog."

    def test_crlf_continuation(self) -> None:
        assert decode_escapes("a\\\r\n   b", multiline=True) == "ab"

    def test_continuation_with_trailing_spaces_before_newline(self) -> None:
        assert decode_escapes("a\\   \n b", multiline=True) == "ab"

    def test_continuation_to_end_of_text(self) -> None:
        assert decode_escapes("\\\n    ", multiline=True) == ""

    def test_continuation_not_allowed_in_single_line_strings(self) -> None:
        with pytest.raises(InvalidEscapeSequenceError):
            decode_escapes("a\\\nb")

    def test_backslash_space_without_newline_raises(self) -> None:
        with pytest.raises(InvalidEscapeSequenceError):
            decode_escapes("a\\ b", multiline=True)

# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tokenizer and document builder for TOML text."""

from strictoml.parser.dates import decode_datetime, system_local_offset
from strictoml.parser.escapes import decode_escapes
from strictoml.parser.lexer import Context, Token, TokenKind, build_grammar, tokenize
from strictoml.parser.parser import build_document, parse

__all__ = [
    "Context",
    "Token",
    "TokenKind",
    "build_document",
    "build_grammar",
    "decode_datetime",
    "decode_escapes",
    "parse",
    "system_local_offset",
    "tokenize",
]

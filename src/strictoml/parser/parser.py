# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Document builder: turns the token stream into a :class:`Document`.

Table headers are always absolute paths from the document root. The body of
an array-of-tables element is sliced out of the stream and parsed into its own
document, with nested headers rewritten relative to the element.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from strictoml.config.options import DEFAULT_OPTIONS, ParseOptions
from strictoml.errors import MixedArrayTypeError, TomlSyntaxError
from strictoml.model.document import Document, ValueKind, kind_of
from strictoml.model.keypath import KeyPath
from strictoml.parser.lexer import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def parse(source: str, options: ParseOptions | None = None) -> Document:
    """Parse TOML source text into a Document.

    Args:
        source: The full text of a TOML document.
        options: Parse settings; defaults to :data:`DEFAULT_OPTIONS`.

    Returns:
        The populated document.

    Raises:
        TomlError: Any subclass, if the text is not a valid document. No
            partial document is returned.
    """
    options = options or DEFAULT_OPTIONS
    tokens = tokenize(source, options.local_offset, options.keep_comments)
    document = build_document(tokens, options.max_depth)
    logger.debug("Parsed document with %d keys and %d tables", len(document.keys), len(document.declared_tables))
    return document


def build_document(tokens: Sequence[Token], max_depth: int = DEFAULT_OPTIONS.max_depth) -> Document:
    """Build a Document from a complete token sequence.

    Raises:
        TomlSyntaxError: On malformed headers or nesting beyond *max_depth*.
        DuplicateKeyError: When a value or table path is defined twice.
        MixedArrayTypeError: When array elements differ in kind.
    """
    document = Document()
    _Builder(document, max_depth).build(tokens)
    return document


def read_header(tokens: Sequence[Token], pos: int, end_kind: TokenKind) -> tuple[KeyPath, int]:
    """Read header segments starting at *pos* up to and including *end_kind*.

    Returns:
        The header path and the position after the closing token.

    Raises:
        TomlSyntaxError: If the header is blank, starts or ends with a
            separator, has two separators in a row, has two segments without
            a separator, or is never closed.
    """
    parts: list[str] = []
    expect_segment = True
    while pos < len(tokens):
        token = tokens[pos]
        pos += 1
        if token.kind is end_kind:
            if not parts:
                raise TomlSyntaxError("Table name must not be blank")
            if expect_segment:
                raise TomlSyntaxError("Table name must not end with '.'")
            return KeyPath(tuple(parts)), pos
        if token.kind is TokenKind.TABLE_SEP:
            if expect_segment:
                raise TomlSyntaxError("Must not have un-named implicit tables")
            expect_segment = True
        elif token.kind is TokenKind.IDENTIFIER:
            if not expect_segment:
                raise TomlSyntaxError("Table name segments must be separated by '.'")
            parts.append(token.value)
            expect_segment = False
        else:
            raise TomlSyntaxError(f"Unexpected {token.kind.value} in table name")
    raise TomlSyntaxError("Table must contain at least a closing bracket")


def slice_table_array_body(tokens: Sequence[Token], pos: int, path: KeyPath) -> tuple[list[Token], int]:
    """Collect the tokens that belong to one ``[[path]]`` element.

    The element body runs until the first header whose path does not lie
    strictly beneath *path*; such a header belongs to an outer scope. Headers
    that do lie beneath *path* are kept, rewritten relative to the element.

    Args:
        tokens: The full token sequence.
        pos: Position just after the element's ``]]``.
        path: The array-of-tables path.

    Returns:
        The element's body tokens and the position where the outer scope resumes.
    """
    body: list[Token] = []
    while pos < len(tokens):
        token = tokens[pos]
        end_kind = _HEADER_ENDS.get(token.kind)
        if end_kind is None:
            body.append(token)
            pos += 1
            continue
        header, after = read_header(tokens, pos + 1, end_kind)
        if not header.extends(path):
            break
        body.extend(_header_tokens(token.kind, header.relative_to(path)))
        pos = after
    return body, pos


def check_homogeneous(items: Sequence[Any]) -> None:
    """Ensure every array element is of the same scalar kind as the first.

    Empty arrays are always accepted. When the first element is an array or
    an inline table no narrowing is applied, so arrays of differently shaped
    arrays are valid.

    Raises:
        MixedArrayTypeError: Naming the first element's kind.
    """
    if not items:
        return
    expected = kind_of(items[0])
    if expected in _UNNARROWED_KINDS:
        return
    for item in items[1:]:
        if kind_of(item) is not expected:
            raise MixedArrayTypeError(expected.value)


# ################
# Implementation
# ################

_SCALAR_KINDS = frozenset(
    {
        TokenKind.IDENTIFIER,
        TokenKind.INTEGER,
        TokenKind.DOUBLE,
        TokenKind.BOOLEAN,
        TokenKind.DATETIME,
    }
)

_UNNARROWED_KINDS = frozenset({ValueKind.ARRAY, ValueKind.TABLE})

_HEADER_ENDS: dict[TokenKind, TokenKind] = {
    TokenKind.TABLE_BEGIN: TokenKind.TABLE_END,
    TokenKind.TABLE_ARRAY_BEGIN: TokenKind.TABLE_ARRAY_END,
}


def _header_tokens(begin_kind: TokenKind, path: KeyPath) -> list[Token]:
    """Re-emit a header for *path* as tokens."""
    tokens = [Token(begin_kind)]
    for index, part in enumerate(path):
        if index:
            tokens.append(Token(TokenKind.TABLE_SEP))
        tokens.append(Token(TokenKind.IDENTIFIER, part))
    tokens.append(Token(_HEADER_ENDS[begin_kind]))
    return tokens


class _Builder:
    """Populates one document from one scope of tokens."""

    def __init__(
        self,
        document: Document,
        max_depth: int,
        depth: int = 0,
        prefix: KeyPath | None = None,
    ) -> None:
        if depth > max_depth:
            raise TomlSyntaxError(f"Maximum nesting depth of {max_depth} exceeded")
        self._document = document
        self._max_depth = max_depth
        self._depth = depth
        self._prefix = prefix if prefix is not None else KeyPath()
        self._key: str | None = None

    def build(self, tokens: Sequence[Token]) -> None:
        """Consume *tokens* left to right into the document."""
        pos = 0
        while pos < len(tokens):
            token = tokens[pos]
            pos += 1
            match token.kind:
                case TokenKind.KEY:
                    self._key = token.value
                case TokenKind.COMMENT:
                    pass
                case kind if kind in _SCALAR_KINDS:
                    self._document._set_value(self._target(), token.value)
                case TokenKind.ARRAY_BEGIN:
                    items, pos = self._read_array(tokens, pos, self._depth + 1)
                    self._document._set_value(self._target(), items)
                case TokenKind.INLINE_TABLE_BEGIN:
                    table, pos = self._read_inline_table(tokens, pos, self._depth + 1)
                    self._document._set_value(self._target(), table)
                case TokenKind.TABLE_BEGIN:
                    pos = self._read_table(tokens, pos)
                case TokenKind.TABLE_ARRAY_BEGIN:
                    pos = self._read_table_array(tokens, pos)
                case _:
                    raise RuntimeError(f"Internal parser fault: unexpected token {token!r}")

    # ------------------------------------------------------------------
    # Scopes
    # ------------------------------------------------------------------

    def _read_table(self, tokens: Sequence[Token], pos: int) -> int:
        """Declare a ``[table]`` and parse its body up to the next header."""
        path, pos = read_header(tokens, pos, TokenKind.TABLE_END)
        self._document._declare_table(path)
        logger.debug("Declared table %s", path)
        end = pos
        while end < len(tokens) and tokens[end].kind not in _HEADER_ENDS:
            end += 1
        _Builder(self._document, self._max_depth, self._depth, prefix=path).build(tokens[pos:end])
        return end

    def _read_table_array(self, tokens: Sequence[Token], pos: int) -> int:
        """Append one ``[[table.array]]`` element built from its sliced body."""
        path, pos = read_header(tokens, pos, TokenKind.TABLE_ARRAY_END)
        body, pos = slice_table_array_body(tokens, pos, path)
        element = Document()
        _Builder(element, self._max_depth, self._depth + 1).build(body)
        count = self._document._append_table_array_element(path, element)
        logger.debug("Appended element %d to table array %s", count, path)
        return pos

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def _target(self) -> KeyPath:
        if self._key is None:
            raise RuntimeError("Internal parser fault: value token without a preceding key")
        return self._prefix.child(self._key)

    def _read_array(self, tokens: Sequence[Token], pos: int, depth: int) -> tuple[list[Any], int]:
        if depth > self._max_depth:
            raise TomlSyntaxError(f"Maximum nesting depth of {self._max_depth} exceeded")
        items: list[Any] = []
        while pos < len(tokens):
            token = tokens[pos]
            pos += 1
            match token.kind:
                case kind if kind in _SCALAR_KINDS:
                    items.append(token.value)
                case TokenKind.ARRAY_BEGIN:
                    nested, pos = self._read_array(tokens, pos, depth + 1)
                    items.append(nested)
                case TokenKind.INLINE_TABLE_BEGIN:
                    table, pos = self._read_inline_table(tokens, pos, depth + 1)
                    items.append(table)
                case TokenKind.ARRAY_END:
                    check_homogeneous(items)
                    return items, pos
                case TokenKind.COMMENT:
                    pass
                case _:
                    raise RuntimeError(f"Internal parser fault: unexpected token {token!r} in array")
        raise TomlSyntaxError("Unterminated array")

    def _read_inline_table(self, tokens: Sequence[Token], pos: int, depth: int) -> tuple[Document, int]:
        start = pos
        level = 0
        while pos < len(tokens):
            kind = tokens[pos].kind
            if kind is TokenKind.INLINE_TABLE_BEGIN:
                level += 1
            elif kind is TokenKind.INLINE_TABLE_END:
                if level == 0:
                    break
                level -= 1
            pos += 1
        else:
            raise TomlSyntaxError("Unterminated inline table")
        table = Document()
        _Builder(table, self._max_depth, depth).build(tokens[start:pos])
        return table, pos + 1

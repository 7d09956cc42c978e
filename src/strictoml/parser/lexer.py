# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Context-sensitive lexical scanner for TOML documents.

The scanner keeps a stack of lexical contexts. Each context names an ordered
list of rules; the first rule whose pattern matches at the current position
wins. A rule may emit a token, pop the current context, and push further
contexts. Scanning starts with ``[Context.ROOT]`` and ends when the input is
exhausted.
"""

from __future__ import annotations

import enum
import functools
import logging
import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from strictoml.errors import TomlSyntaxError
from strictoml.parser.dates import decode_datetime, system_local_offset
from strictoml.parser.escapes import decode_escapes

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class TokenKind(enum.Enum):
    """All token kinds produced by the scanner."""

    # Values
    IDENTIFIER = "Identifier"
    KEY = "Key"
    INTEGER = "IntegerNumber"
    DOUBLE = "DoubleNumber"
    BOOLEAN = "Boolean"
    DATETIME = "DateTime"

    # Structure
    ARRAY_BEGIN = "ArrayBegin"
    ARRAY_END = "ArrayEnd"
    TABLE_ARRAY_BEGIN = "TableArrayBegin"
    TABLE_ARRAY_END = "TableArrayEnd"
    INLINE_TABLE_BEGIN = "InlineTableBegin"
    INLINE_TABLE_END = "InlineTableEnd"
    TABLE_BEGIN = "TableBegin"
    TABLE_SEP = "TableSep"
    TABLE_END = "TableEnd"

    COMMENT = "Comment"


@dataclass(frozen=True)
class Token:
    """A lexical token.

    Attributes:
        kind: The kind of token.
        value: The decoded payload for value, key and comment tokens; ``None``
            for structural tokens.
    """

    kind: TokenKind
    value: Any = None


class Context(enum.Enum):
    """Lexical contexts; each selects the rule list used at the top of the stack."""

    ROOT = "root"
    LINE_END = "lineEnd"
    COMMENT = "comment"
    VALUE = "value"
    ARRAY = "array"
    ARRAY_TAIL = "arrayTail"
    INLINE_TABLE = "inlineTable"
    INLINE_TABLE_TAIL = "inlineTableTail"
    INLINE_TABLE_NEXT = "inlineTableNext"
    STRING = "string"
    LITERAL_STRING = "literalString"
    MULTILINE_STRING = "multilineString"
    MULTILINE_LITERAL_STRING = "multilineLiteralString"
    TABLE_NAME = "tableName"
    TABLE_ARRAY = "tableArray"


Action = Callable[[re.Match[str]], "Token | None"]


@dataclass(frozen=True)
class Rule:
    """One grammar rule.

    Attributes:
        pattern: Pattern matched at the current position.
        action: Produces the token for a match (or ``None`` for no token).
        push: Contexts pushed, in order, after a match; the last becomes active.
        pop: Whether the current context is popped before pushing.
    """

    pattern: re.Pattern[str]
    action: Action | None = None
    push: tuple[Context, ...] = ()
    pop: bool = False


Grammar = dict[Context, tuple[Rule, ...]]


def tokenize(
    source: str,
    local_offset: timedelta | None = None,
    keep_comments: bool = False,
) -> list[Token]:
    """Tokenize TOML source text.

    Args:
        source: The full document text.
        local_offset: UTC offset for date/time literals that omit one.
            Defaults to the system's current local offset.
        keep_comments: Emit COMMENT tokens instead of discarding comments.

    Returns:
        The ordered token list.

    Raises:
        TomlSyntaxError: If some remaining input matches no rule of the active
            context, or the input ends inside an unterminated construct.
        InvalidDateFormatError: For date literals that are not real instants.
        InvalidEscapeSequenceError: For unknown escapes in basic strings.
        InvalidUnicodeCharacterError: For invalid unicode escapes.
    """
    if local_offset is None:
        local_offset = system_local_offset()
    grammar = build_grammar(local_offset, keep_comments)
    return _Scanner(source, grammar).run()


@functools.lru_cache(maxsize=16)
def build_grammar(local_offset: timedelta, keep_comments: bool = False) -> Grammar:
    """Build the context-to-rules table.

    Args:
        local_offset: Offset applied to date/time literals without one.
        keep_comments: Whether comment text becomes COMMENT tokens.
    """
    key_rules = _key_rules()
    header_rules = _header_segment_rules()
    comment_action = _comment_token if keep_comments else None
    return {
        Context.ROOT: (
            _rule(r"[ \t\r\n]+"),
            _rule(r"#", push=(Context.COMMENT,)),
            *(_with(rule, push=(Context.LINE_END, Context.VALUE)) for rule in key_rules),
            # Array of tables must come before table.
            _rule(r"\[\[", _emit(TokenKind.TABLE_ARRAY_BEGIN), push=(Context.LINE_END, Context.TABLE_ARRAY)),
            _rule(r"\[", _emit(TokenKind.TABLE_BEGIN), push=(Context.LINE_END, Context.TABLE_NAME)),
        ),
        Context.LINE_END: (
            _rule(r"[ \t]+"),
            _rule(r"#", pop=True, push=(Context.COMMENT,)),
            _rule(r"\r?\n", pop=True),
        ),
        Context.COMMENT: (_rule(r"[^\r\n]*", comment_action, pop=True),),
        Context.VALUE: (
            _rule(r"[ \t]+"),
            *_value_rules(local_offset, then=()),
        ),
        Context.ARRAY: (
            _rule(r"[ \t\r\n]+"),
            _rule(r"#", push=(Context.COMMENT,)),
            _rule(r"\]", _emit(TokenKind.ARRAY_END), pop=True),
            *_value_rules(local_offset, then=(Context.ARRAY_TAIL,)),
        ),
        Context.ARRAY_TAIL: (
            _rule(r"[ \t\r\n]+"),
            _rule(r"#", push=(Context.COMMENT,)),
            _rule(r",", pop=True, push=(Context.ARRAY,)),
            _rule(r"\]", _emit(TokenKind.ARRAY_END), pop=True),
        ),
        Context.INLINE_TABLE: (
            _rule(r"[ \t]+"),
            _rule(r"\}", _emit(TokenKind.INLINE_TABLE_END), pop=True),
            *(
                _with(rule, pop=True, push=(Context.INLINE_TABLE_TAIL, Context.VALUE))
                for rule in key_rules
            ),
        ),
        Context.INLINE_TABLE_TAIL: (
            _rule(r"[ \t]+"),
            _rule(r",", pop=True, push=(Context.INLINE_TABLE_NEXT,)),
            _rule(r"\}", _emit(TokenKind.INLINE_TABLE_END), pop=True),
        ),
        Context.INLINE_TABLE_NEXT: (
            _rule(r"[ \t]+"),
            *(
                _with(rule, pop=True, push=(Context.INLINE_TABLE_TAIL, Context.VALUE))
                for rule in key_rules
            ),
        ),
        Context.STRING: (
            _rule(r'"', pop=True),
            _rule(_BASIC_CHAR + "+", lambda m: Token(TokenKind.IDENTIFIER, decode_escapes(m.group()))),
        ),
        Context.LITERAL_STRING: (
            _rule(r"'", pop=True),
            _rule(_LITERAL_CHAR + "+", lambda m: Token(TokenKind.IDENTIFIER, m.group())),
        ),
        Context.MULTILINE_STRING: (
            _rule(r'"""', pop=True),
            _rule(
                r'(?:[^"\\\x00-\x08\x0b\x0c\x0e-\x1f\x7f]|\\[\s\S]|"(?!""))+',
                lambda m: Token(
                    TokenKind.IDENTIFIER,
                    decode_escapes(_strip_first_newline(m.group()), multiline=True),
                ),
            ),
        ),
        Context.MULTILINE_LITERAL_STRING: (
            _rule(r"'''", pop=True),
            _rule(
                r"(?:[^'\x00-\x08\x0b\x0c\x0e-\x1f\x7f]|'(?!''))+",
                lambda m: Token(TokenKind.IDENTIFIER, _strip_first_newline(m.group())),
            ),
        ),
        Context.TABLE_NAME: (
            *header_rules,
            _rule(r"\]", _emit(TokenKind.TABLE_END), pop=True),
        ),
        Context.TABLE_ARRAY: (
            *header_rules,
            _rule(r"\]\]", _emit(TokenKind.TABLE_ARRAY_END), pop=True),
        ),
    }


# ################
# Implementation
# ################

# A basic-string character, or a backslash together with the character it escapes.
_BASIC_CHAR = r'(?:[^"\\\x00-\x08\x0a-\x1f\x7f]|\\[^\x00-\x08\x0a-\x1f\x7f])'
_LITERAL_CHAR = r"[^'\x00-\x08\x0a-\x1f\x7f]"
_BARE_KEY = r"[A-Za-z0-9_-]+"

_DIGITS = r"\d(?:_?\d)*"
_INTEGER = r"[-+]?(?:0|[1-9](?:_?\d)*)"

_DATE = r"\d{4}-\d{2}-\d{2}"
_TIME = r"T\d{2}:\d{2}:\d{2}"
_FRACTION = r"\.\d+"
_OFFSET = r"(?:[Zz]|[-+]\d{2}:\d{2})"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# Terminating inside any other context means a construct was left open.
_TERMINAL_CONTEXTS = frozenset({Context.ROOT, Context.LINE_END, Context.COMMENT})


def _rule(
    pattern: str,
    action: Action | None = None,
    push: tuple[Context, ...] = (),
    pop: bool = False,
) -> Rule:
    return Rule(re.compile(pattern), action, push, pop)


def _with(rule: Rule, push: tuple[Context, ...], pop: bool = False) -> Rule:
    return Rule(rule.pattern, rule.action, push, pop)


def _emit(kind: TokenKind) -> Action:
    token = Token(kind)
    return lambda _m: token


def _key_rules() -> tuple[Rule, ...]:
    """Bare, quoted and literal keys immediately followed by ``=``."""
    return (
        _rule(rf"({_BARE_KEY})[ \t]*=", lambda m: Token(TokenKind.KEY, m.group(1))),
        _rule(rf'"({_BASIC_CHAR}*)"[ \t]*=', lambda m: Token(TokenKind.KEY, decode_escapes(m.group(1)))),
        _rule(rf"'({_LITERAL_CHAR}*)'[ \t]*=", lambda m: Token(TokenKind.KEY, m.group(1))),
    )


def _header_segment_rules() -> tuple[Rule, ...]:
    """Rules shared by ``[table]`` and ``[[table.array]]`` headers."""
    return (
        _rule(r"[ \t]+"),
        _rule(r'""', lambda _m: Token(TokenKind.IDENTIFIER, "")),
        _rule(r"''", lambda _m: Token(TokenKind.IDENTIFIER, "")),
        _rule(r'"', push=(Context.STRING,)),
        _rule(r"'", push=(Context.LITERAL_STRING,)),
        _rule(r"\.", _emit(TokenKind.TABLE_SEP)),
        _rule(r"\[", _reject("Invalid table declaration: '[' not allowed within a table name; quote the name")),
        _rule(r"#", _reject("Invalid table declaration: comments not allowed within a table name; close it first")),
        _rule(_BARE_KEY, lambda m: Token(TokenKind.IDENTIFIER, m.group())),
    )


def _value_rules(local_offset: timedelta, then: tuple[Context, ...]) -> tuple[Rule, ...]:
    """Rules recognizing one value.

    Every rule pops the context it runs in and pushes *then* beneath whatever
    the value itself needs, so arrays can continue with their separator
    context after each element.
    """

    def value(pattern: str, action: Action | None = None, inner: tuple[Context, ...] = ()) -> Rule:
        return _rule(pattern, action, push=then + inner, pop=True)

    def date(pattern: str) -> Rule:
        return value(pattern, lambda m: Token(TokenKind.DATETIME, decode_datetime(m.group(), local_offset)))

    def empty_string(_m: re.Match[str]) -> Token:
        return Token(TokenKind.IDENTIFIER, "")

    return (
        value(r"\[", _emit(TokenKind.ARRAY_BEGIN), inner=(Context.ARRAY,)),
        value(r"\{", _emit(TokenKind.INLINE_TABLE_BEGIN), inner=(Context.INLINE_TABLE,)),
        # Multi-line delimiters must be tried before single-line ones.
        value(r'""""""', empty_string),
        value(r"''''''", empty_string),
        value(r'"""', inner=(Context.MULTILINE_STRING,)),
        value(r"'''", inner=(Context.MULTILINE_LITERAL_STRING,)),
        value(r'""', empty_string),
        value(r"''", empty_string),
        value(r'"', inner=(Context.STRING,)),
        value(r"'", inner=(Context.LITERAL_STRING,)),
        # Most specific date shape first so a longer literal is never cut short.
        date(_DATE + _TIME + _FRACTION + _OFFSET),
        date(_DATE + _TIME + _OFFSET),
        date(_DATE + _TIME + _FRACTION),
        date(_DATE + _TIME),
        date(_DATE),
        value(rf"{_INTEGER}(?:\.{_DIGITS})?[eE][-+]?{_DIGITS}", _float_token),
        value(rf"{_INTEGER}\.{_DIGITS}", _float_token),
        value(_INTEGER, _integer_token),
        value(r"true", lambda _m: Token(TokenKind.BOOLEAN, True)),
        value(r"false", lambda _m: Token(TokenKind.BOOLEAN, False)),
    )


def _float_token(match: re.Match[str]) -> Token:
    number = float(match.group().replace("_", ""))
    if math.isinf(number):
        raise TomlSyntaxError(f"Float out of 64-bit range: {match.group()}")
    return Token(TokenKind.DOUBLE, number)


def _integer_token(match: re.Match[str]) -> Token:
    number = int(match.group().replace("_", ""))
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise TomlSyntaxError(f"Integer out of 64-bit range: {match.group()}")
    return Token(TokenKind.INTEGER, number)


def _comment_token(match: re.Match[str]) -> Token:
    return Token(TokenKind.COMMENT, match.group().strip())


def _reject(message: str) -> Action:
    def action(_m: re.Match[str]) -> Token | None:
        raise TomlSyntaxError(message)

    return action


def _strip_first_newline(text: str) -> str:
    if text.startswith("\r\n"):
        return text[2:]
    if text.startswith("\n"):
        return text[1:]
    return text


class _Scanner:
    """Drives the context stack over one source text."""

    def __init__(self, source: str, grammar: Grammar) -> None:
        self._source = source
        self._grammar = grammar
        self._pos = 0
        self._stack: list[Context] = [Context.ROOT]
        self._tokens: list[Token] = []

    def run(self) -> list[Token]:
        """Scan the whole input and return the tokens."""
        while self._pos < len(self._source):
            self._step()
        if self._stack[-1] not in _TERMINAL_CONTEXTS:
            raise TomlSyntaxError(
                f"Unexpected end of input inside {self._stack[-1].value}",
                *self._location(self._pos),
            )
        logger.debug("Tokenized %d characters into %d tokens", len(self._source), len(self._tokens))
        return self._tokens

    def _step(self) -> None:
        """Apply the first matching rule of the active context."""
        for rule in self._grammar[self._stack[-1]]:
            match = rule.pattern.match(self._source, self._pos)
            if match is None:
                continue
            if rule.action is not None:
                try:
                    token = rule.action(match)
                except TomlSyntaxError as exc:
                    if exc.line is not None:
                        raise
                    raise TomlSyntaxError(exc.context, *self._location(self._pos)) from None
                if token is not None:
                    self._tokens.append(token)
            if rule.pop:
                self._stack.pop()
            self._stack.extend(rule.push)
            self._pos = match.end()
            return
        raise TomlSyntaxError(f"Unexpected input {self._remainder()!r}", *self._location(self._pos))

    def _remainder(self) -> str:
        """The unmatched text up to the end of its line."""
        end = self._source.find("\n", self._pos)
        return self._source[self._pos : end if end >= 0 else len(self._source)]

    def _location(self, pos: int) -> tuple[int, int]:
        line = self._source.count("\n", 0, pos) + 1
        column = pos - (self._source.rfind("\n", 0, pos) + 1) + 1
        return line, column

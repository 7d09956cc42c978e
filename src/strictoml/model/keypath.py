# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Normalized key paths used to address values and tables."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

# ###############
# Public Interface
# ###############

BARE_KEY_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


@dataclass(frozen=True)
class KeyPath:
    """An ordered sequence of unescaped key segments.

    Key paths compare and hash structurally, so they are used directly as
    mapping keys inside a :class:`~strictoml.model.document.Document`.

    Attributes:
        parts: The key segments, outermost first.
    """

    parts: tuple[str, ...] = ()

    @classmethod
    def of(cls, *parts: str) -> KeyPath:
        """Build a key path from individual segments."""
        return cls(tuple(parts))

    def child(self, key: str) -> KeyPath:
        """Return a new path with *key* appended."""
        return KeyPath(self.parts + (key,))

    def parent(self) -> KeyPath:
        """Return the path without its last segment."""
        return KeyPath(self.parts[:-1])

    def startswith(self, prefix: KeyPath) -> bool:
        """Return True when *prefix* is equal to or an ancestor of this path."""
        return self.parts[: len(prefix.parts)] == prefix.parts

    def extends(self, prefix: KeyPath) -> bool:
        """Return True when this path lies strictly beneath *prefix*."""
        return len(self.parts) > len(prefix.parts) and self.startswith(prefix)

    def relative_to(self, prefix: KeyPath) -> KeyPath:
        """Strip *prefix* from the front of this path.

        Raises:
            ValueError: If this path does not start with *prefix*.
        """
        if not self.startswith(prefix):
            raise ValueError(f"{self} is not beneath {prefix}")
        return KeyPath(self.parts[len(prefix.parts) :])

    def prefixes(self) -> Iterator[KeyPath]:
        """Yield every proper, non-empty prefix, shortest first."""
        for end in range(1, len(self.parts)):
            yield KeyPath(self.parts[:end])

    @property
    def first(self) -> str:
        return self.parts[0]

    @property
    def last(self) -> str:
        return self.parts[-1]

    def __add__(self, other: KeyPath) -> KeyPath:
        return KeyPath(self.parts + other.parts)

    def __len__(self) -> int:
        return len(self.parts)

    def __iter__(self) -> Iterator[str]:
        return iter(self.parts)

    def __bool__(self) -> bool:
        return bool(self.parts)

    def __str__(self) -> str:
        return ".".join(quote_key(part) for part in self.parts)


def quote_key(key: str) -> str:
    """Return *key* as written in TOML: bare when possible, otherwise quoted."""
    if BARE_KEY_PATTERN.fullmatch(key):
        return key
    return quote_string(key)


def quote_string(value: str) -> str:
    """Return *value* as a TOML basic string literal with escapes applied."""
    chars: list[str] = []
    for ch in value:
        if ch in _ESCAPES:
            chars.append(_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            chars.append(f"\\u{ord(ch):04X}")
        else:
            chars.append(ch)
    return '"' + "".join(chars) + '"'


# ################
# Implementation
# ################

_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}

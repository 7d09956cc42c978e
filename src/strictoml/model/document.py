# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""The parsed, queryable TOML document.

A :class:`Document` maps normalized :class:`KeyPath` objects to values and
records which paths were declared as tables. Values are plain Python objects:

- ``str``, ``int``, ``float``, ``bool``
- ``datetime.datetime`` (always timezone-aware)
- ``list`` of any of the above, of lists, or of nested documents
- ``Document`` (inline tables and array-of-tables elements)

Documents are populated only by the document builder through the underscore
primitives below; consumers use the read-only query methods.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from strictoml.errors import DuplicateKeyError, TomlKeyError, TypeMismatchError
from strictoml.model.keypath import KeyPath

# ###############
# Public Interface
# ###############


class ValueKind(enum.Enum):
    """Kinds of values a document can hold, named as they appear in errors."""

    STRING = "String"
    INT = "Int"
    DOUBLE = "Double"
    BOOL = "Bool"
    DATE = "Date"
    ARRAY = "Array"
    TABLE = "Table"


def kind_of(value: Any) -> ValueKind:
    """Classify a document value.

    ``bool`` is checked before ``int`` because it is a subclass of it.

    Raises:
        TypeError: If *value* is not a document value.
    """
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.INT
    if isinstance(value, float):
        return ValueKind.DOUBLE
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, datetime):
        return ValueKind.DATE
    if isinstance(value, list):
        return ValueKind.ARRAY
    if isinstance(value, Document):
        return ValueKind.TABLE
    raise TypeError(f"Not a TOML value: {value!r}")


class Document:
    """A TOML document: key paths to values, plus the set of declared tables."""

    def __init__(self) -> None:
        self._values: dict[KeyPath, Any] = {}
        self._tables: dict[KeyPath, None] = {}
        self._table_arrays: set[KeyPath] = set()
        # Every strict prefix of a stored value path or declared table path.
        self._implied: set[KeyPath] = set()

    # ------------------------------------------------------------------
    # Existence checks
    # ------------------------------------------------------------------

    def has_key(self, *path: str) -> bool:
        """Return True when *path* addresses a value."""
        return self._find(KeyPath(path)) is not _MISSING

    def has_table(self, *path: str, implicit: bool = False) -> bool:
        """Return True when *path* was declared with a ``[table]`` header.

        With ``implicit=True`` the check also accepts tables that exist only
        because a deeper header or key implies them, and paths that hold an
        inline-table document.
        """
        key = KeyPath(path)
        if key in self._tables:
            return True
        if not implicit:
            return False
        return key in self._implied or isinstance(self._find(key), Document)

    @property
    def keys(self) -> list[KeyPath]:
        """All value key paths stored directly in this document."""
        return list(self._values)

    def items(self) -> list[tuple[KeyPath, Any]]:
        """All ``(key path, value)`` pairs stored directly in this document."""
        return list(self._values.items())

    @property
    def key_names(self) -> list[str]:
        """Distinct first segments of all value key paths, in insertion order."""
        return list(dict.fromkeys(key.first for key in self._values))

    @property
    def declared_tables(self) -> list[KeyPath]:
        """Declared table paths in declaration order."""
        return list(self._tables)

    # ------------------------------------------------------------------
    # Typed getters
    # ------------------------------------------------------------------

    def value(self, *path: str) -> Any:
        """Return the value at *path* without any type check.

        Raises:
            TomlKeyError: If *path* does not address a value.
        """
        key = KeyPath(path)
        found = self._find(key)
        if found is _MISSING:
            raise TomlKeyError(key.parts)
        return found

    def string(self, *path: str) -> str:
        return self._typed(path, ValueKind.STRING)

    def int(self, *path: str) -> int:
        return self._typed(path, ValueKind.INT)

    def double(self, *path: str) -> float:
        return self._typed(path, ValueKind.DOUBLE)

    def float(self, *path: str) -> float:
        """Alias of :meth:`double`."""
        return self._typed(path, ValueKind.DOUBLE)

    def bool(self, *path: str) -> bool:
        return self._typed(path, ValueKind.BOOL)

    def date(self, *path: str) -> datetime:
        return self._typed(path, ValueKind.DATE)

    def array(self, *path: str, of: type | None = None) -> list[Any]:
        """Return the array at *path*.

        Args:
            path: Key segments of the array.
            of: Optional element type; every element must be an instance of it
                (``bool`` elements never satisfy ``of=int``).

        Raises:
            TomlKeyError: If *path* is absent.
            TypeMismatchError: If the value is not an array, or an element is
                not of type *of*.
        """
        result: list[Any] = self._typed(path, ValueKind.ARRAY)
        if of is not None:
            for element in result:
                if not isinstance(element, of) or (of is not bool and isinstance(element, bool)):
                    raise TypeMismatchError(path, f"Array of {of.__name__}", _describe(element))
        return result

    def table(self, *path: str) -> Document:
        """Return the table at *path* as an independent document.

        Inline tables and array-of-tables elements are returned as stored.
        Declared (or implied) tables are extracted with their paths rewritten
        relative to *path*. An empty *path* returns the document itself.

        Raises:
            TomlKeyError: If no table exists at *path*.
            TypeMismatchError: If *path* holds a non-table value.
        """
        key = KeyPath(path)
        if not key:
            return self
        found = self._find(key)
        if found is _MISSING:
            if self.has_table(*path, implicit=True):
                return self._extract(key)
            raise TomlKeyError(key.parts)
        if not isinstance(found, Document):
            raise TypeMismatchError(key.parts, ValueKind.TABLE.value, _describe(found))
        return found

    def tables(self, *parent: str) -> dict[str, Document]:
        """Return every table directly beneath *parent*, keyed by its name.

        Tables that are only implied by a deeper declared header are included.
        """
        base = KeyPath(parent)
        names: dict[str, None] = {}
        for declared in self._tables:
            if declared.extends(base):
                names[declared.parts[len(base)]] = None
        return {name: self._extract(base.child(name)) for name in names}

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Return the document as nested plain ``dict``/``list`` objects."""
        result: dict[str, Any] = {}
        for table in self._tables:
            _nested(result, table.parts)
        for key, val in self._values.items():
            _nested(result, key.parent().parts)[key.last] = _plain(val)
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self._values == other._values and set(self._tables) == set(other._tables)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Document({self.to_dict()!r})"

    def __str__(self) -> str:
        from strictoml.serialization.toml_writer import dumps

        return dumps(self)

    # ------------------------------------------------------------------
    # Builder primitives
    # ------------------------------------------------------------------

    def _set_value(self, key: KeyPath, value: Any) -> None:
        """Store *value* at *key*; the path must be entirely unused."""
        self._check_free(key)
        self._values[key] = value
        self._imply(key)

    def _declare_table(self, key: KeyPath) -> None:
        """Record *key* as an explicitly declared table."""
        if key in self._tables or key in self._values:
            raise DuplicateKeyError(key.parts)
        self._check_no_leaf_above(key)
        self._tables[key] = None
        self._imply(key)

    def _append_table_array_element(self, key: KeyPath, element: Document) -> int:
        """Append *element* to the array of tables at *key*, creating it if new.

        Returns:
            The number of elements after appending.
        """
        if key in self._table_arrays:
            elements: list[Document] = self._values[key]
            elements.append(element)
            return len(elements)
        self._check_free(key)
        self._values[key] = [element]
        self._table_arrays.add(key)
        self._imply(key)
        return 1

    # ------------------------------------------------------------------
    # Lookup and consistency helpers
    # ------------------------------------------------------------------

    def _check_free(self, key: KeyPath) -> None:
        if key in self._values or key in self._tables or key in self._implied:
            raise DuplicateKeyError(key.parts)
        self._check_no_leaf_above(key)

    def _check_no_leaf_above(self, key: KeyPath) -> None:
        for prefix in key.prefixes():
            if prefix in self._values:
                raise DuplicateKeyError(key.parts)

    def _imply(self, key: KeyPath) -> None:
        self._implied.update(key.prefixes())

    def _find(self, key: KeyPath) -> Any:
        """Resolve *key*, descending through nested documents held as values."""
        if key in self._values:
            return self._values[key]
        for end in range(len(key) - 1, 0, -1):
            head = KeyPath(key.parts[:end])
            nested = self._values.get(head)
            if isinstance(nested, Document):
                return nested._find(key.relative_to(head))
        return _MISSING

    def _typed(self, path: tuple[str, ...], kind: ValueKind) -> Any:
        found = self.value(*path)
        if kind_of(found) is not kind:
            raise TypeMismatchError(path, kind.value, _describe(found))
        return found

    def _extract(self, base: KeyPath) -> Document:
        """Copy everything beneath *base* into a new document, paths made relative."""
        sub = Document()
        for key, val in self._values.items():
            if key.extends(base):
                relative = key.relative_to(base)
                sub._values[relative] = val
                sub._imply(relative)
                if key in self._table_arrays:
                    sub._table_arrays.add(relative)
        for table in self._tables:
            if table.extends(base):
                relative = table.relative_to(base)
                sub._tables[relative] = None
                sub._imply(relative)
        return sub


# ################
# Implementation
# ################

_MISSING = object()


def _describe(value: Any) -> str:
    try:
        return kind_of(value).value
    except TypeError:
        return type(value).__name__


def _nested(root: dict[str, Any], parts: Iterable[str]) -> dict[str, Any]:
    node = root
    for part in parts:
        node = node.setdefault(part, {})
    return node


def _plain(value: Any) -> Any:
    if isinstance(value, Document):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(element) for element in value]
    return value

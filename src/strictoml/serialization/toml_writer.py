# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization of a Document back to TOML text.

Direct values are written as ``key = value`` lines, then each declared table
under its ``[path]`` header, then every array of tables as repeated
``[[path]]`` blocks. Re-parsing the output yields an equal document.
"""

from __future__ import annotations

import math
from datetime import datetime
from pathlib import Path
from typing import Any

from strictoml.model.document import Document
from strictoml.model.keypath import KeyPath, quote_key, quote_string

# ###############
# Public Interface
# ###############


def dumps(document: Document) -> str:
    """Serialize *document* to TOML text."""
    lines: list[str] = []
    _emit(document, KeyPath(), lines)
    return "\n".join(lines) + "\n" if lines else ""


def dump(document: Document, path: Path) -> None:
    """Write *document* as TOML to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps(document), encoding="utf-8")


def format_value(value: Any) -> str:
    """Format one value as a TOML literal.

    Raises:
        ValueError: For floats with no TOML spelling (``nan``, ``inf``).
        TypeError: For objects that are not document values.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ValueError(f"Float {value!r} cannot be represented in TOML")
        return repr(value)
    if isinstance(value, str):
        return quote_string(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, list):
        return "[" + ", ".join(format_value(element) for element in value) + "]"
    if isinstance(value, Document):
        return _inline_table(value.to_dict())
    if isinstance(value, dict):
        return _inline_table(value)
    raise TypeError(f"Cannot serialize {type(value).__name__} to TOML")


# ################
# Implementation
# ################


def _is_table_array(value: Any) -> bool:
    return isinstance(value, list) and bool(value) and all(isinstance(e, Document) for e in value)


def _inline_table(mapping: dict[str, Any]) -> str:
    if not mapping:
        return "{}"
    pairs = ", ".join(f"{quote_key(key)} = {format_value(val)}" for key, val in mapping.items())
    return "{ " + pairs + " }"


def _emit(document: Document, base: KeyPath, lines: list[str]) -> None:
    """Append the lines for *document*, whose headers are written beneath *base*."""
    items = document.items()
    owners: dict[KeyPath, list[tuple[KeyPath, Any]]] = {KeyPath(): []}
    for table in document.declared_tables:
        owners[table] = []
    table_arrays: list[tuple[KeyPath, list[Document]]] = []
    for key, val in items:
        if _is_table_array(val):
            table_arrays.append((key, val))
        else:
            owners.setdefault(key.parent(), []).append((key, val))

    for owner, pairs in owners.items():
        if owner:
            if lines:
                lines.append("")
            lines.append(f"[{base + owner}]")
        for key, val in pairs:
            lines.append(f"{quote_key(key.last)} = {format_value(val)}")

    for key, elements in table_arrays:
        for element in elements:
            if lines:
                lines.append("")
            lines.append(f"[[{base + key}]]")
            _emit(element, base + key, lines)

# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversion of documents to JSON and YAML.

Besides plain JSON/YAML, this module produces the "tagged" JSON used by the
toml-test conformance suite, in which every leaf is an object of the form
``{"type": "integer", "value": "42"}``.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

import yaml

from strictoml.model.document import Document

# ###############
# Public Interface
# ###############


def to_tagged(value: Any) -> Any:
    """Convert a plain document value (see :meth:`Document.to_dict`) to tagged form."""
    if isinstance(value, dict):
        return {key: to_tagged(val) for key, val in value.items()}
    if isinstance(value, list):
        return [to_tagged(element) for element in value]
    if isinstance(value, bool):
        return {"type": "bool", "value": "true" if value else "false"}
    if isinstance(value, int):
        return {"type": "integer", "value": str(value)}
    if isinstance(value, float):
        return {"type": "float", "value": repr(value)}
    if isinstance(value, datetime):
        return {"type": "datetime", "value": value.isoformat()}
    if isinstance(value, str):
        return {"type": "string", "value": value}
    raise TypeError(f"Cannot tag {type(value).__name__}")


def to_tagged_json(document: Document, indent: int | None = None) -> str:
    """Serialize *document* to toml-test tagged JSON."""
    return json.dumps(to_tagged(document.to_dict()), indent=indent, ensure_ascii=False)


def to_json(document: Document, indent: int | None = 2) -> str:
    """Serialize *document* to plain JSON; datetimes become ISO 8601 strings."""
    return json.dumps(document.to_dict(), indent=indent, ensure_ascii=False, default=_json_default)


def to_yaml(document: Document) -> str:
    """Serialize *document* to YAML using PyYAML's safe dumper."""
    return yaml.safe_dump(document.to_dict(), allow_unicode=True, sort_keys=False)


# ################
# Implementation
# ################


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")

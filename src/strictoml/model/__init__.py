# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Document model: key paths, value kinds and the queryable document."""

from strictoml.model.document import Document, ValueKind, kind_of
from strictoml.model.keypath import KeyPath, quote_key, quote_string

__all__ = [
    "Document",
    "KeyPath",
    "ValueKind",
    "kind_of",
    "quote_key",
    "quote_string",
]

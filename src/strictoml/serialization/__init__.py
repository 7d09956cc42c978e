# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Writers for TOML text and JSON/YAML interchange formats."""

from strictoml.serialization.interchange import to_json, to_tagged, to_tagged_json, to_yaml
from strictoml.serialization.toml_writer import dump, dumps, format_value

__all__ = [
    "dump",
    "dumps",
    "format_value",
    "to_json",
    "to_tagged",
    "to_tagged_json",
    "to_yaml",
]

# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parse options for strictoml."""

from strictoml.config.options import (
    DEFAULT_OPTIONS,
    OptionsError,
    ParseOptions,
    load_parse_options,
)

__all__ = [
    "DEFAULT_OPTIONS",
    "OptionsError",
    "ParseOptions",
    "load_parse_options",
]

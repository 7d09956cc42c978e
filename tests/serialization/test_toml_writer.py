# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for writing documents back to TOML text."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from strictoml.config.options import ParseOptions
from strictoml.model.document import Document
from strictoml.parser.parser import parse
from strictoml.serialization.toml_writer import dump, dumps, format_value

# ###############
# Test Helpers
# ###############

_FIXTURES = Path(__file__).parent.parent / "fixtures"
_UTC_OPTIONS = ParseOptions(local_offset_minutes=0)


def _parse(source: str) -> Document:
    return parse(source, _UTC_OPTIONS)


# ###############
# Value Formatting
# ###############


class TestFormatValue:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (True, "true"),
            (False, "false"),
            (42, "42"),
            (-7, "-7"),
            (3.14, "3.14"),
            (1e16, "1e+16"),
            ("plain", '"plain"'),
            ('with "quotes"', '"with \\"quotes\\""'),
            ([1, 2], "[1, 2]"),
            ([], "[]"),
            ([["a"], [1]], '[["a"], [1]]'),
            ({"x": 1, "a b": "c"}, '{ x = 1, "a b" = "c" }'),
            ({}, "{}"),
        ],
    )
    def test_literal(self, value: object, expected: str) -> None:
        assert format_value(value) == expected

    def test_datetime_uses_rfc3339(self) -> None:
        when = datetime(1979, 5, 27, 7, 32, tzinfo=timezone(timedelta(hours=-7)))
        assert format_value(when) == "1979-05-27T07:32:00-07:00"

    def test_inline_document(self) -> None:
        point = _parse("p = { x = 1, y = 2 }").table("p")
        assert format_value(point) == "{ x = 1, y = 2 }"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_floats_rejected(self, value: float) -> None:
        with pytest.raises(ValueError):
            format_value(value)

    def test_foreign_object_rejected(self) -> None:
        with pytest.raises(TypeError):
            format_value(object())


# ###############
# Document Layout
# ###############


class TestDumps:
    def test_empty_document(self) -> None:
        assert dumps(Document()) == ""

    def test_root_values_then_tables(self) -> None:
        doc = _parse('[owner]\nname = "Tom"\n\n[database]\nport = 5432\n')
        assert dumps(doc) == '[owner]\nname = "Tom"\n\n[database]\nport = 5432\n'

    def test_root_values_come_first(self) -> None:
        doc = _parse('title = "x"\n[a]\nb = 1\n')
        assert dumps(doc) == 'title = "x"\n\n[a]\nb = 1\n'

    def test_empty_declared_table_keeps_header(self) -> None:
        assert dumps(_parse("[a]\n[a.b]\n")) == "[a]\n\n[a.b]\n"

    def test_quoted_header_segments(self) -> None:
        doc = _parse('[the."bit#"]\n"what?" = 1\n')
        assert dumps(doc) == '[the."bit#"]\n"what?" = 1\n'

    def test_table_arrays_as_blocks(self) -> None:
        doc = _parse('[[people]]\nname = "Bruce"\n\n[[people]]\nname = "Eric"\n')
        assert dumps(doc) == '[[people]]\nname = "Bruce"\n\n[[people]]\nname = "Eric"\n'

    def test_nested_table_array_paths_are_absolute(self) -> None:
        text = dumps(_parse((_FIXTURES / "albums.toml").read_text(encoding="utf-8")))
        assert text.count("[[albums]]") == 2
        assert text.count("[[albums.songs]]") == 4

    def test_str_matches_dumps(self) -> None:
        doc = _parse("a = [1, 2]\n")
        assert str(doc) == dumps(doc) == "a = [1, 2]\n"


# ###############
# Round Trips
# ###############


class TestRoundTrip:
    @pytest.mark.parametrize("name", ["toml_example.toml", "hard_example.toml", "albums.toml", "simple.toml"])
    def test_fixture_round_trip(self, name: str) -> None:
        original = _parse((_FIXTURES / name).read_text(encoding="utf-8"))
        assert _parse(dumps(original)) == original

    def test_escapes_round_trip(self) -> None:
        original = _parse('s = "tab\\t quote\\" back\\\\ nl\\n bell\\u0007"\n')
        assert _parse(dumps(original)).string("s") == original.string("s")

    def test_extreme_floats_round_trip(self) -> None:
        original = _parse("big = 1.7976931348623157e308\ntiny = 5e-324\n")
        assert _parse(dumps(original)) == original

    def test_dump_writes_file(self, tmp_path: Path) -> None:
        doc = _parse("[a]\nx = 1\n")
        target = tmp_path / "out" / "doc.toml"
        dump(doc, target)
        assert target.read_text(encoding="utf-8") == "[a]\nx = 1\n"

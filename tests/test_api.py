# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the top-level strictoml API."""

from pathlib import Path

import pytest

import strictoml

_FIXTURES = Path(__file__).parent / "fixtures"


def test_loads() -> None:
    doc = strictoml.loads("answer = 42\n")
    assert isinstance(doc, strictoml.Document)
    assert doc.int("answer") == 42


def test_loads_with_options() -> None:
    doc = strictoml.loads("d = 1979-05-27", strictoml.ParseOptions(local_offset_minutes=60))
    assert doc.date("d").isoformat() == "1979-05-27T00:00:00+01:00"


def test_load_from_path() -> None:
    doc = strictoml.load(_FIXTURES / "toml_example.toml")
    assert doc.string("owner", "organization") == "GitHub"


def test_load_accepts_string_path() -> None:
    doc = strictoml.load(str(_FIXTURES / "albums.toml"))
    assert len(doc.array("albums")) == 2


def test_load_missing_file_raises_os_error(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        strictoml.load(tmp_path / "missing.toml")


def test_dump_and_load_round_trip(tmp_path: Path) -> None:
    original = strictoml.load(_FIXTURES / "hard_example.toml")
    target = tmp_path / "copy.toml"
    strictoml.dump(original, target)
    assert strictoml.load(target) == original


@pytest.mark.parametrize(
    ("source", "error"),
    [
        ("a = 1 b = 2", strictoml.TomlSyntaxError),
        ("a = 1e1000", strictoml.TomlSyntaxError),
        ("a = { b = 1, }", strictoml.TomlSyntaxError),
        ("a = 1\na = 2", strictoml.DuplicateKeyError),
        ("a = [1, 'x']", strictoml.MixedArrayTypeError),
        ("d = 1979-02-30", strictoml.InvalidDateFormatError),
        ('s = "\\q"', strictoml.InvalidEscapeSequenceError),
        ('s = "\\uDFFF"', strictoml.InvalidUnicodeCharacterError),
    ],
)
def test_error_taxonomy(source: str, error: type[strictoml.TomlError]) -> None:
    with pytest.raises(error):
        strictoml.loads(source)


def test_query_errors_are_builtin_compatible() -> None:
    doc = strictoml.loads("a = 1\n")
    with pytest.raises(KeyError):
        doc.value("b")
    with pytest.raises(TypeError):
        doc.string("a")


def test_version() -> None:
    assert strictoml.__version__ == "0.1.0"

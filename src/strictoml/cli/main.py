# Copyright 2026 Strictoml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the strictoml command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from strictoml.config.options import DEFAULT_OPTIONS, OptionsError, ParseOptions, load_parse_options
from strictoml.errors import TomlError, TomlKeyError
from strictoml.model.document import Document
from strictoml.parser.parser import parse
from strictoml.serialization.interchange import to_json, to_tagged_json, to_yaml
from strictoml.serialization.toml_writer import dumps, format_value

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the strictoml CLI."""
    parser = argparse.ArgumentParser(
        prog="strictoml",
        description="strictoml - strict TOML reader",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log parser activity to stderr",
    )
    parser.add_argument(
        "--options",
        metavar="OPTIONS.yaml",
        help="YAML file with parse options",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check that TOML files parse",
        description="Parse each file and report whether it is a valid document.",
    )
    check_parser.add_argument("files", nargs="+", help="TOML files to check")

    # decode subcommand
    decode_parser = subparsers.add_parser(
        "decode",
        help="Print a document as toml-test tagged JSON",
        description="Read TOML from a file or stdin and print the toml-test tagged JSON encoding.",
    )
    decode_parser.add_argument(
        "file",
        nargs="?",
        help="TOML file to decode (default: read stdin)",
    )

    # dump subcommand
    dump_parser = subparsers.add_parser(
        "dump",
        help="Re-emit a document as TOML, JSON or YAML",
        description="Parse a TOML file and write it back out in the chosen format.",
    )
    dump_parser.add_argument("file", help="TOML file to dump")
    dump_parser.add_argument(
        "--format",
        choices=["toml", "json", "yaml"],
        default="toml",
        help="Output format (default: toml)",
    )

    # get subcommand
    get_parser = subparsers.add_parser(
        "get",
        help="Print the value at a key path",
        description="Parse a TOML file and print the value addressed by the given key segments.",
    )
    get_parser.add_argument("file", help="TOML file to query")
    get_parser.add_argument("keys", nargs="+", metavar="KEY", help="Key path segments")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[{levelname}:{name}] {message}",
        style="{",
    )
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    try:
        options = _load_options(args.options)
    except OptionsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.command == "check":
        return _cmd_check(args, options)
    if args.command == "decode":
        return _cmd_decode(args, options)
    if args.command == "dump":
        return _cmd_dump(args, options)
    if args.command == "get":
        return _cmd_get(args, options)
    return 0


def _load_options(path: str | None) -> ParseOptions:
    if path is None:
        return DEFAULT_OPTIONS
    return load_parse_options(Path(path))


def _read_document(path: Path, options: ParseOptions) -> Document | None:
    """Parse *path*, printing an error and returning None on failure."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
        return None
    try:
        return parse(text, options)
    except TomlError as exc:
        print(f"Error: {path}: {exc}", file=sys.stderr)
        return None


def _cmd_check(args: argparse.Namespace, options: ParseOptions) -> int:
    """Handle the check subcommand."""
    has_errors = False
    for name in args.files:
        if _read_document(Path(name), options) is None:
            has_errors = True
        else:
            print(f"{name}: OK")
    return 1 if has_errors else 0


def _cmd_decode(args: argparse.Namespace, options: ParseOptions) -> int:
    """Handle the decode subcommand."""
    if args.file is None:
        try:
            document = parse(sys.stdin.read(), options)
        except TomlError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
    else:
        document = _read_document(Path(args.file), options)
        if document is None:
            return 1
    print(to_tagged_json(document))
    return 0


def _cmd_dump(args: argparse.Namespace, options: ParseOptions) -> int:
    """Handle the dump subcommand."""
    document = _read_document(Path(args.file), options)
    if document is None:
        return 1
    if args.format == "json":
        print(to_json(document))
    elif args.format == "yaml":
        print(to_yaml(document), end="")
    else:
        print(dumps(document), end="")
    return 0


def _cmd_get(args: argparse.Namespace, options: ParseOptions) -> int:
    """Handle the get subcommand."""
    document = _read_document(Path(args.file), options)
    if document is None:
        return 1
    try:
        value = document.value(*args.keys)
    except TomlKeyError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if isinstance(value, str):
        print(value)
    elif isinstance(value, Document):
        print(dumps(value), end="")
    else:
        print(format_value(value))
    return 0

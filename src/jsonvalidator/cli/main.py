# Copyright 2026 JsonValidator Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the jsonvalidator command-line interface."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from yachalk import chalk

from jsonvalidator.errors import JsonValidatorError
from jsonvalidator.serialization import read_document, read_schema

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the jsonvalidator CLI."""
    parser = argparse.ArgumentParser(
        prog="jsonvalidator",
        description="jsonvalidator: validate JSON and YAML documents against portable schemas",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log validation traces to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Validate a document against a schema",
        description="Validate a JSON or YAML document against a schema document.",
    )
    check_parser.add_argument("schema", help="Schema document (.json, .yaml or .yml)")
    check_parser.add_argument("data", help="Document to validate (.json, .yaml or .yml)")

    # infer subcommand
    infer_parser = subparsers.add_parser(
        "infer",
        help="Infer a schema from a sample document",
        description="Build a schema with required fields only from the shape of a sample object.",
    )
    infer_parser.add_argument("sample", help="Sample document (.json, .yaml or .yml)")
    infer_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the schema to this file instead of printing it (format chosen by suffix)",
    )

    # example subcommand
    example_parser = subparsers.add_parser(
        "example",
        help="Print an example document for a schema",
        description="Print an example value, a rules description or an empty template for a schema.",
    )
    example_parser.add_argument("schema", help="Schema document (.json, .yaml or .yml)")
    mode = example_parser.add_mutually_exclusive_group()
    mode.add_argument("--rules", action="store_true", help="Describe the rules of every field")
    mode.add_argument("--template", action="store_true", help="Print empty placeholders")

    # paths subcommand
    paths_parser = subparsers.add_parser(
        "paths",
        help="Print the address of every field in a schema",
        description="Print a tree mirroring the schema whose leaves are slash-delimited addresses.",
    )
    paths_parser.add_argument("schema", help="Schema document (.json, .yaml or .yml)")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    try:
        if args.command == "check":
            return _cmd_check(args)
        if args.command == "infer":
            return _cmd_infer(args)
        if args.command == "example":
            return _cmd_example(args)
        if args.command == "paths":
            return _cmd_paths(args)
    except JsonValidatorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    schema_path = Path(args.schema)
    data_path = Path(args.data)
    schema = read_schema(schema_path)
    data = read_document(data_path)
    schema.validate(data)
    print(f"{chalk.green('OK')} '{data_path}' is valid against '{schema_path}'.")
    return 0


def _cmd_infer(args: argparse.Namespace) -> int:
    """Handle the infer subcommand."""
    from jsonvalidator.inference import infer_schema
    from jsonvalidator.serialization import dumps, write_schema

    schema = infer_schema(read_document(Path(args.sample)))
    if args.output is None:
        print(dumps(schema))
        return 0
    output = Path(args.output)
    write_schema(schema, output)
    print(f"{chalk.green('Wrote')} schema with {len(schema)} field(s) to '{output}'.")
    return 0


def _cmd_example(args: argparse.Namespace) -> int:
    """Handle the example subcommand."""
    schema = read_schema(Path(args.schema))
    if args.rules:
        document = schema.example_with_rules()
    elif args.template:
        document = schema.template()
    else:
        document = schema.example()
    _print_json(document)
    return 0


def _cmd_paths(args: argparse.Namespace) -> int:
    """Handle the paths subcommand."""
    _print_json(read_schema(Path(args.schema)).path())
    return 0


def _print_json(document: Any) -> None:
    print(json.dumps(document, indent=2))

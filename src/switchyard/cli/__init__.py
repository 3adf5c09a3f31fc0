"""Switchyard CLI: compile key lists into matchers and inspect them.

Entry point registered as ``switchyard`` in ``pyproject.toml``::

    [project.scripts]
    switchyard = "switchyard.cli:main"
"""

import argparse
import logging
import sys


def _add_key_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("keyfile", help="Key list, one key per line (blank lines skipped)")
    parser.add_argument(
        "--ignore-case",
        action="store_true",
        help="Match keys with ASCII case folded",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``switchyard`` command."""
    parser = argparse.ArgumentParser(
        prog="switchyard",
        description="switchyard: compile fixed string sets into exact-match dispatch code.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # -- switchyard compile -----------------------------------------------
    compile_parser = subparsers.add_parser(
        "compile", help="Render a key list as a Python lookup function"
    )
    _add_key_options(compile_parser)
    compile_parser.add_argument("--name", default="lookup", help="Generated function name")
    compile_parser.add_argument(
        "--return-type",
        default="int",
        help="Return annotation of the generated function",
    )
    compile_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write source to this file instead of stdout",
    )

    # -- switchyard lookup ------------------------------------------------
    lookup_parser = subparsers.add_parser("lookup", help="Look up queries against a key list")
    _add_key_options(lookup_parser)
    lookup_parser.add_argument("queries", nargs="+", help="Strings to look up")

    # -- switchyard tree --------------------------------------------------
    tree_parser = subparsers.add_parser("tree", help="Show the length buckets and trie shape")
    _add_key_options(tree_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command == "compile":
        from switchyard.cli._compile import run_compile

        run_compile(args)
    elif args.command == "lookup":
        from switchyard.cli._lookup import run_lookup

        run_lookup(args)
    elif args.command == "tree":
        from switchyard.cli._tree import run_tree

        run_tree(args)

"""``switchyard compile``: render a key list as Python source."""

import argparse
import sys
from pathlib import Path

from switchyard.cli._keys import load_map
from switchyard.config import Case, MatcherConfig
from switchyard.errors import SwitchyardError


def run_compile(args: argparse.Namespace) -> None:
    """Write a lookup function for ``args.keyfile`` to stdout or ``args.output``.

    Each key returns its line index among the non-blank lines.
    """
    config = MatcherConfig(
        case=Case.INSENSITIVE if args.ignore_case else Case.SENSITIVE,
        func_name=args.name,
        return_annotation=args.return_type,
    )
    strmap = load_map(args, config)

    try:
        source = strmap.source()
    except SwitchyardError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if args.output is None:
        sys.stdout.write(source)
        return

    Path(args.output).write_text(source, encoding="utf-8")
    print(f"Wrote {args.name}() for {len(strmap)} keys to {args.output}")

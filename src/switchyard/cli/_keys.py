"""Key-file loading shared by the CLI commands."""

import argparse
import sys
from pathlib import Path

from switchyard.config import Case, MatcherConfig
from switchyard.strmap import StrMap


def read_keys(path: str | Path) -> list[str]:
    """Read a line-oriented key list.

    Each line is stripped; blank lines are skipped. A key's value is its
    index among the remaining lines.
    """
    text = Path(path).read_text(encoding="utf-8")
    keys = []
    for line in text.splitlines():
        key = line.strip()
        if key:
            keys.append(key)
    return keys


def load_map(args: argparse.Namespace, config: MatcherConfig | None = None) -> StrMap:
    """Build a StrMap from ``args.keyfile``, exiting with status 1 if it can't be read."""
    try:
        keys = read_keys(args.keyfile)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    case = Case.INSENSITIVE if args.ignore_case else Case.SENSITIVE
    config = config or MatcherConfig(case=case)
    return StrMap(config).entries((key, index) for index, key in enumerate(keys))

"""``switchyard lookup``: query a key list from the command line."""

import argparse

from switchyard.cli._keys import load_map


def run_lookup(args: argparse.Namespace) -> None:
    """Print ``QUERY<TAB>VALUE`` per query, ``-`` for misses.

    Exits with status 1 if any query missed, so the command can gate
    shell scripts the way ``grep`` does.
    """
    strmap = load_map(args)
    strmap.freeze()

    missed = False
    for query in args.queries:
        value = strmap.lookup(query)
        if value is None:
            missed = True
            print(f"{query}\t-")
        else:
            print(f"{query}\t{value}")

    if missed:
        raise SystemExit(1)

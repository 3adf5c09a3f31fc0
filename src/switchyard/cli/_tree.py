"""``switchyard tree``: show how a key list is bucketed and compressed.

Prints one section per key length, then the trie below it with one
indented line per edge label::

    length 3 (2 keys)
      ye
        p = 1
        s = 0
"""

import argparse

from switchyard.cli._keys import load_map
from switchyard.trie.node import TraversalOrder


def run_tree(args: argparse.Namespace) -> None:
    strmap = load_map(args)
    strmap.freeze()
    encoding = strmap.config.encoding

    buckets = list(strmap.forest.buckets())
    if not buckets:
        print("No keys.")
        return

    for length, root in buckets:
        count = len(root)
        print(f"length {length} ({count} key{'s' if count != 1 else ''})")
        depth = 0
        for order, node in root.walk():
            if order is TraversalOrder.POST:
                depth -= 1
                continue
            depth += 1
            label = node.label.decode(encoding, errors="backslashreplace")
            if node is root:
                # The empty key lives on the root itself
                if node.has_value:
                    print(f"  '' = {node.value}")
                continue
            suffix = f" = {node.value}" if node.has_value else ""
            print(f"{'  ' * (depth - 1)}{label}{suffix}")

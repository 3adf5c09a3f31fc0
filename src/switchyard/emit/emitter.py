"""Depth-first emission of decision procedures from tries.

The emitter walks a bucket's trie once, opening a ``Branch`` on entry to
each node and closing it on exit. The pending-children stack plays the
role the token stack plays in a source-level code generator: each frame
collects the branches that will nest inside the frame's conditional.
"""

import logging
from typing import Any

from switchyard.emit.decision import Branch, ByteTest, Decision, DecisionProcedure
from switchyard.trie.forest import Forest
from switchyard.trie.node import MISSING, Node, TraversalOrder

logger = logging.getLogger("switchyard.emit")


def _is_ascii_letter(byte: int) -> bool:
    return 0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A


def byte_test(offset: int, byte: int, *, case_insensitive: bool = False) -> ByteTest:
    """Build the comparison for *byte* at *offset*.

    Case folding only applies to ASCII letters; every other byte is
    compared exactly.
    """
    if case_insensitive and _is_ascii_letter(byte):
        return ByteTest(offset=offset, byte=byte | 0x20, fold=True)
    return ByteTest(offset=offset, byte=byte)


def emit(root: Node, *, case_insensitive: bool = False) -> Decision:
    """Turn a single-length bucket trie into an equivalent ``Decision``.

    Raises ``ValueError`` if keys below *root* have different lengths:
    the emitted branches return on the first full-path match, which is
    only equivalent to lookup when every key has the bucket's length.
    """
    # Stack of frames; each frame collects the branches nested inside it
    frames: list[list[Branch]] = [[]]
    opened: list[tuple[tuple[ByteTest, ...], Any]] = []
    depth = 0
    length: int | None = None

    for order, node in root.walk():
        if order is TraversalOrder.PRE and node.value is not MISSING:
            key_length = depth + len(node.label)
            if length is None:
                length = key_length
            elif length != key_length:
                msg = (
                    f"emit() expects a single-length bucket, found keys of length "
                    f"{length} and {key_length}"
                )
                raise ValueError(msg)

        # Only a bucket root has an empty label; it has no condition to emit
        if not node.label:
            continue

        if order is TraversalOrder.PRE:
            tests = tuple(
                byte_test(depth + k, byte, case_insensitive=case_insensitive)
                for k, byte in enumerate(node.label)
            )
            opened.append((tests, node.value))
            frames.append([])
            depth += len(node.label)
        else:
            children = frames.pop()
            tests, value = opened.pop()
            frames[-1].append(Branch(tests=tests, value=value, children=tuple(children)))
            depth -= len(node.label)

    branches = tuple(frames.pop())
    value = root.value if not root.label else MISSING
    return Decision(length=length or 0, branches=branches, value=value)


def emit_forest(forest: Forest, *, case_insensitive: bool = False) -> DecisionProcedure:
    """Emit one ``Decision`` per length bucket of *forest*."""
    decisions = []
    for length, root in forest.buckets():
        decision = emit(root, case_insensitive=case_insensitive)
        logger.debug(
            "Emitted bucket of length %d: %d top-level branches, depth %d",
            length,
            len(decision.branches),
            decision.depth(),
        )
        decisions.append(decision)
    return DecisionProcedure(decisions=tuple(decisions), case_insensitive=case_insensitive)

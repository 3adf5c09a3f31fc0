"""Edge-labeled trie node with split-on-divergence insertion.

Each node owns a byte-string label (a compressed run of path bytes), an
optional value, and children keyed by the first byte of their label.
Splitting only happens where two keys diverge, so depth grows with the
number of branch points rather than with key length.

All operations are iterative; adversarially deep tries never touch the
interpreter's recursion limit.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import Any


class _Missing:
    """Marker for "no value stored here". ``None`` is a legal payload."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class TraversalOrder(Enum):
    """Whether ``Node.walk()`` is entering or leaving a node."""

    PRE = "pre"
    POST = "post"


def differs_at(a: bytes, b: bytes) -> int | None:
    """Return the smallest index where *a* and *b* differ.

    Only the common length is compared; ``None`` means one is a prefix
    of the other.
    """
    for i, (x, y) in enumerate(zip(a, b)):
        if x != y:
            return i
    return None


class Node:
    """A node in the byte trie. Mutable during construction only.

    Usage::

        root = Node()
        root.insert(b"abcd", 1)
        root.insert(b"abz", 3)
        root.get(b"abz")  # 3
    """

    __slots__ = ("children", "label", "value")

    def __init__(self, label: bytes = b"", value: Any = MISSING) -> None:
        self.label = label
        self.value = value
        # First byte of each child's label -> child, kept in ascending order
        self.children: dict[int, Node] = {}

    def __repr__(self) -> str:
        value = "" if self.value is MISSING else f", value={self.value!r}"
        return f"Node({self.label!r}{value}, children={len(self.children)})"

    @property
    def has_value(self) -> bool:
        return self.value is not MISSING

    def __len__(self) -> int:
        return sum(1 for _ in self.items())

    # -- Construction ------------------------------------------------------

    def split_at(self, idx: int) -> None:
        """Push ``label[idx:]``, the value, and the children down into a new child."""
        suffix = self.label[idx:]
        child = Node(suffix, self.value)
        child.children = self.children
        self.label = self.label[:idx]
        self.value = MISSING
        self.children = {suffix[0]: child}

    def insert(self, key: bytes, value: Any) -> Any:
        """Insert *key* below this node and return the previous value, or ``None``.

        This node's label is assumed to already match a prefix of *key*
        (true for a bucket root, whose label is empty).
        """
        previous = self.replace(key, value)
        return None if previous is MISSING else previous

    def replace(self, key: bytes, value: Any) -> Any:
        """Like ``insert()``, but returns ``MISSING`` when *key* was absent."""
        node = self
        offset = 0  # bytes of key consumed by the labels above node
        while True:
            label = node.label
            common = min(len(key) - offset, len(label))
            split = differs_at(key[offset : offset + common], label)
            if split is None and common < len(label):
                split = common

            if split is not None:
                node.split_at(split)
                offset += split
            else:
                offset += len(label)

            if offset == len(key):
                previous = node.value
                node.value = value
                return previous

            child = node.children.get(key[offset])
            if child is None:
                node._add_child(Node(key[offset:], value))
                return MISSING
            node = child

    def _add_child(self, child: Node) -> None:
        byte = child.label[0]
        out_of_order = bool(self.children) and byte < next(reversed(self.children))
        self.children[byte] = child
        if out_of_order:
            self.children = dict(sorted(self.children.items()))

    # -- Lookup ------------------------------------------------------------

    def get(self, key: bytes, default: Any = None) -> Any:
        """Return the value stored for exactly *key*, or *default*."""
        node = self
        offset = 0
        size = len(key)
        while True:
            label = node.label
            if size - offset < len(label) or not key.startswith(label, offset):
                return default
            offset += len(label)
            if offset == size:
                return default if node.value is MISSING else node.value
            child = node.children.get(key[offset])
            if child is None:
                return default
            node = child

    # -- Traversal ---------------------------------------------------------

    def walk(self) -> Iterator[tuple[TraversalOrder, Node]]:
        """Depth-first traversal, yielding each node on entry and on exit.

        Children are visited in ascending byte order, so the sequence is
        reproducible across runs.
        """
        yield TraversalOrder.PRE, self
        stack = [(self, iter(self.children.values()))]
        while stack:
            node, children = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                yield TraversalOrder.POST, node
            else:
                stack.append((child, iter(child.children.values())))
                yield TraversalOrder.PRE, child

    def items(self) -> Iterator[tuple[bytes, Any]]:
        """Yield ``(key, value)`` for every key stored below this node, in byte order."""
        path: list[bytes] = []
        for order, node in self.walk():
            if order is TraversalOrder.PRE:
                path.append(node.label)
                if node.value is not MISSING:
                    yield b"".join(path), node.value
            else:
                path.pop()

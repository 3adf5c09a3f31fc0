"""Length-bucketed set of tries.

Every key lives in the trie for its byte length, so a lookup performs
exactly one length dispatch and the tries themselves never check
lengths.
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from switchyard.trie.node import MISSING, Node


class Forest:
    """A set of tries where each trie only stores keys of a single length.

    Usage::

        forest = Forest()
        forest.insert(b"yes", True)
        forest.insert(b"no", False)
        forest.get(b"no")  # False
    """

    __slots__ = ("_by_length", "_size")

    def __init__(self) -> None:
        self._by_length: dict[int, Node] = {}
        self._size = 0

    @property
    def by_length(self) -> Mapping[int, Node]:
        """Read-only view of the bucket roots, keyed by key length."""
        return MappingProxyType(self._by_length)

    def insert(self, key: bytes, value: Any) -> Any:
        """Insert *key* into its length bucket. Returns the previous value or ``None``."""
        previous = self.replace(key, value)
        return None if previous is MISSING else previous

    def replace(self, key: bytes, value: Any) -> Any:
        """Like ``insert()``, but returns ``MISSING`` when *key* was absent."""
        root = self._by_length.get(len(key))
        if root is None:
            root = self._by_length[len(key)] = Node()
        previous = root.replace(key, value)
        if previous is MISSING:
            self._size += 1
        return previous

    def get(self, key: bytes, default: Any = None) -> Any:
        root = self._by_length.get(len(key))
        if root is None:
            return default
        return root.get(key, default)

    def buckets(self) -> Iterator[tuple[int, Node]]:
        """Yield ``(length, root)`` pairs in ascending length order."""
        for length in sorted(self._by_length):
            yield length, self._by_length[length]

    def items(self) -> Iterator[tuple[bytes, Any]]:
        for _, root in self.buckets():
            yield from root.items()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (bytes, bytearray, memoryview)):
            return False
        return self.get(bytes(key), MISSING) is not MISSING

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"Forest(keys={self._size}, buckets={sorted(self._by_length)})"

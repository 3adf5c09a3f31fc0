"""Tries: byte-compressed, length-bucketed key storage with O(key-length) lookup.

Keys are inserted during setup; the resulting forest is treated as an
immutable lookup structure once the owning map freezes.
"""

from switchyard.trie.forest import Forest
from switchyard.trie.node import MISSING, Node, TraversalOrder

__all__ = ["MISSING", "Forest", "Node", "TraversalOrder"]

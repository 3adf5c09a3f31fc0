"""Decision-procedure types and their interpreter.

The shapes here are isomorphic to the Python source that
``switchyard.codegen`` renders::

    DecisionProcedure  ->  if n == 2: ... elif n == 3: ...
    Decision           ->  the body of one length arm
    Branch             ->  if s[0] == 0x79 and s[1] == 0x65: ...
    ByteTest           ->  s[1] == 0x65

``evaluate()`` walks the structure exactly the way the rendered code
executes, which makes it the bridge between the trie and its source form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from switchyard.trie.node import MISSING

_ASCII_FOLD = 0x20


@dataclass(frozen=True, slots=True)
class ByteTest:
    """One byte comparison at an absolute query offset.

    With ``fold`` set, ``byte`` is a lowercase ASCII letter and the query
    byte is lowercased (``| 0x20``) before comparing.
    """

    offset: int
    byte: int
    fold: bool = False

    def matches(self, query: bytes) -> bool:
        actual = query[self.offset]
        if self.fold:
            actual |= _ASCII_FOLD
        return actual == self.byte


@dataclass(frozen=True, slots=True)
class Branch:
    """A conditional block: all ``tests`` must pass to enter it.

    Sibling branches form an if/elif chain. A branch with a value
    returns it as soon as it is entered; otherwise control moves on to
    its children.
    """

    tests: tuple[ByteTest, ...]
    value: Any = MISSING
    children: tuple[Branch, ...] = ()

    @property
    def has_value(self) -> bool:
        return self.value is not MISSING

    @property
    def label(self) -> bytes:
        """The bytes this branch compares, in offset order."""
        return bytes(test.byte for test in self.tests)

    def matches(self, query: bytes) -> bool:
        return all(test.matches(query) for test in self.tests)


@dataclass(frozen=True, slots=True)
class Decision:
    """The decision procedure for one length bucket."""

    length: int
    branches: tuple[Branch, ...] = ()
    value: Any = MISSING  # Only the empty key stores its value here

    @property
    def has_value(self) -> bool:
        return self.value is not MISSING

    def depth(self) -> int:
        """Deepest if/elif nesting below the length arm (0 for no branches)."""
        deepest = 0
        stack = [(branch, 1) for branch in self.branches]
        while stack:
            branch, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in branch.children)
        return deepest

    def evaluate(self, query: bytes, default: Any = None) -> Any:
        """Run the procedure against *query*, returning the value or *default*."""
        if len(query) != self.length:
            return default
        if self.value is not MISSING:
            return self.value

        branches = self.branches
        while branches:
            for branch in branches:
                if branch.matches(query):
                    break
            else:
                return default
            if branch.value is not MISSING:
                return branch.value
            branches = branch.children
        return default


@dataclass(frozen=True, slots=True)
class DecisionProcedure:
    """Length dispatch over per-bucket decisions, ordered by length."""

    decisions: tuple[Decision, ...] = ()
    case_insensitive: bool = False
    _by_length: dict[int, Decision] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_length", {d.length: d for d in self.decisions})

    def __len__(self) -> int:
        return len(self.decisions)

    def decision_for(self, length: int) -> Decision | None:
        return self._by_length.get(length)

    def depth(self) -> int:
        return max((decision.depth() for decision in self.decisions), default=0)

    def evaluate(self, query: bytes, default: Any = None) -> Any:
        decision = self._by_length.get(len(query))
        if decision is None:
            return default
        return decision.evaluate(query, default)

"""StrMap: a static string-keyed map compiled from a fixed set of keys.

Keys are registered during setup, then the map freezes into an
immutable structure that can be queried directly, emitted as a decision
procedure, or rendered and compiled into a standalone Python function.
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any, TextIO

from switchyard.codegen import compile_function, render_source
from switchyard.config import MatcherConfig
from switchyard.emit.decision import DecisionProcedure
from switchyard.emit.emitter import emit_forest
from switchyard.trie.forest import Forest
from switchyard.trie.node import MISSING

logger = logging.getLogger("switchyard.strmap")

Key = str | bytes | bytearray | memoryview


class StrMap:
    """Exact-match map from byte strings to arbitrary values.

    Usage::

        words = StrMap()
        words.entries([("yes", True), ("yep", True), ("no", False)])
        words.lookup("yep")  # True
        words.lookup("ye")  # None

        parse = words.build()
        parse(b"no")  # False

    With ``Case.INSENSITIVE`` keys and queries are folded to ASCII
    lowercase, so keys that differ only in letter case collide and the
    last one inserted wins.
    """

    __slots__ = ("_config", "_forest", "_frozen")

    def __init__(self, config: MatcherConfig | None = None) -> None:
        self._config = config or MatcherConfig()
        self._forest = Forest()
        self._frozen = False

    @property
    def config(self) -> MatcherConfig:
        return self._config

    @property
    def forest(self) -> Forest:
        return self._forest

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _to_bytes(self, key: Key) -> bytes:
        if isinstance(key, str):
            data = key.encode(self._config.encoding)
        elif isinstance(key, (bytes, bytearray, memoryview)):
            data = bytes(key)
        else:
            msg = f"keys must be str or bytes, not {type(key).__name__}"
            raise TypeError(msg)
        if self._config.case_insensitive:
            return data.lower()
        return data

    # -- Construction ------------------------------------------------------

    def insert(self, key: Key, value: Any) -> Any:
        """Insert *key*. Returns the value it replaced, or ``None``.

        Must be called before ``freeze()``.
        """
        if self._frozen:
            msg = "Cannot insert keys after the map is frozen."
            raise RuntimeError(msg)

        data = self._to_bytes(key)
        previous = self._forest.replace(data, value)
        if previous is MISSING:
            return None
        logger.debug("Key %r overwritten (%r -> %r)", data, previous, value)
        return previous

    def entry(self, key: Key, value: Any) -> "StrMap":
        """Chainable ``insert()``."""
        self.insert(key, value)
        return self

    def entries(self, pairs: Iterable[tuple[Key, Any]]) -> "StrMap":
        for key, value in pairs:
            self.insert(key, value)
        return self

    def freeze(self) -> None:
        """Freeze the map. No more keys can be inserted."""
        if not self._frozen:
            self._frozen = True
            logger.debug(
                "Froze map with %d keys in %d buckets",
                len(self._forest),
                len(self._forest.by_length),
            )

    # -- Queries -----------------------------------------------------------

    def lookup(self, query: Key, default: Any = None) -> Any:
        """Return the value for exactly *query*, or *default*."""
        return self._forest.get(self._to_bytes(query), default)

    get = lookup

    def __getitem__(self, query: Key) -> Any:
        value = self.lookup(query, MISSING)
        if value is MISSING:
            raise KeyError(query)
        return value

    def __contains__(self, query: object) -> bool:
        if not isinstance(query, (str, bytes, bytearray, memoryview)):
            return False
        return self.lookup(query, MISSING) is not MISSING

    def __len__(self) -> int:
        return len(self._forest)

    def items(self) -> Iterator[tuple[bytes, Any]]:
        """Yield ``(key, value)`` pairs, shortest keys first, then in byte order."""
        return self._forest.items()

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"StrMap(keys={len(self)}, case={self._config.case.value}, {state})"

    # -- Compilation -------------------------------------------------------

    def emit(self) -> DecisionProcedure:
        """Freeze the map and emit its decision procedure."""
        self.freeze()
        return emit_forest(self._forest, case_insensitive=self._config.case_insensitive)

    def source(self, value_expr: Callable[[Any], str] = repr) -> str:
        """Freeze the map and render it as Python source.

        ``value_expr`` renders each value as an expression; the default
        ``repr`` covers literals.
        """
        cfg = self._config
        return render_source(
            self.emit(),
            func_name=cfg.func_name,
            return_annotation=cfg.return_annotation,
            value_expr=value_expr,
            indent=cfg.indent,
        )

    def compile(self, writer: TextIO, value_expr: Callable[[Any], str] = repr) -> None:
        """Write the rendered source to *writer*."""
        writer.write(self.source(value_expr))

    def build(self) -> Callable[[bytes], Any]:
        """Freeze the map and compile it into a function of ``bytes``.

        The function returns the stored value or ``None``; it does not
        encode ``str`` queries, so pass bytes.
        """
        cfg = self._config
        func = compile_function(
            self.emit(),
            func_name=cfg.func_name,
            return_annotation=cfg.return_annotation,
            indent=cfg.indent,
        )
        logger.debug("Built %s() for %d keys", cfg.func_name, len(self))
        return func

"""Test utilities for switchyard matchers.

Query generators that probe the edges of a key set, and assertions
that every compiled form of a map answers exactly like its trie::

    from switchyard.testing import assert_equivalent

    assert_equivalent(strmap)
"""

from collections.abc import Callable, Iterable, Iterator
from typing import Any

from switchyard.strmap import StrMap

# Replacement bytes tried at every position of a key
_PROBE_BYTES = (0x00, 0x20, 0x41, 0x61, 0x7F, 0x80, 0xFF)


def mutations(key: bytes) -> Iterator[bytes]:
    """Yield near misses of *key*.

    Every single-byte substitution (neighbouring bytes, flipped ASCII
    case, and a few fixed probes), every proper prefix, and one-byte
    extensions. The key itself is never yielded.
    """
    for i, byte in enumerate(key):
        head, tail = key[:i], key[i + 1 :]
        for other in {(byte + 1) % 256, (byte - 1) % 256, byte ^ 0x20, *_PROBE_BYTES}:
            if other != byte:
                yield head + bytes((other,)) + tail
    for i in range(len(key)):
        yield key[:i]
    for byte in (0x00, 0x61, 0xFF):
        yield key + bytes((byte,))


def probe_queries(keys: Iterable[bytes]) -> set[bytes]:
    """All *keys*, their ASCII case variants, and their mutations."""
    queries: set[bytes] = set()
    for key in keys:
        queries.update((key, key.upper(), key.lower(), key.swapcase()))
        queries.update(mutations(key))
    return queries


def assert_agree(
    expected: Callable[[bytes], Any],
    actual: Callable[[bytes], Any],
    queries: Iterable[bytes],
    *,
    label: str = "matcher",
) -> None:
    """Assert *actual* returns what *expected* returns for every query."""
    mismatches = []
    for query in sorted(queries):
        want, got = expected(query), actual(query)
        if want != got or type(want) is not type(got):
            mismatches.append(f"  {query!r}: expected {want!r}, got {got!r}")
    assert not mismatches, (
        f"{label} disagrees with lookup on {len(mismatches)} queries:\n"
        + "\n".join(mismatches[:20])
    )


def assert_equivalent(strmap: StrMap, queries: Iterable[bytes] | None = None) -> None:
    """Assert the emitted procedure and the built function both match ``lookup``.

    Freezes *strmap*. When *queries* is omitted, probes every stored key
    with ``probe_queries()``.
    """
    if queries is None:
        queries = probe_queries(key for key, _ in strmap.items())
    queries = list(queries)

    procedure = strmap.emit()
    assert_agree(strmap.lookup, procedure.evaluate, queries, label="decision procedure")
    assert_agree(strmap.lookup, strmap.build(), queries, label="compiled function")

"""Tests for switchyard.testing: query generators and equivalence assertions."""

import pytest

from switchyard.strmap import StrMap
from switchyard.testing import assert_agree, assert_equivalent, mutations, probe_queries


class TestMutations:
    def test_never_yields_key(self) -> None:
        assert b"abc" not in set(mutations(b"abc"))

    def test_prefixes(self) -> None:
        generated = set(mutations(b"abc"))
        assert {b"", b"a", b"ab"} <= generated

    def test_extensions(self) -> None:
        generated = set(mutations(b"abc"))
        assert {b"abc\x00", b"abca", b"abc\xff"} <= generated

    def test_single_byte_substitutions(self) -> None:
        generated = set(mutations(b"abc"))
        assert b"bbc" in generated
        assert b"aBc" in generated
        assert b"ab\xff" in generated
        assert b"abb" in generated

    def test_every_same_length_mutation_differs_in_one_byte(self) -> None:
        for candidate in mutations(b"key"):
            if len(candidate) == 3:
                assert sum(a != b for a, b in zip(candidate, b"key")) == 1

    def test_empty_key(self) -> None:
        assert set(mutations(b"")) == {b"\x00", b"a", b"\xff"}


class TestProbeQueries:
    def test_includes_case_variants(self) -> None:
        queries = probe_queries([b"Abc"])
        assert {b"Abc", b"ABC", b"abc", b"aBC"} <= queries


class TestAssertions:
    def test_agree_passes(self) -> None:
        assert_agree(lambda q: len(q), lambda q: len(q), [b"a", b"bb"])

    def test_agree_reports_mismatches(self) -> None:
        with pytest.raises(AssertionError, match="disagrees with lookup on 1 queries"):
            assert_agree(lambda q: None, lambda q: 1 if q == b"x" else None, [b"x", b"y"])

    def test_agree_distinguishes_types(self) -> None:
        with pytest.raises(AssertionError):
            assert_agree(lambda q: 1, lambda q: True, [b"x"])

    def test_equivalent(self) -> None:
        m = StrMap().entries([("yes", True), ("yep", True), ("no", False)])
        assert_equivalent(m)
        assert m.frozen

    def test_equivalent_explicit_queries(self) -> None:
        m = StrMap().entries([("a", 1)])
        assert_equivalent(m, [b"a", b"b", b""])

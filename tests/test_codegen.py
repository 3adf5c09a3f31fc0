"""Tests for switchyard.codegen: Python source rendering and compilation."""

import linecache

import pytest

from switchyard.codegen import (
    MAX_NESTING,
    byte_literal,
    compile_function,
    render_condition,
    render_source,
)
from switchyard.config import MatcherConfig
from switchyard.emit.decision import Branch, ByteTest, Decision, DecisionProcedure
from switchyard.emit.emitter import emit_forest
from switchyard.errors import ConfigurationError, RenderError
from switchyard.strmap import StrMap
from switchyard.testing import probe_queries
from switchyard.trie.forest import Forest


def _procedure(*pairs: tuple[bytes, object], case_insensitive: bool = False) -> DecisionProcedure:
    forest = Forest()
    for key, value in pairs:
        forest.insert(key.lower() if case_insensitive else key, value)
    return emit_forest(forest, case_insensitive=case_insensitive)


YES_NO = ((b"yes", True), (b"yep", True), (b"no", False))


def _nested(depth: int) -> DecisionProcedure:
    branch = Branch((ByteTest(depth - 1, 0x61),), value=1)
    for offset in range(depth - 2, -1, -1):
        branch = Branch((ByteTest(offset, 0x61),), children=(branch,))
    return DecisionProcedure(decisions=(Decision(length=depth, branches=(branch,)),))


class TestLiterals:
    def test_byte_literal(self) -> None:
        assert byte_literal(0x6E) == "0x6e"
        assert byte_literal(0) == "0x00"
        assert byte_literal(0xFF) == "0xff"

    def test_condition_exact(self) -> None:
        assert render_condition(ByteTest(2, 0x70)) == "s[2] == 0x70"

    def test_condition_folded(self) -> None:
        assert render_condition(ByteTest(0, 0x61, fold=True)) == "(s[0] | 0x20) == 0x61"


class TestRenderSource:
    def test_yes_no(self) -> None:
        source = render_source(_procedure(*YES_NO), return_annotation="bool")

        assert source == (
            "def lookup(s: bytes) -> bool | None:\n"
            "    n = len(s)\n"
            "    if n == 2:\n"
            "        if s[0] == 0x6e and s[1] == 0x6f:  # b'no'\n"
            "            return False\n"
            "    elif n == 3:\n"
            "        if s[0] == 0x79 and s[1] == 0x65:  # b'ye'\n"
            "            if s[2] == 0x70:  # b'p'\n"
            "                return True\n"
            "            elif s[2] == 0x73:  # b's'\n"
            "                return True\n"
            "    return None\n"
        )

    def test_custom_name_and_indent(self) -> None:
        source = render_source(_procedure((b"a", 1)), func_name="parse_a", indent="\t")
        assert source.startswith("def parse_a(s: bytes) -> object | None:\n")
        assert "\tn = len(s)\n" in source
        assert "\t\tif s[0] == 0x61:  # b'a'\n" in source
        assert "\t\t\treturn 1\n" in source

    def test_value_expr(self) -> None:
        source = render_source(_procedure((b"red", "RED")), value_expr=lambda v: f"Color.{v}")
        assert "return Color.RED" in source

    def test_case_insensitive(self) -> None:
        source = render_source(_procedure((b"Ok", 1), case_insensitive=True))
        assert "(s[0] | 0x20) == 0x6f and (s[1] | 0x20) == 0x6b" in source

    def test_non_ascii_bytes(self) -> None:
        source = render_source(_procedure((b"\xc3\xa9", 1)))
        assert "s[0] == 0xc3 and s[1] == 0xa9" in source

    def test_empty_key(self) -> None:
        source = render_source(_procedure((b"", 0)))
        assert "    if n == 0:\n        return 0\n" in source

    def test_empty_procedure(self) -> None:
        source = render_source(DecisionProcedure())
        assert source == "def lookup(s: bytes) -> object | None:\n    n = len(s)\n    return None\n"

    def test_source_compiles(self) -> None:
        pairs = [(b"if", 0), (b"in", 1), (b"import", 2), (b"is", 3), (b"id", 4)]
        namespace: dict[str, object] = {}
        exec(render_source(_procedure(*pairs)), namespace)
        lookup = namespace["lookup"]
        for key, value in pairs:
            assert lookup(key) == value  # type: ignore[operator]
        assert lookup(b"i") is None  # type: ignore[operator]


class TestRenderOptions:
    @pytest.mark.parametrize("name", ["", "1abc", "has space", "class", "def", "a-b"])
    def test_invalid_func_name(self, name: str) -> None:
        with pytest.raises(ConfigurationError, match="func_name"):
            render_source(_procedure(*YES_NO), func_name=name)

    @pytest.mark.parametrize("name", ["len", "_values"])
    def test_func_name_shadowing_generated_globals(self, name: str) -> None:
        with pytest.raises(ConfigurationError, match="shadow"):
            compile_function(_procedure((b"ab", 1)), func_name=name)

    def test_func_name_shadowing_via_strmap(self) -> None:
        strmap = StrMap(MatcherConfig(func_name="len")).entries([("ab", 1)])
        with pytest.raises(ConfigurationError, match="shadow"):
            strmap.build()

    @pytest.mark.parametrize("indent", ["", "  x", "--"])
    def test_invalid_indent(self, indent: str) -> None:
        with pytest.raises(ConfigurationError, match="indent"):
            render_source(_procedure(*YES_NO), indent=indent)

    def test_too_deep(self) -> None:
        with pytest.raises(RenderError) as exc_info:
            render_source(_nested(MAX_NESTING + 1))
        assert exc_info.value.depth == MAX_NESTING + 1
        assert exc_info.value.limit == MAX_NESTING

    def test_deepest_allowed_compiles(self) -> None:
        func = compile_function(_nested(MAX_NESTING))
        assert func(b"a" * MAX_NESTING) == 1
        assert func(b"a" * (MAX_NESTING - 1) + b"b") is None


class TestCompileFunction:
    def test_yes_no(self) -> None:
        lookup = compile_function(_procedure(*YES_NO))
        assert lookup(b"yes") is True
        assert lookup(b"yep") is True
        assert lookup(b"no") is False
        assert lookup(b"ye") is None
        assert lookup(b"yesno") is None

    def test_returns_identical_objects(self) -> None:
        sentinel = object()
        lookup = compile_function(_procedure((b"key", sentinel)))
        assert lookup(b"key") is sentinel

    def test_unimported_annotation(self) -> None:
        lookup = compile_function(_procedure((b"a", 1)), return_annotation="SomeEnum")
        assert lookup(b"a") == 1

    def test_name_and_source(self) -> None:
        lookup = compile_function(_procedure(*YES_NO), func_name="yes_or_no")
        assert lookup.__name__ == "yes_or_no"
        assert lookup.__switchyard_source__.startswith("def yes_or_no(")
        assert "_values[0]" in lookup.__switchyard_source__

    def test_linecache_registered(self) -> None:
        compile_function(_procedure(*YES_NO), func_name="cached_lookup")
        lines = linecache.getlines("<switchyard:cached_lookup>")
        assert lines[0].startswith("def cached_lookup(")

    def test_matches_procedure(self) -> None:
        pairs = [(key, i) for i, key in enumerate([b"GET", b"PUT", b"POST", b"PATCH", b"DELETE"])]
        procedure = _procedure(*pairs, case_insensitive=True)
        lookup = compile_function(procedure)
        for query in probe_queries(key for key, _ in pairs):
            assert lookup(query) == procedure.evaluate(query), query

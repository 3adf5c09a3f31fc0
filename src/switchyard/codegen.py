"""Python source generation for decision procedures.

Renders a ``DecisionProcedure`` as a standalone function::

    def lookup(s: bytes) -> bool | None:
        n = len(s)
        if n == 2:
            if s[0] == 0x6e and s[1] == 0x6f:  # b'no'
                return False
        elif n == 3:
            if s[0] == 0x79 and s[1] == 0x65:  # b'ye'
                if s[2] == 0x70:  # b'p'
                    return True
                elif s[2] == 0x73:  # b's'
                    return True
        return None

The function body is assembled line by line; the wrapper is a kida
template so the signature stays readable. ``compile_function()`` turns
the same source into a live callable.
"""

import __future__

import functools
import keyword
import linecache
import logging
from collections.abc import Callable
from typing import Any

from kida import Environment

from switchyard.emit.decision import Branch, ByteTest, DecisionProcedure
from switchyard.errors import ConfigurationError, RenderError

logger = logging.getLogger("switchyard.codegen")

# Python's tokenizer allows 100 indentation levels; the function body and
# the length arm use two of them.
MAX_NESTING = 96

# Globals the generated function reads at call time
_RESERVED_NAMES = frozenset({"len", "_values"})

_FUNCTION_TEMPLATE = """\
def {{ func_name }}(s: bytes) -> {{ return_annotation }} | None:
{{ body }}
{{ indent }}return None
"""


@functools.cache
def _environment() -> Environment:
    return Environment(autoescape=False)


def byte_literal(byte: int) -> str:
    """Render a byte as a hex integer literal.

    Indexing ``bytes`` yields ints, so bytes >= 128 need no escaping.
    """
    return f"0x{byte:02x}"


def render_condition(test: ByteTest) -> str:
    if test.fold:
        return f"(s[{test.offset}] | 0x20) == {byte_literal(test.byte)}"
    return f"s[{test.offset}] == {byte_literal(test.byte)}"


def _render_branches(
    branches: tuple[Branch, ...],
    lines: list[str],
    level: int,
    indent: str,
    value_expr: Callable[[Any], str],
) -> None:
    """Append the if/elif chains for *branches*, depth-first, without recursion."""
    stack = [
        (branch, level, "elif" if i else "if")
        for i, branch in reversed(list(enumerate(branches)))
    ]
    while stack:
        branch, depth, keyword_ = stack.pop()
        conditions = " and ".join(render_condition(test) for test in branch.tests)
        lines.append(f"{indent * depth}{keyword_} {conditions}:  # {branch.label!r}")
        if branch.has_value:
            lines.append(f"{indent * (depth + 1)}return {value_expr(branch.value)}")
        elif not branch.children:
            lines.append(f"{indent * (depth + 1)}pass")
        stack.extend(
            (child, depth + 1, "elif" if i else "if")
            for i, child in reversed(list(enumerate(branch.children)))
        )


def _check_options(func_name: str, indent: str) -> None:
    if not func_name.isidentifier() or keyword.iskeyword(func_name):
        msg = f"func_name must be a valid Python identifier, got {func_name!r}"
        raise ConfigurationError(msg)
    if func_name in _RESERVED_NAMES:
        msg = f"func_name {func_name!r} would shadow a name the generated function uses"
        raise ConfigurationError(msg)
    if not indent or indent.strip(" \t"):
        msg = f"indent must be non-empty whitespace, got {indent!r}"
        raise ConfigurationError(msg)


def render_source(
    procedure: DecisionProcedure,
    *,
    func_name: str = "lookup",
    return_annotation: str = "object",
    value_expr: Callable[[Any], str] = repr,
    indent: str = "    ",
) -> str:
    """Render *procedure* as the source of a Python function.

    ``value_expr`` turns each stored value into the expression the
    function returns; the default ``repr`` suits literals such as ints,
    strings and bools.
    """
    _check_options(func_name, indent)
    depth = procedure.depth()
    if depth > MAX_NESTING:
        raise RenderError(depth, MAX_NESTING)

    lines = [f"{indent}n = len(s)"]
    for i, decision in enumerate(procedure.decisions):
        lines.append(f"{indent}{'elif' if i else 'if'} n == {decision.length}:")
        start = len(lines)
        if decision.has_value:
            lines.append(f"{indent * 2}return {value_expr(decision.value)}")
        _render_branches(decision.branches, lines, 2, indent, value_expr)
        if len(lines) == start:
            lines.append(f"{indent * 2}pass")

    template = _environment().from_string(_FUNCTION_TEMPLATE)
    source = template.render(
        {
            "func_name": func_name,
            "return_annotation": return_annotation,
            "body": "\n".join(lines),
            "indent": indent,
        }
    )
    logger.debug("Rendered %s(): %d lines, depth %d", func_name, len(lines) + 2, depth)
    return source.rstrip("\n") + "\n"


def compile_function(
    procedure: DecisionProcedure,
    *,
    func_name: str = "lookup",
    return_annotation: str = "object",
    indent: str = "    ",
) -> Callable[[bytes], Any]:
    """Render *procedure* and compile it into a callable.

    Values are bound by index into a private tuple rather than rendered
    with ``repr``, so any object can be returned. Annotations are
    compiled lazily, so ``return_annotation`` may name types the
    generated module never imports.
    """
    values: list[Any] = []

    def bind(value: Any) -> str:
        values.append(value)
        return f"_values[{len(values) - 1}]"

    source = render_source(
        procedure,
        func_name=func_name,
        return_annotation=return_annotation,
        value_expr=bind,
        indent=indent,
    )
    filename = f"<switchyard:{func_name}>"
    code = compile(
        source,
        filename,
        "exec",
        flags=__future__.annotations.compiler_flag,
        dont_inherit=True,
    )
    namespace: dict[str, Any] = {"_values": tuple(values)}
    exec(code, namespace)  # noqa: S102

    # Make tracebacks through the generated function show its source
    linecache.cache[filename] = (len(source), None, source.splitlines(keepends=True), filename)

    func = namespace[func_name]
    func.__switchyard_source__ = source
    return func

"""switchyard: static string-keyed dispatch compiler.

Builds an exact-match map from a fixed set of keys: a length-bucketed,
byte-compressed trie that answers lookups in time proportional to the
query length, and that compiles into nested byte comparisons for
generated code.

Basic usage::

    from switchyard import StrMap

    colors = StrMap().entries([("red", 0), ("green", 1), ("blue", 2)])
    colors.lookup("green")  # 1

    print(colors.source())  # def lookup(s: bytes) -> object | None: ...
    parse = colors.build()
    parse(b"blue")  # 2
"""

__version__ = "0.1.0"
__all__ = [
    "Case",
    "ConfigurationError",
    "Decision",
    "DecisionProcedure",
    "Forest",
    "MatcherConfig",
    "Node",
    "RenderError",
    "StrMap",
    "SwitchyardError",
    "emit_forest",
]

# name -> module that defines it
_LAZY_IMPORTS: dict[str, str] = {
    "Case": "switchyard.config",
    "MatcherConfig": "switchyard.config",
    "ConfigurationError": "switchyard.errors",
    "RenderError": "switchyard.errors",
    "SwitchyardError": "switchyard.errors",
    "Decision": "switchyard.emit.decision",
    "DecisionProcedure": "switchyard.emit.decision",
    "emit_forest": "switchyard.emit.emitter",
    "Forest": "switchyard.trie.forest",
    "Node": "switchyard.trie.node",
    "StrMap": "switchyard.strmap",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import switchyard`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)

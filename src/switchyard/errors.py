"""Switchyard exception hierarchy.

Shared across the trie, emitter, code generator, and CLI so every
module raises and catches the same types.
"""


class SwitchyardError(Exception):
    """Base for all switchyard-specific errors."""


class ConfigurationError(SwitchyardError):
    """Raised when matcher configuration is invalid.

    Typically surfaced when rendering source, where the function name
    and indentation actually matter.
    """


class RenderError(SwitchyardError):
    """Raised when a decision procedure cannot be rendered as Python source.

    Python's tokenizer caps indentation depth, so a trie with too many
    nested branch points has no valid source form. Direct lookup and
    ``Decision.evaluate()`` still work for such tries.
    """

    def __init__(self, depth: int, limit: int) -> None:
        self.depth = depth
        self.limit = limit
        super().__init__(
            f"Decision procedure nests {depth} levels deep; "
            f"rendered Python source supports at most {limit}."
        )

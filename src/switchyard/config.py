"""Matcher configuration.

MatcherConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass
from enum import Enum


class Case(Enum):
    """Whether keys match byte-for-byte or with ASCII case folded."""

    SENSITIVE = "sensitive"
    INSENSITIVE = "insensitive"


@dataclass(frozen=True, slots=True)
class MatcherConfig:
    """Matcher configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = MatcherConfig(case=Case.INSENSITIVE, func_name="parse_color")
    """

    # Matching
    case: Case = Case.SENSITIVE
    encoding: str = "utf-8"  # Used to turn ``str`` keys and queries into bytes

    # Generated source
    func_name: str = "lookup"
    return_annotation: str = "object"  # Rendered as ``-> <annotation> | None``
    indent: str = "    "

    @property
    def case_insensitive(self) -> bool:
        return self.case is Case.INSENSITIVE

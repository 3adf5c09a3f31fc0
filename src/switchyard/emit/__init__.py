"""Decision procedures: tries flattened into nested if/elif byte tests.

A decision procedure answers the same question as a trie lookup but
is shaped like generated code: one length dispatch, then chains of
byte comparisons that mirror the trie's branch points.
"""

from switchyard.emit.decision import Branch, ByteTest, Decision, DecisionProcedure
from switchyard.emit.emitter import emit, emit_forest

__all__ = [
    "Branch",
    "ByteTest",
    "Decision",
    "DecisionProcedure",
    "emit",
    "emit_forest",
]

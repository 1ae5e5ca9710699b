"""Runtime switches.

Values are read at call time, so they can be flipped at any point, e.g. in tests.

"""

TRACE_LOGGING = False
"""Emit debug records for every search step (pattern matching, embedding, deep search)."""

RUNTIME_TYPE_CHECK = False
"""Validate field types of tree nodes on construction and raise `InvalidTypes` on mismatch."""

"""
Clause submission.
"""
from typing import Iterable

from .handle import Handle
from .literal import Literal


class ClauseBuilder:
    """Forwards one clause at a time to a ``Handle``.

    Literals are passed through in order and followed by the native
    terminator. Duplicate literals and tautologies are left to the engine.
    """

    def __init__(self, handle: Handle):
        self._handle = handle

    def add_clause(self, literals: Iterable[Literal]) -> None:
        """Assert the disjunction of ``literals``.

        An empty clause makes the formula unsatisfiable.
        """
        for lit in literals:
            self._handle.assert_literal(lit)
        self._handle.end_clause()

"""
Abstract interface for native SAT engines.
"""
from typing import Protocol, Any

# Return codes of the IPASIR solve call.
SAT = 10
UNSAT = 20
UNKNOWN = 0

LIMIT_NAMES = ("conflicts", "decisions")


class Engine(Protocol):
    """Protocol defining the foreign call surface of an IPASIR-style engine.

    All operations take the context returned by ``init()``. The engine
    performs no sequencing checks of its own: calling it out of order is
    undefined behavior, which is why only ``Handle`` talks to it.
    """

    name: str
    supports_assumptions: bool

    def signature(self) -> str:
        """Return the name and version of the engine."""
        ...

    def init(self) -> Any:
        """Create a new native context."""
        ...

    def add(self, context: Any, lit: int) -> None:
        """Add a literal to the current clause, or terminate it with 0."""
        ...

    def assume(self, context: Any, lit: int) -> None:
        """Assume a literal for the next solve call only."""
        ...

    def solve(self, context: Any) -> int:
        """Solve the formula.

        Returns:
            10 if satisfiable, 20 if unsatisfiable, 0 if interrupted or
            out of resources
        """
        ...

    def value(self, context: Any, lit: int) -> int:
        """Return ``lit`` if true, ``-lit`` if false, 0 if unassigned."""
        ...

    def failed(self, context: Any, lit: int) -> bool:
        """Return True if assumption ``lit`` was used to prove unsatisfiability."""
        ...

    def terminate(self, context: Any) -> None:
        """Request asynchronous termination of a running solve."""
        ...

    def reserve(self, context: Any, max_var: int) -> None:
        """Reserve variables up to ``max_var``."""
        ...

    def set_limit(self, context: Any, name: str, limit: int) -> None:
        """Set a one-shot search limit for the next solve call."""
        ...

    def release(self, context: Any) -> None:
        """Destroy the native context."""
        ...

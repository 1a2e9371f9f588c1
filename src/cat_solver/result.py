"""
Solve outcome types.
"""
from enum import Enum
import weakref
from typing import Dict, List, Optional, TYPE_CHECKING

from .engine.base import SAT, UNSAT, UNKNOWN
from .errors import EngineError, ProtocolViolation

if TYPE_CHECKING:
    from .solver import Solver


class SolverResult(Enum):
    """Result of a solve call."""
    SATISFIABLE = "sat"
    UNSATISFIABLE = "unsat"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: int) -> "SolverResult":
        """Map an IPASIR solve return code to a result."""
        if code == SAT:
            return cls.SATISFIABLE
        if code == UNSAT:
            return cls.UNSATISFIABLE
        if code == UNKNOWN:
            return cls.UNKNOWN
        raise EngineError(f"Unknown solver state: {code}")


class ResultView:
    """Read-only view of the last solve outcome of a ``Solver``.

    The view is bound to the solver state it was created in. Once the solver
    leaves that state (it is closed or collected), every accessor raises
    ``ProtocolViolation``.

    Attributes:
        result: Outcome of the solve call
        solver_name: Name of the engine that produced it
        solver_time_ms: Time spent inside the blocking solve call
    """

    def __init__(self, solver: "Solver", result: SolverResult,
                 solver_name: str, solver_time_ms: float):
        # Weak, so a solver dropped by its owner releases its context at once.
        self._solver = weakref.ref(solver)
        self._state = solver.state
        self.result = result
        self.solver_name = solver_name
        self.solver_time_ms = solver_time_ms

    def _check(self) -> "Solver":
        solver = self._solver()
        if solver is None:
            raise ProtocolViolation("solver of this result view no longer exists")
        solver._require_state(self._state, "use a result view")
        return solver

    @property
    def valid(self) -> bool:
        solver = self._solver()
        return solver is not None and solver.state is self._state

    def value(self, literal) -> Optional[bool]:
        """Truth value of ``literal`` in the model, None if unassigned."""
        return self._check().value(literal)

    def failed(self, literal) -> bool:
        """Whether assumption ``literal`` is part of the unsatisfiability proof."""
        return self._check().failed(literal)

    def model(self) -> Dict[int, bool]:
        """Map every mentioned variable to its truth value."""
        solver = self._check()
        model = {}
        for var in sorted(solver._variables):
            val = solver.value(var)
            # Unconstrained variables may stay unassigned; any value satisfies.
            model[var] = True if val is None else val
        return model

    def failed_assumptions(self) -> List[int]:
        """Submitted assumptions implicated in the unsatisfiability proof."""
        solver = self._check()
        return [lit for lit in solver._submitted_assumptions if solver.failed(lit)]

    def __str__(self) -> str:
        return f"{self.result.value} ({self.solver_name}, {self.solver_time_ms:.2f}ms)"

    def __repr__(self) -> str:
        return f"ResultView(result={self.result}, solver_name={self.solver_name!r})"

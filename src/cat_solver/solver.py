"""
Safe solver front end.

``Solver`` owns a ``Handle`` and checks every public call against an explicit
state machine before anything reaches the engine::

    CONFIGURING --solve()--> SATISFIABLE | UNSATISFIABLE | UNKNOWN
         \\                          |
          `------- close() ------> CLOSED

Solved states are terminal apart from ``close()``: the wrapped engines do not
support adding clauses after a result, so any such attempt raises
``ProtocolViolation`` and leaves the previous result untouched.

Example:
    >>> sat = Solver()
    >>> sat.add_clause([1, 2])
    >>> sat.add_clause([-1, 2])
    >>> sat.solve()
    <SolverResult.SATISFIABLE: 'sat'>
    >>> sat.value(2)
    True
"""
from enum import Enum
from typing import Iterable, List, Optional, Set
import time

from .clause import ClauseBuilder
from .engine.base import Engine, LIMIT_NAMES
from .engine.registry import pick_engine
from .errors import ConfigurationError, EngineError, InvalidLiteral, ProtocolViolation
from .handle import Handle
from .literal import Literal, MAX_VARIABLE
from .logging import get_logger
from .result import ResultView, SolverResult

logger = get_logger(__name__)

MAX_LIMIT = 2**32 - 1


class SolverState(Enum):
    """Lifecycle state of a ``Solver``."""
    CONFIGURING = "configuring"
    SATISFIABLE = "satisfiable"
    UNSATISFIABLE = "unsatisfiable"
    UNKNOWN = "unknown"
    CLOSED = "closed"

    @property
    def solved(self) -> bool:
        return self in (SolverState.SATISFIABLE, SolverState.UNSATISFIABLE, SolverState.UNKNOWN)


_STATE_FOR_RESULT = {
    SolverResult.SATISFIABLE: SolverState.SATISFIABLE,
    SolverResult.UNSATISFIABLE: SolverState.UNSATISFIABLE,
    SolverResult.UNKNOWN: SolverState.UNKNOWN,
}


class Solver:
    """Non-incremental SAT solver over an IPASIR-style engine.

    Literals are non-zero integers in the DIMACS convention. Variables are
    created by first use.

    Args:
        engine: Engine to drive. Defaults to ``pick_engine()``, which honours
            $CAT_SOLVER_ENGINE.
    """

    def __init__(self, engine: Optional[Engine] = None):
        if engine is None:
            spec = pick_engine()
            if spec is None:
                raise EngineError("no SAT engine available")
            engine = spec.create()

        self._handle = Handle(engine)
        self._clauses = ClauseBuilder(self._handle)
        self._state = SolverState.CONFIGURING
        self._variables: Set[int] = set()
        self._assumptions: List[Literal] = []
        self._submitted_assumptions: List[int] = []
        self._num_clauses = 0
        self._view: Optional[ResultView] = None

    # -- state checks -------------------------------------------------------

    @property
    def state(self) -> SolverState:
        return self._state

    def _require_state(self, state: SolverState, action: str) -> None:
        if self._state is not state:
            raise ProtocolViolation(
                f"cannot {action} while solver is {self._state.value} "
                f"(requires {state.value})"
            )

    def _require_configuring(self, action: str) -> None:
        if self._state.solved:
            raise ProtocolViolation(
                f"cannot {action} after solve(): incremental solving is not supported"
            )
        self._require_state(SolverState.CONFIGURING, action)

    # -- configuration ------------------------------------------------------

    def add_clause(self, literals: Iterable[int]) -> None:
        """Add the disjunction of ``literals`` as a clause.

        Negative integers are negated variables. All literals are validated
        before any of them is passed to the engine.
        """
        self._require_configuring("add a clause")
        clause = [Literal(lit) for lit in literals]

        self._clauses.add_clause(clause)
        self._variables.update(lit.variable for lit in clause)
        self._num_clauses += 1
        if not clause:
            logger.debug("Empty clause added; formula is unsatisfiable")

    def add_clauses(self, clauses: Iterable[Iterable[int]]) -> None:
        for clause in clauses:
            self.add_clause(clause)

    def add_assumption(self, literal: int) -> None:
        """Assume ``literal`` for the next ``solve()`` call only."""
        self._require_configuring("add an assumption")
        lit = Literal(literal)
        if not self._handle.engine.supports_assumptions:
            raise EngineError(f"engine '{self._handle.engine.name}' does not support assumptions")
        self._assumptions.append(lit)

    def reserve(self, max_var: int) -> None:
        """Increase the maximum variable index explicitly."""
        self._require_configuring("reserve variables")
        if isinstance(max_var, bool) or not 1 <= max_var <= MAX_VARIABLE:
            raise InvalidLiteral(max_var, "max_var must be a positive variable index")
        self._handle.reserve(max_var)

    def set_limit(self, name: str, limit: int) -> None:
        """Set a search limit for the next ``solve()`` call.

        Supported names are ``"conflicts"`` and ``"decisions"``. When a limit
        is hit, ``solve()`` returns ``SolverResult.UNKNOWN``.
        """
        self._require_configuring("set a limit")
        if name not in LIMIT_NAMES:
            raise ConfigurationError("unknown limit")
        if isinstance(limit, bool) or not isinstance(limit, int) or not 0 <= limit <= MAX_LIMIT:
            raise ConfigurationError(f"limit must be an integer in [0, {MAX_LIMIT}]: {limit!r}")
        self._handle.set_limit(name, limit)

    def signature(self) -> str:
        """Return the name and version of the engine."""
        return self._handle.signature()

    # -- solving ------------------------------------------------------------

    def solve(self) -> SolverResult:
        """Solve the formula defined by the added clauses and assumptions.

        Blocks until the engine returns. ``terminate()`` from another thread
        or an exhausted limit yields ``SolverResult.UNKNOWN``.
        """
        self._require_configuring("solve")

        assumptions = self._assumptions
        self._assumptions = []
        for lit in assumptions:
            self._handle.assert_assumption(lit)
            self._variables.add(lit.variable)
        self._submitted_assumptions = [int(lit) for lit in assumptions]

        logger.debug(
            "Solving %d clauses over %d variables with %d assumptions",
            self._num_clauses, len(self._variables), len(assumptions),
        )
        start_time = time.time()
        try:
            result = SolverResult.from_code(self._handle.solve())
        except Exception:
            # The engine state is undefined after a failed search.
            self._state = SolverState.UNKNOWN
            self._view = ResultView(self, SolverResult.UNKNOWN, self._handle.engine.name,
                                    (time.time() - start_time) * 1000)
            raise
        elapsed_ms = (time.time() - start_time) * 1000

        self._state = _STATE_FOR_RESULT[result]
        self._view = ResultView(self, result, self._handle.engine.name, elapsed_ms)
        logger.info("Solve finished: %s", self._view)
        return result

    def terminate(self) -> None:
        """Request termination of a running ``solve()``.

        This is the only method that may be called from another thread.
        """
        self._handle.terminate()

    # -- queries ------------------------------------------------------------

    def value(self, literal: int) -> Optional[bool]:
        """Return the value of ``literal`` in the model.

        Requires a satisfiable result. Returns None for variables that were
        never mentioned, or that the engine left unassigned.
        """
        self._require_state(SolverState.SATISFIABLE, "query a value")
        lit = Literal(literal)
        if lit.variable not in self._variables:
            return None

        val = self._handle.value_of(lit)
        if val == int(lit):
            return True
        elif val == -int(lit):
            return False
        return None

    def failed(self, literal: int) -> bool:
        """Return True if assumption ``literal`` is part of the unsatisfiability proof."""
        self._require_state(SolverState.UNSATISFIABLE, "query failed assumptions")
        lit = Literal(literal)
        if int(lit) not in self._submitted_assumptions:
            raise ProtocolViolation(f"literal {lit} was not submitted as an assumption")
        return self._handle.failed(lit)

    def result(self) -> ResultView:
        """Return a read-only view of the last solve outcome."""
        if not self._state.solved:
            raise ProtocolViolation(f"no result available while solver is {self._state.value}")
        return self._view

    # -- introspection ------------------------------------------------------

    @property
    def num_clauses(self) -> int:
        return self._num_clauses

    @property
    def num_variables(self) -> int:
        return len(self._variables)

    @property
    def engine_name(self) -> str:
        return self._handle.engine.name

    # -- lifecycle ----------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._state is SolverState.CLOSED

    def close(self) -> None:
        """Release the engine context. Legal from any state."""
        if self._state is SolverState.CLOSED:
            return
        self._handle.close()
        self._state = SolverState.CLOSED

    def __enter__(self):
        if self._state is SolverState.CLOSED:
            raise ProtocolViolation("solver is closed")
        return self

    def __exit__(self, *_):
        self.close()

    def __copy__(self):
        raise TypeError("solvers cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("solvers cannot be copied")

    def __reduce__(self):
        raise TypeError("solvers cannot be pickled")

    def __repr__(self) -> str:
        return (
            f"Solver(engine={self.engine_name!r}, state={self._state.value}, "
            f"clauses={self._num_clauses}, variables={len(self._variables)})"
        )

"""
Safe, non-incremental front end for IPASIR-style SAT engines.

This package wraps a native solver context in an owning handle and checks
every call against the solver's state machine, so that protocol misuse
raises a Python exception instead of aborting the process.
"""

__version__ = "0.1.0"

from .errors import (
    SatError,
    InvalidLiteral,
    ProtocolViolation,
    EngineError,
    ConfigurationError,
)
from .literal import Literal
from .handle import Handle
from .clause import ClauseBuilder
from .result import SolverResult, ResultView
from .solver import Solver, SolverState
from .interrupt import terminate_after, solve_with_timeout
from .engine import (
    Engine,
    Z3Engine,
    IpasirLibrary,
    KissatLibrary,
    resolve_engine,
    pick_engine,
)

__all__ = [
    "SatError",
    "InvalidLiteral",
    "ProtocolViolation",
    "EngineError",
    "ConfigurationError",
    "Literal",
    "Handle",
    "ClauseBuilder",
    "SolverResult",
    "ResultView",
    "Solver",
    "SolverState",
    "terminate_after",
    "solve_with_timeout",
    "Engine",
    "Z3Engine",
    "IpasirLibrary",
    "KissatLibrary",
    "resolve_engine",
    "pick_engine",
]

"""Bounded-time solving on top of the engine interrupt.

``Solver.solve()`` has no timeout of its own. ``terminate_after`` arms a
timer thread that calls ``Solver.terminate()``; when it fires, the running
solve returns ``SolverResult.UNKNOWN``.

Example:
    >>> with terminate_after(sat, 5.0):
    ...     result = sat.solve()
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator
import threading

from .logging import get_logger
from .result import SolverResult
from .solver import Solver

logger = get_logger(__name__)


@contextmanager
def terminate_after(solver: Solver, timeout_s: float) -> Iterator[threading.Timer]:
    """Request termination of ``solver`` once ``timeout_s`` seconds elapse.

    The timer is cancelled when the block exits.
    """
    if timeout_s < 0:
        raise ValueError(f"timeout must be non-negative: {timeout_s}")

    def fire():
        logger.info("Timeout of %.3fs reached; terminating solver", timeout_s)
        solver.terminate()

    timer = threading.Timer(timeout_s, fire)
    timer.daemon = True
    timer.start()
    try:
        yield timer
    finally:
        timer.cancel()


def solve_with_timeout(solver: Solver, timeout_s: float) -> SolverResult:
    """Solve, returning ``SolverResult.UNKNOWN`` if ``timeout_s`` elapses first."""
    with terminate_after(solver, timeout_s):
        return solver.solve()

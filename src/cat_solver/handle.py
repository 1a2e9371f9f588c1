"""
Exclusive ownership of one native solver context.
"""
import weakref
from typing import Any

from .engine.base import Engine
from .errors import ProtocolViolation
from .literal import Literal
from .logging import get_logger

logger = get_logger(__name__)


def _release(engine: Engine, context: Any) -> None:
    logger.debug("Releasing %s context", engine.name)
    engine.release(context)


class Handle:
    """Sole owner of a native context created by ``engine.init()``.

    The context is released exactly once: on ``close()``, on context-manager
    exit, or when the handle is garbage collected, whichever happens first.
    The handle cannot be copied or pickled, and it is not safe to use from
    several threads at once; only ``terminate()`` may be called concurrently
    with a running ``solve()``.
    """

    def __init__(self, engine: Engine):
        self._engine = engine
        self._context = engine.init()
        self._finalizer = weakref.finalize(self, _release, engine, self._context)
        logger.debug("Opened %s context", engine.name)

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def closed(self) -> bool:
        return not self._finalizer.alive

    def _check_open(self) -> Any:
        if not self._finalizer.alive:
            raise ProtocolViolation("solver handle is closed")
        return self._context

    def assert_literal(self, literal: Literal) -> None:
        self._engine.add(self._check_open(), int(literal))

    def end_clause(self) -> None:
        self._engine.add(self._check_open(), 0)

    def assert_assumption(self, literal: Literal) -> None:
        self._engine.assume(self._check_open(), int(literal))

    def solve(self) -> int:
        """Run the blocking engine search and return its raw result code."""
        return self._engine.solve(self._check_open())

    def value_of(self, literal: Literal) -> int:
        return self._engine.value(self._check_open(), int(literal))

    def failed(self, literal: Literal) -> bool:
        return self._engine.failed(self._check_open(), int(literal))

    def terminate(self) -> None:
        """Ask a running solve to stop. Safe to call from another thread."""
        if self._finalizer.alive:
            self._engine.terminate(self._context)

    def signature(self) -> str:
        return self._engine.signature()

    def reserve(self, max_var: int) -> None:
        self._engine.reserve(self._check_open(), max_var)

    def set_limit(self, name: str, limit: int) -> None:
        self._engine.set_limit(self._check_open(), name, limit)

    def close(self) -> None:
        """Release the native context. Later calls are no-ops."""
        self._finalizer()

    def __enter__(self):
        self._check_open()
        return self

    def __exit__(self, *_):
        self.close()

    def __copy__(self):
        raise TypeError("solver handles cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("solver handles cannot be copied")

    def __reduce__(self):
        raise TypeError("solver handles cannot be pickled")

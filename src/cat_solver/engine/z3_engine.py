"""
Z3 engine implementation.

Each native context owns a private ``z3.Context`` so that interrupting one
solver never cancels another.
"""
import threading
from typing import Dict, List, Optional
import z3

from ..errors import ConfigurationError, EngineError
from .base import SAT, UNSAT, UNKNOWN


class Z3Context:
    """Per-solver state kept on the Python side of the z3 bindings."""

    def __init__(self):
        self.ctx = z3.Context()
        self.solver = z3.Solver(ctx=self.ctx)
        self.atoms: Dict[int, z3.BoolRef] = {}
        self.clause: List[z3.BoolRef] = []
        self.assumptions: Dict[int, z3.BoolRef] = {}
        self.model: Optional[z3.ModelRef] = None
        self.core: List[z3.BoolRef] = []
        self.terminate_requested = threading.Event()

    def atom(self, var: int) -> z3.BoolRef:
        b = self.atoms.get(var)
        if b is None:
            b = z3.Bool(f"x{var}", self.ctx)
            self.atoms[var] = b
        return b

    def lit(self, lit: int) -> z3.BoolRef:
        b = self.atom(abs(lit))
        return b if lit > 0 else z3.Not(b)


class Z3Engine:
    """Engine backed by the z3 Python bindings.

    Clauses are asserted as disjunctions of Boolean atoms named ``x<var>``,
    assumptions are passed to ``check()`` and failed assumptions are read
    from the unsat core.
    """

    name = "z3"
    supports_assumptions = True

    def signature(self) -> str:
        return f"z3-{z3.get_version_string()}"

    def init(self) -> Z3Context:
        return Z3Context()

    def add(self, context: Z3Context, lit: int) -> None:
        if lit != 0:
            context.clause.append(context.lit(lit))
            return

        lits = context.clause
        context.clause = []
        if not lits:
            context.solver.add(z3.BoolVal(False, context.ctx))
        elif len(lits) == 1:
            context.solver.add(lits[0])
        else:
            context.solver.add(z3.Or(*lits))

    def assume(self, context: Z3Context, lit: int) -> None:
        context.assumptions[lit] = context.lit(lit)

    def solve(self, context: Z3Context) -> int:
        assumptions = context.assumptions
        context.assumptions = {}
        # Best effort: a terminate() landing between this check and the start of
        # check() interrupts a context that is not searching yet, and z3 drops it.
        if context.terminate_requested.is_set():
            return UNKNOWN

        try:
            result = context.solver.check(*assumptions.values())
        except z3.Z3Exception as e:
            raise EngineError(f"z3 failed during solve: {e}") from e

        if result == z3.sat:
            context.model = context.solver.model()
            return SAT
        elif result == z3.unsat:
            core = context.solver.unsat_core()
            context.core = [
                e for e in assumptions.values() if any(e.eq(c) for c in core)
            ]
            return UNSAT
        else:
            return UNKNOWN

    def value(self, context: Z3Context, lit: int) -> int:
        var = abs(lit)
        if context.model is None or var not in context.atoms:
            return 0

        val = context.model.eval(context.atoms[var], model_completion=True)
        if z3.is_true(val):
            return var
        elif z3.is_false(val):
            return -var
        return 0

    def failed(self, context: Z3Context, lit: int) -> bool:
        expr = context.lit(lit)
        return any(expr.eq(e) for e in context.core)

    def terminate(self, context: Z3Context) -> None:
        context.terminate_requested.set()
        context.ctx.interrupt()

    def reserve(self, context: Z3Context, max_var: int) -> None:
        # z3 allocates atoms on demand
        pass

    def set_limit(self, context: Z3Context, name: str, limit: int) -> None:
        if name == "conflicts":
            context.solver.set("max_conflicts", limit)
        else:
            raise ConfigurationError(f"limit '{name}' is not supported by the z3 engine")

    def release(self, context: Z3Context) -> None:
        context.model = None
        context.core = []
        context.atoms.clear()
        context.solver = None

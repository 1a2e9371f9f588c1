"""
Pytest configuration and fixtures for cat_solver tests.
"""
import sys
import threading
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


class RecordingEngine:
    """Scripted engine that records every foreign call it receives.

    ``solve`` returns ``solve_code``; with ``block=True`` it waits until
    ``terminate`` is called and then returns 0.
    """

    name = "recording"
    supports_assumptions = True

    def __init__(self, solve_code=10, values=None, failed=(), block=False):
        self.solve_code = solve_code
        self.values = values or {}
        self.failed_lits = set(failed)
        self.block = block
        self.calls = []
        self.released = 0
        self.started = threading.Event()
        self.stop = threading.Event()

    def signature(self):
        return "recording-1.0"

    def init(self):
        self.calls.append(("init",))
        return object()

    def add(self, context, lit):
        self.calls.append(("add", lit))

    def assume(self, context, lit):
        self.calls.append(("assume", lit))

    def solve(self, context):
        self.calls.append(("solve",))
        self.started.set()
        if self.block:
            self.stop.wait(10)
            return 0
        return self.solve_code

    def value(self, context, lit):
        self.calls.append(("value", lit))
        var_value = self.values.get(abs(lit))
        if var_value is None:
            return 0
        return lit if var_value == (lit > 0) else -lit

    def failed(self, context, lit):
        self.calls.append(("failed", lit))
        return lit in self.failed_lits

    def terminate(self, context):
        self.calls.append(("terminate",))
        self.stop.set()

    def reserve(self, context, max_var):
        self.calls.append(("reserve", max_var))

    def set_limit(self, context, name, limit):
        self.calls.append(("set_limit", name, limit))

    def release(self, context):
        self.calls.append(("release",))
        self.released += 1


@pytest.fixture
def recording_engine():
    return RecordingEngine()

"""Native SAT engines.

Every engine implements the IPASIR-style call surface described by
``Engine``. The z3 engine works in-process through the z3 Python bindings;
the ctypes engines load a shared IPASIR or Kissat library.
"""

from .base import Engine, SAT, UNSAT, UNKNOWN, LIMIT_NAMES
from .ipasir import IpasirLibrary, KissatLibrary
from .registry import EngineSpec, resolve_engine, is_engine_available, pick_engine
from .z3_engine import Z3Engine

__all__ = [
    "Engine",
    "SAT",
    "UNSAT",
    "UNKNOWN",
    "LIMIT_NAMES",
    "IpasirLibrary",
    "KissatLibrary",
    "Z3Engine",
    "EngineSpec",
    "resolve_engine",
    "is_engine_available",
    "pick_engine",
]

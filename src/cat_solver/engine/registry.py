"""Resolve SAT engines by name or shared-library path.

Users can override the default engine by setting $CAT_SOLVER_ENGINE to a
known engine name or to the path of an IPASIR shared library.
"""

from __future__ import annotations

from ctypes.util import find_library
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence
import os

from ..errors import ConfigurationError
from .base import Engine
from .ipasir import IpasirLibrary, KissatLibrary
from .z3_engine import Z3Engine


@dataclass(frozen=True)
class EngineSpec:
    """Describes how to construct an engine."""

    name: str
    factory: Callable[[], Engine]
    library: Optional[str] = None

    def create(self) -> Engine:
        return self.factory()


def _kissat_spec() -> EngineSpec:
    path = find_library("kissat")
    return EngineSpec("kissat", lambda: KissatLibrary(path), library=path)


_KNOWN_ENGINES = {
    "z3": lambda: EngineSpec("z3", Z3Engine),
    "kissat": _kissat_spec,
}


def _is_path(name: str) -> bool:
    return os.path.sep in name or bool(os.path.altsep and os.path.altsep in name)


def _find_library(name: str) -> Optional[str]:
    """Look up a bare library name such as "cadical" or "libcadical.so"."""
    stem = name.split(".")[0]
    if stem.startswith("lib"):
        stem = stem[3:]
    return find_library(name) or (find_library(stem) if stem else None)


def resolve_engine(name_or_path: str) -> EngineSpec:
    """Resolve an engine name or library path to a construction spec.

    Bare names are looked up with the system library search; the spec of a
    library that cannot be found has no ``library``.
    """
    if name_or_path in _KNOWN_ENGINES:
        return _KNOWN_ENGINES[name_or_path]()

    p = Path(name_or_path)
    if not p.name:
        raise ConfigurationError(f"unknown SAT engine: {name_or_path!r}")
    library = str(p) if _is_path(name_or_path) else _find_library(p.name)
    if "kissat" in p.name:
        return EngineSpec(p.name, lambda: KissatLibrary(library), library=library)
    return EngineSpec(p.name, lambda: IpasirLibrary(library), library=library)


def is_engine_available(name_or_path: str) -> bool:
    """Return True if the engine appears usable on this system."""
    try:
        spec = resolve_engine(name_or_path)
    except ConfigurationError:
        return False

    if spec.name == "z3":
        return True
    if spec.library is None:
        return False

    # find_library returns bare sonames, which the loader resolves itself
    if _is_path(spec.library):
        return os.path.exists(spec.library)
    return True


def pick_engine(preferred: Sequence[str] = ("z3", "kissat")) -> Optional[EngineSpec]:
    """Pick the first available engine from a preference list.

    Users can override by setting $CAT_SOLVER_ENGINE.
    """
    env = os.environ.get("CAT_SOLVER_ENGINE")
    if env:
        if not is_engine_available(env):
            raise ConfigurationError(f"CAT_SOLVER_ENGINE={env!r} is not available")
        return resolve_engine(env)

    for n in preferred:
        if is_engine_available(n):
            return resolve_engine(n)

    return None

"""
Tests for engine resolution and selection.
"""
import pytest

from cat_solver import ConfigurationError
from cat_solver.engine import (
    IpasirLibrary,
    KissatLibrary,
    Z3Engine,
    is_engine_available,
    pick_engine,
    resolve_engine,
)


def test_resolve_z3():
    spec = resolve_engine("z3")
    assert spec.name == "z3"
    assert spec.library is None
    assert isinstance(spec.create(), Z3Engine)
    assert is_engine_available("z3")


def test_resolve_library_paths(monkeypatch):
    created = []
    monkeypatch.setattr(IpasirLibrary, "__init__", lambda self, path=None, lib=None: created.append(("ipasir", path)))
    monkeypatch.setattr(KissatLibrary, "__init__", lambda self, path=None, lib=None: created.append(("kissat", path)))

    spec = resolve_engine("/opt/sat/libcadical.so")
    assert spec.name == "libcadical.so"
    assert spec.library == "/opt/sat/libcadical.so"
    spec.create()

    spec = resolve_engine("/opt/sat/libkissat.so")
    spec.create()

    assert created == [
        ("ipasir", "/opt/sat/libcadical.so"),
        ("kissat", "/opt/sat/libkissat.so"),
    ]


def test_missing_library_unavailable(tmp_path):
    assert not is_engine_available(str(tmp_path / "libmissing.so"))
    lib = tmp_path / "libipasir.so"
    lib.write_bytes(b"")
    assert is_engine_available(str(lib))


def test_pick_engine_default(monkeypatch):
    monkeypatch.delenv("CAT_SOLVER_ENGINE", raising=False)
    spec = pick_engine()
    assert spec is not None
    assert spec.name == "z3"


def test_pick_engine_preference(monkeypatch, tmp_path):
    monkeypatch.delenv("CAT_SOLVER_ENGINE", raising=False)
    missing = str(tmp_path / "libnone.so")
    assert pick_engine(preferred=(missing,)) is None
    assert pick_engine(preferred=(missing, "z3")).name == "z3"


def test_pick_engine_env_override(monkeypatch, tmp_path):
    """Test that $CAT_SOLVER_ENGINE overrides the preference list."""
    lib = tmp_path / "libipasir.so"
    lib.write_bytes(b"")
    monkeypatch.setenv("CAT_SOLVER_ENGINE", str(lib))
    spec = pick_engine(preferred=("z3",))
    assert spec.library == str(lib)

    monkeypatch.setenv("CAT_SOLVER_ENGINE", str(tmp_path / "libmissing.so"))
    with pytest.raises(ConfigurationError):
        pick_engine()


def test_unknown_bare_name_unavailable(monkeypatch):
    """Test that a bare name the library search cannot find is not available."""
    monkeypatch.setattr("cat_solver.engine.registry.find_library", lambda name: None)
    assert resolve_engine("no-such-sat-lib").library is None
    assert not is_engine_available("no-such-sat-lib")

    monkeypatch.setenv("CAT_SOLVER_ENGINE", "no-such-sat-lib")
    with pytest.raises(ConfigurationError):
        pick_engine()


def test_bare_name_found_by_library_search(monkeypatch):
    found = {"cadical": "libcadical.so.1"}
    monkeypatch.setattr("cat_solver.engine.registry.find_library", found.get)

    spec = resolve_engine("cadical")
    assert spec.library == "libcadical.so.1"
    assert is_engine_available("cadical")

    # "libcadical.so" is searched under its stem as well
    assert resolve_engine("libcadical.so").library == "libcadical.so.1"

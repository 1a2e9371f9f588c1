"""
Tests for the ctypes bindings, with the shared library mocked out.
"""
from ctypes import c_int, c_int32, c_void_p
from unittest.mock import MagicMock

import pytest

from cat_solver import Solver, SolverResult, EngineError, ConfigurationError
from cat_solver.engine import IpasirLibrary, KissatLibrary


def make_ipasir_lib():
    lib = MagicMock()
    lib.ipasir_signature.return_value = b"minisat-2.2.0"
    lib.ipasir_init.return_value = 0x1234
    lib.ipasir_solve.return_value = 10
    lib.ipasir_val.side_effect = lambda ptr, lit: lit
    lib.ipasir_failed.return_value = 0
    return lib


def make_kissat_lib():
    lib = MagicMock()
    lib.kissat_signature.return_value = b"kissat-3.1.0"
    lib.kissat_init.return_value = 0x5678
    lib.kissat_solve.return_value = 20
    return lib


def test_ipasir_function_types():
    lib = make_ipasir_lib()
    IpasirLibrary(lib=lib)
    assert lib.ipasir_init.restype is c_void_p
    assert lib.ipasir_add.argtypes == [c_void_p, c_int32]
    assert lib.ipasir_solve.restype is c_int
    assert lib.ipasir_val.restype is c_int32


def test_ipasir_solver_calls():
    """Test that the solver drives the IPASIR symbols in protocol order."""
    lib = make_ipasir_lib()
    engine = IpasirLibrary(lib=lib)

    with Solver(engine) as sat:
        assert sat.signature() == "minisat-2.2.0"
        sat.add_clause([1, -2])
        sat.add_assumption(2)
        assert sat.solve() is SolverResult.SATISFIABLE
        assert sat.value(1) is True

    lib.ipasir_set_terminate.assert_called_once()
    assert [c.args for c in lib.ipasir_add.call_args_list] == [
        (0x1234, 1), (0x1234, -2), (0x1234, 0),
    ]
    lib.ipasir_assume.assert_called_once_with(0x1234, 2)
    lib.ipasir_solve.assert_called_once_with(0x1234)
    lib.ipasir_release.assert_called_once_with(0x1234)


def test_ipasir_terminate_callback():
    """Test that the installed terminate callback reports the request flag."""
    lib = make_ipasir_lib()
    engine = IpasirLibrary(lib=lib)
    ctx = engine.init()

    callback = lib.ipasir_set_terminate.call_args.args[2]
    assert callback(None) == 0
    engine.terminate(ctx)
    assert callback(None) == 1
    engine.release(ctx)


def test_ipasir_null_solver():
    lib = make_ipasir_lib()
    lib.ipasir_init.return_value = None
    with pytest.raises(EngineError):
        Solver(IpasirLibrary(lib=lib))


def test_ipasir_no_limits():
    lib = make_ipasir_lib()
    sat = Solver(IpasirLibrary(lib=lib))
    with pytest.raises(ConfigurationError):
        sat.set_limit("conflicts", 10)
    sat.close()


def test_kissat_solver_calls():
    lib = make_kissat_lib()
    with Solver(KissatLibrary(lib=lib)) as sat:
        assert sat.signature().startswith("kissat-")
        sat.reserve(4)
        sat.set_limit("conflicts", 100)
        sat.set_limit("decisions", 200)
        sat.add_clause([1, 2])
        with pytest.raises(EngineError):
            sat.add_assumption(1)
        assert sat.solve() is SolverResult.UNSATISFIABLE
        sat.terminate()

    lib.kissat_reserve.assert_called_once_with(0x5678, 4)
    lib.kissat_set_conflict_limit.assert_called_once_with(0x5678, 100)
    lib.kissat_set_decision_limit.assert_called_once_with(0x5678, 200)
    lib.kissat_terminate.assert_called_once_with(0x5678)
    lib.kissat_release.assert_called_once_with(0x5678)
    lib.kissat_assume.assert_not_called()


def test_missing_library():
    with pytest.raises(EngineError):
        IpasirLibrary("/nonexistent/libipasir.so")
    with pytest.raises(EngineError):
        KissatLibrary()

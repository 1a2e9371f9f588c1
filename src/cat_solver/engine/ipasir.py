"""
ctypes bindings to native IPASIR and Kissat shared libraries.
"""
from ctypes import CDLL, CFUNCTYPE, c_char_p, c_int, c_int32, c_uint, c_void_p
from typing import Any, Optional
import threading

from ..errors import ConfigurationError, EngineError
from ..logging import get_logger

logger = get_logger(__name__)

TERMINATE_CALLBACK = CFUNCTYPE(c_int, c_void_p)


def _load(path: Optional[str], lib: Any) -> Any:
    if lib is not None:
        return lib
    if path is None:
        raise EngineError("no shared library given")
    try:
        lib = CDLL(path)
    except OSError as e:
        raise EngineError(f"cannot load SAT library '{path}': {e}") from e
    logger.debug("Loaded shared SAT library %s", path)
    return lib


class NativeContext:
    """Pointer to a native solver plus the Python objects it must keep alive."""

    def __init__(self, ptr: int):
        self.ptr = ptr
        self.terminate_requested = threading.Event()
        self.callback = None


class IpasirLibrary:
    """Engine over a shared library exporting the standard ``ipasir_*`` API."""

    name = "ipasir"
    supports_assumptions = True

    def __init__(self, path: Optional[str] = None, lib: Any = None):
        self.path = path
        self.lib = lib = _load(path, lib)

        lib.ipasir_signature.argtypes = []
        lib.ipasir_signature.restype = c_char_p

        lib.ipasir_init.argtypes = []
        lib.ipasir_init.restype = c_void_p

        lib.ipasir_release.argtypes = [c_void_p]
        lib.ipasir_release.restype = None

        lib.ipasir_add.argtypes = [c_void_p, c_int32]
        lib.ipasir_add.restype = None

        lib.ipasir_assume.argtypes = [c_void_p, c_int32]
        lib.ipasir_assume.restype = None

        lib.ipasir_solve.argtypes = [c_void_p]
        lib.ipasir_solve.restype = c_int

        lib.ipasir_val.argtypes = [c_void_p, c_int32]
        lib.ipasir_val.restype = c_int32

        lib.ipasir_failed.argtypes = [c_void_p, c_int32]
        lib.ipasir_failed.restype = c_int

        lib.ipasir_set_terminate.argtypes = [c_void_p, c_void_p, TERMINATE_CALLBACK]
        lib.ipasir_set_terminate.restype = None

    def signature(self) -> str:
        sig = self.lib.ipasir_signature()
        return sig.decode("utf-8", "replace") if sig else "invalid"

    def init(self) -> NativeContext:
        ptr = self.lib.ipasir_init()
        if not ptr:
            raise EngineError("ipasir_init returned a null solver")
        context = NativeContext(ptr)

        def poll(_):
            return 1 if context.terminate_requested.is_set() else 0

        # ctypes only holds a weak reference; the context keeps the callback alive.
        context.callback = TERMINATE_CALLBACK(poll)
        self.lib.ipasir_set_terminate(ptr, None, context.callback)
        return context

    def add(self, context: NativeContext, lit: int) -> None:
        self.lib.ipasir_add(context.ptr, lit)

    def assume(self, context: NativeContext, lit: int) -> None:
        self.lib.ipasir_assume(context.ptr, lit)

    def solve(self, context: NativeContext) -> int:
        return self.lib.ipasir_solve(context.ptr)

    def value(self, context: NativeContext, lit: int) -> int:
        return self.lib.ipasir_val(context.ptr, lit)

    def failed(self, context: NativeContext, lit: int) -> bool:
        return bool(self.lib.ipasir_failed(context.ptr, lit))

    def terminate(self, context: NativeContext) -> None:
        context.terminate_requested.set()

    def reserve(self, context: NativeContext, max_var: int) -> None:
        # IPASIR has no reservation call; variables are created on first use.
        pass

    def set_limit(self, context: NativeContext, name: str, limit: int) -> None:
        raise ConfigurationError(f"limit '{name}' is not supported by IPASIR libraries")

    def release(self, context: NativeContext) -> None:
        self.lib.ipasir_release(context.ptr)
        context.ptr = None
        context.callback = None


class KissatLibrary:
    """Engine over a shared Kissat library (``kissat_*`` API).

    Kissat does not implement assumptions or incremental solving.
    """

    name = "kissat"
    supports_assumptions = False

    def __init__(self, path: Optional[str] = None, lib: Any = None):
        self.path = path
        self.lib = lib = _load(path, lib)

        lib.kissat_signature.argtypes = []
        lib.kissat_signature.restype = c_char_p

        lib.kissat_init.argtypes = []
        lib.kissat_init.restype = c_void_p

        lib.kissat_release.argtypes = [c_void_p]
        lib.kissat_release.restype = None

        lib.kissat_add.argtypes = [c_void_p, c_int]
        lib.kissat_add.restype = None

        lib.kissat_solve.argtypes = [c_void_p]
        lib.kissat_solve.restype = c_int

        lib.kissat_value.argtypes = [c_void_p, c_int]
        lib.kissat_value.restype = c_int

        lib.kissat_terminate.argtypes = [c_void_p]
        lib.kissat_terminate.restype = None

        lib.kissat_reserve.argtypes = [c_void_p, c_int]
        lib.kissat_reserve.restype = None

        lib.kissat_set_conflict_limit.argtypes = [c_void_p, c_uint]
        lib.kissat_set_conflict_limit.restype = None

        lib.kissat_set_decision_limit.argtypes = [c_void_p, c_uint]
        lib.kissat_set_decision_limit.restype = None

    def signature(self) -> str:
        sig = self.lib.kissat_signature()
        return sig.decode("utf-8", "replace") if sig else "invalid"

    def init(self) -> NativeContext:
        ptr = self.lib.kissat_init()
        if not ptr:
            raise EngineError("kissat_init returned a null solver")
        return NativeContext(ptr)

    def add(self, context: NativeContext, lit: int) -> None:
        self.lib.kissat_add(context.ptr, lit)

    def assume(self, context: NativeContext, lit: int) -> None:
        raise EngineError("kissat does not support assumptions")

    def solve(self, context: NativeContext) -> int:
        return self.lib.kissat_solve(context.ptr)

    def value(self, context: NativeContext, lit: int) -> int:
        return self.lib.kissat_value(context.ptr, lit)

    def failed(self, context: NativeContext, lit: int) -> bool:
        raise EngineError("kissat does not support assumptions")

    def terminate(self, context: NativeContext) -> None:
        context.terminate_requested.set()
        self.lib.kissat_terminate(context.ptr)

    def reserve(self, context: NativeContext, max_var: int) -> None:
        self.lib.kissat_reserve(context.ptr, max_var)

    def set_limit(self, context: NativeContext, name: str, limit: int) -> None:
        if name == "conflicts":
            self.lib.kissat_set_conflict_limit(context.ptr, limit)
        elif name == "decisions":
            self.lib.kissat_set_decision_limit(context.ptr, limit)
        else:
            raise ConfigurationError("unknown limit")

    def release(self, context: NativeContext) -> None:
        self.lib.kissat_release(context.ptr)
        context.ptr = None

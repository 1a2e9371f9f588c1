"""
Exception types raised by the solver wrapper.
"""


class SatError(Exception):
    """Base exception for all cat_solver errors."""
    pass


class InvalidLiteral(SatError, ValueError):
    """Raised when a value cannot be used as a literal (zero or out of range)."""

    def __init__(self, value, reason: str = "literal must be a non-zero integer"):
        self.value = value
        super().__init__(f"{reason}: {value!r}")


class ProtocolViolation(SatError):
    """Raised when an operation is invoked outside its legal solver state.

    The check happens before any engine call, so the native context is
    never driven out of sequence.
    """
    pass


class EngineError(SatError):
    """Raised when the engine is unavailable, lacks a capability, or
    returns a code outside the IPASIR convention."""
    pass


class ConfigurationError(SatError, ValueError):
    """Raised for unknown limits, bad limit values and unknown engines."""
    pass

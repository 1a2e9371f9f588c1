"""
Literal value type.

Literals follow the DIMACS convention: the magnitude is a 1-based variable
index and the sign is the polarity. Zero terminates clauses on the native
side and is never a literal.
"""
import operator
from typing import Any

from .errors import InvalidLiteral

# Native engines take a 32-bit C int; INT_MIN has no negation.
MAX_VARIABLE = 2**31 - 1


class Literal:
    """A validated, immutable, non-zero signed integer."""

    __slots__ = ("_value",)

    def __init__(self, value: Any):
        if isinstance(value, Literal):
            value = value._value
        elif isinstance(value, bool):
            raise TypeError(f"literal must be an integer, not bool: {value!r}")
        else:
            value = operator.index(value)

        if value == 0:
            raise InvalidLiteral(value)
        if abs(value) > MAX_VARIABLE:
            raise InvalidLiteral(value, f"literal magnitude exceeds {MAX_VARIABLE}")
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name, value):
        raise AttributeError("Literal is immutable")

    @property
    def variable(self) -> int:
        """1-based variable index."""
        return abs(self._value)

    @property
    def positive(self) -> bool:
        return self._value > 0

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __neg__(self) -> "Literal":
        return Literal(-self._value)

    def __eq__(self, other) -> bool:
        if isinstance(other, Literal):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"Literal({self._value})"

    def __str__(self) -> str:
        return str(self._value)

"""Checked integer wrapper for arithmetic on ledger amounts.

Ledger balances are unsigned 64-bit; reserve products are unsigned
128-bit. SafeInt keeps Python's unbounded ints for intermediate values
and makes the unsafe cases explicit:
- Division by zero raises DivisionByZero
- Subtraction below zero raises Underflow
- Values outside u64/u128 raise ArithmeticOverflow on conversion

Usage pattern:
    from cpamm.safe_int import S

    fee = (S(amount) * S(fee_bps)) // S(FEE_DENOMINATOR)
    taxed = (S(amount) - fee).to_u64()
"""

from __future__ import annotations

from cpamm.constants import U64_MAX, U128_MAX
from cpamm.errors import ArithmeticOverflow, DivisionByZero


class Underflow(ArithmeticOverflow):
    """Subtraction would produce a negative amount."""

    message = "Arithmetic underflow"


class SafeInt:
    """Integer with checked arithmetic operations.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    def __radd__(self, other: int) -> SafeInt:
        return SafeInt(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"{self._value} - {other_val}")
        return SafeInt(result)

    def __rsub__(self, other: int) -> SafeInt:
        result = other - self._value
        if result < 0:
            raise Underflow(f"{other} - {self._value}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __rmul__(self, other: int) -> SafeInt:
        return SafeInt(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"{self._value} // 0")
        return SafeInt(self._value // other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def min(self, other: SafeInt | int) -> SafeInt:
        """Return minimum of self and other."""
        return SafeInt(min(self._value, _extract_value(other)))

    def to_u64(self) -> int:
        """Convert to int, validating u64 bounds.

        Raises:
            ArithmeticOverflow: If value is negative or exceeds 2^64-1
        """
        return _check_bounds(self._value, U64_MAX, "u64")

    def to_u128(self) -> int:
        """Convert to int, validating u128 bounds.

        Raises:
            ArithmeticOverflow: If value is negative or exceeds 2^128-1
        """
        return _check_bounds(self._value, U128_MAX, "u128")


def _check_bounds(value: int, upper: int, name: str) -> int:
    if value < 0:
        raise ArithmeticOverflow(f"negative value cannot be {name}: {value}")
    if value > upper:
        raise ArithmeticOverflow(f"value exceeds {name} max: {value}")
    return value


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt

__all__ = ["SafeInt", "S", "Underflow"]

"""U128F64 fixed-point math.

Values are unsigned binary fixed-point numbers with 128 integer bits and
64 fractional bits, stored as an int raw value scaled by 2^64. The
integer part holds the product of any two u64 amounts, so reserve
products and share sizing never overflow on valid ledger input.

Every operation is checked: a result outside [0, 2^192) raises
ArithmeticOverflow and a zero divisor raises DivisionByZero. Rounding is
always toward zero, so no operation can create value out of nothing.
"""

from __future__ import annotations

from math import isqrt
from typing import ClassVar

from cpamm.errors import ArithmeticOverflow, DivisionByZero

__all__ = [
    "FixedPoint",
    "FRAC_BITS",
    "INT_BITS",
    "ONE",
    "RAW_MAX",
]

FRAC_BITS = 64
INT_BITS = 128

ONE = 1 << FRAC_BITS
RAW_MAX = (1 << (INT_BITS + FRAC_BITS)) - 1


def _checked(raw: int, op: str) -> int:
    if raw < 0:
        raise ArithmeticOverflow(f"{op} result is negative")
    if raw > RAW_MAX:
        raise ArithmeticOverflow(f"{op} result exceeds U128F64 range")
    return raw


class FixedPoint:
    """U128F64 fixed-point number stored as int.

    Example: 1.5 is stored as 3 << 63
    """

    ONE: ClassVar[int] = ONE

    __slots__ = ("raw",)
    __hash__ = None  # type: ignore[assignment]  # Unhashable since we define __eq__

    def __init__(self, raw: int) -> None:
        """Create FixedPoint from a raw scaled value."""
        self.raw = _checked(raw, "construct")

    @classmethod
    def from_int(cls, n: int) -> FixedPoint:
        """Create from an integer amount (scaled by 2^64)."""
        if n < 0 or n >= 1 << INT_BITS:
            raise ArithmeticOverflow(f"{n} does not fit in {INT_BITS} integer bits")
        return cls(n << FRAC_BITS)

    def to_int(self) -> int:
        """Integer part, truncated toward zero."""
        return self.raw >> FRAC_BITS

    def to_u64(self) -> int:
        """Integer part as a u64 ledger amount."""
        value = self.to_int()
        if value >= 1 << 64:
            raise ArithmeticOverflow(f"{value} exceeds u64")
        return value

    def add(self, other: FixedPoint) -> FixedPoint:
        return FixedPoint(_checked(self.raw + other.raw, "add"))

    def sub(self, other: FixedPoint) -> FixedPoint:
        return FixedPoint(_checked(self.raw - other.raw, "sub"))

    def mul(self, other: FixedPoint) -> FixedPoint:
        """Multiply with truncation: (a * b) >> 64"""
        return FixedPoint(_checked((self.raw * other.raw) >> FRAC_BITS, "mul"))

    def div(self, other: FixedPoint) -> FixedPoint:
        """Divide with truncation: (a << 64) // b"""
        if other.raw == 0:
            raise DivisionByZero(f"{self} / 0")
        return FixedPoint(_checked((self.raw << FRAC_BITS) // other.raw, "div"))

    def sqrt(self) -> FixedPoint:
        """Square root with truncation.

        For raw r the real value is r / 2^64, so the root's raw value is
        sqrt(r * 2^64).
        """
        return FixedPoint(isqrt(self.raw << FRAC_BITS))

    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __truediv__ = div

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedPoint):
            return NotImplemented
        return self.raw == other.raw

    def __lt__(self, other: FixedPoint) -> bool:
        return self.raw < other.raw

    def __le__(self, other: FixedPoint) -> bool:
        return self.raw <= other.raw

    def __gt__(self, other: FixedPoint) -> bool:
        return self.raw > other.raw

    def __ge__(self, other: FixedPoint) -> bool:
        return self.raw >= other.raw

    def __repr__(self) -> str:
        return f"FixedPoint({self.raw})"

    def __str__(self) -> str:
        # Exact: 2^64 has 64 decimal places
        whole = self.raw >> FRAC_BITS
        frac = self.raw & (ONE - 1)
        if frac == 0:
            return str(whole)
        digits = str(frac * 10**FRAC_BITS // ONE).rjust(FRAC_BITS, "0").rstrip("0")
        return f"{whole}.{digits}"

"""Signed binary fixed-point numbers with 80 integer and 48 fractional bits.

Every rate, ratio and intermediate value of the rate model is carried as a
``FixedPoint``. The raw representation is a Python ``int`` scaled by
``2**48`` and bounded to a signed 128-bit range, so results are
deterministic and independent of float rounding.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext
from fractions import Fraction
from typing import ClassVar

from src.protocol.errors import FixedPointDivisionByZero, FixedPointOverflow

FRAC_BITS = 48
TOTAL_BITS = 128

_ONE_RAW = 1 << FRAC_BITS
_MIN_RAW = -(1 << (TOTAL_BITS - 1))
_MAX_RAW = (1 << (TOTAL_BITS - 1)) - 1

# Enough significant digits to print any raw value exactly
_DECIMAL_PRECISION = 100


def _check_range(raw: int) -> int:
    if raw < _MIN_RAW or raw > _MAX_RAW:
        raise FixedPointOverflow(f"value out of fixed-point range (raw={raw})")
    return raw


@dataclass(frozen=True, order=True)
class FixedPoint:
    """Immutable I80F48-style fixed-point value."""

    raw: int

    ZERO: ClassVar[FixedPoint]
    ONE: ClassVar[FixedPoint]
    MAX: ClassVar[FixedPoint]
    MIN: ClassVar[FixedPoint]

    def __post_init__(self) -> None:
        _check_range(self.raw)

    # --- construction ---

    @classmethod
    def from_raw(cls, raw: int) -> FixedPoint:
        return cls(raw)

    @classmethod
    def from_num(cls, value: int | float | Decimal | Fraction | str | FixedPoint) -> FixedPoint:
        """Convert a number to fixed point.

        Integers convert exactly. Floats, decimals, fractions and numeric
        strings round to the nearest representable value, ties to even.

        Raises:
            FixedPointOverflow: value is infinite or out of range.
            ValueError: value is NaN or not numeric.
        """
        if isinstance(value, FixedPoint):
            return value
        if isinstance(value, bool):
            raise TypeError("bool is not a numeric fixed-point input")
        if isinstance(value, int):
            return cls(value << FRAC_BITS)
        try:
            exact = Fraction(value)
        except OverflowError as exc:
            raise FixedPointOverflow(f"cannot represent {value!r}") from exc
        return cls(round(exact * _ONE_RAW))

    # --- conversion ---

    def to_float(self) -> float:
        return self.raw / _ONE_RAW

    def to_decimal(self) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = _DECIMAL_PRECISION
            return Decimal(self.raw) / Decimal(_ONE_RAW)

    def __float__(self) -> float:
        return self.to_float()

    def __str__(self) -> str:
        return str(self.to_decimal())

    def __repr__(self) -> str:
        return f"FixedPoint({self})"

    def __format__(self, spec: str) -> str:
        return format(self.to_decimal(), spec)

    # --- arithmetic ---

    @staticmethod
    def _coerce(other: object) -> FixedPoint | None:
        if isinstance(other, FixedPoint):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return FixedPoint.from_num(other)
        return None

    def __add__(self, other: object) -> FixedPoint:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return FixedPoint(self.raw + rhs.raw)

    __radd__ = __add__

    def __sub__(self, other: object) -> FixedPoint:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return FixedPoint(self.raw - rhs.raw)

    def __rsub__(self, other: object) -> FixedPoint:
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def __mul__(self, other: object) -> FixedPoint:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        # Arithmetic shift rounds toward negative infinity
        return FixedPoint((self.raw * rhs.raw) >> FRAC_BITS)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> FixedPoint:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        if rhs.raw == 0:
            raise FixedPointDivisionByZero("fixed-point division by zero")
        numerator = self.raw << FRAC_BITS
        quotient = abs(numerator) // abs(rhs.raw)
        if (numerator < 0) != (rhs.raw < 0):
            quotient = -quotient
        return FixedPoint(quotient)

    def __rtruediv__(self, other: object) -> FixedPoint:
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs / self

    def __neg__(self) -> FixedPoint:
        return FixedPoint(-self.raw)

    def __abs__(self) -> FixedPoint:
        return FixedPoint(abs(self.raw))

    def __bool__(self) -> bool:
        return self.raw != 0

    # --- ordering helpers ---

    def min(self, other: FixedPoint) -> FixedPoint:
        return other if other < self else self

    def max(self, other: FixedPoint) -> FixedPoint:
        return other if other > self else self

    def clamp(self, lo: FixedPoint, hi: FixedPoint) -> FixedPoint:
        """Bound to ``[lo, hi]``; ``hi`` wins when the bounds are inverted."""
        return self.max(lo).min(hi)

    def is_negative(self) -> bool:
        return self.raw < 0


FixedPoint.ZERO = FixedPoint(0)
FixedPoint.ONE = FixedPoint(_ONE_RAW)
FixedPoint.MAX = FixedPoint(_MAX_RAW)
FixedPoint.MIN = FixedPoint(_MIN_RAW)

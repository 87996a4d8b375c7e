import math
import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Any, Optional, Union

from monetary.domain.exceptions.currency import InvalidFormatError
from monetary.domain.exceptions.numeric import (
    ConversionError,
    DecimalOverflowError,
    DivisionByZeroError,
    PrecisionLossError,
    RoundingNecessaryError,
)

from .rounding_mode import RoundingMode

UNSCALED_MAX = 2**127 - 1
UNSCALED_MIN = -(2**127)
SCALE_MAX = 2**31 - 1
SCALE_MIN = -(2**31)

# Extra digits carried by division so that the final rounding decision is exact.
DIVISION_GUARD_DIGITS = 10

_PLAIN_NUMBER = re.compile(r"^(-)?([0-9]+)(?:\.([0-9]+))?$")
_SCIENTIFIC_NUMBER = re.compile(r"^(-?[0-9]+(?:\.[0-9]+)?)[eE]([+-]?[0-9]+)$")


def _split_toward_zero(value: int, factor: int) -> tuple[int, int]:
    quotient = abs(value) // factor
    if value < 0:
        quotient = -quotient

    return quotient, value - quotient * factor


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _round_unscaled(
    unscaled: int, scale: int, target_scale: int, mode: RoundingMode
) -> int:
    if target_scale >= scale:
        return unscaled * 10 ** (target_scale - scale)

    factor = 10 ** (scale - target_scale)
    quotient, remainder = _split_toward_zero(unscaled, factor)

    if remainder == 0:
        return quotient

    half = factor // 2
    magnitude = abs(remainder)
    direction = _sign(remainder)

    if mode is RoundingMode.UP:
        return quotient + direction
    if mode is RoundingMode.DOWN:
        return quotient
    if mode is RoundingMode.CEILING:
        return quotient + 1 if remainder > 0 else quotient
    if mode is RoundingMode.FLOOR:
        return quotient - 1 if remainder < 0 else quotient
    if mode is RoundingMode.HALF_UP:
        return quotient + direction if magnitude >= half else quotient
    if mode is RoundingMode.HALF_DOWN:
        return quotient + direction if magnitude > half else quotient
    if mode is RoundingMode.HALF_EVEN:
        if magnitude > half or (magnitude == half and quotient % 2 != 0):
            return quotient + direction
        return quotient

    raise RoundingNecessaryError(f"{unscaled}E-{scale}", target_scale)


def _checked(unscaled: int, operation: str) -> int:
    if unscaled > UNSCALED_MAX or unscaled < UNSCALED_MIN:
        raise DecimalOverflowError(operation)

    return unscaled


@total_ordering
@dataclass(frozen=True, eq=False)
class FixedDecimal:
    """
    Exact signed decimal stored as ``unscaled * 10 ** -scale``.

    The unscaled value is bounded to the signed 128-bit range and the scale to
    the signed 32-bit range. A negative scale multiplies the unscaled value.
    Instances are immutable; every operation returns a new decimal.
    """

    unscaled: int = 0
    scale: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.unscaled, bool) or not isinstance(self.unscaled, int):
            raise TypeError(f"Unscaled value must be an int: {self.unscaled!r}")
        if isinstance(self.scale, bool) or not isinstance(self.scale, int):
            raise TypeError(f"Scale must be an int: {self.scale!r}")
        if self.scale > SCALE_MAX or self.scale < SCALE_MIN:
            raise DecimalOverflowError("scale adjustment")

        _checked(self.unscaled, "construction")

    @classmethod
    def zero(cls) -> "FixedDecimal":
        return cls(0, 0)

    @classmethod
    def one(cls) -> "FixedDecimal":
        return cls(1, 0)

    @classmethod
    def from_int(cls, value: int) -> "FixedDecimal":
        return cls(value, 0)

    @classmethod
    def parse(cls, text: str) -> "FixedDecimal":
        """
        Parse a plain decimal literal such as ``"-123.45"``.

        :param text: Optional leading '-', an integer part, optional '.' and fraction digits
        :return: Decimal whose scale equals the number of fraction digits

        :raises InvalidFormatError: on empty input, extra dots or non-digit characters
        """
        stripped = text.strip()

        if not stripped:
            raise InvalidFormatError("empty decimal literal", text)

        match = _PLAIN_NUMBER.match(stripped)
        if match is None:
            raise InvalidFormatError("not a decimal literal", text)

        negative, integer_part, fraction_part = match.groups()
        fraction_part = fraction_part or ""

        unscaled = int(integer_part + fraction_part)
        if negative:
            unscaled = -unscaled

        return cls(unscaled, len(fraction_part))

    @classmethod
    def from_float(cls, value: Any) -> "FixedDecimal":
        """
        Build a decimal from a binary float through its shortest decimal text.

        Going through the text avoids carrying binary artifacts over
        (``0.1`` becomes exactly ``0.1``).

        :raises ConversionError: for NaN, infinities, or values beyond the 128-bit range
        """
        if not math.isfinite(float(value)):
            raise ConversionError(value, "FixedDecimal", reason="value is not finite")

        text = str(value)

        try:
            scientific = _SCIENTIFIC_NUMBER.match(text)
            if scientific is None:
                return cls.parse(text)

            mantissa = cls.parse(scientific.group(1))
            exponent = int(scientific.group(2))
            shifted = cls(mantissa.unscaled, mantissa.scale - exponent)

            if shifted.scale < 0:
                return shifted.rescale(0)
            return shifted

        except (InvalidFormatError, DecimalOverflowError) as e:
            raise ConversionError(value, "FixedDecimal", reason=str(e)) from e

    def rescale(
        self, target_scale: int, mode: RoundingMode = RoundingMode.HALF_EVEN
    ) -> "FixedDecimal":
        """
        Bring the decimal to another scale.

        Increasing the scale is exact. Decreasing it splits the unscaled value into
        a quotient and a remainder (truncated toward zero) and lets ``mode`` decide
        how the quotient is adjusted.

        :raises RoundingNecessaryError: if mode is UNNECESSARY and digits would be lost
        :raises DecimalOverflowError: if the result leaves the 128-bit range
        """
        if target_scale == self.scale:
            return self

        unscaled = _round_unscaled(self.unscaled, self.scale, target_scale, mode)

        return FixedDecimal(_checked(unscaled, "rescale"), target_scale)

    def add(self, other: "FixedDecimal") -> "FixedDecimal":
        scale = max(self.scale, other.scale)
        left, right = self._aligned(other, scale)

        return FixedDecimal(_checked(left + right, "addition"), scale)

    def subtract(self, other: "FixedDecimal") -> "FixedDecimal":
        scale = max(self.scale, other.scale)
        left, right = self._aligned(other, scale)

        return FixedDecimal(_checked(left - right, "subtraction"), scale)

    def multiply(
        self,
        other: "FixedDecimal",
        target_scale: Optional[int] = None,
        mode: RoundingMode = RoundingMode.HALF_EVEN,
    ) -> "FixedDecimal":
        """
        Multiply two decimals.

        The exact product has scale ``s1 + s2``; it is returned as is when no
        target scale is given, otherwise it is rescaled with ``mode``.
        """
        product_scale = self.scale + other.scale
        product = self.unscaled * other.unscaled

        if target_scale is None:
            return FixedDecimal(_checked(product, "multiplication"), product_scale)

        unscaled = _round_unscaled(product, product_scale, target_scale, mode)

        return FixedDecimal(_checked(unscaled, "multiplication"), target_scale)

    def divide(
        self,
        other: "FixedDecimal",
        target_scale: int,
        mode: RoundingMode = RoundingMode.HALF_EVEN,
    ) -> "FixedDecimal":
        """
        Divide by another decimal and round the quotient to ``target_scale``.

        The dividend is widened so that the integer quotient carries
        DIVISION_GUARD_DIGITS digits past the target scale, plus one sticky digit
        recording whether the division was inexact.

        :raises DivisionByZeroError: if the divisor is zero
        """
        if other.unscaled == 0:
            raise DivisionByZeroError(self)

        natural_scale = self.scale - other.scale
        extra = max(0, target_scale + DIVISION_GUARD_DIGITS - natural_scale)

        quotient, remainder = divmod(abs(self.unscaled) * 10**extra, abs(other.unscaled))
        digits = quotient * 10 + (1 if remainder else 0)

        sign = -1 if (self.unscaled < 0) != (other.unscaled < 0) else 1

        unscaled = _round_unscaled(
            sign * digits, natural_scale + extra + 1, target_scale, mode
        )

        return FixedDecimal(_checked(unscaled, "division"), target_scale)

    def negate(self) -> "FixedDecimal":
        return FixedDecimal(_checked(-self.unscaled, "negation"), self.scale)

    def abs(self) -> "FixedDecimal":
        if self.unscaled >= 0:
            return self
        return self.negate()

    def signum(self) -> int:
        return _sign(self.unscaled)

    def is_zero(self) -> bool:
        return self.unscaled == 0

    def is_positive(self) -> bool:
        return self.unscaled > 0

    def is_negative(self) -> bool:
        return self.unscaled < 0

    def to_float(self) -> float:
        """
        :raises PrecisionLossError: if the magnitude exceeds the float64 range
        """
        try:
            if self.scale >= 0:
                return self.unscaled / 10**self.scale
            return float(self.unscaled * 10 ** (-self.scale))
        except OverflowError as e:
            raise PrecisionLossError(self, "float64") from e

    def normalized(self) -> "FixedDecimal":
        """Drop trailing zeros of the unscaled value (``1.2300`` -> ``1.23``)."""
        if self.unscaled == 0:
            return FixedDecimal(0, 0)

        unscaled, scale = self.unscaled, self.scale
        while unscaled % 10 == 0:
            unscaled //= 10
            scale -= 1

        return FixedDecimal(unscaled, scale)

    def _aligned(self, other: "FixedDecimal", scale: int) -> tuple[int, int]:
        left = self.unscaled * 10 ** (scale - self.scale)
        right = other.unscaled * 10 ** (scale - other.scale)

        return left, right

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FixedDecimal):
            return NotImplemented

        left, right = self._aligned(other, max(self.scale, other.scale))
        return left == right

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, FixedDecimal):
            return NotImplemented

        left, right = self._aligned(other, max(self.scale, other.scale))
        return left < right

    def __hash__(self) -> int:
        normalized = self.normalized()
        return hash((normalized.unscaled, normalized.scale))

    @staticmethod
    def _operand(other: Any) -> Optional["FixedDecimal"]:
        # Plain ints take part in operators; bools and floats do not.
        if isinstance(other, FixedDecimal):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return FixedDecimal.from_int(other)
        return None

    def __add__(self, other: Union["FixedDecimal", int]) -> "FixedDecimal":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.add(operand)

    __radd__ = __add__

    def __sub__(self, other: Union["FixedDecimal", int]) -> "FixedDecimal":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.subtract(operand)

    def __rsub__(self, other: int) -> "FixedDecimal":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return operand.subtract(self)

    def __mul__(self, other: Union["FixedDecimal", int]) -> "FixedDecimal":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.multiply(operand)

    __rmul__ = __mul__

    def __neg__(self) -> "FixedDecimal":
        return self.negate()

    def __abs__(self) -> "FixedDecimal":
        return self.abs()

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __str__(self) -> str:
        if self.scale == 0:
            return str(self.unscaled)

        if self.scale < 0:
            return str(self.unscaled * 10 ** (-self.scale))

        sign = "-" if self.unscaled < 0 else ""
        integer_part, fraction_part = divmod(abs(self.unscaled), 10**self.scale)

        return f"{sign}{integer_part}.{fraction_part:0{self.scale}d}"

    def __repr__(self) -> str:
        return f"FixedDecimal('{self}')"

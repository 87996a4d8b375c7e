import math
from abc import ABC, abstractmethod
from typing import Any, Union

import numpy as np

from monetary.domain.exceptions.numeric import ConversionError, PrecisionLossError
from monetary.domain.values.fixed_decimal import FixedDecimal
from monetary.domain.values.monetary_context import MonetaryContext

Amount = Union[FixedDecimal, float, np.float32]


def _require_finite(value: Any, target: str) -> None:
    if not math.isfinite(float(value)):
        raise ConversionError(value, target, reason="value is not finite")


def _narrow_to_float32(value: float, source: Any) -> np.float32:
    with np.errstate(over="ignore"):
        narrowed = np.float32(value)

    if np.isinf(narrowed):
        raise PrecisionLossError(source, "float32")

    return narrowed


class Numeric(ABC):
    """
    Capability bundle for one backing type of a monetary amount.

    Values themselves are plain FixedDecimal / float / numpy.float32 objects;
    the bundle supplies zero, arithmetic, context rounding and the fallible
    conversions between backing types.
    """

    name: str = "numeric"

    @abstractmethod
    def accepts(self, value: Any) -> bool:
        raise NotImplementedError()

    @abstractmethod
    def coerce(self, value: Any) -> Amount:
        """Accept a value of this type, or an int, as an amount of this type."""
        raise NotImplementedError()

    @abstractmethod
    def zero(self) -> Amount:
        raise NotImplementedError()

    @abstractmethod
    def divide(self, left: Amount, right: Amount, context: MonetaryContext) -> Amount:
        raise NotImplementedError()

    @abstractmethod
    def from_decimal(self, value: FixedDecimal) -> Amount:
        raise NotImplementedError()

    @abstractmethod
    def to_decimal(self, value: Amount) -> FixedDecimal:
        raise NotImplementedError()

    @abstractmethod
    def from_float64(self, value: float) -> Amount:
        raise NotImplementedError()

    @abstractmethod
    def to_float64(self, value: Amount) -> float:
        raise NotImplementedError()

    @abstractmethod
    def from_float32(self, value: np.float32) -> Amount:
        raise NotImplementedError()

    @abstractmethod
    def to_float32(self, value: Amount) -> np.float32:
        raise NotImplementedError()

    def is_zero(self, value: Amount) -> bool:
        return bool(value == self.zero())

    def is_positive(self, value: Amount) -> bool:
        return bool(value > self.zero())

    def is_negative(self, value: Amount) -> bool:
        return bool(value < self.zero())

    def add(self, left: Amount, right: Amount) -> Amount:
        return left + right

    def subtract(self, left: Amount, right: Amount) -> Amount:
        return left - right

    def multiply(self, left: Amount, right: Amount) -> Amount:
        return left * right

    def negate(self, value: Amount) -> Amount:
        return -value

    def abs(self, value: Amount) -> Amount:
        return abs(value)

    def percent_factor(self, percent: float) -> Amount:
        """``percent / 100`` as an amount of this type."""
        return self.divide(self.from_float64(percent), self.coerce(100), MonetaryContext())

    def round_to(self, value: Amount, context: MonetaryContext) -> Amount:
        """Round to the context's max scale by way of the decimal representation."""
        return self.from_decimal(context.round(self.to_decimal(value)))

    def format(self, value: Amount) -> str:
        return str(value)

    def __repr__(self) -> str:
        return f"<Numeric {self.name}>"


class DecimalNumeric(Numeric):
    name = "decimal"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, FixedDecimal)

    def coerce(self, value: Any) -> FixedDecimal:
        if isinstance(value, FixedDecimal):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return FixedDecimal.from_int(value)

        raise TypeError(f"Expected FixedDecimal or int, got {type(value).__name__}")

    def zero(self) -> FixedDecimal:
        return FixedDecimal.zero()

    def is_zero(self, value: FixedDecimal) -> bool:
        return value.is_zero()

    def is_positive(self, value: FixedDecimal) -> bool:
        return value.is_positive()

    def is_negative(self, value: FixedDecimal) -> bool:
        return value.is_negative()

    def multiply(self, left: FixedDecimal, right: FixedDecimal) -> FixedDecimal:
        return left.multiply(right)

    def divide(
        self, left: FixedDecimal, right: FixedDecimal, context: MonetaryContext
    ) -> FixedDecimal:
        return left.divide(right, context.max_scale, context.rounding_mode)

    def percent_factor(self, percent: float) -> FixedDecimal:
        # Dividing by 100 only moves the decimal point.
        value = self.from_float64(percent)
        return FixedDecimal(value.unscaled, value.scale + 2)

    def round_to(self, value: FixedDecimal, context: MonetaryContext) -> FixedDecimal:
        return context.round(value)

    def from_decimal(self, value: FixedDecimal) -> FixedDecimal:
        return value

    def to_decimal(self, value: FixedDecimal) -> FixedDecimal:
        return value

    def from_float64(self, value: float) -> FixedDecimal:
        return FixedDecimal.from_float(float(value))

    def to_float64(self, value: FixedDecimal) -> float:
        return value.to_float()

    def from_float32(self, value: np.float32) -> FixedDecimal:
        return FixedDecimal.from_float(np.float32(value))

    def to_float32(self, value: FixedDecimal) -> np.float32:
        return _narrow_to_float32(value.to_float(), value)


class Float64Numeric(Numeric):
    name = "float64"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, float)

    def coerce(self, value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"Expected float or int, got {type(value).__name__}")

        return float(value)

    def zero(self) -> float:
        return 0.0

    def divide(self, left: float, right: float, context: MonetaryContext) -> float:
        if right == 0.0:
            # IEEE 754: x/0 is a signed infinity, 0/0 and nan/0 are NaN.
            if left == 0.0 or math.isnan(left):
                return math.nan
            return math.copysign(math.inf, left) * math.copysign(1.0, right)

        return left / right

    def round_to(self, value: float, context: MonetaryContext) -> float:
        if not math.isfinite(value):
            return value
        return super().round_to(value, context)

    def from_decimal(self, value: FixedDecimal) -> float:
        return value.to_float()

    def to_decimal(self, value: float) -> FixedDecimal:
        return FixedDecimal.from_float(value)

    def from_float64(self, value: float) -> float:
        return float(value)

    def to_float64(self, value: float) -> float:
        return float(value)

    def from_float32(self, value: np.float32) -> float:
        _require_finite(value, self.name)
        return float(value)

    def to_float32(self, value: float) -> np.float32:
        _require_finite(value, "float32")
        return _narrow_to_float32(value, value)

    def format(self, value: float) -> str:
        return repr(float(value))


class Float32Numeric(Numeric):
    name = "float32"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, np.float32)

    def coerce(self, value: Any) -> np.float32:
        if isinstance(value, bool) or not isinstance(value, (int, float, np.float32)):
            raise TypeError(f"Expected numpy.float32, float or int, got {type(value).__name__}")

        return np.float32(value)

    def zero(self) -> np.float32:
        return np.float32(0.0)

    def add(self, left: np.float32, right: np.float32) -> np.float32:
        with np.errstate(all="ignore"):
            return np.float32(left + right)

    def subtract(self, left: np.float32, right: np.float32) -> np.float32:
        with np.errstate(all="ignore"):
            return np.float32(left - right)

    def multiply(self, left: np.float32, right: np.float32) -> np.float32:
        with np.errstate(all="ignore"):
            return np.float32(left * right)

    def divide(
        self, left: np.float32, right: np.float32, context: MonetaryContext
    ) -> np.float32:
        with np.errstate(all="ignore"):
            return np.float32(np.true_divide(left, right, dtype=np.float32))

    def round_to(self, value: np.float32, context: MonetaryContext) -> np.float32:
        if not np.isfinite(value):
            return value
        return super().round_to(value, context)

    def from_decimal(self, value: FixedDecimal) -> np.float32:
        return _narrow_to_float32(value.to_float(), value)

    def to_decimal(self, value: np.float32) -> FixedDecimal:
        return FixedDecimal.from_float(np.float32(value))

    def from_float64(self, value: float) -> np.float32:
        _require_finite(value, self.name)
        return _narrow_to_float32(float(value), value)

    def to_float64(self, value: np.float32) -> float:
        _require_finite(value, "float64")
        return float(value)

    def from_float32(self, value: np.float32) -> np.float32:
        return np.float32(value)

    def to_float32(self, value: np.float32) -> np.float32:
        return np.float32(value)


DECIMAL = DecimalNumeric()
FLOAT64 = Float64Numeric()
FLOAT32 = Float32Numeric()

_BY_NAME = {numeric.name: numeric for numeric in (DECIMAL, FLOAT64, FLOAT32)}


def numeric_of(value: Any) -> Numeric:
    """
    Resolve the backing type of an amount.

    :raises TypeError: if the value is not a FixedDecimal, float or numpy.float32
    """
    if isinstance(value, FixedDecimal):
        return DECIMAL
    if isinstance(value, np.float32):
        return FLOAT32
    if isinstance(value, float):
        return FLOAT64

    raise TypeError(
        f"Unsupported amount type {type(value).__name__}: "
        f"expected FixedDecimal, float or numpy.float32"
    )


def numeric_for(kind: Any) -> Numeric:
    """
    Resolve a backing type from a bundle, a Python type or a name.

    ``numeric_for(float)``, ``numeric_for("float64")`` and ``numeric_for(FLOAT64)``
    all return FLOAT64.
    """
    if isinstance(kind, Numeric):
        return kind
    if isinstance(kind, str) and kind.lower() in _BY_NAME:
        return _BY_NAME[kind.lower()]
    if kind is FixedDecimal:
        return DECIMAL
    if kind is np.float32:
        return FLOAT32
    if kind is float or kind is np.float64:
        return FLOAT64

    raise TypeError(f"Unsupported backing type: {kind!r}")


def convert_value(value: Amount, target: Numeric) -> Amount:
    """
    Carry an amount over to another backing type.

    Same-type conversion is the identity; everything else goes through the
    decimal representation.
    """
    source = numeric_of(value)

    if source is target:
        return value
    if source is DECIMAL:
        return target.from_decimal(value)

    return target.from_decimal(source.to_decimal(value))

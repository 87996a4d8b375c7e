import math
from dataclasses import dataclass, field, replace
from typing import Any, Optional

import numpy as np

from monetary.domain.exceptions import CurrencyMismatchError, InvalidExchangeRateError
from monetary.domain.numeric import (
    DECIMAL,
    Amount,
    Numeric,
    convert_value,
    numeric_for,
    numeric_of,
)
from monetary.domain.values import Currency, MonetaryContext, RoundingMode


@dataclass(frozen=True)
class Monetary:
    """
    An amount of money: a backing amount, its currency and the context that
    governs rounding of derived values.

    The backing amount is a FixedDecimal, a float or a numpy.float32. Every
    operation returns a new value. Arithmetic does not round implicitly;
    percentages, ``apply_context`` and rate application do.
    """

    amount: Amount
    currency: Currency
    context: MonetaryContext = field(default_factory=MonetaryContext)

    def __post_init__(self) -> None:
        numeric_of(self.amount)

        if isinstance(self.amount, np.float64):
            object.__setattr__(self, "amount", float(self.amount))

    @classmethod
    def zero(
        cls,
        currency: Currency,
        kind: Any = DECIMAL,
        context: Optional[MonetaryContext] = None,
    ) -> "Monetary":
        return cls(numeric_for(kind).zero(), currency, context or MonetaryContext())

    @property
    def numeric(self) -> Numeric:
        return numeric_of(self.amount)

    def is_zero(self) -> bool:
        return self.numeric.is_zero(self.amount)

    def is_positive(self) -> bool:
        return self.numeric.is_positive(self.amount)

    def is_negative(self) -> bool:
        return self.numeric.is_negative(self.amount)

    def with_context(self, context: MonetaryContext) -> "Monetary":
        return replace(self, context=context)

    def with_currency(self, currency: Currency) -> "Monetary":
        return replace(self, currency=currency)

    def with_amount(self, amount: Amount) -> "Monetary":
        return replace(self, amount=amount)

    def abs(self) -> "Monetary":
        return self.with_amount(self.numeric.abs(self.amount))

    def negate(self) -> "Monetary":
        return self.with_amount(self.numeric.negate(self.amount))

    def add(self, other: "Monetary") -> "Monetary":
        """
        Sum of two values of the same currency and backing type.

        The result keeps this value's currency and context.

        :raises CurrencyMismatchError: if the currency descriptors differ
        :raises TypeError: if the backing types differ
        """
        numeric = self._check_compatible(other, "addition")

        return self.with_amount(numeric.add(self.amount, other.amount))

    def subtract(self, other: "Monetary") -> "Monetary":
        """
        Difference of two values of the same currency and backing type.

        :raises CurrencyMismatchError: if the currency descriptors differ
        :raises TypeError: if the backing types differ
        """
        numeric = self._check_compatible(other, "subtraction")

        return self.with_amount(numeric.subtract(self.amount, other.amount))

    def multiply_by(self, scalar: Any) -> "Monetary":
        numeric = self.numeric

        return self.with_amount(numeric.multiply(self.amount, numeric.coerce(scalar)))

    def divide_by(self, scalar: Any) -> "Monetary":
        """
        Divide by a scalar of the same backing type (or an int).

        Decimal amounts are divided to the context's max scale with its
        rounding mode and raise DivisionByZeroError on a zero divisor. Float
        amounts follow IEEE 754 and yield an infinity or NaN instead.
        """
        numeric = self.numeric

        return self.with_amount(
            numeric.divide(self.amount, numeric.coerce(scalar), self.context)
        )

    def apply_percentage(self, percent: float) -> "Monetary":
        """``amount * (1 + percent / 100)``, rounded with the context."""
        numeric = self.numeric
        factor = numeric.add(numeric.coerce(1), numeric.percent_factor(percent))

        return self._rounded(numeric.multiply(self.amount, factor), self.context)

    def percentage_of(self, percent: float) -> "Monetary":
        """``amount * percent / 100``, rounded with the context."""
        numeric = self.numeric
        portion = numeric.multiply(self.amount, numeric.percent_factor(percent))

        return self._rounded(portion, self.context)

    def apply_context(self) -> "Monetary":
        return self._rounded(self.amount, self.context)

    def round(
        self, decimal_places: int, mode: Optional[RoundingMode] = None
    ) -> "Monetary":
        """Round to ``decimal_places`` with ``mode`` or the context's rounding mode."""
        target = replace(
            self.context,
            max_scale=decimal_places,
            rounding_mode=mode or self.context.rounding_mode,
        )

        return self._rounded(self.amount, target)

    def round_to_precision(self) -> "Monetary":
        return self.round(self.currency.default_fraction_digits)

    def to_minor_units(self) -> int:
        """Whole number of minor units (cents, satoshis), rounding half to even."""
        digits = self.currency.default_fraction_digits
        decimal = self.numeric.to_decimal(self.amount)

        return decimal.rescale(digits, RoundingMode.HALF_EVEN).unscaled

    def convert(
        self, rate: float, target_currency: Currency, kind: Any = None
    ) -> "Monetary":
        """
        Convert with a bare floating-point rate, without a provider.

        The amount goes through float64, is multiplied by ``rate`` and lands in
        ``kind`` (this value's backing type by default). The context is kept.

        :raises InvalidExchangeRateError: if the rate is not positive or not finite
        :raises ConversionError: if the amount cannot be carried through float64
        """
        if isinstance(rate, bool) or not isinstance(rate, (int, float, np.floating)):
            raise InvalidExchangeRateError(rate)
        if not math.isfinite(rate) or rate <= 0:
            raise InvalidExchangeRateError(rate)

        target = numeric_for(kind) if kind is not None else self.numeric
        converted = self.numeric.to_float64(self.amount) * float(rate)

        return Monetary(target.from_float64(converted), target_currency, self.context)

    def as_type(self, kind: Any) -> "Monetary":
        """Carry the amount over to another backing type, keeping the currency."""
        return self.with_amount(convert_value(self.amount, numeric_for(kind)))

    def _rounded(self, amount: Amount, context: MonetaryContext) -> "Monetary":
        return self.with_amount(self.numeric.round_to(amount, context))

    def _check_compatible(self, other: "Monetary", operation: str) -> Numeric:
        if self.currency != other.currency:
            raise CurrencyMismatchError(
                self.currency.code, other.currency.code, operation=operation
            )

        numeric = self.numeric
        if numeric is not other.numeric:
            raise TypeError(
                f"Cannot combine {numeric.name} and {other.numeric.name} amounts "
                f"in {operation}; convert with as_type() first"
            )

        return numeric

    def __add__(self, other: "Monetary") -> "Monetary":
        if not isinstance(other, Monetary):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: "Monetary") -> "Monetary":
        if not isinstance(other, Monetary):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, scalar: Any) -> "Monetary":
        if isinstance(scalar, Monetary):
            return NotImplemented
        return self.multiply_by(scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: Any) -> "Monetary":
        if isinstance(scalar, Monetary):
            return NotImplemented
        return self.divide_by(scalar)

    def __neg__(self) -> "Monetary":
        return self.negate()

    def __abs__(self) -> "Monetary":
        return self.abs()

    def __str__(self) -> str:
        return f"{self.numeric.format(self.amount)} {self.currency.code}"

import math
import time
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Any, Optional

import numpy as np

from monetary.domain.exceptions import (
    ConversionError,
    CurrencyMismatchError,
    ExpiredRateError,
    InvalidExchangeRateError,
    NumericError,
)
from monetary.domain.numeric import (
    DECIMAL,
    Amount,
    Numeric,
    convert_value,
    numeric_for,
    numeric_of,
)
from monetary.domain.values import (
    Currency,
    CurrencyPair,
    MonetaryContext,
    RateAge,
    TimestampUTC,
)

from .monetary_amount import Monetary


@dataclass(frozen=True)
class ExchangeRate:
    """
    The ExchangeRate model.
    It converts amounts of the base currency into the target currency by a
    positive factor, and may go stale once its time-to-live has elapsed.
    """

    base: Currency
    target: Currency
    factor: Amount
    timestamp: TimestampUTC = field(default_factory=TimestampUTC.now)
    ttl: Optional[timedelta] = None
    context: MonetaryContext = field(default_factory=MonetaryContext)
    # Set when a cache stamps the rate; expiry is then measured on the monotonic clock.
    monotonic_mark: Optional[float] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        numeric = numeric_of(self.factor)

        if isinstance(self.factor, np.float64):
            object.__setattr__(self, "factor", float(self.factor))

        if numeric is not DECIMAL and not math.isfinite(float(self.factor)):
            raise InvalidExchangeRateError(self.factor)
        if not numeric.is_positive(self.factor):
            raise InvalidExchangeRateError(self.factor)
        if self.ttl is not None and self.ttl < timedelta(0):
            raise ValueError(f"TTL cannot be negative: {self.ttl}")

    @property
    def pair(self) -> CurrencyPair:
        return CurrencyPair.of(self.base, self.target)

    @property
    def numeric(self) -> Numeric:
        return numeric_of(self.factor)

    def with_ttl(self, ttl: Optional[timedelta]) -> "ExchangeRate":
        return replace(self, ttl=ttl)

    def with_context(self, context: MonetaryContext) -> "ExchangeRate":
        return replace(self, context=context)

    def stamped(self, ttl: timedelta) -> "ExchangeRate":
        """
        Re-mint the rate as of now with the given TTL.

        The timestamp is reset and expiry of the stamped rate follows the
        monotonic clock, so wall clock adjustments do not age it.
        """
        return replace(
            self,
            timestamp=TimestampUTC.now(),
            ttl=ttl,
            monotonic_mark=time.monotonic(),
        )

    def age(self, reference_time: Optional[TimestampUTC] = None) -> RateAge:
        """
        Get the rate age.

        :param reference_time: Reference time for age calculation (default: utc now)
        :return: RateAge value object
        """
        if reference_time is None:
            if self.monotonic_mark is not None:
                return RateAge(timedelta(seconds=time.monotonic() - self.monotonic_mark))
            return RateAge.since(self.timestamp)

        return RateAge.between(self.timestamp, reference_time)

    def is_expired(self, reference_time: Optional[TimestampUTC] = None) -> bool:
        """A rate without a TTL never expires."""
        if self.ttl is None:
            return False

        return self.age(reference_time).exceeds(self.ttl)

    def apply(self, amount: Monetary) -> Monetary:
        """
        Convert an amount using this rate, staying in the amount's backing type.

        :param amount: Amount in the base currency
        :return: Amount in the target currency, with the original context

        :raises CurrencyMismatchError: if the amount is not in the base currency
        :raises ExpiredRateError: if the rate's TTL has elapsed
        """
        self._check_applicable(amount)

        numeric = amount.numeric
        factor = convert_value(self.factor, numeric)

        return Monetary(
            numeric.multiply(amount.amount, factor), self.target, amount.context
        )

    def apply_convert(self, amount: Monetary, kind: Any = DECIMAL) -> Monetary:
        """
        Convert an amount into another backing type.

        The multiplication happens in FixedDecimal and is rounded to the rate's
        context before the result is carried over to ``kind``.

        :param amount: Amount in the base currency
        :param kind: Target backing type (bundle, Python type or name)
        :return: Amount in the target currency, with the original context

        :raises CurrencyMismatchError: if the amount is not in the base currency
        :raises ExpiredRateError: if the rate's TTL has elapsed
        :raises ConversionError: if any numeric step fails
        """
        self._check_applicable(amount)

        target = numeric_for(kind)

        try:
            value = amount.numeric.to_decimal(amount.amount)
            factor = self.numeric.to_decimal(self.factor)

            product = value.multiply(
                factor, self.context.max_scale, self.context.rounding_mode
            )
            converted = target.from_decimal(product)

        except ConversionError:
            raise
        except NumericError as e:
            raise ConversionError(amount.amount, target.name, reason=str(e)) from e

        return Monetary(converted, self.target, amount.context)

    def inverse(self) -> "ExchangeRate":
        """
        Get the rate for the reverse direction (EUR->USD from USD->EUR).

        Decimal factors are inverted at the rate context's max scale.
        """
        numeric = self.numeric
        factor = numeric.divide(numeric.coerce(1), self.factor, self.context)

        return ExchangeRate(
            base=self.target,
            target=self.base,
            factor=factor,
            timestamp=self.timestamp,
            ttl=self.ttl,
            context=self.context,
            monotonic_mark=self.monotonic_mark,
        )

    def _check_applicable(self, amount: Monetary) -> None:
        if not amount.currency.same_currency(self.base):
            raise CurrencyMismatchError(
                self.base.code, amount.currency.code, operation="rate application"
            )

        if self.is_expired():
            raise ExpiredRateError(
                self.base.code, self.target.code, age_seconds=self.age().seconds
            )

    def __str__(self) -> str:
        return (
            f"ExchangeRate({self.base.code}->{self.target.code}, "
            f"factor={self.numeric.format(self.factor)}, at={self.timestamp})"
        )

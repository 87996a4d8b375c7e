from .currency import Currency
from .currency_pair import CurrencyPair
from .fixed_decimal import FixedDecimal
from .monetary_context import MonetaryContext, MonetaryContextBuilder
from .rate_age import RateAge
from .rounding_mode import RoundingMode
from .timestamp_utc import TimestampUTC

__all__ = [
    "Currency",
    "CurrencyPair",
    "FixedDecimal",
    "MonetaryContext",
    "MonetaryContextBuilder",
    "RateAge",
    "RoundingMode",
    "TimestampUTC",
]

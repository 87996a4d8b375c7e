from .base import MonetaryError
from .currency import (
    CurrencyMismatchError,
    InvalidAmountError,
    InvalidFormatError,
    UnknownCurrencyError,
)
from .exchange import (
    ExchangeError,
    ExpiredRateError,
    InvalidExchangeRateError,
    NoRateFoundError,
    ProviderError,
)
from .numeric import (
    ConversionError,
    DecimalOverflowError,
    DivisionByZeroError,
    NumericError,
    PrecisionLossError,
    RoundingNecessaryError,
)

__all__ = [
    "MonetaryError",
    "UnknownCurrencyError",
    "InvalidFormatError",
    "InvalidAmountError",
    "CurrencyMismatchError",
    "NumericError",
    "ConversionError",
    "PrecisionLossError",
    "DivisionByZeroError",
    "DecimalOverflowError",
    "RoundingNecessaryError",
    "ExchangeError",
    "InvalidExchangeRateError",
    "NoRateFoundError",
    "ExpiredRateError",
    "ProviderError",
]

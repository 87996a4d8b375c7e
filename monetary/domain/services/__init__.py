from .conversion_service import BatchConversionResult, CurrencyConversionService
from .currency_registry import (
    available_currencies,
    get_currency,
    get_currency_by_numeric_code,
    is_supported,
    require_currency,
)
from .factory import MonetaryFactory
from .money_formatter import MoneyFormatter

__all__ = [
    "BatchConversionResult",
    "CurrencyConversionService",
    "MonetaryFactory",
    "MoneyFormatter",
    "available_currencies",
    "get_currency",
    "get_currency_by_numeric_code",
    "is_supported",
    "require_currency",
]

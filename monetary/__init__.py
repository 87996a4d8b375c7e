from monetary.adapters.outbound.providers import (
    CachingRateProvider,
    CompositeRateProvider,
    StaticRateProvider,
)
from monetary.app.ports.outbound import ExchangeRateProvider
from monetary.domain.models import ExchangeRate, Monetary
from monetary.domain.numeric import DECIMAL, FLOAT32, FLOAT64
from monetary.domain.services import (
    BatchConversionResult,
    CurrencyConversionService,
    MonetaryFactory,
    MoneyFormatter,
    available_currencies,
    get_currency,
    require_currency,
)
from monetary.domain.values import (
    Currency,
    CurrencyPair,
    FixedDecimal,
    MonetaryContext,
    RoundingMode,
)

__version__ = "0.1.0"

__all__ = [
    "BatchConversionResult",
    "CachingRateProvider",
    "CompositeRateProvider",
    "Currency",
    "CurrencyConversionService",
    "CurrencyPair",
    "DECIMAL",
    "ExchangeRate",
    "ExchangeRateProvider",
    "FLOAT32",
    "FLOAT64",
    "FixedDecimal",
    "Monetary",
    "MonetaryContext",
    "MonetaryFactory",
    "MoneyFormatter",
    "RoundingMode",
    "StaticRateProvider",
    "available_currencies",
    "get_currency",
    "require_currency",
]

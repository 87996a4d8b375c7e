from .rate_provider import ExchangeRateProvider

__all__ = [
    "ExchangeRateProvider",
]

from .exchange_rate import ExchangeRate
from .monetary_amount import Monetary

__all__ = [
    "ExchangeRate",
    "Monetary",
]

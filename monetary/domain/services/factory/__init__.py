from .monetary_factory import MonetaryFactory

__all__ = [
    "MonetaryFactory",
]

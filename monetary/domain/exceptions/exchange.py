from typing import Any, Optional

from .base import MonetaryError


class ExchangeError(MonetaryError):
    pass


class InvalidExchangeRateError(ExchangeError):
    """Raised when a rate is not a positive finite number."""

    category = "InvalidExchangeRate"

    def __init__(self, rate: Any):
        self.rate = rate

        super().__init__(f"Invalid exchange rate: {rate}")


class NoRateFoundError(ExchangeError):
    """Raised when no provider in the chain knows the pair."""

    category = "NoRateFound"
    recoverable = True

    def __init__(self, base: Any, target: Any):
        self.base = base
        self.target = target

        super().__init__(f"No exchange rate found for {base} -> {target}")


class ExpiredRateError(ExchangeError):
    category = "ExpiredRate"
    recoverable = True

    def __init__(self, base: Any, target: Any, age_seconds: Optional[float] = None):
        self.base = base
        self.target = target

        message = f"Exchange rate {base} -> {target} has expired"

        if age_seconds is not None:
            message += f" ({age_seconds:.3f}s old)"

        super().__init__(message)


class ProviderError(ExchangeError):
    """Raised by provider implementations when an upstream lookup fails."""

    category = "ProviderError"
    recoverable = True

    def __init__(self, provider_name: str, reason: str):
        self.provider_name = provider_name

        super().__init__(f"Exchange rate provider '{provider_name}' failed: {reason}")

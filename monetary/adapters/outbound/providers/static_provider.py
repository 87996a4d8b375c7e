from typing import Iterable, Optional, Union

from monetary.app.ports.outbound.rate_provider import ExchangeRateProvider
from monetary.domain.models import ExchangeRate
from monetary.domain.numeric import Amount
from monetary.domain.values import (
    Currency,
    CurrencyPair,
    FixedDecimal,
    MonetaryContext,
)
from monetary.shared.logging import get_logger

logger = get_logger(__name__)


class StaticRateProvider(ExchangeRateProvider):
    """
    Fixed in-memory rates, for tests and for deployments with pinned rates.

    Every lookup mints a fresh rate with this provider's context and no TTL.
    """

    def __init__(self, context: Optional[MonetaryContext] = None):
        self._context = context or MonetaryContext()
        self._rates: dict[CurrencyPair, tuple[Currency, Currency, Amount]] = {}

    @property
    def context(self) -> MonetaryContext:
        return self._context

    def add_rate(
        self, base: Currency, target: Currency, factor: Union[Amount, str]
    ) -> "StaticRateProvider":
        """
        Register (or replace) the factor for base -> target.

        String factors are parsed as FixedDecimal literals.

        :raises InvalidExchangeRateError: if the factor is not positive or not finite
        """
        if isinstance(factor, str):
            factor = FixedDecimal.parse(factor)

        # Validates the factor before it is stored.
        rate = ExchangeRate(base, target, factor, context=self._context)
        self._rates[rate.pair] = (rate.base, rate.target, rate.factor)

        logger.debug("static_rate_added", pair=str(rate.pair), factor=str(factor))

        return self

    def remove_rate(self, base: Currency, target: Currency) -> bool:
        return self._rates.pop(CurrencyPair.of(base, target), None) is not None

    def get_exchange_rate(
        self, base: Currency, target: Currency
    ) -> Optional[ExchangeRate]:
        entry = self._rates.get(CurrencyPair.of(base, target))

        if entry is None:
            return None

        stored_base, stored_target, factor = entry

        return ExchangeRate(stored_base, stored_target, factor, context=self._context)

    def get_multiple_rates(
        self, pairs: Iterable[tuple[Currency, Currency]]
    ) -> dict[CurrencyPair, ExchangeRate]:
        rates = {}

        for base, target in pairs:
            rate = self.get_exchange_rate(base, target)

            if rate is not None:
                rates[rate.pair] = rate

        return rates

    def __len__(self) -> int:
        return len(self._rates)

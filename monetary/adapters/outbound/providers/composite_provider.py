from typing import Iterable, Optional

from monetary.app.ports.outbound.rate_provider import ExchangeRateProvider
from monetary.domain.models import ExchangeRate
from monetary.domain.values import Currency, CurrencyPair
from monetary.shared.logging import get_logger

logger = get_logger(__name__)


class CompositeRateProvider(ExchangeRateProvider):
    """Queries providers in order and returns the first hit."""

    def __init__(self, providers: Iterable[ExchangeRateProvider]):
        self._providers = tuple(providers)

        if not self._providers:
            raise ValueError("CompositeRateProvider needs at least one provider")

    @property
    def providers(self) -> tuple[ExchangeRateProvider, ...]:
        return self._providers

    def get_exchange_rate(
        self, base: Currency, target: Currency
    ) -> Optional[ExchangeRate]:
        for provider in self._providers:
            rate = provider.get_exchange_rate(base, target)

            if rate:
                return rate

            logger.debug(
                "composite_provider_fallback",
                provider=provider.name,
                pair=f"{base.code}->{target.code}",
            )

        return None

    def get_multiple_rates(
        self, pairs: Iterable[tuple[Currency, Currency]]
    ) -> dict[CurrencyPair, ExchangeRate]:
        pending = {CurrencyPair.of(base, target): (base, target) for base, target in pairs}
        rates: dict[CurrencyPair, ExchangeRate] = {}

        for provider in self._providers:
            if not pending:
                break

            found = provider.get_multiple_rates(pending.values())

            # Providers without batch support answer pair by pair.
            if not found:
                found = {}
                for base, target in pending.values():
                    rate = provider.get_exchange_rate(base, target)
                    if rate:
                        found[rate.pair] = rate

            for pair, rate in found.items():
                if pair in pending:
                    rates[pair] = rate
                    del pending[pair]

        return rates

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from monetary.domain.models import ExchangeRate
from monetary.domain.values import Currency, CurrencyPair


class ExchangeRateProvider(ABC):
    @abstractmethod
    def get_exchange_rate(
        self, base: Currency, target: Currency
    ) -> Optional[ExchangeRate]:
        """
        Get the rate converting base into target, if this provider knows it.
        A miss is reported as None; upstream failures raise ProviderError.
        """
        raise NotImplementedError()

    def get_multiple_rates(
        self, pairs: Iterable[tuple[Currency, Currency]]
    ) -> dict[CurrencyPair, ExchangeRate]:
        """
        Batch lookup for providers that can serve several pairs at once.
        Providers without batch support return an empty mapping.
        """
        return {}

    @property
    def name(self) -> str:
        return type(self).__name__

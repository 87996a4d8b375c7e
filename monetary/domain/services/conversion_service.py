import time
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Union

from monetary.app.ports.outbound.rate_provider import ExchangeRateProvider
from monetary.domain.exceptions import MonetaryError, NoRateFoundError
from monetary.domain.models import ExchangeRate, Monetary
from monetary.domain.numeric import DECIMAL
from monetary.domain.values import Currency, CurrencyPair, MonetaryContext
from monetary.shared.logging import get_logger
from monetary.shared.observability import Metrics
from monetary.shared.utils import ReadWriteLock

logger = get_logger(__name__)


@dataclass(frozen=True)
class BatchConversionResult:
    """Outcome of converting one amount of a batch: a value or an error."""

    source: Monetary
    value: Optional[Monetary] = None
    error: Optional[MonetaryError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Monetary:
        """
        :raises MonetaryError: the error recorded for this amount
        """
        if self.error is not None:
            raise self.error

        return self.value  # type: ignore [return-value]


class CurrencyConversionService:
    """
    Converts monetary values through an ordered chain of rate providers.

    Rates that were applied successfully are kept in a service-level cache
    keyed by currency pair, separate from any caching provider in the chain.
    """

    def __init__(
        self,
        providers: Optional[Iterable[ExchangeRateProvider]] = None,
        default_context: Optional[MonetaryContext] = None,
        metrics: Optional[Metrics] = None,
    ):
        self._providers: tuple[ExchangeRateProvider, ...] = tuple(providers or ())
        self._default_context = default_context or MonetaryContext()
        self._metrics = metrics

        self._rate_cache: dict[CurrencyPair, ExchangeRate] = {}
        self._lock = ReadWriteLock()

    @property
    def default_context(self) -> MonetaryContext:
        return self._default_context

    @property
    def providers(self) -> tuple[ExchangeRateProvider, ...]:
        return self._providers

    def add_provider(self, provider: ExchangeRateProvider) -> None:
        """Append a provider; it is consulted after every provider added before it."""
        self._providers = self._providers + (provider,)

        logger.debug(
            "conversion_provider_added",
            provider=provider.name,
            position=len(self._providers),
        )

    def clear_cache(self) -> None:
        with self._lock.write_locked():
            self._rate_cache.clear()

    def convert(self, amount: Monetary, target: Currency) -> Monetary:
        """
        Convert an amount into the target currency, keeping its backing type.

        :param amount: Amount to convert
        :param target: Target currency
        :return: Converted amount with the original context

        :raises NoRateFoundError: If no provider knows the pair
        :raises ExpiredRateError: If the rate went stale before it was applied
        :raises ProviderError: If a provider fails
        """
        if amount.currency.same_currency(target):
            return amount

        pair = CurrencyPair.of(amount.currency, target)
        started = time.perf_counter()

        with self._lock.read_locked():
            cached = self._rate_cache.get(pair)

        if cached is not None and not cached.is_expired():
            logger.debug("conversion_cache_hit", pair=str(pair))
            self._record(pair, "cached", started)
            return cached.apply(amount)

        rate = self._lookup(amount.currency, target)

        try:
            converted = rate.apply(amount)
        except MonetaryError:
            self._record(pair, "error", started)
            raise

        with self._lock.write_locked():
            self._rate_cache[pair] = rate

        self._record(pair, "success", started)
        logger.debug(
            "conversion_completed",
            pair=str(pair),
            amount=str(amount),
            converted=str(converted),
        )

        return converted

    def convert_to(
        self, amount: Monetary, target: Currency, kind: Any = DECIMAL
    ) -> Monetary:
        """
        Convert an amount into the target currency and another backing type.

        The multiplication happens in FixedDecimal and is rounded with the
        rate's context. Rates found here are not stored in the service cache.

        :param amount: Amount to convert
        :param target: Target currency
        :param kind: Target backing type (bundle, Python type or name)

        :raises NoRateFoundError: If no provider knows the pair
        :raises ConversionError: If the amount cannot be carried over to ``kind``
        """
        if amount.currency.same_currency(target):
            return amount.as_type(kind).with_currency(target)

        pair = CurrencyPair.of(amount.currency, target)
        started = time.perf_counter()

        rate = self._lookup(amount.currency, target)

        try:
            converted = rate.apply_convert(amount, kind)
        except MonetaryError:
            self._record(pair, "error", started)
            raise

        self._record(pair, "success", started)

        return converted

    def convert_batch(
        self, amounts: Sequence[Monetary], target: Currency
    ) -> list[BatchConversionResult]:
        """
        Convert many amounts into one target currency.

        Amounts are grouped by source currency. The first amount of a group
        probes the rate; if it fails, the same error is reported for the whole
        group. Results come back in input order, one per input.
        """
        groups: dict[Union[int, str], list[int]] = {}

        for index, amount in enumerate(amounts):
            groups.setdefault(amount.currency.identity, []).append(index)

        results: list[Optional[BatchConversionResult]] = [None] * len(amounts)

        for identity, indices in groups.items():
            if identity == target.identity:
                for index in indices:
                    results[index] = BatchConversionResult(
                        source=amounts[index], value=amounts[index]
                    )
                continue

            first, *rest = indices

            try:
                probe = self.convert(amounts[first], target)
            except MonetaryError as e:
                logger.warning(
                    "batch_group_failed",
                    source=amounts[first].currency.code,
                    target=target.code,
                    size=len(indices),
                    error=str(e),
                )
                for index in indices:
                    results[index] = BatchConversionResult(source=amounts[index], error=e)
                continue

            results[first] = BatchConversionResult(source=amounts[first], value=probe)

            for index in rest:
                results[index] = self._convert_one(amounts[index], target)

        logger.info(
            "batch_conversion_completed",
            target=target.code,
            size=len(amounts),
            failed=sum(1 for result in results if result and not result.ok),
        )

        return results  # type: ignore [return-value]

    def _convert_one(self, amount: Monetary, target: Currency) -> BatchConversionResult:
        try:
            return BatchConversionResult(source=amount, value=self.convert(amount, target))
        except MonetaryError as e:
            return BatchConversionResult(source=amount, error=e)

    def _lookup(self, base: Currency, target: Currency) -> ExchangeRate:
        for provider in self._providers:
            rate = provider.get_exchange_rate(base, target)

            if rate is not None:
                self._count_lookup(provider, "hit")
                logger.debug(
                    "rate_provider_hit",
                    provider=provider.name,
                    pair=f"{base.code}->{target.code}",
                )
                return rate

            self._count_lookup(provider, "miss")
            logger.debug(
                "rate_provider_miss",
                provider=provider.name,
                pair=f"{base.code}->{target.code}",
            )

        logger.warning("rate_not_found", base=base.code, target=target.code)

        if self._metrics:
            pair = CurrencyPair.of(base, target)
            self._metrics.conversions_total.labels(pair=str(pair), status="no_rate").inc()

        raise NoRateFoundError(base.code, target.code)

    def _count_lookup(self, provider: ExchangeRateProvider, status: str) -> None:
        if self._metrics:
            self._metrics.rate_lookups_total.labels(
                provider=provider.name, status=status
            ).inc()

    def _record(self, pair: CurrencyPair, status: str, started: float) -> None:
        if not self._metrics:
            return

        self._metrics.conversions_total.labels(pair=str(pair), status=status).inc()
        self._metrics.conversion_duration_seconds.labels(pair=str(pair)).observe(
            time.perf_counter() - started
        )

from datetime import timedelta
from typing import Optional

from monetary.app.ports.outbound.rate_provider import ExchangeRateProvider
from monetary.domain.models import ExchangeRate
from monetary.domain.values import Currency, CurrencyPair
from monetary.shared.logging import get_logger
from monetary.shared.observability import Metrics
from monetary.shared.utils import ReadWriteLock

logger = get_logger(__name__)

CACHE_TYPE = "rate_provider"


class CachingRateProvider(ExchangeRateProvider):
    """
    Memoizes the lookups of one upstream provider.

    Cached rates are re-stamped on insertion: the timestamp becomes the
    insertion time and the TTL becomes this provider's, whatever the upstream
    attached. Misses are not cached, so a failing upstream can be retried
    immediately. The upstream is called without any lock held.
    """

    def __init__(
        self,
        upstream: ExchangeRateProvider,
        ttl: timedelta,
        cleanup_interval: int = 100,
        metrics: Optional[Metrics] = None,
    ):
        if ttl <= timedelta(0):
            raise ValueError(f"Cache TTL must be positive: {ttl}")
        if cleanup_interval < 1:
            raise ValueError(f"Cleanup interval must be positive: {cleanup_interval}")

        self._upstream = upstream
        self._ttl = ttl
        self._cleanup_interval = cleanup_interval
        self._metrics = metrics

        self._cache: dict[CurrencyPair, ExchangeRate] = {}
        self._lock = ReadWriteLock()
        self._insertions = 0

    @property
    def upstream(self) -> ExchangeRateProvider:
        return self._upstream

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    @property
    def size(self) -> int:
        with self._lock.read_locked():
            return len(self._cache)

    def get_exchange_rate(
        self, base: Currency, target: Currency
    ) -> Optional[ExchangeRate]:
        pair = CurrencyPair.of(base, target)

        with self._lock.read_locked():
            cached = self._cache.get(pair)

        if cached is not None and not cached.is_expired():
            logger.debug("rate_cache_hit", pair=str(pair))
            self._count("hit")
            return cached

        logger.debug("rate_cache_miss", pair=str(pair))
        self._count("miss")

        rate = self._upstream.get_exchange_rate(base, target)

        if rate is None:
            return None

        rate = rate.stamped(self._ttl)

        with self._lock.write_locked():
            self._cache[pair] = rate
            self._insertions += 1

            if self._insertions % self._cleanup_interval == 0:
                self._evict_expired()

        return rate

    def invalidate(self, pair: Optional[CurrencyPair] = None) -> None:
        """Drop one cached pair, or everything when no pair is given."""
        with self._lock.write_locked():
            if pair is None:
                self._cache.clear()
            else:
                self._cache.pop(pair, None)

        logger.debug("rate_cache_invalidated", pair=str(pair) if pair else "all")

    def _evict_expired(self) -> None:
        # Caller holds the write lock.
        expired = [pair for pair, rate in self._cache.items() if rate.is_expired()]

        for pair in expired:
            del self._cache[pair]

        if expired:
            logger.debug("rate_cache_evicted", count=len(expired))

            if self._metrics:
                self._metrics.cache_evictions_total.labels(cache_type=CACHE_TYPE).inc(
                    len(expired)
                )

    def _count(self, outcome: str) -> None:
        if not self._metrics:
            return

        if outcome == "hit":
            self._metrics.cache_hits_total.labels(cache_type=CACHE_TYPE).inc()
        else:
            self._metrics.cache_misses_total.labels(cache_type=CACHE_TYPE).inc()

from functools import lru_cache
from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from monetary.shared.logging import get_logger

logger = get_logger(__name__)


class Metrics:
    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()

        self.conversions_total = Counter(
            "conversions_total",
            "Total currency conversions",
            ["pair", "status"],
            registry=self.registry,
        )
        self.conversion_duration_seconds = Histogram(
            "conversion_duration_seconds",
            "Conversion processing time",
            ["pair"],
            registry=self.registry,
        )

        self.rate_lookups_total = Counter(
            "rate_lookups_total",
            "Exchange rate lookups against providers",
            ["provider", "status"],
            registry=self.registry,
        )

        self.cache_hits_total = Counter(
            "cache_hits_total",
            "Cache hit count",
            ["cache_type"],
            registry=self.registry,
        )
        self.cache_misses_total = Counter(
            "cache_misses_total",
            "Cache miss count",
            ["cache_type"],
            registry=self.registry,
        )
        self.cache_evictions_total = Counter(
            "cache_evictions_total",
            "Expired cache entries evicted",
            ["cache_type"],
            registry=self.registry,
        )

        logger.info("metrics_initialized")


@lru_cache()
def get_metrics_registry() -> Metrics:
    return Metrics()


def init_metrics() -> Metrics:
    get_metrics_registry.cache_clear()
    return get_metrics_registry()


def generate_metrics(metrics: Optional[Metrics] = None) -> tuple[str, str]:
    metrics = metrics or get_metrics_registry()
    content = generate_latest(metrics.registry)
    return content.decode("utf-8"), CONTENT_TYPE_LATEST

from datetime import timedelta

from dependency_injector import containers, providers

from monetary.adapters.outbound.providers import (
    CachingRateProvider,
    StaticRateProvider,
)
from monetary.domain.services import (
    CurrencyConversionService,
    MonetaryFactory,
    MoneyFormatter,
)
from monetary.domain.values import MonetaryContext
from monetary.shared.config import get_settings
from monetary.shared.logging import get_logger
from monetary.shared.observability import Metrics

logger = get_logger(__name__)


class Container(containers.DeclarativeContainer):
    config = providers.Configuration()

    metrics = providers.Singleton(Metrics)

    default_context = providers.Singleton(
        MonetaryContext,
        precision=config.default_precision,
        max_scale=config.default_max_scale,
        rounding_mode=config.default_rounding_mode,
    )

    monetary_factory = providers.Singleton(
        MonetaryFactory,
        context=default_context,
    )

    money_formatter = providers.Singleton(MoneyFormatter)

    static_rate_provider = providers.Singleton(
        StaticRateProvider,
        context=default_context,
    )

    caching_rate_provider = providers.Singleton(
        CachingRateProvider,
        upstream=static_rate_provider,
        ttl=providers.Factory(timedelta, seconds=config.rate_cache_ttl_seconds),
        cleanup_interval=config.rate_cache_cleanup_interval,
        metrics=metrics,
    )

    conversion_service = providers.Singleton(
        CurrencyConversionService,
        providers=providers.List(caching_rate_provider),
        default_context=default_context,
        metrics=metrics,
    )


def get_container() -> Container:
    settings = get_settings()

    container = Container()

    container.config.from_dict(
        {
            "default_precision": settings.DEFAULT_PRECISION,
            "default_max_scale": settings.DEFAULT_MAX_SCALE,
            "default_rounding_mode": settings.DEFAULT_ROUNDING_MODE,
            "rate_cache_ttl_seconds": float(settings.RATE_CACHE_TTL_SECONDS),
            "rate_cache_cleanup_interval": settings.RATE_CACHE_CLEANUP_INTERVAL,
        }
    )

    if not settings.ENABLE_METRICS:
        container.metrics.override(providers.Object(None))

    logger.info(
        "di_container_configured",
        metrics_enabled=settings.ENABLE_METRICS,
        rate_cache_ttl_seconds=settings.RATE_CACHE_TTL_SECONDS,
    )

    return container

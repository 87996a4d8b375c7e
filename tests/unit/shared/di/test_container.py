from datetime import timedelta

from monetary.adapters.outbound.providers import CachingRateProvider
from monetary.domain.services import CurrencyConversionService
from monetary.domain.services.currency_registry import require_currency
from monetary.domain.values import FixedDecimal, MonetaryContext, RoundingMode
from monetary.shared.di import get_container
from monetary.shared.observability import Metrics


def test_container_wires_conversion_stack():
    # Given
    container = get_container()

    # When
    service = container.conversion_service()
    cache = container.caching_rate_provider()

    # Then
    assert isinstance(service, CurrencyConversionService)
    assert isinstance(cache, CachingRateProvider)
    assert service.providers == (cache,)
    assert cache.upstream is container.static_rate_provider()
    assert cache.ttl == timedelta(seconds=300)
    assert container.default_context() == MonetaryContext(
        precision=19, max_scale=6, rounding_mode=RoundingMode.HALF_EVEN
    )


def test_container_without_metrics():
    container = get_container()

    assert container.metrics() is None


def test_container_with_metrics(monkeypatch):
    # Given
    monkeypatch.setenv("ENABLE_METRICS", "true")

    from monetary.shared.config import get_settings

    get_settings.cache_clear()

    # When
    container = get_container()

    # Then
    assert isinstance(container.metrics(), Metrics)
    assert container.conversion_service() is container.conversion_service()


def test_container_converts_with_static_rates():
    # Given
    container = get_container()
    usd = require_currency("USD")
    eur = require_currency("EUR")
    container.static_rate_provider().add_rate(usd, eur, "0.85")

    # When
    converted = container.conversion_service().convert(
        container.monetary_factory().parse("USD:100"), eur
    )

    # Then
    assert converted.currency == eur
    assert converted.amount == FixedDecimal.parse("85")

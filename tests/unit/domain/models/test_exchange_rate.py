from datetime import datetime, timedelta, timezone

import freezegun
import pytest

from monetary.domain.exceptions import (
    ConversionError,
    CurrencyMismatchError,
    DecimalOverflowError,
    ExpiredRateError,
    InvalidExchangeRateError,
)
from monetary.domain.models import ExchangeRate, Monetary
from monetary.domain.numeric import FLOAT64
from monetary.domain.services.currency_registry import require_currency
from monetary.domain.values import (
    CurrencyPair,
    FixedDecimal,
    MonetaryContext,
    RoundingMode,
    TimestampUTC,
)

USD = require_currency("USD")
EUR = require_currency("EUR")
GBP = require_currency("GBP")

MINTED_AT = datetime(2025, 10, 2, 12, 0, 0, tzinfo=timezone.utc)


def _d(text: str) -> FixedDecimal:
    return FixedDecimal.parse(text)


def _rate(factor: str = "0.85", **kwargs) -> ExchangeRate:
    return ExchangeRate(USD, EUR, _d(factor), timestamp=TimestampUTC(MINTED_AT), **kwargs)


@pytest.mark.parametrize(
    "factor", [_d("0"), _d("-1.5"), 0.0, -0.85, float("nan"), float("inf")]
)
def test_rate_factor_must_be_positive_and_finite(factor):
    with pytest.raises(InvalidExchangeRateError):
        ExchangeRate(USD, EUR, factor)


def test_rate_basics():
    rate = _rate()

    assert rate.pair == CurrencyPair.of(USD, EUR)
    assert rate.ttl is None
    assert rate.context == MonetaryContext()
    assert "USD->EUR" in str(rate)


@freezegun.freeze_time(MINTED_AT + timedelta(days=365))
def test_rate_without_ttl_never_expires():
    assert not _rate().is_expired()


def test_rate_with_ttl_expires_after_it():
    # Given
    rate = _rate().with_ttl(timedelta(seconds=30))

    # When & Then
    assert not rate.is_expired(TimestampUTC(MINTED_AT + timedelta(seconds=29)))
    assert not rate.is_expired(TimestampUTC(MINTED_AT + timedelta(seconds=30)))
    assert rate.is_expired(TimestampUTC(MINTED_AT + timedelta(seconds=31)))


@freezegun.freeze_time(MINTED_AT + timedelta(seconds=10))
def test_apply_stays_in_backing_type():
    # Given
    rate = _rate()
    amount = Monetary(_d("100.00"), USD, MonetaryContext.high())

    # When
    converted = rate.apply(amount)

    # Then
    assert converted.amount == _d("85")
    assert converted.currency == EUR
    assert converted.context == MonetaryContext.high()


@freezegun.freeze_time(MINTED_AT)
def test_apply_converts_factor_to_amount_type():
    converted = _rate().apply(Monetary(100.0, USD))

    assert converted.numeric is FLOAT64
    assert converted.amount == pytest.approx(85.0)


@freezegun.freeze_time(MINTED_AT)
def test_apply_rejects_other_currencies():
    with pytest.raises(CurrencyMismatchError):
        _rate().apply(Monetary(_d("100"), GBP))


@freezegun.freeze_time(MINTED_AT + timedelta(minutes=1))
def test_apply_rejects_expired_rate():
    rate = _rate().with_ttl(timedelta(seconds=10))

    with pytest.raises(ExpiredRateError) as exc_info:
        rate.apply(Monetary(_d("100"), USD))

    assert exc_info.value.is_recoverable()


@freezegun.freeze_time(MINTED_AT)
def test_apply_convert_changes_backing_type():
    converted = _rate().apply_convert(Monetary(_d("100"), USD), float)

    assert converted.amount == 85.0
    assert converted.currency == EUR


@pytest.mark.parametrize(
    "mode, expected",
    [
        (RoundingMode.HALF_EVEN, "3.33"),
        (RoundingMode.UP, "3.34"),
        (RoundingMode.FLOOR, "3.33"),
    ],
)
def test_apply_convert_rounds_with_rate_context(mode, expected):
    rate = _rate("0.333333333").with_context(MonetaryContext(19, 2, mode))

    converted = rate.apply_convert(Monetary(_d("10"), USD))

    assert str(converted.amount) == expected


@freezegun.freeze_time(MINTED_AT)
def test_apply_convert_wraps_numeric_failures():
    rate = _rate("1")
    huge = Monetary(FixedDecimal(1, -100), USD)

    with pytest.raises(ConversionError) as exc_info:
        rate.apply_convert(huge)

    assert isinstance(exc_info.value.__cause__, DecimalOverflowError)


@freezegun.freeze_time(MINTED_AT)
def test_apply_convert_reports_precision_loss():
    rate = _rate("1")
    huge = Monetary(FixedDecimal(1, -60), USD)

    with pytest.raises(ConversionError):
        rate.with_context(MonetaryContext(max_scale=-60)).apply_convert(huge, "float32")


def test_inverse():
    rate = _rate("0.8").with_ttl(timedelta(minutes=5))

    inverse = rate.inverse()

    assert inverse.base == EUR
    assert inverse.target == USD
    assert inverse.factor == _d("1.25")
    assert inverse.ttl == timedelta(minutes=5)
    assert inverse.timestamp == rate.timestamp


def test_stamped_rate_ages_from_stamping():
    with freezegun.freeze_time(MINTED_AT + timedelta(hours=1)) as frozen:
        # Given
        rate = _rate()

        # When
        stamped = rate.stamped(timedelta(seconds=30))

        # Then
        assert stamped.timestamp == TimestampUTC.now()
        assert stamped.ttl == timedelta(seconds=30)
        assert stamped.factor == rate.factor
        assert not stamped.is_expired()

        frozen.tick(timedelta(seconds=31))
        assert stamped.is_expired()
        assert stamped.age().seconds == pytest.approx(31)

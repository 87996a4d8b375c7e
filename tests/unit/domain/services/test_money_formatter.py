import numpy as np

from monetary.domain.models import Monetary
from monetary.domain.services import MoneyFormatter
from monetary.domain.services.currency_registry import require_currency
from monetary.domain.values import FixedDecimal, RoundingMode


def _money(amount, code: str) -> Monetary:
    if isinstance(amount, str):
        amount = FixedDecimal.parse(amount)
    return Monetary(amount, require_currency(code))


def test_format_pads_to_currency_digits():
    formatter = MoneyFormatter()

    assert formatter.format(_money("10.5", "USD")) == "$10.50"
    assert formatter.format(_money("1000", "JPY")) == "¥1000"
    assert formatter.format(_money("0.0015", "BTC")) == "₿0.00150000"
    assert formatter.format(_money("-3.25", "GBP")) == "£-3.25"


def test_format_rounds_half_even_by_default():
    formatter = MoneyFormatter()

    assert formatter.format(_money("2.345", "EUR")) == "€2.34"
    assert formatter.format(_money("1234.5", "JPY")) == "¥1234"
    assert MoneyFormatter(RoundingMode.HALF_UP).format(_money("2.345", "EUR")) == "€2.35"


def test_format_float_backings():
    formatter = MoneyFormatter()

    assert formatter.format(_money(10.5, "USD")) == "$10.50"
    assert formatter.format(_money(np.float32(0.25), "CHF")) == "Fr0.25"


def test_format_with_code():
    assert MoneyFormatter(show_code=True).format(_money("12", "EUR")) == "€12.00 EUR"

import pytest

from monetary.domain.exceptions import (
    ConversionError,
    DecimalOverflowError,
    DivisionByZeroError,
    InvalidFormatError,
    PrecisionLossError,
    RoundingNecessaryError,
)
from monetary.domain.values import FixedDecimal, RoundingMode
from monetary.domain.values.fixed_decimal import UNSCALED_MAX, UNSCALED_MIN


def _d(text: str) -> FixedDecimal:
    return FixedDecimal.parse(text)


@pytest.mark.parametrize(
    "mode, expected",
    [
        (RoundingMode.HALF_EVEN, "12.36"),
        (RoundingMode.HALF_DOWN, "12.35"),
        (RoundingMode.HALF_UP, "12.36"),
        (RoundingMode.FLOOR, "12.35"),
        (RoundingMode.CEILING, "12.36"),
        (RoundingMode.UP, "12.36"),
        (RoundingMode.DOWN, "12.35"),
    ],
)
def test_rescale_positive_value_by_mode(mode, expected):
    # Given
    value = FixedDecimal(12355, 3)

    # When
    rounded = value.rescale(2, mode)

    # Then
    assert str(rounded) == expected
    assert rounded.scale == 2


@pytest.mark.parametrize(
    "mode, expected",
    [
        (RoundingMode.HALF_EVEN, "-12.36"),
        (RoundingMode.HALF_DOWN, "-12.35"),
        (RoundingMode.HALF_UP, "-12.36"),
        (RoundingMode.FLOOR, "-12.36"),
        (RoundingMode.CEILING, "-12.35"),
        (RoundingMode.UP, "-12.36"),
        (RoundingMode.DOWN, "-12.35"),
    ],
)
def test_rescale_negative_value_by_mode(mode, expected):
    value = FixedDecimal(12355, 3).negate()

    assert str(value.rescale(2, mode)) == expected


def test_half_even_keeps_even_quotient_on_tie():
    assert str(FixedDecimal(12345, 3).rescale(2, RoundingMode.HALF_EVEN)) == "12.34"
    assert str(FixedDecimal(12345, 3).rescale(2, RoundingMode.HALF_UP)) == "12.35"


def test_half_modes_round_past_half_the_same_way():
    value = _d("2.5001")

    assert str(value.rescale(0, RoundingMode.HALF_DOWN)) == "3"
    assert str(value.rescale(0, RoundingMode.HALF_EVEN)) == "3"


def test_rescale_up_is_exact():
    value = FixedDecimal(5, 1).rescale(3)

    assert value.unscaled == 500
    assert str(value) == "0.500"


def test_rescale_unnecessary():
    assert str(FixedDecimal(12350, 3).rescale(2, RoundingMode.UNNECESSARY)) == "12.35"

    with pytest.raises(RoundingNecessaryError):
        FixedDecimal(12355, 3).rescale(2, RoundingMode.UNNECESSARY)


def test_rescale_then_unnecessary_matches_direct_rescale():
    value = _d("12.35")

    widened = value.rescale(4, RoundingMode.HALF_UP)

    assert widened.rescale(2, RoundingMode.UNNECESSARY) == value.rescale(2)


def test_decimal_arithmetic():
    # Given
    a = _d("123.45")
    b = _d("67.89")

    # When & Then
    assert str(a.add(b)) == "191.34"
    assert str(a.subtract(b)) == "55.56"
    assert str(a.multiply(b, 2, RoundingMode.HALF_EVEN)) == "8381.02"
    assert str(a.divide(b, 2, RoundingMode.HALF_EVEN)) == "1.82"


def test_add_aligns_scales():
    result = _d("1.5") + _d("0.25")

    assert result.scale == 2
    assert str(result) == "1.75"


def test_exact_multiply_keeps_combined_scale():
    product = _d("1.5").multiply(_d("2.25"))

    assert product.scale == 3
    assert str(product) == "3.375"
    assert str(_d("1.5") * 3) == "4.5"


def test_divide_rounds_ties_with_mode():
    one, eight = _d("1"), _d("8")

    assert str(one.divide(eight, 2, RoundingMode.HALF_EVEN)) == "0.12"
    assert str(one.divide(eight, 2, RoundingMode.HALF_UP)) == "0.13"


def test_divide_inexact_quotient_respects_directed_modes():
    one, three = _d("1"), _d("3")

    assert str(one.divide(three, 2, RoundingMode.UP)) == "0.34"
    assert str(one.divide(three, 2, RoundingMode.DOWN)) == "0.33"
    assert str(one.divide(three, 4, RoundingMode.HALF_EVEN)) == "0.3333"


def test_divide_negative_and_mixed_scales():
    assert str(_d("-7").divide(_d("2"), 0, RoundingMode.HALF_EVEN)) == "-4"
    assert str(_d("10.00").divide(_d("0.5"), 1)) == "20.0"


def test_divide_by_zero():
    with pytest.raises(DivisionByZeroError):
        _d("1.00").divide(_d("0.0"), 2)

    with pytest.raises(ZeroDivisionError):
        _d("1").divide(FixedDecimal.zero(), 2)


@pytest.mark.parametrize(
    "text, unscaled, scale",
    [
        ("123.45", 12345, 2),
        ("-0.001", -1, 3),
        ("42", 42, 0),
        ("007.10", 710, 2),
    ],
)
def test_parse(text, unscaled, scale):
    value = _d(text)

    assert (value.unscaled, value.scale) == (unscaled, scale)


@pytest.mark.parametrize("text", ["", "   ", "1.2.3", "abc", "12a", ".5", "5.", "+5"])
def test_parse_rejects_malformed_input(text):
    with pytest.raises(InvalidFormatError):
        FixedDecimal.parse(text)


def test_negative_zero_loses_its_sign():
    assert str(_d("-0")) == "0"
    assert str(_d("-0.00")) == "0.00"
    assert not _d("-0.00").is_negative()


def test_format():
    assert str(FixedDecimal(-50, 2)) == "-0.50"
    assert str(FixedDecimal(12, -2)) == "1200"
    assert str(FixedDecimal(7, 0)) == "7"
    assert str(FixedDecimal(-1234567, 4)) == "-123.4567"
    assert repr(FixedDecimal(150, 2)) == "FixedDecimal('1.50')"


@pytest.mark.parametrize("text", ["123.4500", "-0.001", "42", "0.000001", "-98765.4321"])
def test_parse_format_round_trip(text):
    value = _d(text)

    assert _d(str(value)) == value
    assert _d(str(value)).scale == value.scale


def test_equality_and_ordering_ignore_scale():
    assert _d("1.50") == _d("1.5")
    assert hash(_d("1.50")) == hash(_d("1.5"))
    assert _d("1.05") < _d("1.5")
    assert _d("-2") < _d("-1.99")
    assert max(_d("0.1"), _d("0.09")) == _d("0.1")


def test_sign_inspection():
    value = _d("-3.25")

    assert value.negate().negate() == value
    assert value.abs() == _d("3.25")
    assert not value.abs().is_negative()
    assert value.signum() == -1
    assert FixedDecimal.zero().signum() == 0
    assert FixedDecimal.one().signum() == 1
    assert FixedDecimal.zero().is_zero()
    assert _d("0.01").is_positive()


def test_overflow_is_reported():
    largest = FixedDecimal(UNSCALED_MAX, 0)

    with pytest.raises(DecimalOverflowError):
        largest.add(FixedDecimal.one())

    with pytest.raises(OverflowError):
        FixedDecimal(UNSCALED_MIN, 0).negate()

    with pytest.raises(DecimalOverflowError):
        FixedDecimal(UNSCALED_MAX + 1, 0)

    with pytest.raises(DecimalOverflowError):
        largest.multiply(FixedDecimal(2, 0))


def test_from_float_uses_shortest_text():
    assert FixedDecimal.from_float(0.1) == _d("0.1")
    assert FixedDecimal.from_float(0.1).scale == 1
    assert FixedDecimal.from_float(-2.5) == _d("-2.5")
    assert FixedDecimal.from_float(1e-05) == _d("0.00001")
    assert str(FixedDecimal.from_float(1.5e20)) == "150000000000000000000"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), 1e40])
def test_from_float_rejects_unrepresentable(value):
    with pytest.raises(ConversionError):
        FixedDecimal.from_float(value)


def test_to_float():
    assert _d("12.5").to_float() == 12.5
    assert FixedDecimal(3, -2).to_float() == 300.0

    with pytest.raises(PrecisionLossError):
        FixedDecimal(1, -400).to_float()


def test_normalized_drops_trailing_zeros():
    value = _d("1.2300").normalized()

    assert (value.unscaled, value.scale) == (123, 2)
    assert FixedDecimal(0, 5).normalized() == FixedDecimal.zero()


def test_operators_accept_plain_ints():
    value = _d("2.50")

    assert value + 1 == _d("3.50")
    assert 1 + value == _d("3.50")
    assert value - 1 == _d("1.50")
    assert 1 - value == _d("-1.50")
    assert value * 2 == _d("5.00")
    assert 2 * value == _d("5.00")


@pytest.mark.parametrize("other", [1.5, True, "1"])
def test_operators_reject_other_operands(other):
    value = _d("2.50")

    with pytest.raises(TypeError):
        value + other
    with pytest.raises(TypeError):
        value - other
    with pytest.raises(TypeError):
        value * other

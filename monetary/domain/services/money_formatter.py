from monetary.domain.models import Monetary
from monetary.domain.values import RoundingMode


class MoneyFormatter:
    """
    Renders values as ``"<symbol><amount>"`` ($10.50, ¥1000, ₿0.00150000).

    Amounts are printed with the currency's default fraction digits.
    """

    def __init__(
        self,
        rounding_mode: RoundingMode = RoundingMode.HALF_EVEN,
        show_code: bool = False,
    ):
        self._rounding_mode = RoundingMode(rounding_mode)
        self._show_code = show_code

    def format(self, money: Monetary) -> str:
        digits = money.currency.default_fraction_digits
        amount = money.numeric.to_decimal(money.amount).rescale(
            digits, self._rounding_mode
        )

        if self._show_code:
            return f"{money.currency.symbol}{amount} {money.currency.code}"

        return f"{money.currency.symbol}{amount}"

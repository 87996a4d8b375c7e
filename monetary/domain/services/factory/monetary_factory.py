from typing import Any, Optional, Union

from monetary.domain.exceptions import InvalidAmountError, InvalidFormatError
from monetary.domain.models import Monetary
from monetary.domain.numeric import DECIMAL, Amount, numeric_for
from monetary.domain.services.currency_registry import require_currency
from monetary.domain.values import Currency, FixedDecimal, MonetaryContext


class MonetaryFactory:
    def __init__(self, context: Optional[MonetaryContext] = None):
        self._context = context or MonetaryContext()

    @property
    def context(self) -> MonetaryContext:
        return self._context

    def create(self, value: Amount, currency: Currency) -> Monetary:
        return Monetary(value, currency, self._context)

    def of(self, value: Union[Amount, int, str], code: str) -> Monetary:
        """
        Build a value from an amount and a registered currency code.

        Ints and strings become FixedDecimal amounts.

        :raises UnknownCurrencyError: if the code is not registered
        :raises InvalidAmountError: if a string amount is not a decimal literal
        """
        currency = require_currency(code)

        if isinstance(value, str):
            value = self._parse_amount(value)
        elif isinstance(value, int) and not isinstance(value, bool):
            value = FixedDecimal.from_int(value)

        return self.create(value, currency)

    def parse(self, literal: str) -> Monetary:
        """
        Parse a ``"CODE:amount"`` literal such as ``"USD:10.50"``.

        :raises InvalidFormatError: if there is no ':' separator or no amount
        :raises UnknownCurrencyError: if the code is not registered
        :raises InvalidAmountError: if the amount is not a decimal literal
        """
        code, separator, raw_amount = literal.partition(":")

        if not separator:
            raise InvalidFormatError("expected 'CODE:amount'", literal)
        if not raw_amount.strip():
            raise InvalidFormatError("missing amount", literal)

        currency = require_currency(code)

        return self.create(self._parse_amount(raw_amount), currency)

    def from_minor_units(self, code: str, minor_units: int) -> Monetary:
        """1050 USD cents -> 10.50 USD."""
        currency = require_currency(code)
        amount = FixedDecimal(minor_units, currency.default_fraction_digits)

        return self.create(amount, currency)

    def zero(self, code: str, kind: Any = DECIMAL) -> Monetary:
        return self.create(numeric_for(kind).zero(), require_currency(code))

    @staticmethod
    def _parse_amount(raw_amount: str) -> FixedDecimal:
        try:
            return FixedDecimal.parse(raw_amount)
        except InvalidFormatError as e:
            raise InvalidAmountError(raw_amount.strip()) from e

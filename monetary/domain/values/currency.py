from dataclasses import dataclass, replace
from typing import Union

CRYPTOCURRENCY_CODES = frozenset({"BTC", "ETH", "LTC"})
PRECIOUS_METAL_CODES = frozenset({"XAU", "XAG"})


@dataclass(frozen=True)
class Currency:
    """
    Immutable currency descriptor.

    Equality compares the full descriptor. Non-ISO tokens such as
    cryptocurrencies carry numeric code 0.
    """

    code: str
    numeric_code: int
    default_fraction_digits: int
    symbol: str
    display_name: str

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("Currency code cannot be empty")
        if not self.code.isalnum():
            raise ValueError(
                f"Currency code must only contain letters and numbers: {self.code}"
            )
        if self.numeric_code < 0:
            raise ValueError(f"Numeric code cannot be negative: {self.numeric_code}")
        if self.default_fraction_digits < 0:
            raise ValueError(
                f"Fraction digits cannot be negative: {self.default_fraction_digits}"
            )

        object.__setattr__(self, "code", self.code.upper())

    @classmethod
    def of(cls, code: str) -> "Currency":
        """Look a currency up in the registry, raising UnknownCurrencyError on a miss."""
        from monetary.domain.services.currency_registry import require_currency

        return require_currency(code)

    @property
    def identity(self) -> Union[int, str]:
        """
        Key used for same-currency checks and pair lookups.

        The ISO numeric code when there is one, the alphabetic code otherwise,
        so that BTC and ETH (both numeric 0) stay distinct.
        """
        if self.numeric_code:
            return self.numeric_code

        return self.code

    @property
    def precision(self) -> int:
        return self.default_fraction_digits

    def same_currency(self, other: "Currency") -> bool:
        return self.identity == other.identity

    def is_cryptocurrency(self) -> bool:
        return self.code in CRYPTOCURRENCY_CODES

    def is_precious_metal(self) -> bool:
        return self.code in PRECIOUS_METAL_CODES

    def is_fiat(self) -> bool:
        return not self.is_cryptocurrency() and not self.is_precious_metal()

    def with_symbol(self, symbol: str) -> "Currency":
        return replace(self, symbol=symbol)

    def format_with_symbol(self, show_code: bool = False) -> str:
        if show_code:
            return f"{self.symbol} {self.code}"

        return self.symbol

    def __str__(self) -> str:
        return self.code

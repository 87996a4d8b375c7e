from dataclasses import dataclass
from typing import Union

from .currency import Currency


@dataclass(frozen=True)
class CurrencyPair:
    """
    Ordered (base, target) cache key built from currency identities.

    USD->EUR and EUR->USD are different pairs.
    """

    base_code: Union[int, str]
    target_code: Union[int, str]

    @classmethod
    def of(cls, base: Currency, target: Currency) -> "CurrencyPair":
        return cls(base_code=base.identity, target_code=target.identity)

    def __str__(self) -> str:
        return f"{self.base_code}->{self.target_code}"

    def inverse(self) -> "CurrencyPair":
        """Returns the reverse pair (USD->EUR -> EUR->USD)."""
        return CurrencyPair(base_code=self.target_code, target_code=self.base_code)

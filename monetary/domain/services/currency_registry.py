from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional

from monetary.domain.exceptions import UnknownCurrencyError
from monetary.domain.values import Currency

_CURRENCIES = (
    # Fiat
    Currency("USD", 840, 2, "$", "US Dollar"),
    Currency("EUR", 978, 2, "€", "Euro"),
    Currency("GBP", 826, 2, "£", "British Pound Sterling"),
    Currency("JPY", 392, 0, "¥", "Japanese Yen"),
    Currency("CHF", 756, 2, "Fr", "Swiss Franc"),
    Currency("CAD", 124, 2, "C$", "Canadian Dollar"),
    Currency("AUD", 36, 2, "A$", "Australian Dollar"),
    Currency("CNY", 156, 2, "¥", "Chinese Yuan"),
    Currency("INR", 356, 2, "₹", "Indian Rupee"),
    Currency("KRW", 410, 0, "₩", "South Korean Won"),
    Currency("BRL", 986, 2, "R$", "Brazilian Real"),
    Currency("RUB", 643, 2, "₽", "Russian Ruble"),
    Currency("ZAR", 710, 2, "R", "South African Rand"),
    Currency("MXN", 484, 2, "$", "Mexican Peso"),
    Currency("SGD", 702, 2, "S$", "Singapore Dollar"),
    Currency("NOK", 578, 2, "kr", "Norwegian Krone"),
    Currency("SEK", 752, 2, "kr", "Swedish Krona"),
    Currency("DKK", 208, 2, "kr", "Danish Krone"),
    Currency("PLN", 985, 2, "zł", "Polish Zloty"),
    Currency("CZK", 203, 2, "Kč", "Czech Koruna"),
    Currency("HUF", 348, 2, "Ft", "Hungarian Forint"),
    Currency("ILS", 376, 2, "₪", "Israeli New Shekel"),
    Currency("AED", 784, 2, "د.إ", "UAE Dirham"),
    Currency("SAR", 682, 2, "﷼", "Saudi Riyal"),
    Currency("TRY", 949, 2, "₺", "Turkish Lira"),
    # Cryptocurrencies carry no ISO numeric code
    Currency("BTC", 0, 8, "₿", "Bitcoin"),
    Currency("ETH", 0, 18, "Ξ", "Ethereum"),
    Currency("LTC", 0, 8, "Ł", "Litecoin"),
    # Precious metals
    Currency("XAU", 959, 4, "Au", "Gold (troy ounce)"),
    Currency("XAG", 961, 4, "Ag", "Silver (troy ounce)"),
)


@lru_cache()
def get_registry() -> Mapping[str, Currency]:
    """Read-only code -> currency mapping, built on first use."""
    return MappingProxyType({currency.code: currency for currency in _CURRENCIES})


def get_currency(code: str) -> Optional[Currency]:
    """Case-insensitive lookup; ``None`` for unknown codes."""
    return get_registry().get(code.strip().upper())


def require_currency(code: str) -> Currency:
    """
    :raises UnknownCurrencyError: if the code is not registered
    """
    currency = get_currency(code)

    if currency is None:
        raise UnknownCurrencyError(code)

    return currency


def get_currency_by_numeric_code(numeric_code: int) -> Optional[Currency]:
    # Linear scan; numeric code 0 is shared by every cryptocurrency.
    for currency in get_registry().values():
        if currency.numeric_code == numeric_code:
            return currency

    return None


def is_supported(code: str) -> bool:
    return get_currency(code) is not None


def available_currencies() -> list[Currency]:
    return list(get_registry().values())

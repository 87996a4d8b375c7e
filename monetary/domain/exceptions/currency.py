from typing import Any, Optional

from .base import MonetaryError


class UnknownCurrencyError(MonetaryError):
    """Raised when a currency code is not present in the registry."""

    category = "UnknownCurrency"

    def __init__(self, code: str, context: Optional[str] = None):
        self.code = code

        message = f"Unknown currency code: {code}"

        if context:
            message = f"Unknown currency code '{code}' in context: {context}"

        super().__init__(message)


class InvalidFormatError(MonetaryError):
    category = "InvalidFormat"

    def __init__(self, reason: str, value: Optional[str] = None):
        self.value = value

        message = f"Invalid format: {reason}"

        if value is not None:
            message += f" (input: '{value}')"

        super().__init__(message)


class InvalidAmountError(MonetaryError):
    category = "InvalidAmount"

    def __init__(self, amount: str, reason: str = "not a number"):
        self.amount = amount

        super().__init__(f"Invalid amount '{amount}': {reason}")


class CurrencyMismatchError(MonetaryError):
    """Raised when an operation combines values of different currencies."""

    category = "CurrencyMismatch"

    def __init__(self, expected: Any, actual: Any, operation: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        self.operation = operation

        if operation:
            message = f"Currency mismatch in {operation}: expected '{expected}', got '{actual}'"
        else:
            message = f"Currency mismatch: expected '{expected}', got '{actual}'"

        super().__init__(message)

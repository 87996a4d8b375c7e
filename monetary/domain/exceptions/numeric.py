from typing import Any

from .base import MonetaryError


class NumericError(MonetaryError):
    pass


class ConversionError(NumericError):
    """Raised when a value cannot be carried over to another backing type."""

    category = "ConversionError"
    recoverable = True

    def __init__(self, value: Any, target: str, reason: str = "conversion failed"):
        self.value = value
        self.target = target

        super().__init__(f"Cannot convert {value!r} to {target}: {reason}")


class PrecisionLossError(ConversionError):
    """Raised when the target type cannot represent the value's magnitude."""

    category = "PrecisionLoss"

    def __init__(self, value: Any, target: str):
        super().__init__(value, target, reason="value out of range")


class DivisionByZeroError(NumericError, ZeroDivisionError):
    category = "DivisionByZero"

    def __init__(self, dividend: Any):
        self.dividend = dividend

        super().__init__(f"Division by zero: {dividend} / 0")


class DecimalOverflowError(NumericError, OverflowError):
    """Raised when an unscaled value leaves the signed 128-bit range."""

    category = "OverflowError"

    def __init__(self, operation: str):
        self.operation = operation

        super().__init__(f"128-bit decimal overflow during {operation}")


class RoundingNecessaryError(NumericError, ArithmeticError):
    category = "RoundingNecessary"

    def __init__(self, value: Any, scale: int):
        self.value = value
        self.scale = scale

        super().__init__(
            f"Rounding necessary to bring {value} to scale {scale}, "
            f"but rounding mode is UNNECESSARY"
        )

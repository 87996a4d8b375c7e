from dataclasses import dataclass
from typing import Optional

from .fixed_decimal import SCALE_MAX, SCALE_MIN, FixedDecimal
from .rounding_mode import RoundingMode

DEFAULT_PRECISION = 19
DEFAULT_MAX_SCALE = 6
DEFAULT_ROUNDING_MODE = RoundingMode.HALF_EVEN


@dataclass(frozen=True)
class MonetaryContext:
    """
    Precision, maximum scale and rounding mode travelling with a monetary value.

    Arithmetic never rounds on its own; only operations that declare context
    sensitivity (percentages, explicit context application, rate application)
    call ``round``.
    """

    precision: int = DEFAULT_PRECISION
    max_scale: int = DEFAULT_MAX_SCALE
    rounding_mode: RoundingMode = DEFAULT_ROUNDING_MODE

    def __post_init__(self) -> None:
        if self.precision <= 0:
            raise ValueError(f"Precision must be positive: {self.precision}")
        if self.max_scale > SCALE_MAX or self.max_scale < SCALE_MIN:
            raise ValueError(f"Max scale out of range: {self.max_scale}")

        object.__setattr__(self, "rounding_mode", RoundingMode(self.rounding_mode))

    @classmethod
    def builder(cls) -> "MonetaryContextBuilder":
        return MonetaryContextBuilder()

    @classmethod
    def currency(cls) -> "MonetaryContext":
        return cls(precision=19, max_scale=2, rounding_mode=RoundingMode.HALF_EVEN)

    @classmethod
    def high(cls) -> "MonetaryContext":
        return cls(precision=34, max_scale=10, rounding_mode=RoundingMode.HALF_EVEN)

    @classmethod
    def scientific(cls) -> "MonetaryContext":
        return cls(precision=50, max_scale=15, rounding_mode=RoundingMode.HALF_EVEN)

    def round(self, value: FixedDecimal) -> FixedDecimal:
        return value.rescale(self.max_scale, self.rounding_mode)


class MonetaryContextBuilder:
    def __init__(self) -> None:
        self._precision: Optional[int] = None
        self._max_scale: Optional[int] = None
        self._rounding_mode: Optional[RoundingMode] = None

    def with_precision(self, precision: int) -> "MonetaryContextBuilder":
        self._precision = precision
        return self

    def with_max_scale(self, max_scale: int) -> "MonetaryContextBuilder":
        self._max_scale = max_scale
        return self

    def with_rounding_mode(self, rounding_mode: RoundingMode) -> "MonetaryContextBuilder":
        self._rounding_mode = rounding_mode
        return self

    def build(self) -> MonetaryContext:
        return MonetaryContext(
            precision=self._precision if self._precision is not None else DEFAULT_PRECISION,
            max_scale=self._max_scale if self._max_scale is not None else DEFAULT_MAX_SCALE,
            rounding_mode=self._rounding_mode or DEFAULT_ROUNDING_MODE,
        )

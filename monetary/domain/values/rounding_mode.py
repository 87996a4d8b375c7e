from enum import Enum


class RoundingMode(str, Enum):
    """How a decimal is brought to a smaller scale."""

    UP = "UP"
    DOWN = "DOWN"
    CEILING = "CEILING"
    FLOOR = "FLOOR"
    HALF_UP = "HALF_UP"
    HALF_DOWN = "HALF_DOWN"
    HALF_EVEN = "HALF_EVEN"  # Banker's rounding
    UNNECESSARY = "UNNECESSARY"

    def __str__(self) -> str:
        return self.value

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .timestamp_utc import TimestampUTC


@dataclass(frozen=True)
class RateAge:
    """Time elapsed since an exchange rate was minted."""

    elapsed: timedelta

    @property
    def seconds(self) -> float:
        return self.elapsed.total_seconds()

    def exceeds(self, ttl: Optional[timedelta]) -> bool:
        """A rate without a TTL never goes stale."""
        if ttl is None:
            return False

        return self.elapsed > ttl

    @classmethod
    def between(
        cls, minted_at: TimestampUTC, reference_time: TimestampUTC
    ) -> "RateAge":
        return cls(minted_at.elapsed(reference_time))

    @classmethod
    def since(cls, minted_at: TimestampUTC) -> "RateAge":
        return cls.between(minted_at, TimestampUTC.now())

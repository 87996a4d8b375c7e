from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional


@dataclass(frozen=True)
class TimestampUTC:
    value: datetime

    def __post_init__(self) -> None:
        if self.value.tzinfo is None:
            dt_utc = self.value.replace(tzinfo=timezone.utc)
        else:
            dt_utc = self.value.astimezone(timezone.utc)

        object.__setattr__(self, "value", dt_utc)

    def __str__(self) -> str:
        return self.value.isoformat()

    def elapsed(self, reference: Optional["TimestampUTC"] = None) -> timedelta:
        if reference is None:
            reference = TimestampUTC.now()
        return reference.value - self.value

    @classmethod
    def now(cls) -> "TimestampUTC":
        return cls(datetime.now(timezone.utc))

    @classmethod
    def from_timestamp(cls, timestamp: float) -> "TimestampUTC":
        return cls(datetime.fromtimestamp(timestamp, tz=timezone.utc))

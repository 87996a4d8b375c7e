from datetime import datetime, timedelta, timezone

import freezegun

from monetary.domain.values import RateAge, TimestampUTC

MINTED_AT = datetime(2025, 10, 2, 12, 0, 0, tzinfo=timezone.utc)


def test_rate_age_between():
    age = RateAge.between(
        TimestampUTC(MINTED_AT), TimestampUTC(MINTED_AT + timedelta(seconds=45))
    )

    assert age.seconds == 45.0
    assert age.exceeds(timedelta(seconds=30))
    assert not age.exceeds(timedelta(seconds=45))


def test_rate_age_without_ttl_never_exceeds():
    age = RateAge(timedelta(days=365))

    assert not age.exceeds(None)


@freezegun.freeze_time(MINTED_AT + timedelta(minutes=2))
def test_rate_age_since_uses_current_time():
    age = RateAge.since(TimestampUTC(MINTED_AT))

    assert age.elapsed == timedelta(minutes=2)

"""
core/timestamps.py -- Conversion between datetimes and Unix time.

Calendar time is always UTC. Naive datetimes are taken to already be UTC;
aware ones are converted. Sub-second precision is lost on the way to epoch
seconds (rounded half-to-even, like round()).
"""

from datetime import datetime, timedelta, timezone

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime. Patched in tests."""
    return datetime.now(timezone.utc)


def to_epoch_seconds(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return round((moment - UNIX_EPOCH).total_seconds())


def to_datetime(seconds: int) -> datetime:
    return UNIX_EPOCH + timedelta(seconds=seconds)

"""Calendar helpers shared by the mood report aggregates.

All helpers keep the tzinfo of their input, so boundaries are computed in the
caller's offset.
"""

from datetime import date, datetime, timedelta, timezone, tzinfo

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_next_day(dt: datetime) -> datetime:
    return start_of_day(dt) + timedelta(days=1)


def most_recent_monday(dt: datetime) -> datetime:
    """Monday 00:00:00 of the week containing dt (dt itself if it is that instant)."""
    return start_of_day(dt) - timedelta(days=dt.weekday())


def start_of_month(dt: datetime) -> datetime:
    return start_of_day(dt).replace(day=1)


def shift_month(month_start: datetime, months: int) -> datetime:
    """Move a first-of-month datetime by a number of calendar months."""
    index = month_start.year * 12 + (month_start.month - 1) + months
    year, month = divmod(index, 12)
    return month_start.replace(year=year, month=month + 1, day=1)


def local_date(dt: datetime, tz: tzinfo) -> date:
    """Calendar date of dt as seen from tz."""
    return dt.astimezone(tz).date()


def unix_seconds(dt: datetime) -> int:
    """Whole seconds since the epoch, rounded down."""
    return (dt - EPOCH) // timedelta(seconds=1)

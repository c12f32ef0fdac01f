from __future__ import annotations

from datetime import date, datetime, timedelta

from ..core.constants import SECONDS_PER_HOUR


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into naive local time.

    Offsets (``+00:00``, ``Z``) are converted to the server's local zone so
    stored timestamps compare with :func:`now_local`.
    """
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return to_local_naive(datetime.fromisoformat(value))


def to_local_naive(dt: datetime) -> datetime:
    """Convert an offset-aware datetime to naive local time; naive values pass through."""
    if dt.tzinfo is not None:
        return dt.astimezone().replace(tzinfo=None)
    return dt


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def calendar_day(ts: datetime) -> date:
    return ts.date()


def monday_of(day: date) -> date:
    """Monday of the Monday-Sunday week containing ``day``."""
    return day - timedelta(days=day.weekday())


def hours_between(start: datetime, end: datetime) -> float:
    """Signed elapsed hours; negative when ``end`` precedes ``start``."""
    return (end - start).total_seconds() / SECONDS_PER_HOUR


def iter_days(start: date, end: date):
    """Yield each day in ``[start, end)``."""
    day = start
    while day < end:
        yield day
        day += timedelta(days=1)

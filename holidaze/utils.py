"""Shared date helpers used across the booking engine and payload schemas."""

from datetime import date, datetime, time, timezone


def parse_iso_date(value: str) -> date:
    """Parse an ISO-8601 date or timestamp into a calendar date.

    The time-of-day is dropped; a trailing ``Z`` is accepted.

    Examples:
        >>> parse_iso_date("2024-06-10")
        datetime.date(2024, 6, 10)
        >>> parse_iso_date("2024-06-10T14:30:00.000Z")
        datetime.date(2024, 6, 10)
    """
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value).date()


def to_iso_timestamp(day: date) -> str:
    """Format a calendar date as the UTC midnight timestamp the API expects.

    Examples:
        >>> to_iso_timestamp(date(2024, 7, 1))
        '2024-07-01T00:00:00.000Z'
    """
    moment = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.000Z")


def as_date(value: date) -> date:
    """Reduce a date or datetime to a calendar date; reject anything else."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"expected a date, got {type(value).__name__}")

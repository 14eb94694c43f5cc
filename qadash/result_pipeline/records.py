"""Access helpers for loosely-typed run records."""

from collections.abc import Iterable, Mapping
from datetime import date, datetime, timezone, tzinfo
from typing import Any

UNKNOWN_KEY = "Unknown"

DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def get_field(record: Any, name: str) -> Any:
    """Read a field from a mapping row or an attribute-style record.

    Args:
        record: Run record (dict-like row or model instance)
        name: Field name

    Returns:
        Field value, or None when the record has no such field

    """
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def as_records(runs: Iterable[Any] | None) -> list[Any]:
    """Return runs as a list, treating None and non-iterables as empty."""
    if runs is None or isinstance(runs, str | bytes | Mapping):
        return []
    try:
        return list(runs)
    except TypeError:
        return []


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a run timestamp.

    Accepts datetime and date objects, ISO 8601 strings (including a trailing
    ``Z`` and a space separator) and epoch milliseconds.

    Args:
        value: Raw timestamp value

    Returns:
        Parsed datetime (naive or aware, as given), or None if unparseable

    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def to_local(moment: datetime, tz: tzinfo | None = None) -> datetime:
    """Express a timestamp as wall-clock time in ``tz`` (None = local time).

    Naive timestamps are already wall-clock time and are returned unchanged.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(tz)


def day_key(value: Any, tz: tzinfo | None = None) -> str | None:
    """Calendar-day string (YYYY-MM-DD) of a timestamp, or None if unparseable."""
    moment = parse_timestamp(value)
    if moment is None:
        return None
    return to_local(moment, tz).date().isoformat()


def day_name(day: date) -> str:
    """Short English weekday name."""
    return DAY_NAMES[day.weekday()]

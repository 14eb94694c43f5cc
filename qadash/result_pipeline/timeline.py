"""Build the rolling N-day run timeline."""

from collections.abc import Iterable
from datetime import date, datetime, timedelta, tzinfo
from typing import Any

from qadash.result_pipeline.grouping import group_by_date
from qadash.result_pipeline.models.stats import TimelineBucket
from qadash.result_pipeline.records import day_name
from qadash.result_pipeline.stats import calculate_test_stats

DEFAULT_TIMELINE_DAYS = 7


def current_day(tz: tzinfo | None = None) -> date:
    """Today's date in ``tz`` (process local time when None)."""
    return datetime.now(tz).date()


def get_timeline_data(
    runs: Iterable[Any] | None,
    days: int = DEFAULT_TIMELINE_DAYS,
    tz: tzinfo | None = None,
) -> list[TimelineBucket]:
    """Bucket runs into the last ``days`` calendar days, oldest first.

    The clock is read once per call, so every bucket is computed against the
    same "today". A day without runs still gets a bucket with zeroed stats.

    Args:
        runs: Run records with a ``created_at`` timestamp
        days: Window length; the last bucket is today
        tz: Timezone that defines calendar days (process local time when None)

    Returns:
        Exactly ``days`` buckets (none when ``days`` is not positive)

    """
    today = current_day(tz)
    runs_by_day = group_by_date(runs, tz)

    timeline: list[TimelineBucket] = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        key = day.isoformat()
        day_runs = runs_by_day.get(key, [])
        timeline.append(
            TimelineBucket(
                date=key,
                day_name=day_name(day),
                runs=day_runs,
                stats=calculate_test_stats(day_runs),
            )
        )
    return timeline

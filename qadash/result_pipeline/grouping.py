"""Partition, filter and summarize run records."""

from collections.abc import Callable, Iterable
from datetime import tzinfo
from typing import Any

from qadash.result_pipeline.models.stats import WebsiteSummary
from qadash.result_pipeline.records import (
    UNKNOWN_KEY,
    as_records,
    day_key,
    get_field,
    parse_timestamp,
)
from qadash.result_pipeline.stats import calculate_test_stats


def group_by_website(runs: Iterable[Any] | None) -> dict[str, list[Any]]:
    """Group runs by ``website_name``.

    Args:
        runs: Run records

    Returns:
        Runs keyed by website name in first-seen order; runs without a
        website name are grouped under "Unknown"

    """
    return _group(runs, _website_key)


def group_by_date(
    runs: Iterable[Any] | None, tz: tzinfo | None = None
) -> dict[str, list[Any]]:
    """Group runs by the calendar day of ``created_at``.

    Days are taken in ``tz`` (process local time when None), so two runs on
    the same local day share a bucket whatever their time of day.

    Args:
        runs: Run records
        tz: Timezone that defines calendar days

    Returns:
        Runs keyed by YYYY-MM-DD in first-seen order; runs without a
        parseable timestamp are grouped under "Unknown"

    """
    return _group(runs, lambda run: day_key(get_field(run, "created_at"), tz))


def filter_runs(
    runs: Iterable[Any] | None,
    website: str | None = None,
    test_type: str | None = None,
    day: str | None = None,
    tz: tzinfo | None = None,
) -> list[Any]:
    """Select runs by website, test type and calendar day, newest first.

    Args:
        runs: Run records
        website: Exact website name to keep
        test_type: Test type to keep (case-insensitive)
        day: Calendar day (YYYY-MM-DD) to keep
        tz: Timezone that defines calendar days

    Returns:
        Matching runs sorted by ``created_at`` descending; runs without a
        parseable timestamp come last in their original order

    """
    selected = as_records(runs)
    if website is not None:
        selected = [
            run for run in selected if get_field(run, "website_name") == website
        ]
    if test_type is not None:
        wanted = test_type.lower()
        selected = [run for run in selected if _test_type(run) == wanted]
    if day is not None:
        selected = [
            run for run in selected if day_key(get_field(run, "created_at"), tz) == day
        ]

    dated = []
    undated = []
    for run in selected:
        moment = parse_timestamp(get_field(run, "created_at"))
        if moment is None:
            undated.append(run)
        else:
            # Naive timestamps are local wall-clock time.
            dated.append((moment.timestamp(), run))
    dated.sort(key=lambda item: item[0], reverse=True)
    return [run for _, run in dated] + undated


def summarize_websites(runs: Iterable[Any] | None) -> list[WebsiteSummary]:
    """Per-website run statistics, busiest website first.

    Websites with the same number of runs keep their first-seen order.
    """
    summaries = [
        WebsiteSummary(
            name=name, runs=website_runs, stats=calculate_test_stats(website_runs)
        )
        for name, website_runs in group_by_website(runs).items()
    ]
    summaries.sort(key=lambda summary: summary.stats.total, reverse=True)
    return summaries


def _group(
    runs: Iterable[Any] | None, key_for: Callable[[Any], str | None]
) -> dict[str, list[Any]]:
    groups: dict[str, list[Any]] = {}
    for run in as_records(runs):
        key = key_for(run) or UNKNOWN_KEY
        groups.setdefault(key, []).append(run)
    return groups


def _website_key(run: Any) -> str | None:
    name = get_field(run, "website_name")
    if name is None or name == "":
        return None
    return str(name)


def _test_type(run: Any) -> str | None:
    value = get_field(run, "test_type")
    if isinstance(value, str):
        return value.lower()
    return None


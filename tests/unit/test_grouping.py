"""Tests for grouping utilities."""

from zoneinfo import ZoneInfo

from qadash.result_pipeline.grouping import (
    filter_runs,
    group_by_date,
    group_by_website,
    summarize_websites,
)


def test_group_by_website_preserves_order() -> None:
    """group_by_website keeps first-seen keys and record order."""
    runs = [
        {"id": 1, "website_name": "shop"},
        {"id": 2, "website_name": "blog"},
        {"id": 3, "website_name": "shop"},
        {"id": 4},
        {"id": 5, "website_name": None},
    ]
    groups = group_by_website(runs)

    assert list(groups) == ["shop", "blog", "Unknown"]
    assert [run["id"] for run in groups["shop"]] == [1, 3]
    assert [run["id"] for run in groups["Unknown"]] == [4, 5]


def test_group_by_website_does_not_mutate_input() -> None:
    """group_by_website returns new containers."""
    runs = [{"id": 1, "website_name": "shop"}]
    groups = group_by_website(runs)
    groups["shop"].append({"id": 2})
    assert runs == [{"id": 1, "website_name": "shop"}]


def test_group_by_website_empty() -> None:
    """group_by_website returns an empty mapping without runs."""
    assert group_by_website(None) == {}
    assert group_by_website([]) == {}


def test_group_by_date_same_local_day() -> None:
    """group_by_date groups runs on the same calendar day together."""
    runs = [
        {"id": 1, "created_at": "2024-01-05T01:00:00"},
        {"id": 2, "created_at": "2024-01-05T23:00:00"},
        {"id": 3, "created_at": "2024-01-06T00:01:00"},
    ]
    groups = group_by_date(runs)

    assert list(groups) == ["2024-01-05", "2024-01-06"]
    assert [run["id"] for run in groups["2024-01-05"]] == [1, 2]
    assert [run["id"] for run in groups["2024-01-06"]] == [3]


def test_group_by_date_timezone() -> None:
    """group_by_date takes calendar days in the given timezone."""
    runs = [
        {"id": 1, "created_at": "2024-01-05T20:00:00Z"},
        {"id": 2, "created_at": "2024-01-06T02:00:00Z"},
    ]

    utc = group_by_date(runs, ZoneInfo("UTC"))
    assert list(utc) == ["2024-01-05", "2024-01-06"]

    new_york = group_by_date(runs, ZoneInfo("America/New_York"))
    assert list(new_york) == ["2024-01-05"]
    assert len(new_york["2024-01-05"]) == 2


def test_group_by_date_unparseable() -> None:
    """group_by_date puts runs without a valid timestamp under Unknown."""
    groups = group_by_date([{"id": 1}, {"id": 2, "created_at": "soon"}])
    assert list(groups) == ["Unknown"]
    assert len(groups["Unknown"]) == 2


def _run(run_id: int, website: str, test_type: str, created_at: str) -> dict:
    return {
        "id": run_id,
        "website_name": website,
        "test_type": test_type,
        "created_at": created_at,
    }


def test_filter_runs_combined() -> None:
    """filter_runs applies website, type and day filters, newest first."""
    runs = [
        _run(1, "shop", "smoke", "2024-01-05T08:00:00"),
        _run(2, "shop", "Smoke", "2024-01-05T18:00:00"),
        _run(3, "blog", "smoke", "2024-01-05T12:00:00"),
        _run(4, "shop", "load", "2024-01-05T13:00:00"),
        _run(5, "shop", "smoke", "2024-01-04T13:00:00"),
    ]

    selected = filter_runs(runs, website="shop", test_type="SMOKE", day="2024-01-05")
    assert [run["id"] for run in selected] == [2, 1]


def test_filter_runs_sorts_newest_first() -> None:
    """filter_runs sorts by created_at descending, undated runs last."""
    runs = [
        {"id": 1, "created_at": "2024-01-03T10:00:00"},
        {"id": 2},
        {"id": 3, "created_at": "2024-01-05T10:00:00"},
        {"id": 4, "created_at": None},
        {"id": 5, "created_at": "2024-01-04T10:00:00"},
    ]
    assert [run["id"] for run in filter_runs(runs)] == [3, 5, 1, 2, 4]


def test_filter_runs_no_filters_keeps_everything() -> None:
    """filter_runs without filters returns every run."""
    assert filter_runs(None) == []
    assert len(filter_runs([{"id": 1}, {"id": 2}])) == 2


def test_summarize_websites() -> None:
    """summarize_websites computes per-website stats, busiest first."""
    runs = [
        {"website_name": "blog", "status": "pass"},
        {"website_name": "shop", "status": "pass"},
        {"website_name": "shop", "status": "fail"},
        {"website_name": "docs", "status": "fail"},
        {"status": "running"},
    ]
    summaries = summarize_websites(runs)

    assert [summary.name for summary in summaries] == [
        "shop",
        "blog",
        "docs",
        "Unknown",
    ]
    shop = summaries[0]
    assert shop.stats.total == 2
    assert shop.stats.passed == 1
    assert shop.stats.pass_rate == "50.0"
    assert len(shop.runs) == 2
    assert summaries[3].stats.running == 1

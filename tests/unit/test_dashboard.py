"""Tests for the dashboard summary."""

import json
from datetime import date
from unittest.mock import patch

from qadash.result_pipeline.dashboard import build_dashboard_summary
from qadash.result_pipeline.models.config import PipelineConfig

RUNS = [
    {
        "website_name": "shop",
        "test_type": "smoke",
        "status": "pass",
        "created_at": "2024-01-07T09:00:00",
    },
    {
        "website_name": "shop",
        "test_type": "load",
        "status": "fail",
        "created_at": "2024-01-06T09:00:00",
    },
    {
        "website_name": "blog",
        "test_type": "smoke",
        "status": "running",
        "created_at": "2024-01-07T10:00:00",
    },
]


def test_build_dashboard_summary() -> None:
    """build_dashboard_summary combines stats, websites, types and timeline."""
    with patch(
        "qadash.result_pipeline.timeline.current_day", return_value=date(2024, 1, 7)
    ):
        summary = build_dashboard_summary(RUNS, PipelineConfig(timeline_days=2))

    assert summary["stats"] == {
        "passed": 1,
        "failed": 1,
        "running": 1,
        "total": 3,
        "passRate": "33.3",
    }
    assert [website["name"] for website in summary["websites"]] == ["shop", "blog"]
    assert summary["websites"][0]["runCount"] == 2
    assert "runs" not in summary["websites"][0]
    assert summary["testTypes"] == {"smoke": 2, "load": 1}

    timeline = summary["timeline"]
    assert [bucket["date"] for bucket in timeline] == ["2024-01-06", "2024-01-07"]
    assert [bucket["runCount"] for bucket in timeline] == [1, 2]
    assert timeline[1]["stats"]["passRate"] == "50.0"
    assert timeline[1]["dayName"] == "Sun"


def test_build_dashboard_summary_default_config() -> None:
    """build_dashboard_summary uses a seven-day window by default."""
    summary = build_dashboard_summary(None)
    assert summary["stats"]["total"] == 0
    assert summary["websites"] == []
    assert summary["testTypes"] == {}
    assert len(summary["timeline"]) == 7


def test_build_dashboard_summary_is_json_serializable() -> None:
    """build_dashboard_summary returns plain JSON-compatible data."""
    summary = build_dashboard_summary(RUNS)
    assert json.loads(json.dumps(summary)) == summary

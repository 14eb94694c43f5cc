"""Assemble the dashboard summary from a collection of runs."""

import logging
from collections.abc import Iterable
from typing import Any

from qadash.result_pipeline.grouping import summarize_websites
from qadash.result_pipeline.models.config import PipelineConfig
from qadash.result_pipeline.models.stats import TimelineBucket, WebsiteSummary
from qadash.result_pipeline.records import as_records
from qadash.result_pipeline.stats import calculate_test_stats, count_by_test_type
from qadash.result_pipeline.timeline import get_timeline_data

logger = logging.getLogger(__name__)


def build_dashboard_summary(
    runs: Iterable[Any] | None, config: PipelineConfig | None = None
) -> dict[str, Any]:
    """Compute every aggregate the dashboard shows for a set of runs.

    Args:
        runs: Run records
        config: Pipeline settings (defaults when None)

    Returns:
        Plain, JSON-serializable dict with camelCase keys: ``stats``,
        ``websites``, ``testTypes`` and ``timeline``

    """
    config = config or PipelineConfig()
    records = as_records(runs)
    logger.info(
        f"Summarizing {len(records)} runs over {config.timeline_days} days "
        f"(timezone: {config.timezone or 'local'})"
    )

    websites = summarize_websites(records)
    timeline = get_timeline_data(records, config.timeline_days, config.zone_info)

    return {
        "stats": calculate_test_stats(records).model_dump(by_alias=True),
        "websites": [_without_runs(summary) for summary in websites],
        "testTypes": count_by_test_type(records),
        "timeline": [_without_runs(bucket) for bucket in timeline],
    }


def _without_runs(group: WebsiteSummary | TimelineBucket) -> dict[str, Any]:
    # Raw run records are not guaranteed to be JSON-serializable.
    dumped = group.model_dump(by_alias=True, exclude={"runs"})
    dumped["runCount"] = len(group.runs)
    return dumped

"""Rate Core Web Vitals values against fixed thresholds."""

import math
from collections.abc import Mapping

from qadash.result_pipeline.models.config import DEFAULT_THRESHOLDS, MetricThreshold
from qadash.result_pipeline.models.results import MetricRating

METRIC_LABELS: dict[str, str] = {
    "lcp": "Largest Contentful Paint",
    "fid": "First Input Delay",
    "cls": "Cumulative Layout Shift",
    "ttfb": "Time to First Byte",
    "fcp": "First Contentful Paint",
}


def classify_metric(
    metric: str,
    value: float | None,
    thresholds: Mapping[str, MetricThreshold] = DEFAULT_THRESHOLDS,
) -> MetricRating:
    """Rate a metric value.

    Boundary values fall into the outer bucket: a value equal to the good
    threshold is good and a value equal to the poor threshold is poor.

    Args:
        metric: Metric name (case-insensitive, e.g. "LCP")
        value: Measured value
        thresholds: Rating thresholds keyed by lower-case metric name

    Returns:
        The rating; ``unknown`` for an unrecognized metric or a missing or
        NaN value

    """
    threshold = thresholds.get(metric.lower())
    if threshold is None:
        return MetricRating.UNKNOWN
    if value is None or math.isnan(value):
        return MetricRating.UNKNOWN

    if value <= threshold.good:
        return MetricRating.GOOD
    if value >= threshold.poor:
        return MetricRating.POOR
    return MetricRating.NEEDS_IMPROVEMENT

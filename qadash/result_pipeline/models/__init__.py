"""Data models for normalized results, run statistics, and configuration."""

from qadash.result_pipeline.models.config import (
    DEFAULT_THRESHOLDS,
    MetricThreshold,
    PipelineConfig,
)
from qadash.result_pipeline.models.results import (
    AccessibilityViolation,
    AccessibilityViolationGroup,
    LighthouseScores,
    LoadTestSummary,
    MetricRating,
    MetricView,
    NormalizedTestResult,
    PerformanceMetricView,
    PixelResult,
    SecurityResult,
    SEOResult,
    SSLInfo,
    TestStatus,
    TestType,
    VisualResult,
)
from qadash.result_pipeline.models.stats import RunStats, TimelineBucket, WebsiteSummary

__all__ = [
    "DEFAULT_THRESHOLDS",
    "AccessibilityViolation",
    "AccessibilityViolationGroup",
    "LighthouseScores",
    "LoadTestSummary",
    "MetricRating",
    "MetricThreshold",
    "MetricView",
    "NormalizedTestResult",
    "PerformanceMetricView",
    "PipelineConfig",
    "PixelResult",
    "RunStats",
    "SEOResult",
    "SSLInfo",
    "SecurityResult",
    "TestStatus",
    "TestType",
    "TimelineBucket",
    "VisualResult",
    "WebsiteSummary",
]

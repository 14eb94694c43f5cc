"""Canonical, dashboard-ready models for normalized test results."""

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from qadash.result_pipeline.decoding import to_number, to_text


class CanonicalModel(BaseModel):
    """Immutable model serialized with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


class TestType(StrEnum):
    """Test categories produced by the dashboard's tools."""

    __test__ = False

    SMOKE = "smoke"
    PERFORMANCE = "performance"
    LOAD = "load"
    ACCESSIBILITY = "accessibility"
    SECURITY = "security"
    SEO = "seo"
    VISUAL = "visual"
    PIXEL = "pixel"


class TestStatus(StrEnum):
    """Outcome of a single smoke check."""

    __test__ = False

    PASS = "pass"
    FAIL = "fail"


class MetricRating(StrEnum):
    """Qualitative rating of a Core Web Vitals metric."""

    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs-improvement"
    POOR = "poor"
    UNKNOWN = "unknown"


class NormalizedTestResult(CanonicalModel):
    """A single smoke check result."""

    id: int | str | None = Field(default=None, description="Result identifier")
    test_name: str | None = Field(default=None, description="Smoke check name")
    category: str | None = Field(default=None, description="Check category")
    status: TestStatus = Field(default=TestStatus.FAIL, description="Check outcome")
    duration_ms: float | None = Field(
        default=None, description="Check duration in milliseconds"
    )
    error_message: str | None = Field(
        default=None, description="Failure details, if any"
    )
    screenshot_url: str | None = Field(default=None, description="Screenshot link")
    created_at: str | None = Field(default=None, description="Creation timestamp")

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> TestStatus:
        if isinstance(value, str) and value.strip().lower() == TestStatus.PASS:
            return TestStatus.PASS
        return TestStatus.FAIL

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> int | str | None:
        if isinstance(value, int | str) and not isinstance(value, bool):
            return value
        return to_text(value)

    @field_validator("duration_ms", mode="before")
    @classmethod
    def _coerce_duration(cls, value: Any) -> float | None:
        return to_number(value)

    @field_validator(
        "test_name", "category", "error_message", "screenshot_url", mode="before"
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return to_text(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _coerce_created_at(cls, value: Any) -> str | None:
        if isinstance(value, datetime):
            return value.isoformat()
        return to_text(value)


class MetricView(CanonicalModel):
    """One rated performance metric."""

    value: float | None = None
    rating: MetricRating = MetricRating.UNKNOWN
    label: str


class LighthouseScores(CanonicalModel):
    """Lighthouse category scores."""

    performance: float | None = None
    accessibility: float | None = None
    best_practices: float | None = None
    seo: float | None = None


class PerformanceMetricView(CanonicalModel):
    """Rated Core Web Vitals plus optional Lighthouse scores."""

    lcp: MetricView
    fid: MetricView
    cls: MetricView
    ttfb: MetricView
    fcp: MetricView
    lighthouse: LighthouseScores | None = None


class AccessibilityViolation(CanonicalModel):
    """A single axe violation, reduced to what the dashboard shows."""

    id: str | None = None
    description: str | None = None
    help: str | None = None
    help_url: str | None = None
    nodes: int = 0
    wcag: list[str] = Field(default_factory=list)


class AccessibilityViolationGroup(CanonicalModel):
    """Violations keyed by WCAG impact, most severe first."""

    critical: list[AccessibilityViolation] = Field(default_factory=list)
    serious: list[AccessibilityViolation] = Field(default_factory=list)
    moderate: list[AccessibilityViolation] = Field(default_factory=list)
    minor: list[AccessibilityViolation] = Field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of violations across all severities."""
        return sum(
            len(violations)
            for violations in (self.critical, self.serious, self.moderate, self.minor)
        )


class SSLInfo(CanonicalModel):
    """TLS certificate summary."""

    status: str | None = None
    grade: str | None = None
    expires: str | None = None


class SecurityResult(CanonicalModel):
    """Security scan result."""

    ssl: SSLInfo
    headers: dict[str, Any] = Field(default_factory=dict)
    vulnerabilities: list[Any] = Field(default_factory=list)


class SEOResult(CanonicalModel):
    """SEO audit result."""

    score: float | None = None
    meta_tags: dict[str, Any] = Field(default_factory=dict)
    structured_data: list[Any] = Field(default_factory=list)
    technical_seo: dict[str, Any] = Field(
        default_factory=dict, serialization_alias="technicalSEO"
    )
    issues: list[Any] = Field(default_factory=list)


class PixelResult(CanonicalModel):
    """Tracking pixel audit result."""

    detected: list[Any] = Field(default_factory=list)
    events: list[Any] = Field(default_factory=list)
    network: list[Any] = Field(default_factory=list)


class VisualResult(CanonicalModel):
    """Visual regression comparison result."""

    baseline_url: str | None = None
    current_url: str | None = None
    diff_url: str | None = None
    comparisons: list[Any] = Field(default_factory=list)
    issues: int = 0
    similarity: float | None = None


class LoadTestSummary(CanonicalModel):
    """Load test result with derived rates.

    ``successful_requests`` is ``total_requests - failed_requests`` and is not
    clamped, so inconsistent counters surface as a negative value.
    """

    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    duration: float = 0.0
    throughput: str = Field(default="0.00", description="Requests per second")
    error_rate: str = Field(default="0.00", description="Failed requests, percent")
    avg_latency: float | None = None
    p95_latency: float | None = None
    p99_latency: float | None = None
    latency_distribution: list[Any] = Field(default_factory=list)

"""Convert raw test tool payloads into canonical result models.

Every adapter accepts whatever the storage layer returned for its category
and never raises on missing or malformed data: list-shaped categories fall
back to an empty list (or an empty severity group for accessibility) and
singleton categories fall back to None.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from qadash.result_pipeline.decoding import (
    decode_json_list,
    decode_json_object,
    format_ratio,
    to_count,
    to_number,
    to_text,
)
from qadash.result_pipeline.models.config import DEFAULT_THRESHOLDS, MetricThreshold
from qadash.result_pipeline.models.results import (
    AccessibilityViolation,
    AccessibilityViolationGroup,
    LighthouseScores,
    LoadTestSummary,
    MetricView,
    NormalizedTestResult,
    PerformanceMetricView,
    PixelResult,
    SecurityResult,
    SEOResult,
    SSLInfo,
    TestType,
    VisualResult,
)
from qadash.result_pipeline.rating import METRIC_LABELS, classify_metric

logger = logging.getLogger(__name__)

SEVERITY_LEVELS = ("critical", "serious", "moderate", "minor")
DEFAULT_SEVERITY = "minor"


def normalize_smoke_results(results: Any) -> list[NormalizedTestResult]:
    """Normalize raw smoke test rows.

    Raw ``duration_ms`` and ``error_message`` map to ``duration_ms`` /
    ``error_message`` (serialized as ``durationMs`` / ``errorMessage``).
    Already-normalized results pass through unchanged, so normalizing twice
    gives the same list as normalizing once.

    Args:
        results: List of raw smoke rows, canonical results, or None

    Returns:
        Normalized results in input order; rows that are not mappings or fail
        validation are skipped

    """
    if not isinstance(results, list | tuple):
        _warn_shape(results, "smoke results", "list")
        return []

    normalized: list[NormalizedTestResult] = []
    for index, raw in enumerate(results):
        if isinstance(raw, NormalizedTestResult):
            normalized.append(raw)
            continue
        if not isinstance(raw, Mapping):
            logger.warning(
                f"Skipping smoke result {index}: expected a mapping, "
                f"got {type(raw).__name__}"
            )
            continue
        try:
            normalized.append(NormalizedTestResult.model_validate(dict(raw)))
        except ValidationError as e:
            logger.warning(f"Skipping invalid smoke result {index}: {e}")
    return normalized


def normalize_performance_metrics(
    metrics: Any,
    thresholds: Mapping[str, MetricThreshold] = DEFAULT_THRESHOLDS,
) -> PerformanceMetricView | None:
    """Rate each Core Web Vitals metric and extract Lighthouse scores.

    Args:
        metrics: Raw performance row with ``lcp``, ``fid``, ``cls``, ``ttfb``,
            ``fcp`` and an optional ``lighthouse_score`` object
        thresholds: Rating thresholds keyed by metric name

    Returns:
        Rated metrics, or None when no metrics were recorded

    """
    if not isinstance(metrics, Mapping):
        _warn_shape(metrics, "performance metrics", "mapping")
        return None

    views: dict[str, MetricView] = {}
    for name, label in METRIC_LABELS.items():
        value = to_number(metrics.get(name))
        views[name] = MetricView(
            value=value,
            rating=classify_metric(name, value, thresholds),
            label=label,
        )

    return PerformanceMetricView(
        **views, lighthouse=_lighthouse_scores(metrics.get("lighthouse_score"))
    )


def _lighthouse_scores(raw: Any) -> LighthouseScores | None:
    if raw is None:
        return None
    scores = decode_json_object(raw, "lighthouse_score")
    if not scores and isinstance(raw, str | bytes):
        # Blank or malformed encoded block: no Lighthouse run recorded.
        return None
    return LighthouseScores(
        performance=to_number(scores.get("performance")),
        accessibility=to_number(scores.get("accessibility")),
        best_practices=to_number(scores.get("best-practices")),
        seo=to_number(scores.get("seo")),
    )


def normalize_accessibility_violations(violations: Any) -> AccessibilityViolationGroup:
    """Group axe violations by impact.

    A violation without an impact counts as minor; a violation whose impact is
    not one of the four WCAG levels is dropped.

    Args:
        violations: List of raw axe violations (or its JSON encoding)

    Returns:
        Violations grouped by severity; every severity is present, possibly
        empty

    """
    if isinstance(violations, str | bytes):
        violations = decode_json_list(violations, "violations")
    if not isinstance(violations, list | tuple):
        _warn_shape(violations, "accessibility violations", "list")
        return AccessibilityViolationGroup()

    grouped: dict[str, list[AccessibilityViolation]] = {
        severity: [] for severity in SEVERITY_LEVELS
    }
    for raw in violations:
        if not isinstance(raw, Mapping):
            logger.warning(
                f"Skipping accessibility violation: expected a mapping, "
                f"got {type(raw).__name__}"
            )
            continue

        severity = to_text(raw.get("impact")) or DEFAULT_SEVERITY
        if severity not in grouped:
            logger.debug(
                f"Dropping violation {raw.get('id')!r} with impact {severity!r}"
            )
            continue

        grouped[severity].append(
            AccessibilityViolation(
                id=to_text(raw.get("id")),
                description=to_text(raw.get("description")),
                help=to_text(raw.get("help")),
                help_url=to_text(raw.get("helpUrl")),
                nodes=_node_count(raw.get("nodes")),
                wcag=_wcag_tags(raw.get("tags")),
            )
        )

    return AccessibilityViolationGroup(**grouped)


def _node_count(nodes: Any) -> int:
    if isinstance(nodes, list | tuple):
        return len(nodes)
    return 0


def _wcag_tags(tags: Any) -> list[str]:
    if not isinstance(tags, list | tuple):
        return []
    return [tag for tag in tags if isinstance(tag, str) and tag.startswith("wcag")]


def normalize_security_results(security: Any) -> SecurityResult | None:
    """Normalize a security scan row, decoding headers and vulnerabilities."""
    if not isinstance(security, Mapping):
        _warn_shape(security, "security results", "mapping")
        return None

    return SecurityResult(
        ssl=SSLInfo(
            status=to_text(security.get("ssl_status")),
            grade=to_text(security.get("ssl_grade")),
            expires=to_text(security.get("ssl_expires")),
        ),
        headers=decode_json_object(
            security.get("security_headers"), "security_headers"
        ),
        vulnerabilities=decode_json_list(
            security.get("vulnerabilities"), "vulnerabilities"
        ),
    )


def normalize_seo_results(seo: Any) -> SEOResult | None:
    """Normalize an SEO audit row."""
    if not isinstance(seo, Mapping):
        _warn_shape(seo, "SEO results", "mapping")
        return None

    return SEOResult(
        score=to_number(seo.get("seo_score")),
        meta_tags=decode_json_object(seo.get("meta_tags"), "meta_tags"),
        structured_data=decode_json_list(seo.get("structured_data"), "structured_data"),
        technical_seo=decode_json_object(seo.get("technical_seo"), "technical_seo"),
        issues=decode_json_list(seo.get("issues"), "issues"),
    )


def normalize_pixel_results(pixel_results: Any) -> PixelResult | None:
    """Normalize a tracking pixel audit row."""
    if not isinstance(pixel_results, Mapping):
        _warn_shape(pixel_results, "pixel results", "mapping")
        return None

    return PixelResult(
        detected=decode_json_list(
            pixel_results.get("pixels_detected"), "pixels_detected"
        ),
        events=decode_json_list(pixel_results.get("events"), "events"),
        network=decode_json_list(
            pixel_results.get("network_timeline"), "network_timeline"
        ),
    )


def normalize_visual_results(visual: Any) -> VisualResult | None:
    """Normalize a visual regression row."""
    if not isinstance(visual, Mapping):
        _warn_shape(visual, "visual results", "mapping")
        return None

    return VisualResult(
        baseline_url=to_text(visual.get("baseline_url")),
        current_url=to_text(visual.get("current_url")),
        diff_url=to_text(visual.get("diff_url")),
        comparisons=decode_json_list(visual.get("comparisons"), "comparisons"),
        issues=to_count(visual.get("issues_detected")),
        similarity=to_number(visual.get("similarity_score")),
    )


def normalize_load_results(load: Any) -> LoadTestSummary | None:
    """Normalize a load test row and derive throughput and error rate.

    Counters are not cross-checked: ``failed_requests`` larger than
    ``total_requests`` yields a negative ``successful_requests``. A zero
    request count or duration gives ``"0.00"`` instead of dividing by zero.
    Both rates keep two decimals and exact ties round up.

    Args:
        load: Raw load test row

    Returns:
        Load test summary, or None when no load test was recorded

    """
    if not isinstance(load, Mapping):
        _warn_shape(load, "load results", "mapping")
        return None

    requests = to_count(load.get("total_requests"))
    failed = to_count(load.get("failed_requests"))
    duration = to_number(load.get("duration_seconds")) or 0.0

    throughput = format_ratio(requests, duration, 2) if duration > 0 else "0.00"
    error_rate = (
        format_ratio(failed, requests, 2, scale=100) if requests != 0 else "0.00"
    )

    return LoadTestSummary(
        total_requests=requests,
        successful_requests=requests - failed,
        failed_requests=failed,
        duration=duration,
        throughput=throughput,
        error_rate=error_rate,
        avg_latency=to_number(load.get("avg_latency_ms")),
        p95_latency=to_number(load.get("p95_latency_ms")),
        p99_latency=to_number(load.get("p99_latency_ms")),
        latency_distribution=decode_json_list(
            load.get("latency_distribution"), "latency_distribution"
        ),
    )


def normalize_result(
    test_type: TestType | str,
    raw: Any,
    thresholds: Mapping[str, MetricThreshold] = DEFAULT_THRESHOLDS,
) -> Any:
    """Normalize a raw payload of the given test category.

    Args:
        test_type: Test category (case-insensitive)
        raw: Raw payload for that category
        thresholds: Rating thresholds for performance metrics

    Returns:
        The category's canonical structure (see the per-category adapters)

    Raises:
        ValueError: If the test type is unknown

    """
    try:
        category = TestType(str(test_type).lower())
    except ValueError:
        raise ValueError(
            f"Unknown test type: {test_type}. "
            f"Must be one of: {', '.join(t.value for t in TestType)}"
        ) from None

    if category is TestType.SMOKE:
        return normalize_smoke_results(raw)
    elif category is TestType.PERFORMANCE:
        return normalize_performance_metrics(raw, thresholds)
    elif category is TestType.ACCESSIBILITY:
        return normalize_accessibility_violations(raw)
    elif category is TestType.SECURITY:
        return normalize_security_results(raw)
    elif category is TestType.SEO:
        return normalize_seo_results(raw)
    elif category is TestType.PIXEL:
        return normalize_pixel_results(raw)
    elif category is TestType.VISUAL:
        return normalize_visual_results(raw)
    else:
        return normalize_load_results(raw)


def _warn_shape(value: Any, what: str, expected: str) -> None:
    if value is not None:
        logger.warning(
            f"Ignoring {what}: expected a {expected}, got {type(value).__name__}"
        )

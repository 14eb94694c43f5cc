"""Reduce run records into summary counters."""

from collections.abc import Iterable
from typing import Any

from qadash.result_pipeline.decoding import format_ratio
from qadash.result_pipeline.models.stats import RunStats
from qadash.result_pipeline.records import as_records, get_field

UNKNOWN_TEST_TYPE = "unknown"


def calculate_test_stats(runs: Iterable[Any] | None) -> RunStats:
    """Count passed, failed and running runs.

    Statuses are matched case-insensitively. A run with any other status
    (including none) still counts towards ``total``, which lowers the pass
    rate without being attributed to a known state.

    Args:
        runs: Run records carrying a ``status`` field

    Returns:
        Counters plus ``pass_rate``: passed / total * 100 as a string with
        one decimal (exact ties round up), or 0 when there are no runs

    """
    passed = failed = running = total = 0
    for run in as_records(runs):
        status = _status(get_field(run, "status"))
        if status == "pass":
            passed += 1
        elif status == "fail":
            failed += 1
        elif status == "running":
            running += 1
        total += 1

    pass_rate = format_ratio(passed, total, 1, scale=100) if total > 0 else 0

    return RunStats(
        passed=passed,
        failed=failed,
        running=running,
        total=total,
        pass_rate=pass_rate,
    )


def count_by_test_type(runs: Iterable[Any] | None) -> dict[str, int]:
    """Count runs per lower-cased ``test_type``, in first-seen order."""
    counts: dict[str, int] = {}
    for run in as_records(runs):
        test_type = get_field(run, "test_type")
        if isinstance(test_type, str) and test_type:
            key = test_type.lower()
        else:
            key = UNKNOWN_TEST_TYPE
        counts[key] = counts.get(key, 0) + 1
    return counts


def _status(value: Any) -> str | None:
    if isinstance(value, str):
        return value.lower()
    return None

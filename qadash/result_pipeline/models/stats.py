"""Models for aggregated run statistics."""

from typing import Any

from pydantic import Field

from qadash.result_pipeline.models.results import CanonicalModel


class RunStats(CanonicalModel):
    """Pass/fail counters over a collection of runs."""

    passed: int = Field(default=0, description="Runs with status 'pass'")
    failed: int = Field(default=0, description="Runs with status 'fail'")
    running: int = Field(default=0, description="Runs with status 'running'")
    total: int = Field(default=0, description="All runs, any status")
    pass_rate: str | int = Field(
        default=0,
        description="passed / total * 100 with one decimal, 0 if no runs",
    )


class TimelineBucket(CanonicalModel):
    """Runs and statistics for one calendar day."""

    date: str = Field(..., description="Calendar day (YYYY-MM-DD)")
    day_name: str = Field(..., description="Short weekday name")
    runs: list[Any] = Field(default_factory=list, description="Runs on that day")
    stats: RunStats = Field(default_factory=RunStats)


class WebsiteSummary(CanonicalModel):
    """Runs and statistics for one website."""

    name: str = Field(..., description="Website name")
    runs: list[Any] = Field(default_factory=list, description="Runs for the website")
    stats: RunStats = Field(default_factory=RunStats)

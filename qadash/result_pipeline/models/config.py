"""Configuration models for the result pipeline."""

from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


class MetricThreshold(BaseModel):
    """Rating boundaries for one performance metric."""

    model_config = ConfigDict(frozen=True)

    good: float = Field(..., description="Values at or below are rated good")
    poor: float = Field(..., description="Values at or above are rated poor")

    @model_validator(mode="after")
    def _check_order(self) -> "MetricThreshold":
        if self.good > self.poor:
            raise ValueError(
                f"good threshold ({self.good}) must not exceed poor ({self.poor})"
            )
        return self


DEFAULT_THRESHOLDS: dict[str, MetricThreshold] = {
    "lcp": MetricThreshold(good=2500, poor=4000),
    "fid": MetricThreshold(good=100, poor=300),
    "cls": MetricThreshold(good=0.1, poor=0.25),
    "ttfb": MetricThreshold(good=800, poor=1800),
    "fcp": MetricThreshold(good=1800, poor=3000),
}


class PipelineConfig(BaseModel):
    """Settings shared by the classifier, grouping and timeline builder."""

    thresholds: dict[str, MetricThreshold] = Field(
        default_factory=lambda: dict(DEFAULT_THRESHOLDS),
        description="Rating thresholds keyed by metric name",
    )
    timeline_days: int = Field(
        default=7, ge=1, description="Number of days in the rolling timeline"
    )
    timezone: str | None = Field(
        default=None,
        description="IANA timezone for calendar days (None = process local time)",
    )

    @field_validator("thresholds")
    @classmethod
    def _merge_with_defaults(
        cls, value: dict[str, MetricThreshold]
    ) -> dict[str, MetricThreshold]:
        # Metrics not named keep their default thresholds.
        overrides = {name.lower(): threshold for name, threshold in value.items()}
        return DEFAULT_THRESHOLDS | overrides

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value

    @property
    def zone_info(self) -> tzinfo | None:
        """Timezone used for calendar-day keys, None for local time."""
        if self.timezone is None:
            return None
        return ZoneInfo(self.timezone)

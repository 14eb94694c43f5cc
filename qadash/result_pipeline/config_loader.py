"""Load pipeline configuration from YAML files."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from qadash.result_pipeline.models.config import PipelineConfig


def load_pipeline_config(config_path: Path) -> PipelineConfig:
    """Load pipeline settings from a YAML file.

    Example file::

        timeline_days: 14
        timezone: Europe/Paris
        thresholds:
          lcp: {good: 2000, poor: 3500}

    Threshold entries replace the defaults for the metrics they name; other
    metrics keep their default thresholds.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Parsed configuration

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If YAML is invalid or doesn't match schema

    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        raise ValueError(f"Empty config file: {config_path}")
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    try:
        return PipelineConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid pipeline config in {config_path}: {e}") from e

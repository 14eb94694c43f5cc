"""CLI entry point for the result pipeline."""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

import typer
from pydantic import BaseModel

from qadash.result_pipeline.config_loader import load_pipeline_config
from qadash.result_pipeline.dashboard import build_dashboard_summary
from qadash.result_pipeline.models.config import PipelineConfig
from qadash.result_pipeline.normalizer import normalize_result

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
    force=True,
)
logger = logging.getLogger(__name__)

TIMEZONE_ENV_VAR = "QADASH_TIMEZONE"

app = typer.Typer()


def load_json_file(path: Path) -> Any:
    """Read a JSON document from disk.

    Args:
        path: Path to the JSON file

    Returns:
        Decoded JSON value

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid JSON

    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    try:
        with path.open() as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e


def resolve_config(config_file: Path | None, days: int | None) -> PipelineConfig:
    """Build pipeline settings from a config file, CLI flags and environment."""
    config = load_pipeline_config(config_file) if config_file else PipelineConfig()

    update: dict[str, Any] = {}
    if days is not None:
        update["timeline_days"] = days
    if TIMEZONE_ENV_VAR in os.environ:
        update["timezone"] = os.environ[TIMEZONE_ENV_VAR]
    if not update:
        return config

    # Re-validate so overrides go through the same checks as the file.
    return PipelineConfig.model_validate(config.model_dump() | update)


@app.command()
def summarize(
    runs_file: Path = typer.Option(..., help="JSON file with a list of test runs"),  # noqa: B008
    days: int | None = typer.Option(None, help="Number of days in the timeline"),
    config_file: Path | None = typer.Option(  # noqa: B008
        None, help="YAML file with pipeline settings"
    ),
) -> None:
    """Print dashboard statistics for a set of test runs."""
    try:
        config = resolve_config(config_file, days)
        runs = load_json_file(runs_file)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to load input: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if not isinstance(runs, list):
        typer.echo("Error: runs file must contain a JSON array", err=True)
        raise typer.Exit(code=1)

    logger.info(f"Loaded {len(runs)} runs from {runs_file}")
    summary = build_dashboard_summary(runs, config)
    typer.echo(json.dumps(summary, indent=2))


@app.command()
def normalize(
    test_type: str = typer.Option(
        ...,
        help="Test type (smoke, performance, load, accessibility, security, "
        "seo, visual, pixel)",
    ),
    result_file: Path = typer.Option(..., help="JSON file with a raw result"),  # noqa: B008
    config_file: Path | None = typer.Option(  # noqa: B008
        None, help="YAML file with pipeline settings"
    ),
) -> None:
    """Print the canonical form of a raw test result."""
    try:
        config = resolve_config(config_file, None)
        raw = load_json_file(result_file)
        result = normalize_result(test_type, raw, config.thresholds)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to normalize {test_type} result: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(_to_jsonable(result), indent=2))


def _to_jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json", by_alias=True)
    if isinstance(result, list):
        return [_to_jsonable(item) for item in result]
    return result


if __name__ == "__main__":  # pragma: no cover
    app()

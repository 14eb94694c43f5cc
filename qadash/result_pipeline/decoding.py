"""Decode JSON-encoded sub-fields and coerce loosely-typed scalars."""

import json
import logging
import math
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

logger = logging.getLogger(__name__)


def decode_json_object(value: Any, field: str) -> dict[str, Any]:
    """Decode a JSON-encoded object field.

    Args:
        value: Raw field value (JSON string, already-decoded dict, or None)
        field: Field name, used in log messages

    Returns:
        Decoded object; an empty dict when the value is absent, malformed,
        or not an object

    """
    decoded = _decode(value, field)
    if decoded is None:
        return {}
    if not isinstance(decoded, Mapping):
        logger.warning(
            f"Expected a JSON object in '{field}', got {type(decoded).__name__}"
        )
        return {}
    return dict(decoded)


def decode_json_list(value: Any, field: str) -> list[Any]:
    """Decode a JSON-encoded array field.

    Args:
        value: Raw field value (JSON string, already-decoded list, or None)
        field: Field name, used in log messages

    Returns:
        Decoded list; an empty list when the value is absent, malformed,
        or not an array

    """
    decoded = _decode(value, field)
    if decoded is None:
        return []
    if not isinstance(decoded, list | tuple):
        logger.warning(
            f"Expected a JSON array in '{field}', got {type(decoded).__name__}"
        )
        return []
    return list(decoded)


def _decode(value: Any, field: str) -> Any:
    if value is None:
        return None
    if isinstance(value, bytes | bytearray):
        value = value.decode("utf-8", errors="replace")
    if not isinstance(value, str):
        return value
    if not value.strip():
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        logger.warning(f"Malformed JSON in '{field}': {e}")
        return None


def to_number(value: Any) -> float | None:
    """Coerce a raw value to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return None
    if not isinstance(value, int | float):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def to_count(value: Any) -> int:
    """Coerce a raw counter to an int, treating missing values as zero."""
    number = to_number(value)
    if number is None:
        return 0
    return int(number)


def to_text(value: Any) -> str | None:
    """Coerce a raw scalar to a string, or None."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool | int | float):
        return str(value)
    return None


def format_ratio(
    numerator: float, denominator: float, places: int, scale: int = 1
) -> str:
    """Format ``numerator * scale / denominator`` with a fixed number of decimals.

    The quotient is computed exactly and exact ties round away from zero, so
    12.25 formats as "12.3" and 0.125 as "0.13".

    Args:
        numerator: Dividend
        denominator: Divisor, must not be zero
        places: Number of digits after the decimal point
        scale: Factor applied to the numerator (100 for percentages)

    Returns:
        Fixed-point string such as "33.33"

    """
    value = Decimal(numerator) * scale / Decimal(denominator)
    return str(value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))

"""
Error types and input validation utilities for core functions.

Per-row and per-field problems met while ingesting telemetry are not errors:
those rows or fields are dropped silently. Only whole-input failures are
raised, as subclasses of ValidationError.
"""

import math
import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Custom exception for validation errors."""
    pass


class IngestEmptyError(ValidationError):
    """No vehicle produced a single valid sample."""
    pass


class PolarFormatError(ValidationError):
    """Polar performance table could not be parsed."""
    pass


@dataclass(frozen=True)
class IngestParseWarning:
    """
    Non-fatal anomaly reported by the tabular tokenizer.

    Attributes:
        row: 1-based line number in the source text, when known
        message: Human-readable description
        raw: The offending tokens, if available
    """
    row: Optional[int]
    message: str
    raw: Tuple[str, ...] = ()


def parse_finite_float(value: Any) -> Optional[float]:
    """
    Parse a value into a finite float.

    Returns None for missing, blank, non-numeric, NaN or infinite values.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (ValueError, TypeError):
        return None
    if not math.isfinite(number):
        return None
    return number


def validate_time_range(time_range: Optional[Tuple[float, float]]) -> Tuple[bool, Optional[str]]:
    """
    Validate a [start, end] replay time range in epoch milliseconds.

    Args:
        time_range: Tuple of (start, end), or None for no restriction

    Returns:
        Tuple of (is_valid, error_message)
    """
    if time_range is None:
        return True, None

    if len(time_range) != 2:
        return False, "Time range must have exactly two values"

    start, end = time_range
    for name, value in (("start", start), ("end", end)):
        if value is None or not math.isfinite(value):
            return False, f"Time range {name} must be a finite number"

    if start > end:
        return False, "time_start must be before time_end"

    return True, None


def validate_file_path(file_path: Any, context: str = "File") -> None:
    """
    Validate a path argument before reading it.

    Raises:
        ValidationError: If no path was given
    """
    if file_path is None or (isinstance(file_path, str) and not file_path.strip()):
        raise ValidationError(f"{context}: no path given")

    logger.debug(f"{context}: path validation passed for {file_path}")

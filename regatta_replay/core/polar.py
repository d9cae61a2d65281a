"""
Polar performance table parsing.

A polar table is whitespace or tab delimited text:

    TWA\\TWS  0  6    8    10
    45        0  5.1  6.2  6.9
    90        0  6.0  7.1  7.8

The header holds two placeholder tokens followed by true wind speeds; every
following line holds a true wind angle, a placeholder, and the boat speed for
each wind speed column.
"""

import os
import logging
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from regatta_replay.core.models.polar import PolarPerformancePoint, PolarCurvePoint, PolarCurve
from regatta_replay.core.validation import PolarFormatError, parse_finite_float, validate_file_path

logger = logging.getLogger(__name__)

# Tokens before the first wind speed / boat speed column on every line
LEADING_TOKENS = 2


def _wind_speed_columns(header: List[str]) -> List[Tuple[int, float]]:
    """(token index, wind speed) for every numeric header column."""
    columns = []
    for index in range(LEADING_TOKENS, len(header)):
        tws = parse_finite_float(header[index])
        if tws is not None:
            columns.append((index, tws))
    return columns


def parse_performance_table(content: str) -> List[PolarPerformancePoint]:
    """
    Parse a polar table into individual performance points.

    Lines whose angle does not parse are skipped; non-numeric cells inside an
    otherwise valid line are skipped one by one. A non-numeric header column
    is ignored without shifting the other columns.

    Args:
        content: Polar table text

    Returns:
        List of PolarPerformancePoint, in file order

    Raises:
        PolarFormatError: If there are fewer than 2 lines or the header has
            no numeric wind speed columns
    """
    lines = content.strip().split('\n')
    if len(lines) < 2:
        raise PolarFormatError("Polar file must have at least 2 lines")

    columns = _wind_speed_columns(lines[0].split())
    if not columns:
        raise PolarFormatError("No TWS values found in header")

    points = []
    for line_number, line in enumerate(lines[1:], start=2):
        parts = line.split()
        if len(parts) < LEADING_TOKENS:
            continue

        twa = parse_finite_float(parts[0])
        if twa is None:
            logger.debug(f"Skipping polar line {line_number}: no wind angle")
            continue

        for index, tws in columns:
            if index >= len(parts):
                break
            boat_speed = parse_finite_float(parts[index])
            if boat_speed is not None:
                points.append(PolarPerformancePoint(
                    true_wind_angle=twa,
                    true_wind_speed=tws,
                    boat_speed=boat_speed,
                ))

    logger.info(f"Parsed polar table with {len(columns)} wind speeds and {len(points)} points")
    return points


def group_by_wind_speed(points: Iterable[PolarPerformancePoint]) -> List[PolarCurve]:
    """
    Group performance points into one curve per true wind speed.

    Returns:
        Curves ordered by wind speed, each with points ordered by angle
    """
    grouped: Dict[float, List[PolarCurvePoint]] = {}
    for point in points:
        grouped.setdefault(point.true_wind_speed, []).append(
            PolarCurvePoint(angle=point.true_wind_angle, boat_speed=point.boat_speed)
        )

    curves = [
        PolarCurve(
            true_wind_speed=tws,
            points=tuple(sorted(curve_points, key=lambda p: p.angle)),
        )
        for tws, curve_points in grouped.items()
    ]
    curves.sort(key=lambda curve: curve.true_wind_speed)
    return curves


def interpolate_polar_speed(curve: PolarCurve, angle: float) -> Optional[float]:
    """
    Expected boat speed on a curve at a given true wind angle.

    Linear between the curve's points; None outside its angle range.
    """
    if not curve.points:
        return None

    angles = np.array(curve.angles, dtype=float)
    if angle < angles[0] or angle > angles[-1]:
        return None

    speeds = np.array([p.boat_speed for p in curve.points], dtype=float)
    return float(np.interp(angle, angles, speeds))


def load_polar_from_path(file_path: str) -> List[PolarCurve]:
    """
    Load a polar table from disk and group it into curves.

    Raises:
        FileNotFoundError: If the file does not exist
        PolarFormatError: If the table cannot be parsed
    """
    validate_file_path(file_path, "Polar table")
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Polar table not found: {file_path}")

    with open(file_path, 'r', encoding='utf-8') as f:
        content = f.read()

    return group_by_wind_speed(parse_performance_table(content))

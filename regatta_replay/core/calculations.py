"""
Shared calculations module.

Geographic and angular helpers used by ingestion, the track query engine and
the replay service. Everything here is a pure function over plain floats.
"""

import math
from typing import Tuple

from geopy.distance import geodesic

from regatta_replay.core.constants import (
    FULL_CIRCLE_DEGREES, ANGLE_WRAP_BOUNDARY_DEGREES, EARTH_RADIUS_METERS
)


# =============================================================================
# BASIC GEOMETRIC CALCULATIONS
# =============================================================================

def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate distance between two points in meters."""
    return geodesic((lat1, lon1), (lat2, lon2)).meters


def destination_point(lat: float, lon: float, bearing: float,
                      distance_meters: float) -> Tuple[float, float]:
    """
    Calculate the point reached from a start point along a bearing.

    Uses the spherical forward geodesy formula with a mean Earth radius of
    6,371,000 m. Longitude of the result is not re-wrapped into [-180, 180].

    Args:
        lat: Start latitude in degrees
        lon: Start longitude in degrees
        bearing: Initial bearing in degrees (0 = North, 90 = East)
        distance_meters: Distance to travel in meters

    Returns:
        tuple: (latitude, longitude) of the destination in degrees
    """
    lat1 = math.radians(lat)
    lon1 = math.radians(lon)
    bearing_rad = math.radians(bearing)
    d = distance_meters / EARTH_RADIUS_METERS

    lat2 = math.asin(
        math.sin(lat1) * math.cos(d) + math.cos(lat1) * math.sin(d) * math.cos(bearing_rad)
    )
    lon2 = lon1 + math.atan2(
        math.sin(bearing_rad) * math.sin(d) * math.cos(lat1),
        math.cos(d) - math.sin(lat1) * math.sin(lat2)
    )

    return math.degrees(lat2), math.degrees(lon2)


# =============================================================================
# ANGLE HELPERS
# =============================================================================

def normalize_angle(angle: float) -> float:
    """Reduce any finite angle into [0, 360)."""
    normalized = angle % FULL_CIRCLE_DEGREES
    # Tiny negative inputs round up to exactly 360.0
    if normalized >= FULL_CIRCLE_DEGREES:
        normalized -= FULL_CIRCLE_DEGREES
    return normalized


def signed_angle_difference(angle1: float, angle2: float) -> float:
    """
    Shortest signed rotation from angle1 to angle2, in (-180, 180].
    """
    diff = (angle2 - angle1) % FULL_CIRCLE_DEGREES
    if diff > ANGLE_WRAP_BOUNDARY_DEGREES:
        diff -= FULL_CIRCLE_DEGREES
    return diff


def interpolate_angle(angle1: float, angle2: float, ratio: float) -> float:
    """
    Interpolate between two bearings along the shortest arc.

    Args:
        angle1: Start angle in degrees
        angle2: End angle in degrees
        ratio: Position between the two, 0 gives angle1 and 1 gives angle2

    Returns:
        float: Interpolated angle in [0, 360)

    Example:
        >>> interpolate_angle(350, 10, 0.5)
        0.0
    """
    return normalize_angle(angle1 + signed_angle_difference(angle1, angle2) * ratio)

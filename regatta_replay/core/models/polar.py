"""
Polar performance data models.

A polar table gives the expected boat speed for a true wind angle and true
wind speed. It is independent of the telemetry model and only used for
comparison overlays.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class PolarPerformancePoint:
    """One cell of a polar table."""
    true_wind_angle: float  # Degrees
    true_wind_speed: float  # Knots
    boat_speed: float  # Knots


@dataclass(frozen=True)
class PolarCurvePoint:
    angle: float
    boat_speed: float


@dataclass(frozen=True)
class PolarCurve:
    """Boat speed against wind angle for a single true wind speed."""
    true_wind_speed: float
    points: Tuple[PolarCurvePoint, ...]

    @property
    def angles(self) -> Tuple[float, ...]:
        return tuple(point.angle for point in self.points)

    @property
    def max_boat_speed(self) -> float:
        return max((point.boat_speed for point in self.points), default=0.0)

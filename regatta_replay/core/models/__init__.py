"""
Data models package.

Telemetry samples, vehicle tracks, datasets and polar performance tables.
"""

from regatta_replay.core.models.telemetry import (
    TelemetrySample,
    VehicleTrack,
    RaceDataset,
    InterpolatedPosition,
    BoundingBox,
    MOTION_FIELDS,
    WIND_FIELDS,
    time_extent,
    track_to_dataframe,
)
from regatta_replay.core.models.polar import (
    PolarPerformancePoint,
    PolarCurvePoint,
    PolarCurve,
)

__all__ = [
    'TelemetrySample',
    'VehicleTrack',
    'RaceDataset',
    'InterpolatedPosition',
    'BoundingBox',
    'MOTION_FIELDS',
    'WIND_FIELDS',
    'time_extent',
    'track_to_dataframe',
    'PolarPerformancePoint',
    'PolarCurvePoint',
    'PolarCurve',
]

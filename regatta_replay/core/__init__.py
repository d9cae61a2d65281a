"""
Core algorithms package.

Pure functions over immutable telemetry values. This is the interface the
rendering and UI layers call into.
"""

from regatta_replay.core.calculations import destination_point, interpolate_angle, normalize_angle
from regatta_replay.core.filtering import filter_dataset_by_time_range
from regatta_replay.core.models import (
    TelemetrySample, VehicleTrack, RaceDataset, InterpolatedPosition, BoundingBox,
    PolarPerformancePoint, PolarCurve,
)
from regatta_replay.core.polar import parse_performance_table, group_by_wind_speed
from regatta_replay.core.telemetry_csv import ingest, load_csv
from regatta_replay.core.tracks import (
    interpolate_at, points_up_to, rolling_average_speed, filter_by_time_range,
    merge, compute_bounds,
)
from regatta_replay.core.validation import (
    ValidationError, IngestEmptyError, IngestParseWarning, PolarFormatError,
)

__all__ = [
    # Ingestion
    'ingest',
    'load_csv',
    'parse_performance_table',
    'group_by_wind_speed',

    # Queries
    'interpolate_at',
    'points_up_to',
    'rolling_average_speed',
    'filter_by_time_range',
    'filter_dataset_by_time_range',
    'merge',
    'compute_bounds',
    'destination_point',
    'interpolate_angle',
    'normalize_angle',

    # Models
    'TelemetrySample',
    'VehicleTrack',
    'RaceDataset',
    'InterpolatedPosition',
    'BoundingBox',
    'PolarPerformancePoint',
    'PolarCurve',

    # Errors
    'ValidationError',
    'IngestEmptyError',
    'IngestParseWarning',
    'PolarFormatError',
]

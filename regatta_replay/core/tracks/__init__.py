"""
Tracks package.

Query engine for single vehicle tracks, plus dataset merge and bounds.
"""

from .query import (
    interpolate_at,
    interpolate_sample,
    interpolate_dataset,
    points_up_to,
    points_in_window,
    rolling_average_speed,
    filter_by_time_range,
)
from .merge import merge, compute_bounds

__all__ = [
    'interpolate_at',
    'interpolate_sample',
    'interpolate_dataset',
    'points_up_to',
    'points_in_window',
    'rolling_average_speed',
    'filter_by_time_range',
    'merge',
    'compute_bounds',
]

"""
Point-in-time queries against a single vehicle track.

Every function here is a pure query over an immutable track: no state is kept
between calls, so the same track can be queried from any number of callers.
Queries outside the recorded time span return None rather than raising.
"""

import logging
from typing import Dict, List, Optional, Tuple

import numpy as np

from regatta_replay.core.calculations import interpolate_angle
from regatta_replay.core.constants import DEFAULT_ROLLING_WINDOW_SECONDS, MILLISECONDS_PER_SECOND
from regatta_replay.core.models.telemetry import (
    TelemetrySample, VehicleTrack, RaceDataset, InterpolatedPosition,
    MOTION_FIELDS, WIND_FIELDS
)

logger = logging.getLogger(__name__)


def _exact(sample: TelemetrySample) -> InterpolatedPosition:
    return InterpolatedPosition(latitude=sample.latitude, longitude=sample.longitude, sample=sample)


def _lerp(a: float, b: float, ratio: float) -> float:
    return a + (b - a) * ratio


def interpolate_sample(p1: TelemetrySample, p2: TelemetrySample, t: float) -> TelemetrySample:
    """
    Build the sample a vehicle would have had at time t between p1 and p2.

    Position, speed and course are interpolated linearly; speed and course
    are only present if both neighbours carry them. Wind fields use the
    shortest arc between the two values, and when only one neighbour carries
    a wind field its value is held as is.
    """
    ratio = (t - p1.timestamp) / (p2.timestamp - p1.timestamp)

    fields = {}
    for name in MOTION_FIELDS:
        v1, v2 = getattr(p1, name), getattr(p2, name)
        if v1 is not None and v2 is not None:
            fields[name] = _lerp(v1, v2, ratio)

    for name in WIND_FIELDS:
        v1, v2 = getattr(p1, name), getattr(p2, name)
        if v1 is not None and v2 is not None:
            fields[name] = interpolate_angle(v1, v2, ratio)
        elif v1 is not None:
            fields[name] = v1
        elif v2 is not None:
            fields[name] = v2

    return TelemetrySample(
        timestamp=t,
        latitude=_lerp(p1.latitude, p2.latitude, ratio),
        longitude=_lerp(p1.longitude, p2.longitude, ratio),
        **fields
    )


def interpolate_at(track: VehicleTrack, t: float) -> Optional[InterpolatedPosition]:
    """
    Reconstruct a vehicle's position and telemetry at time t.

    Args:
        track: Track with samples sorted by timestamp
        t: Query time in epoch milliseconds

    Returns:
        InterpolatedPosition, or None if the track is empty or t lies
        outside [first timestamp, last timestamp]. A t equal to a stored
        timestamp returns that stored sample unchanged.
    """
    samples = track.samples
    if not samples:
        return None
    if t < samples[0].timestamp or t > samples[-1].timestamp:
        return None

    timestamps = track.timestamps
    index = int(np.searchsorted(timestamps, t, side='left'))

    if index < len(samples) and samples[index].timestamp == t:
        return _exact(samples[index])

    if 0 < index < len(samples):
        p1, p2 = samples[index - 1], samples[index]
        if p1.timestamp < t < p2.timestamp:
            sample = interpolate_sample(p1, p2, t)
            return InterpolatedPosition(latitude=sample.latitude, longitude=sample.longitude, sample=sample)

    # No bracketing pair; only reachable with inconsistent timestamps
    logger.debug(f"No bracketing samples for t={t} on track {track.id}, using last sample")
    return _exact(samples[-1])


def points_up_to(track: VehicleTrack, t: float) -> List[TelemetrySample]:
    """
    Samples recorded at or before time t, in track order.

    Args:
        track: Track to filter
        t: Cut-off time in epoch milliseconds (inclusive)

    Returns:
        List of samples, empty if none qualify
    """
    return [sample for sample in track.samples if sample.timestamp <= t]


def points_in_window(track: VehicleTrack, start: float, end: float) -> List[TelemetrySample]:
    """Samples with start <= timestamp <= end, in track order."""
    return [sample for sample in track.samples if start <= sample.timestamp <= end]


def rolling_average_speed(
    track: VehicleTrack,
    t: float,
    window_seconds: float = DEFAULT_ROLLING_WINDOW_SECONDS
) -> Optional[float]:
    """
    Mean speed over ground across the window ending at t.

    Only samples that carry a speed count; a sample without one is neither
    a zero nor part of the denominator.

    Args:
        track: Track to average
        t: End of the window in epoch milliseconds (inclusive)
        window_seconds: Window length in seconds

    Returns:
        Average speed in knots, or None if no sample in
        [t - window, t] has a speed
    """
    window_start = t - window_seconds * MILLISECONDS_PER_SECOND
    speeds = [
        sample.speed_over_ground
        for sample in points_in_window(track, window_start, t)
        if sample.speed_over_ground is not None
    ]

    if not speeds:
        return None

    return sum(speeds) / len(speeds)


def filter_by_time_range(track: VehicleTrack, time_range: Tuple[float, float]) -> VehicleTrack:
    """
    Copy of a track keeping only samples inside [start, end].

    Args:
        track: Track to filter
        time_range: Tuple of (start, end) in epoch milliseconds, both inclusive

    Returns:
        New VehicleTrack with the same id, name and color
    """
    start, end = time_range
    return track.with_samples(points_in_window(track, start, end))


def interpolate_dataset(dataset: RaceDataset, t: float) -> Dict[str, InterpolatedPosition]:
    """
    Interpolate every vehicle of a dataset at time t.

    Returns:
        dict: vehicle id -> position, for vehicles with a position at t
    """
    positions = {}
    for track in dataset.tracks:
        position = interpolate_at(track, t)
        if position is not None:
            positions[track.id] = position
    return positions

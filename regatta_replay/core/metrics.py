"""
Summary metrics for tracks and datasets.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from regatta_replay.core.calculations import calculate_distance
from regatta_replay.core.constants import MILLISECONDS_PER_SECOND, METERS_PER_KILOMETER
from regatta_replay.core.models.telemetry import VehicleTrack, track_to_dataframe

logger = logging.getLogger(__name__)


def speed_range(tracks: Iterable[VehicleTrack]) -> Optional[Tuple[float, float]]:
    """
    Lowest and highest recorded speed over ground across tracks.

    Used to scale speed gauges and speed-colored tracks consistently.

    Returns:
        (min, max) in knots, or None if no sample has a speed
    """
    speeds = [
        sample.speed_over_ground
        for track in tracks
        for sample in track.samples
        if sample.speed_over_ground is not None
    ]
    if not speeds:
        return None
    return min(speeds), max(speeds)


def summarize_track(track: VehicleTrack) -> Dict[str, Any]:
    """
    Calculate basic metrics for a track.

    Returns:
        dict with:
          - sample_count
          - start_time / end_time: epoch ms, None for an empty track
          - duration_seconds
          - distance_km: great-circle distance sailed along the samples
          - avg_speed / max_speed: over samples carrying a speed, in knots
    """
    metrics: Dict[str, Any] = {
        'vehicle_id': track.id,
        'sample_count': len(track.samples),
        'start_time': track.first_timestamp,
        'end_time': track.last_timestamp,
        'duration_seconds': 0.0,
        'distance_km': 0.0,
        'avg_speed': None,
        'max_speed': None,
    }

    df = track_to_dataframe(track)
    if df.empty:
        return metrics

    metrics['duration_seconds'] = (track.last_timestamp - track.first_timestamp) / MILLISECONDS_PER_SECOND

    if len(df) > 1:
        distance_m = 0.0
        for i in range(len(df) - 1):
            distance_m += calculate_distance(
                df.iloc[i]['latitude'], df.iloc[i]['longitude'],
                df.iloc[i + 1]['latitude'], df.iloc[i + 1]['longitude']
            )
        metrics['distance_km'] = distance_m / METERS_PER_KILOMETER

    speeds = df['speed_over_ground'].dropna()
    if not speeds.empty:
        metrics['avg_speed'] = float(speeds.mean())
        metrics['max_speed'] = float(speeds.max())

    logger.debug(f"Track {track.id}: {metrics['sample_count']} samples, "
                 f"{metrics['distance_km']:.2f} km")
    return metrics

"""
Telemetry data models.

This module defines the data structures for recorded race telemetry: single
observations, per-vehicle tracks and whole datasets. All of them are treated
as immutable values; operations that change a track or dataset return a new
instance.
"""

from dataclasses import dataclass, field, replace
from functools import cached_property
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import numpy as np
import pandas as pd


# Optional scalar fields carried by a sample, in column order
MOTION_FIELDS = ('speed_over_ground', 'course_over_ground')
WIND_FIELDS = ('true_wind_direction', 'apparent_wind_angle', 'true_wind_angle')


@dataclass(frozen=True)
class TelemetrySample:
    """
    One observation of one vehicle.

    Angles are in degrees, speeds in knots. Wind fields are normalized into
    [0, 360) when read from CSV. Unrecognised columns are kept verbatim in
    ``extra`` without interpretation.
    """
    timestamp: float  # Epoch milliseconds; whole numbers except on interpolated samples
    latitude: float
    longitude: float

    speed_over_ground: Optional[float] = None
    course_over_ground: Optional[float] = None
    true_wind_direction: Optional[float] = None
    apparent_wind_angle: Optional[float] = None
    true_wind_angle: Optional[float] = None

    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert sample to dictionary for DataFrame creation."""
        data = {
            'timestamp': self.timestamp,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'speed_over_ground': self.speed_over_ground,
            'course_over_ground': self.course_over_ground,
            'true_wind_direction': self.true_wind_direction,
            'apparent_wind_angle': self.apparent_wind_angle,
            'true_wind_angle': self.true_wind_angle,
        }
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data


@dataclass(frozen=True)
class VehicleTrack:
    """
    The recorded samples of one vehicle, ordered by timestamp.

    ``id`` is the merge key between datasets; ``display_name`` falls back to
    the id when no name was recorded.
    """
    id: str
    display_name: str
    color: str
    samples: Tuple[TelemetrySample, ...] = ()

    def __post_init__(self):
        if not isinstance(self.samples, tuple):
            object.__setattr__(self, 'samples', tuple(self.samples))

    @cached_property
    def timestamps(self) -> np.ndarray:
        """Sample timestamps as an int64 array, in sample order."""
        return np.fromiter((s.timestamp for s in self.samples), dtype=np.int64, count=len(self.samples))

    @property
    def first_timestamp(self) -> Optional[int]:
        return self.samples[0].timestamp if self.samples else None

    @property
    def last_timestamp(self) -> Optional[int]:
        return self.samples[-1].timestamp if self.samples else None

    def with_samples(self, samples: Iterable[TelemetrySample]) -> 'VehicleTrack':
        """Copy of this track carrying different samples."""
        return replace(self, samples=tuple(samples))


@dataclass(frozen=True)
class RaceDataset:
    """
    All vehicle tracks loaded for a replay session.

    ``time_min``/``time_max`` span the first and last samples of every track
    and are both 0 when no track has samples.
    """
    tracks: Tuple[VehicleTrack, ...] = ()
    time_min: int = 0
    time_max: int = 0

    def __post_init__(self):
        if not isinstance(self.tracks, tuple):
            object.__setattr__(self, 'tracks', tuple(self.tracks))
        ids = [track.id for track in self.tracks]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate vehicle ids in dataset: {sorted(ids)}")

    @classmethod
    def from_tracks(cls, tracks: Iterable[VehicleTrack]) -> 'RaceDataset':
        """Build a dataset, deriving the time extent from the tracks."""
        tracks = tuple(tracks)
        time_min, time_max = time_extent(tracks)
        return cls(tracks=tracks, time_min=time_min, time_max=time_max)

    @property
    def vehicle_ids(self) -> List[str]:
        return [track.id for track in self.tracks]

    @property
    def sample_count(self) -> int:
        return sum(len(track.samples) for track in self.tracks)

    @property
    def duration_ms(self) -> int:
        return self.time_max - self.time_min

    def get_track(self, vehicle_id: str) -> Optional[VehicleTrack]:
        """Look a vehicle up by id."""
        for track in self.tracks:
            if track.id == vehicle_id:
                return track
        return None


@dataclass(frozen=True)
class InterpolatedPosition:
    """
    Reconstructed state of a vehicle at a query time.

    ``sample`` is either a stored sample (exact timestamp match) or a
    synthesized one carrying the interpolated fields.
    """
    latitude: float
    longitude: float
    sample: TelemetrySample


@dataclass(frozen=True)
class BoundingBox:
    """Geographic box enclosing a set of samples, in degrees."""
    min_latitude: float
    min_longitude: float
    max_latitude: float
    max_longitude: float

    @property
    def center(self) -> Tuple[float, float]:
        return (
            (self.min_latitude + self.max_latitude) / 2,
            (self.min_longitude + self.max_longitude) / 2,
        )

    def contains(self, lat: float, lon: float) -> bool:
        return (self.min_latitude <= lat <= self.max_latitude
                and self.min_longitude <= lon <= self.max_longitude)


def time_extent(tracks: Iterable[VehicleTrack]) -> Tuple[int, int]:
    """
    Earliest first-sample and latest last-sample timestamps over tracks.

    Returns (0, 0) when no track has samples.
    """
    firsts = [track.first_timestamp for track in tracks if track.samples]
    if not firsts:
        return 0, 0
    lasts = [track.last_timestamp for track in tracks if track.samples]
    return min(firsts), max(lasts)


def track_to_dataframe(track: VehicleTrack) -> pd.DataFrame:
    """
    Convert a track's samples to a pandas DataFrame.

    Args:
        track: VehicleTrack to convert

    Returns:
        pandas DataFrame with one row per sample
    """
    if not track.samples:
        return pd.DataFrame()

    data = [sample.to_dict() for sample in track.samples]
    return pd.DataFrame(data)

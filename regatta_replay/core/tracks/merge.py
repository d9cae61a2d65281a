"""
Combining datasets and measuring their geographic extent.
"""

import logging
from typing import Dict, Iterable, Optional

from regatta_replay.core.models.telemetry import (
    VehicleTrack, RaceDataset, BoundingBox, time_extent
)

logger = logging.getLogger(__name__)


def merge(datasets: Iterable[RaceDataset]) -> RaceDataset:
    """
    Merge datasets by vehicle id.

    A vehicle present in several datasets gets one track holding all of its
    samples, concatenated in dataset order and then sorted by timestamp
    (stable, so equal timestamps keep that order). Name and color come from
    the first dataset the vehicle appears in. Inputs are not modified.

    Args:
        datasets: Datasets to combine, typically one per imported file

    Returns:
        RaceDataset with one track per distinct vehicle id
    """
    merged: Dict[str, VehicleTrack] = {}
    extents = []

    for dataset in datasets:
        for track in dataset.tracks:
            existing = merged.get(track.id)
            if existing is None:
                merged[track.id] = track
            else:
                combined = sorted(existing.samples + track.samples, key=lambda s: s.timestamp)
                merged[track.id] = existing.with_samples(combined)

            # Extent of the track as ingested into this dataset
            if track.samples:
                extents.append(track)

    time_min, time_max = time_extent(extents)

    result = RaceDataset(tracks=tuple(merged.values()), time_min=time_min, time_max=time_max)
    logger.debug(f"Merged into {len(result.tracks)} vehicles with {result.sample_count} samples")
    return result


def compute_bounds(tracks: Iterable[VehicleTrack]) -> Optional[BoundingBox]:
    """
    Smallest latitude/longitude box enclosing every sample.

    Returns:
        BoundingBox, or None if there are no tracks or no samples
    """
    latitudes = []
    longitudes = []
    for track in tracks:
        for sample in track.samples:
            latitudes.append(sample.latitude)
            longitudes.append(sample.longitude)

    if not latitudes:
        return None

    return BoundingBox(
        min_latitude=min(latitudes),
        min_longitude=min(longitudes),
        max_latitude=max(latitudes),
        max_longitude=max(longitudes),
    )

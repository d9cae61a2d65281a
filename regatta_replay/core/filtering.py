"""
Time-range filtering for whole datasets.

The replay can be restricted to a sub-interval of the recording. The
restriction is applied independently to every vehicle; the dataset keeps its
original time extent so the timeline does not jump when a range is set.
"""

import logging
from typing import Optional, Tuple

from regatta_replay.core.models.telemetry import RaceDataset
from regatta_replay.core.tracks.query import filter_by_time_range
from regatta_replay.core.validation import ValidationError, validate_time_range

logger = logging.getLogger(__name__)


def filter_dataset_by_time_range(
    dataset: RaceDataset,
    time_range: Tuple[float, float]
) -> RaceDataset:
    """
    Apply filter_by_time_range to every vehicle of a dataset.

    Args:
        dataset: Dataset to filter
        time_range: Tuple of (start, end) in epoch milliseconds, both inclusive

    Returns:
        New RaceDataset with the same vehicles, time_min and time_max
    """
    initial_count = dataset.sample_count
    filtered = RaceDataset(
        tracks=tuple(filter_by_time_range(track, time_range) for track in dataset.tracks),
        time_min=dataset.time_min,
        time_max=dataset.time_max,
    )
    logger.debug(f"Time filter {time_range[0]}..{time_range[1]}: "
                 f"{initial_count} -> {filtered.sample_count} samples")
    return filtered


def apply_time_range(
    dataset: RaceDataset,
    time_range: Optional[Tuple[float, float]] = None
) -> RaceDataset:
    """
    Validate a time range and apply it, or return the dataset unchanged.

    Raises:
        ValidationError: If the range is malformed or reversed
    """
    is_valid, error = validate_time_range(time_range)
    if not is_valid:
        raise ValidationError(error)

    if time_range is None:
        return dataset

    return filter_dataset_by_time_range(dataset, time_range)

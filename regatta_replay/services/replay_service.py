"""
Replay session service.

This module holds the state of one replay: the working dataset, the playback
clock and the display options, and answers per-frame questions for every
vehicle. It is the layer map, gauge and wind rose widgets talk to; it never
draws anything itself.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from regatta_replay.config.settings import ReplayConfig, QueryConfig, ProfilingConfig
from regatta_replay.core.calculations import destination_point
from regatta_replay.core.filtering import apply_time_range
from regatta_replay.core.metrics import summarize_track, speed_range
from regatta_replay.core.models.telemetry import RaceDataset, InterpolatedPosition, BoundingBox
from regatta_replay.core.telemetry_csv import load_csv_from_path
from regatta_replay.core.tracks import (
    interpolate_at, points_up_to, rolling_average_speed, merge, compute_bounds
)
from regatta_replay.core.validation import ValidationError, validate_time_range
from regatta_replay.utils.profiling import PerformanceCollector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VehicleFrame:
    """What the widgets need to draw one vehicle at the current time."""
    vehicle_id: str
    display_name: str
    color: str
    position: Optional[InterpolatedPosition]
    traveled_count: int  # Samples of the track drawn so far
    rolling_speed: Optional[float]  # Knots, averaged over the rolling window
    wind_angle: Optional[float]  # AWA or TWA depending on the session mode
    true_wind_direction: Optional[float]
    twd_arrow_tip: Optional[Tuple[float, float]]  # Only when TWD arrows are shown


class ReplaySession:
    """
    State of one replay session.

    Args:
        dataset: Optional dataset to load right away
        collector: Optional PerformanceCollector timing the queries issued
            for each frame; one is created from ProfilingConfig when
            profiling is enabled there and none is given
    """

    def __init__(self, dataset: Optional[RaceDataset] = None,
                 collector: Optional[PerformanceCollector] = None):
        self.dataset: Optional[RaceDataset] = None
        self.current_time: Optional[float] = None
        self.speed = ReplayConfig.DEFAULT_SPEED
        self.playing = False
        self.time_range: Optional[Tuple[float, float]] = None
        self.wind_angle_mode = ReplayConfig.DEFAULT_WIND_ANGLE_MODE
        self.draw_full_track = ReplayConfig.DRAW_FULL_TRACK
        self.show_twd = ReplayConfig.SHOW_TWD
        self.rolling_window_seconds = QueryConfig.ROLLING_WINDOW_SECONDS

        self._visible: Optional[RaceDataset] = None
        if collector is None and ProfilingConfig.ENABLED:
            collector = PerformanceCollector(capacity=ProfilingConfig.CAPACITY)
        self.collector = collector

        self._interpolate = interpolate_at
        self._points_up_to = points_up_to
        self._rolling_average_speed = rolling_average_speed
        if collector is not None:
            track_size = lambda track, *args, **kwargs: len(track.samples)
            self._interpolate = collector.wrap('interpolate_at', interpolate_at, track_size)
            self._points_up_to = collector.wrap('points_up_to', points_up_to, track_size)
            self._rolling_average_speed = collector.wrap(
                'rolling_average_speed', rolling_average_speed, track_size
            )

        if dataset is not None:
            self.load(dataset)

    # ------------------------------------------------------------------
    # Dataset management
    # ------------------------------------------------------------------

    def load(self, dataset: RaceDataset) -> None:
        """Replace the working dataset and rewind to its start."""
        self.dataset = dataset
        self.current_time = dataset.time_min
        self.playing = False
        self.time_range = None
        self._visible = None
        logger.info(f"Loaded dataset with {len(dataset.tracks)} vehicles "
                    f"({dataset.time_min} - {dataset.time_max})")

    def add(self, dataset: RaceDataset) -> None:
        """Merge another dataset into the working one and rewind."""
        if self.dataset is None:
            self.load(dataset)
        else:
            self.load(merge([self.dataset, dataset]))

    def visible_dataset(self) -> Optional[RaceDataset]:
        """Working dataset restricted to the active time range."""
        if self.dataset is None:
            return None
        if self._visible is None:
            self._visible = apply_time_range(self.dataset, self.time_range)
        return self._visible

    @property
    def active_range(self) -> Optional[Tuple[float, float]]:
        """Time range the playback clock moves within."""
        if self.dataset is None:
            return None
        if self.time_range is not None:
            return self.time_range
        return self.dataset.time_min, self.dataset.time_max

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def seek(self, t: float) -> float:
        """Move the clock to t, clamped to the active range."""
        if self.dataset is None:
            raise ValidationError("No dataset loaded")
        start, end = self.active_range
        self.current_time = min(max(t, start), end)
        return self.current_time

    def advance(self, elapsed_ms: float) -> Optional[float]:
        """
        Advance the clock by one playback tick.

        Args:
            elapsed_ms: Wall-clock time since the previous tick

        Returns:
            The new current time; playback stops at the end of the range
        """
        if not self.playing or self.dataset is None:
            return self.current_time

        _, end = self.active_range
        next_time = self.current_time + elapsed_ms * self.speed
        if next_time >= end:
            next_time = end
            self.playing = False
            logger.debug("Playback reached the end of the range")
        self.current_time = next_time
        return self.current_time

    def play(self) -> None:
        if self.dataset is None:
            raise ValidationError("No dataset loaded")
        _, end = self.active_range
        # Restart from the beginning when parked at the end
        if self.current_time is not None and self.current_time >= end:
            self.current_time = self.active_range[0]
        self.playing = True

    def pause(self) -> None:
        self.playing = False

    def set_speed(self, speed: float) -> None:
        """Set the playback multiplier; must be one of ReplayConfig.PLAYBACK_SPEEDS."""
        if speed not in ReplayConfig.PLAYBACK_SPEEDS:
            raise ValueError(f"Unsupported playback speed {speed}, "
                             f"expected one of {list(ReplayConfig.PLAYBACK_SPEEDS)}")
        self.speed = speed

    def set_time_range(self, time_range: Optional[Tuple[float, float]]) -> None:
        """
        Restrict the replay to [start, end], or clear with None.

        Raises:
            ValidationError: If the range is malformed or reversed
        """
        is_valid, error = validate_time_range(time_range)
        if not is_valid:
            raise ValidationError(error)

        self.time_range = tuple(time_range) if time_range is not None else None
        self._visible = None
        if self.dataset is not None and self.current_time is not None:
            self.seek(self.current_time)

    # ------------------------------------------------------------------
    # Display options
    # ------------------------------------------------------------------

    def set_wind_angle_mode(self, mode: str) -> None:
        mode = mode.upper()
        if mode not in ReplayConfig.WIND_ANGLE_MODES:
            raise ValueError(f"Unknown wind angle mode {mode!r}")
        self.wind_angle_mode = mode

    def toggle_draw_full_track(self) -> None:
        self.draw_full_track = not self.draw_full_track

    def set_show_twd(self, show: bool) -> None:
        self.show_twd = show

    # ------------------------------------------------------------------
    # Frame queries
    # ------------------------------------------------------------------

    def frame(self, t: Optional[float] = None) -> List[VehicleFrame]:
        """
        Per-vehicle state at time t (defaults to the current time).

        Vehicles without data at t are included with position None so that
        legends and gauges can still list them.
        """
        dataset = self.visible_dataset()
        if dataset is None:
            return []

        if t is None:
            t = self.current_time
        if self.collector is not None:
            self.collector.tick()

        frames = []
        for track in dataset.tracks:
            position = self._interpolate(track, t)
            if self.draw_full_track:
                traveled_count = len(track.samples)
            else:
                traveled_count = len(self._points_up_to(track, t))
            rolling_speed = self._rolling_average_speed(track, t, self.rolling_window_seconds)

            wind_angle = None
            twd = None
            arrow_tip = None
            if position is not None:
                sample = position.sample
                if self.wind_angle_mode == "AWA":
                    wind_angle = sample.apparent_wind_angle
                else:
                    wind_angle = sample.true_wind_angle
                twd = sample.true_wind_direction
                if self.show_twd and twd is not None:
                    arrow_tip = destination_point(
                        position.latitude, position.longitude, twd,
                        QueryConfig.TWD_ARROW_LENGTH_METERS
                    )

            frames.append(VehicleFrame(
                vehicle_id=track.id,
                display_name=track.display_name,
                color=track.color,
                position=position,
                traveled_count=traveled_count,
                rolling_speed=rolling_speed,
                wind_angle=wind_angle,
                true_wind_direction=twd,
                twd_arrow_tip=arrow_tip,
            ))

        return frames

    def bounds(self) -> Optional[BoundingBox]:
        """Bounding box of the visible samples, for fitting the map."""
        dataset = self.visible_dataset()
        if dataset is None:
            return None
        return compute_bounds(dataset.tracks)

    def speed_range(self) -> Optional[Tuple[float, float]]:
        """Speed scale shared by all gauges."""
        dataset = self.visible_dataset()
        if dataset is None:
            return None
        return speed_range(dataset.tracks)

    def summaries(self) -> List[dict]:
        """Summary metrics for every visible vehicle."""
        dataset = self.visible_dataset()
        if dataset is None:
            return []
        return [summarize_track(track) for track in dataset.tracks]


def load_session_from_paths(file_paths: Iterable[str],
                            collector: Optional[PerformanceCollector] = None) -> ReplaySession:
    """
    Read several telemetry CSV files and merge them into one session.

    Raises:
        FileNotFoundError: If a file does not exist
        IngestEmptyError: If a file has no valid samples
    """
    datasets = []
    for path in file_paths:
        dataset, warnings = load_csv_from_path(path)
        if warnings:
            logger.warning(f"{path}: {len(warnings)} CSV parsing warnings")
        datasets.append(dataset)

    if not datasets:
        raise ValidationError("No telemetry files given")

    return ReplaySession(merge(datasets), collector=collector)

"""
Tests for point-in-time track queries.
"""

import pytest

from regatta_replay.core.tracks import (
    interpolate_at,
    interpolate_dataset,
    points_up_to,
    points_in_window,
    rolling_average_speed,
    filter_by_time_range,
)
from regatta_replay.core.models.telemetry import RaceDataset

from conftest import BASE_TIME, make_sample, make_track


class TestInterpolateAt:
    """Tests for interpolate_at."""

    def test_empty_track(self):
        """A track without samples has no position."""
        assert interpolate_at(make_track('E', []), BASE_TIME) is None

    def test_outside_recorded_span(self, simple_track):
        """Before the first or after the last sample there is nothing."""
        assert interpolate_at(simple_track, BASE_TIME - 1) is None
        assert interpolate_at(simple_track, BASE_TIME + 30001) is None

    def test_exact_timestamp_returns_stored_sample(self, simple_track):
        """A stored timestamp gives back that very sample."""
        position = interpolate_at(simple_track, BASE_TIME + 10000)
        assert position.sample is simple_track.samples[1]
        assert position.latitude == simple_track.samples[1].latitude

    def test_endpoints_are_exact(self, simple_track):
        """First and last timestamps are inside the span."""
        assert interpolate_at(simple_track, BASE_TIME).sample is simple_track.samples[0]
        assert interpolate_at(simple_track, BASE_TIME + 30000).sample is simple_track.samples[-1]

    def test_midpoint_is_linear(self, simple_track):
        """Position, speed and course are interpolated linearly."""
        position = interpolate_at(simple_track, BASE_TIME + 5000)
        assert position.latitude == pytest.approx(45.05)
        assert position.longitude == pytest.approx(-120.05)
        assert position.sample.timestamp == BASE_TIME + 5000
        assert position.sample.speed_over_ground == pytest.approx(11.0)
        assert position.sample.course_over_ground == pytest.approx(95.0)

    def test_interpolated_timestamp_is_query_time(self, simple_track):
        """Synthesized samples carry the query time, fractions included."""
        position = interpolate_at(simple_track, BASE_TIME + 2500.5)
        assert position.sample.timestamp == BASE_TIME + 2500.5

    def test_wind_direction_takes_short_way(self, simple_track):
        """350 and 10 meet at north, not south."""
        position = interpolate_at(simple_track, BASE_TIME + 5000)
        assert position.sample.true_wind_direction == pytest.approx(0.0, abs=1e-9)

    def test_one_sided_wind_is_carried(self, simple_track):
        """A wind field on only one neighbour is held as is."""
        first = interpolate_at(simple_track, BASE_TIME + 5000).sample
        assert first.true_wind_angle == 40.0
        assert first.apparent_wind_angle is None

        second = interpolate_at(simple_track, BASE_TIME + 15000).sample
        assert second.true_wind_direction == 10.0
        assert second.apparent_wind_angle == 30.0

    def test_one_sided_speed_is_absent(self, simple_track):
        """Speed needs both neighbours; course is still interpolated."""
        sample = interpolate_at(simple_track, BASE_TIME + 15000).sample
        assert sample.speed_over_ground is None
        assert sample.course_over_ground == pytest.approx(105.0)

    def test_single_sample_track(self):
        """One sample answers only its own timestamp."""
        track = make_track('S', [make_sample(BASE_TIME)])
        assert interpolate_at(track, BASE_TIME).sample is track.samples[0]
        assert interpolate_at(track, BASE_TIME + 1) is None

    def test_duplicate_timestamps_use_first(self):
        """Ties resolve to the first stored sample."""
        track = make_track('D', [
            make_sample(BASE_TIME, 45.0),
            make_sample(BASE_TIME + 1000, 45.1),
            make_sample(BASE_TIME + 1000, 45.2),
        ])
        assert interpolate_at(track, BASE_TIME + 1000).latitude == 45.1


class TestPointsUpTo:
    """Tests for points_up_to and points_in_window."""

    def test_inclusive_cutoff(self, simple_track):
        """Samples at exactly t are included."""
        assert len(points_up_to(simple_track, BASE_TIME + 10000)) == 2
        assert len(points_up_to(simple_track, BASE_TIME + 15000)) == 2

    def test_before_first_sample(self, simple_track):
        """Nothing has been travelled yet."""
        assert points_up_to(simple_track, BASE_TIME - 1) == []

    def test_grows_with_time(self, simple_track):
        """Later cut-offs never return fewer samples."""
        counts = [len(points_up_to(simple_track, BASE_TIME + dt)) for dt in range(0, 40000, 2500)]
        assert counts == sorted(counts)
        assert counts[-1] == 4

    def test_window(self, simple_track):
        """Both ends of the window are inclusive."""
        window = points_in_window(simple_track, BASE_TIME + 10000, BASE_TIME + 20000)
        assert [s.timestamp for s in window] == [BASE_TIME + 10000, BASE_TIME + 20000]


class TestRollingAverageSpeed:
    """Tests for rolling_average_speed."""

    def test_whole_track(self, simple_track):
        """Samples without speed are not counted as zero."""
        assert rolling_average_speed(simple_track, BASE_TIME + 30000, 30) == pytest.approx(12.0)

    def test_short_window(self, simple_track):
        """Only samples inside [t - window, t] count."""
        assert rolling_average_speed(simple_track, BASE_TIME + 30000, 15) == pytest.approx(14.0)

    def test_default_window(self, simple_track):
        """The default window is thirty seconds."""
        assert rolling_average_speed(simple_track, BASE_TIME + 15000) == pytest.approx(11.0)

    def test_no_speeds_in_window(self, simple_track):
        """A window holding no speed yields None."""
        assert rolling_average_speed(simple_track, BASE_TIME + 25000, 5) is None

    def test_empty_track(self):
        assert rolling_average_speed(make_track('E', []), BASE_TIME) is None


class TestFilterByTimeRange:
    """Tests for filter_by_time_range."""

    def test_keeps_inclusive_range(self, simple_track):
        """Samples on the boundaries stay."""
        filtered = filter_by_time_range(simple_track, (BASE_TIME + 10000, BASE_TIME + 20000))
        assert len(filtered.samples) == 2
        assert filtered.id == simple_track.id
        assert filtered.color == simple_track.color

    def test_does_not_modify_input(self, simple_track):
        """Filtering returns a copy."""
        filter_by_time_range(simple_track, (BASE_TIME, BASE_TIME))
        assert len(simple_track.samples) == 4

    def test_range_outside_track(self, simple_track):
        """No overlap leaves an empty track."""
        filtered = filter_by_time_range(simple_track, (0, 1000))
        assert filtered.samples == ()


class TestInterpolateDataset:
    """Tests for interpolate_dataset."""

    def test_only_vehicles_with_data(self, simple_track):
        """Vehicles without data at t are left out."""
        late = make_track('L', [make_sample(BASE_TIME + 20000), make_sample(BASE_TIME + 40000)])
        dataset = RaceDataset.from_tracks([simple_track, late])

        positions = interpolate_dataset(dataset, BASE_TIME + 5000)
        assert list(positions) == ['X']

        positions = interpolate_dataset(dataset, BASE_TIME + 25000)
        assert set(positions) == {'X', 'L'}

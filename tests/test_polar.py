"""
Tests for polar table parsing.
"""

import pytest

from regatta_replay.core.polar import (
    parse_performance_table,
    group_by_wind_speed,
    interpolate_polar_speed,
    load_polar_from_path,
)
from regatta_replay.core.validation import PolarFormatError

POLAR_TABLE = (
    "TWA\\TWS 0 6 8 10\n"
    "45 0 5.1 6.2 6.9\n"
    "90 0 6.0 7.1 7.8\n"
)


class TestParsePerformanceTable:
    """Tests for parse_performance_table."""

    def test_single_line(self):
        """One data line yields one point per wind speed."""
        points = parse_performance_table("TWA\\TWS 0 6 8 10\n45 0 5.1 6.2 6.9")
        assert len(points) == 3
        assert {p.true_wind_angle for p in points} == {45.0}
        assert [p.true_wind_speed for p in points] == [6.0, 8.0, 10.0]
        assert [p.boat_speed for p in points] == [5.1, 6.2, 6.9]

    def test_tab_delimited(self):
        """Tabs work as well as spaces."""
        points = parse_performance_table("TWA\\TWS\t0\t6\n45\t0\t5.1\n")
        assert len(points) == 1

    def test_bad_angle_line_skipped(self):
        """Lines without a numeric angle are skipped entirely."""
        points = parse_performance_table(POLAR_TABLE + "beat 0 4.0 5.0 6.0\n")
        assert len(points) == 6

    def test_bad_cell_skipped(self):
        """A non-numeric cell drops only that point."""
        points = parse_performance_table("TWA\\TWS 0 6 8 10\n45 0 5.1 - 6.9\n")
        assert [(p.true_wind_speed, p.boat_speed) for p in points] == [(6.0, 5.1), (10.0, 6.9)]

    def test_bad_header_column_keeps_alignment(self):
        """A non-numeric wind speed does not shift later columns."""
        points = parse_performance_table("TWA\\TWS 0 6 x 10\n45 0 5.1 9.9 6.9\n")
        assert [(p.true_wind_speed, p.boat_speed) for p in points] == [(6.0, 5.1), (10.0, 6.9)]

    def test_short_line(self):
        """Missing trailing cells are simply absent."""
        points = parse_performance_table("TWA\\TWS 0 6 8 10\n45 0 5.1\n")
        assert len(points) == 1

    def test_too_few_lines(self):
        with pytest.raises(PolarFormatError, match="at least 2 lines"):
            parse_performance_table("TWA\\TWS 0 6 8 10")

    def test_no_wind_speeds(self):
        with pytest.raises(PolarFormatError, match="No TWS values"):
            parse_performance_table("TWA\\TWS 0 a b\n45 0 5.1 6.2\n")


class TestGroupByWindSpeed:
    """Tests for group_by_wind_speed and curve lookups."""

    def test_curves_sorted(self):
        """Curves ascend by wind speed, points by angle."""
        table = "TWA\\TWS 0 10 6\n90 0 7.8 6.0\n45 0 6.9 5.1\n"
        curves = group_by_wind_speed(parse_performance_table(table))

        assert [c.true_wind_speed for c in curves] == [6.0, 10.0]
        assert curves[0].angles == (45.0, 90.0)
        assert [p.boat_speed for p in curves[0].points] == [5.1, 6.0]
        assert curves[1].max_boat_speed == 7.8

    def test_empty(self):
        assert group_by_wind_speed([]) == []

    def test_interpolate_polar_speed(self):
        """Speeds between angles are linear; outside the curve is None."""
        curve = group_by_wind_speed(parse_performance_table(POLAR_TABLE))[0]
        assert interpolate_polar_speed(curve, 67.5) == pytest.approx(5.55)
        assert interpolate_polar_speed(curve, 45) == pytest.approx(5.1)
        assert interpolate_polar_speed(curve, 30) is None
        assert interpolate_polar_speed(curve, 120) is None

    def test_load_from_path(self, tmp_path):
        """Files on disk are parsed and grouped."""
        path = tmp_path / "boat.pol"
        path.write_text(POLAR_TABLE, encoding='utf-8')
        curves = load_polar_from_path(str(path))
        assert [c.true_wind_speed for c in curves] == [6.0, 8.0, 10.0]

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_polar_from_path(str(tmp_path / "missing.pol"))

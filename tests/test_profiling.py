"""
Tests for the performance collector.
"""

import json

import pytest

from regatta_replay.utils.profiling import PerformanceCollector


class FakeClock:
    """Clock advancing a fixed step on every read."""

    def __init__(self, step=0.005):
        self.now = 0.0
        self.step = step

    def __call__(self):
        self.now += self.step
        return self.now


class TestPerformanceCollector:
    """Tests for PerformanceCollector."""

    def test_measure_returns_result_and_records(self):
        """Timings come from the injected clock."""
        collector = PerformanceCollector(clock=FakeClock(0.005))
        assert collector.measure('add', lambda a, b: a + b, 2, 3) == 5

        stats = collector.stats('add')
        assert stats.call_count == 1
        assert stats.avg_time == pytest.approx(5.0)

    def test_ring_buffer_keeps_latest(self):
        """Only the most recent measurements are kept."""
        collector = PerformanceCollector(capacity=3)
        for duration in (1, 2, 3, 4, 5):
            collector.record('op', duration)

        stats = collector.stats('op')
        assert stats.call_count == 3
        assert stats.min_time == 3
        assert stats.max_time == 5
        assert stats.avg_time == pytest.approx(4.0)
        assert stats.median_time == pytest.approx(4.0)
        assert stats.total_time == pytest.approx(12.0)

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            PerformanceCollector(capacity=0)

    def test_disabled_records_nothing(self):
        """A disabled collector still calls through."""
        collector = PerformanceCollector(enabled=False)
        assert collector.measure('op', lambda: 42) == 42
        collector.record('op', 1.0)
        assert collector.stats('op') is None
        assert collector.all_stats() == []

    def test_disabling_clears(self):
        collector = PerformanceCollector()
        collector.record('op', 1.0)
        collector.set_enabled(False)
        assert not collector.enabled
        assert collector.stats('op') is None

    def test_wrap_records_sizes(self):
        """Wrapped functions record the size computed from their arguments."""
        collector = PerformanceCollector(clock=FakeClock())
        timed_sum = collector.wrap('sum', sum, size_of=lambda values: len(values))

        assert timed_sum([1, 2, 3]) == 6
        assert timed_sum([1]) == 1

        stats = collector.stats('sum')
        assert stats.call_count == 2
        assert stats.avg_dataset_size == pytest.approx(2.0)
        assert stats.avg_element_count == pytest.approx(2.0)

    def test_all_stats_slowest_first(self):
        collector = PerformanceCollector()
        collector.record('fast', 1.0)
        collector.record('slow', 10.0)
        assert [s.name for s in collector.all_stats()] == ['slow', 'fast']

    def test_tick_updates_fps(self):
        """Frames counted within a second become the fps figure."""
        collector = PerformanceCollector(clock=FakeClock(0.3))
        for _ in range(4):
            collector.tick()
        assert collector.fps == 4

    def test_export_json(self):
        collector = PerformanceCollector()
        collector.record('op', 2.0, element_count=10)
        data = json.loads(collector.export_json())
        assert data['fps'] == 0
        assert data['metrics'][0]['name'] == 'op'
        assert data['metrics'][0]['avg_element_count'] == 10.0

    def test_reset(self):
        collector = PerformanceCollector()
        collector.record('op', 1.0)
        collector.reset()
        assert collector.all_stats() == []

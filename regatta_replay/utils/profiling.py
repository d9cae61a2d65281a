"""
Performance collection for track queries.

The core query functions carry no instrumentation. A PerformanceCollector is
created by whoever wants timings and wraps the calls it cares about:

    collector = PerformanceCollector()
    timed_interpolate = collector.wrap('interpolate_at', interpolate_at)
    position = timed_interpolate(track, t)
    collector.stats('interpolate_at')

Each operation keeps only its most recent ``capacity`` measurements.
"""

import json
import time
import logging
from collections import deque
from dataclasses import dataclass, asdict
from typing import Any, Callable, Deque, Dict, List, Optional

import numpy as np

from regatta_replay.core.constants import DEFAULT_PROFILING_CAPACITY, MILLISECONDS_PER_SECOND

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Measurement:
    duration_ms: float
    element_count: Optional[int] = None
    dataset_size: Optional[int] = None


@dataclass(frozen=True)
class OperationStats:
    """Aggregates over the measurements currently held for one operation."""
    name: str
    call_count: int
    avg_time: float
    min_time: float
    max_time: float
    median_time: float
    total_time: float
    calls_per_second: float
    avg_element_count: float
    avg_dataset_size: float


class PerformanceCollector:
    """
    Collects execution times per named operation.

    Args:
        capacity: Measurements kept per operation (oldest dropped first)
        enabled: When False, calls pass straight through and nothing is kept
        clock: Monotonic clock returning seconds
    """

    def __init__(self,
                 capacity: int = DEFAULT_PROFILING_CAPACITY,
                 enabled: bool = True,
                 clock: Callable[[], float] = time.perf_counter):
        if capacity < 1:
            raise ValueError(f"Capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._enabled = enabled
        self._clock = clock
        self._measurements: Dict[str, Deque[Measurement]] = {}
        self._frame_count = 0
        self._frames_in_window = 0
        self._window_start = clock()
        self.fps = 0

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable collection; disabling clears collected data."""
        self._enabled = enabled
        if not enabled:
            self.reset()

    def measure(self, name: str, fn: Callable[..., Any], *args,
                element_count: Optional[int] = None,
                dataset_size: Optional[int] = None,
                **kwargs) -> Any:
        """Call fn(*args, **kwargs) and record how long it took."""
        if not self._enabled:
            return fn(*args, **kwargs)

        start = self._clock()
        result = fn(*args, **kwargs)
        duration_ms = (self._clock() - start) * MILLISECONDS_PER_SECOND

        self.record(name, duration_ms, element_count, dataset_size)
        return result

    def wrap(self, name: str, fn: Callable[..., Any],
             size_of: Optional[Callable[..., int]] = None) -> Callable[..., Any]:
        """
        Return an instrumented version of fn.

        Args:
            name: Operation name measurements are recorded under
            fn: Function to wrap
            size_of: Optional callable receiving the call arguments and
                returning the dataset size to record with each call
        """
        def timed(*args, **kwargs):
            size = size_of(*args, **kwargs) if size_of is not None and self._enabled else None
            return self.measure(name, fn, *args, element_count=size, dataset_size=size, **kwargs)

        timed.__name__ = getattr(fn, '__name__', name)
        timed.__doc__ = fn.__doc__
        return timed

    def record(self, name: str, duration_ms: float,
               element_count: Optional[int] = None,
               dataset_size: Optional[int] = None) -> None:
        """Record a measurement taken elsewhere."""
        if not self._enabled:
            return

        buffer = self._measurements.get(name)
        if buffer is None:
            buffer = deque(maxlen=self.capacity)
            self._measurements[name] = buffer
        buffer.append(Measurement(duration_ms, element_count, dataset_size))

    def tick(self) -> None:
        """Count one rendered frame; fps is refreshed once per second."""
        if not self._enabled:
            return

        self._frame_count += 1
        self._frames_in_window += 1
        now = self._clock()
        if now - self._window_start >= 1.0:
            self.fps = self._frames_in_window
            self._frames_in_window = 0
            self._window_start = now

    def stats(self, name: str) -> Optional[OperationStats]:
        """Statistics for one operation, or None if nothing was recorded."""
        buffer = self._measurements.get(name)
        if not buffer:
            return None

        times = np.array([m.duration_ms for m in buffer], dtype=float)
        element_counts = [m.element_count for m in buffer if m.element_count is not None]
        dataset_sizes = [m.dataset_size for m in buffer if m.dataset_size is not None]

        call_count = len(times)
        calls_per_second = (call_count / self._frame_count) * self.fps if self.fps > 0 and self._frame_count else 0.0

        return OperationStats(
            name=name,
            call_count=call_count,
            avg_time=float(times.mean()),
            min_time=float(times.min()),
            max_time=float(times.max()),
            median_time=float(np.median(times)),
            total_time=float(times.sum()),
            calls_per_second=float(calls_per_second),
            avg_element_count=float(np.mean(element_counts)) if element_counts else 0.0,
            avg_dataset_size=float(np.mean(dataset_sizes)) if dataset_sizes else 0.0,
        )

    def all_stats(self) -> List[OperationStats]:
        """Statistics for every operation, slowest average first."""
        stats = [self.stats(name) for name in self._measurements]
        return sorted((s for s in stats if s is not None), key=lambda s: s.avg_time, reverse=True)

    def reset(self) -> None:
        """Drop all measurements and frame counts."""
        self._measurements.clear()
        self._frame_count = 0
        self._frames_in_window = 0
        self._window_start = self._clock()
        self.fps = 0

    def export_json(self) -> str:
        """Serialize current statistics as JSON."""
        return json.dumps(
            {
                'fps': self.fps,
                'metrics': [asdict(s) for s in self.all_stats()],
            },
            indent=2
        )

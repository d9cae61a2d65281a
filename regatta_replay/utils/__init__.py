"""
Utilities package.

Provides helpers used around the core algorithms.

Modules:
    profiling: Injectable performance collector for query timings
    time_format: Timestamp and duration labels
"""

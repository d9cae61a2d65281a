"""
Regatta Replay.

Replays recorded boat-race telemetry: CSV ingestion, per-vehicle track
interpolation, dataset merging and polar performance tables.
"""

__version__ = "1.0.0"

"""
Services package.

Provides session state between the UI layer and core algorithms.

Modules:
    replay_service: Replay clock, display options and per-frame vehicle state
"""

from regatta_replay.services.replay_service import (
    ReplaySession, VehicleFrame, load_session_from_paths
)

__all__ = [
    'ReplaySession',
    'VehicleFrame',
    'load_session_from_paths',
]

"""
Application settings and configuration.

This module contains application-specific configuration: replay defaults,
ingestion schema and logging. For algorithmic constants, see the
core.constants module.
"""

import logging
from typing import Dict, Any

# Import algorithmic constants from core module
from regatta_replay.core.constants import (
    REQUIRED_COLUMNS,
    VEHICLE_NAME_COLUMN,
    MOTION_COLUMNS,
    WIND_ANGLE_COLUMNS,
    DEFAULT_ROLLING_WINDOW_SECONDS,
    DEFAULT_PROFILING_CAPACITY
)

# App information
APP_NAME = "Regatta Replay"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Replay recorded boat-race telemetry on an interactive timeline"


# Replay defaults
PLAYBACK_SPEEDS = (0.5, 1, 2, 4, 8, 16, 24, 48)  # Multipliers of real time
DEFAULT_PLAYBACK_SPEED = 1
WIND_ANGLE_MODES = ("AWA", "TWA")
DEFAULT_WIND_ANGLE_MODE = "TWA"
DEFAULT_DRAW_FULL_TRACK = False
DEFAULT_SHOW_TWD = False

# Query defaults (reference core constants)
DEFAULT_ROLLING_WINDOW = DEFAULT_ROLLING_WINDOW_SECONDS  # From core.constants

# Wind arrow overlay
DEFAULT_TWD_ARROW_LENGTH_METERS = 50  # Offset from the boat for the TWD glyph

# Profiling
DEFAULT_PROFILING_ENABLED = False
DEFAULT_PROFILING_BUFFER = DEFAULT_PROFILING_CAPACITY  # From core.constants

# Logging configuration
LOGGING_CONFIG = {
    "level": logging.INFO,
    "format": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
}


def configure_logging(level: int = None) -> None:
    """Apply LOGGING_CONFIG to the root logger."""
    logging.basicConfig(
        level=level if level is not None else LOGGING_CONFIG["level"],
        format=LOGGING_CONFIG["format"],
    )


# =============== Configuration Classes ===============
# These classes provide typed access to configuration sections

class IngestConfig:
    """Column schema for telemetry CSV files."""
    REQUIRED_COLUMNS = REQUIRED_COLUMNS
    NAME_COLUMN = VEHICLE_NAME_COLUMN
    MOTION_COLUMNS = MOTION_COLUMNS
    WIND_ANGLE_COLUMNS = WIND_ANGLE_COLUMNS

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get ingestion configuration as a dictionary."""
        return {
            'required_columns': list(cls.REQUIRED_COLUMNS),
            'name_column': cls.NAME_COLUMN,
            'motion_columns': dict(cls.MOTION_COLUMNS),
            'wind_angle_columns': dict(cls.WIND_ANGLE_COLUMNS),
        }


class QueryConfig:
    """Configuration parameters for track queries."""
    ROLLING_WINDOW_SECONDS = DEFAULT_ROLLING_WINDOW
    TWD_ARROW_LENGTH_METERS = DEFAULT_TWD_ARROW_LENGTH_METERS

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get query configuration as a dictionary."""
        return {
            'rolling_window_seconds': cls.ROLLING_WINDOW_SECONDS,
            'twd_arrow_length_meters': cls.TWD_ARROW_LENGTH_METERS,
        }


class ReplayConfig:
    """Configuration parameters for replay sessions."""
    PLAYBACK_SPEEDS = PLAYBACK_SPEEDS
    DEFAULT_SPEED = DEFAULT_PLAYBACK_SPEED
    WIND_ANGLE_MODES = WIND_ANGLE_MODES
    DEFAULT_WIND_ANGLE_MODE = DEFAULT_WIND_ANGLE_MODE
    DRAW_FULL_TRACK = DEFAULT_DRAW_FULL_TRACK
    SHOW_TWD = DEFAULT_SHOW_TWD

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get replay configuration as a dictionary."""
        return {
            'playback_speeds': list(cls.PLAYBACK_SPEEDS),
            'default_speed': cls.DEFAULT_SPEED,
            'wind_angle_modes': list(cls.WIND_ANGLE_MODES),
            'default_wind_angle_mode': cls.DEFAULT_WIND_ANGLE_MODE,
            'draw_full_track': cls.DRAW_FULL_TRACK,
            'show_twd': cls.SHOW_TWD,
        }


class ProfilingConfig:
    """Configuration parameters for the performance collector."""
    ENABLED = DEFAULT_PROFILING_ENABLED
    CAPACITY = DEFAULT_PROFILING_BUFFER

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get profiling configuration as a dictionary."""
        return {
            'enabled': cls.ENABLED,
            'capacity': cls.CAPACITY,
        }

"""
Tests for configuration classes.
"""

import logging

from regatta_replay.config.settings import (
    IngestConfig, QueryConfig, ReplayConfig, ProfilingConfig, LOGGING_CONFIG, configure_logging
)


def test_replay_defaults():
    config = ReplayConfig.as_dict()
    assert config['default_speed'] in config['playback_speeds']
    assert config['default_wind_angle_mode'] in config['wind_angle_modes']


def test_query_defaults():
    assert QueryConfig.as_dict() == {'rolling_window_seconds': 30, 'twd_arrow_length_meters': 50}


def test_ingest_schema():
    config = IngestConfig.as_dict()
    assert config['required_columns'] == ['timestamp', 'lat', 'lon', 'boat_id']
    assert config['motion_columns']['sog'] == 'speed_over_ground'


def test_profiling_defaults():
    assert ProfilingConfig.as_dict()['capacity'] == 1000


def test_configure_logging(monkeypatch):
    """configure_logging passes the configured format to basicConfig."""
    calls = []
    monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: calls.append(kwargs))

    configure_logging(logging.DEBUG)

    assert calls == [{'level': logging.DEBUG, 'format': LOGGING_CONFIG['format']}]

"""
Shared fixtures for telemetry tests.
"""

import pytest

from regatta_replay.core.models.telemetry import TelemetrySample, VehicleTrack, RaceDataset

BASE_TIME = 1705312800000  # 2024-01-15T10:00:00Z


@pytest.fixture
def two_boat_csv():
    """Two boats, three samples each, one minute apart."""
    return (
        "timestamp,lat,lon,boat_id,boat_name,sog,cog,twd\n"
        "2024-01-15T10:00:00Z,45.00,-120.00,A,Alpha,10.0,90,350\n"
        "2024-01-15T10:01:00Z,45.01,-120.02,A,Alpha,12.0,95,10\n"
        "2024-01-15T10:02:00Z,45.02,-120.04,A,Alpha,11.0,100,20\n"
        "2024-01-15T10:00:00Z,44.90,-119.90,B,Bravo,8.0,270,340\n"
        "2024-01-15T10:01:00Z,44.95,-119.95,B,Bravo,9.0,275,345\n"
        "2024-01-15T10:02:00Z,45.05,-119.80,B,Bravo,7.0,280,355\n"
    )


def make_sample(t, lat=45.0, lon=-120.0, **fields):
    return TelemetrySample(timestamp=t, latitude=lat, longitude=lon, **fields)


def make_track(vehicle_id, samples, name=None):
    return VehicleTrack(id=vehicle_id, display_name=name or vehicle_id, color='hsl(0, 70%, 50%)',
                        samples=tuple(samples))


@pytest.fixture
def simple_track():
    """Track with four samples ten seconds apart and mixed optional fields."""
    return make_track('X', [
        make_sample(BASE_TIME, 45.0, -120.0, speed_over_ground=10.0, course_over_ground=90.0,
                    true_wind_direction=350.0, true_wind_angle=40.0),
        make_sample(BASE_TIME + 10000, 45.1, -120.1, speed_over_ground=12.0, course_over_ground=100.0,
                    true_wind_direction=10.0),
        make_sample(BASE_TIME + 20000, 45.2, -120.2, course_over_ground=110.0,
                    apparent_wind_angle=30.0),
        make_sample(BASE_TIME + 30000, 45.3, -120.3, speed_over_ground=14.0),
    ])


@pytest.fixture
def simple_dataset(simple_track):
    return RaceDataset.from_tracks([simple_track])

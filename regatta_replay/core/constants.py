"""
Constants for the Regatta Replay application.

This module contains all the mathematical, geodesic and domain-specific
constants used throughout the codebase. Constants are grouped by their purpose
and documented with their units where applicable.
"""

# =============================================================================
# CONVERSION FACTORS
# =============================================================================

# Distance conversions
METERS_PER_KILOMETER = 1000

# Time conversions
MILLISECONDS_PER_SECOND = 1000
SECONDS_PER_MINUTE = 60
MINUTES_PER_HOUR = 60

# =============================================================================
# GEODESY
# =============================================================================

EARTH_RADIUS_METERS = 6371000  # Spherical Earth model for forward geodesy

LATITUDE_MIN_DEGREES = -90
LATITUDE_MAX_DEGREES = 90
LONGITUDE_MIN_DEGREES = -180
LONGITUDE_MAX_DEGREES = 180

# =============================================================================
# ANGLE CONSTANTS (all in degrees)
# =============================================================================

FULL_CIRCLE_DEGREES = 360
ANGLE_WRAP_BOUNDARY_DEGREES = 180  # Used for shortest-arc wrapping

# =============================================================================
# TRACK QUERY PARAMETERS
# =============================================================================

DEFAULT_ROLLING_WINDOW_SECONDS = 30  # Window for rolling average speed

# =============================================================================
# VEHICLE COLORS
# =============================================================================

# Visually distinct palette; two vehicles may share an entry
VEHICLE_COLOR_PALETTE = (
    'hsl(0, 70%, 50%)',    # Red
    'hsl(210, 70%, 50%)',  # Blue
    'hsl(120, 70%, 50%)',  # Green
    'hsl(30, 70%, 50%)',   # Orange
    'hsl(270, 70%, 50%)',  # Purple
    'hsl(60, 70%, 50%)',   # Yellow
    'hsl(180, 70%, 50%)',  # Cyan
    'hsl(330, 70%, 50%)',  # Pink
    'hsl(45, 70%, 50%)',   # Gold
    'hsl(150, 70%, 50%)',  # Teal
    'hsl(300, 70%, 50%)',  # Magenta
    'hsl(15, 70%, 50%)',   # Coral
    'hsl(240, 70%, 50%)',  # Dark Blue
    'hsl(90, 70%, 50%)',   # Lime
    'hsl(195, 70%, 50%)',  # Sky Blue
    'hsl(345, 70%, 50%)',  # Rose
)

# =============================================================================
# TELEMETRY CSV SCHEMA
# =============================================================================

# Column names are matched case-insensitively
TIMESTAMP_COLUMN = 'timestamp'
LATITUDE_COLUMN = 'lat'
LONGITUDE_COLUMN = 'lon'
VEHICLE_ID_COLUMN = 'boat_id'
VEHICLE_NAME_COLUMN = 'boat_name'
REQUIRED_COLUMNS = (TIMESTAMP_COLUMN, LATITUDE_COLUMN, LONGITUDE_COLUMN, VEHICLE_ID_COLUMN)

# Optional numeric columns -> sample attribute
MOTION_COLUMNS = {
    'sog': 'speed_over_ground',  # Knots
    'cog': 'course_over_ground',  # Degrees
}
WIND_ANGLE_COLUMNS = {
    'twd': 'true_wind_direction',
    'awa': 'apparent_wind_angle',
    'twa': 'true_wind_angle',
}

# =============================================================================
# PROFILING
# =============================================================================

DEFAULT_PROFILING_CAPACITY = 1000  # Measurements kept per operation

# =============================================================================
# VALIDATION
# =============================================================================

assert len(VEHICLE_COLOR_PALETTE) == 16, "Vehicle palette must have 16 entries"

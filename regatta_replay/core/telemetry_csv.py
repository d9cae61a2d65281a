"""
Telemetry CSV parsing and normalization.

This module turns delimited text with a header row into a RaceDataset.
Parsing is best-effort: rows missing a required value, with an unparseable
timestamp or with out-of-range coordinates are dropped, and unparseable
optional values are simply left out of the sample. Only an input that yields
no samples at all is rejected.
"""

import io
import os
import logging
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from regatta_replay.core.calculations import normalize_angle
from regatta_replay.core.colors import generate_vehicle_color
from regatta_replay.core.constants import (
    TIMESTAMP_COLUMN, LATITUDE_COLUMN, LONGITUDE_COLUMN, VEHICLE_ID_COLUMN,
    VEHICLE_NAME_COLUMN, MOTION_COLUMNS, WIND_ANGLE_COLUMNS,
    LATITUDE_MIN_DEGREES, LATITUDE_MAX_DEGREES,
    LONGITUDE_MIN_DEGREES, LONGITUDE_MAX_DEGREES
)
from regatta_replay.core.models.telemetry import TelemetrySample, VehicleTrack, RaceDataset
from regatta_replay.core.validation import (
    IngestEmptyError, IngestParseWarning, validate_file_path
)

logger = logging.getLogger(__name__)

# Columns with a typed meaning; everything else is carried as an opaque extra
SCHEMA_COLUMNS = frozenset(
    (TIMESTAMP_COLUMN, LATITUDE_COLUMN, LONGITUDE_COLUMN, VEHICLE_ID_COLUMN, VEHICLE_NAME_COLUMN)
    + tuple(MOTION_COLUMNS) + tuple(WIND_ANGLE_COLUMNS)
)

_EPOCH = pd.Timestamp(0, tz='UTC')


def _read_table(content: str) -> Tuple[pd.DataFrame, List[IngestParseWarning]]:
    """
    Tokenize CSV text into a DataFrame of strings.

    Rows with more fields than the header are kept (extra fields dropped),
    short rows are padded with empty strings, and both are reported as
    warnings, as are fields left spanning lines by an unterminated quote.
    """
    warnings: List[IngestParseWarning] = []

    try:
        header = pd.read_csv(io.StringIO(content), nrows=0, dtype=str)
    except pd.errors.EmptyDataError as e:
        raise IngestEmptyError("No valid boat tracks found in CSV: input is empty") from e
    except pd.errors.ParserError as e:
        raise IngestEmptyError(f"No valid boat tracks found in CSV: {e}") from e
    field_count = len(header.columns)

    def on_bad_line(tokens: List[str]) -> List[str]:
        warnings.append(IngestParseWarning(
            row=None,
            message=f"Too many fields: expected {field_count}, found {len(tokens)}",
            raw=tuple(tokens),
        ))
        return tokens[:field_count]

    read_options = dict(dtype=str, keep_default_na=False, skip_blank_lines=True, engine='python')
    try:
        df = pd.read_csv(io.StringIO(content), on_bad_lines=on_bad_line, **read_options)
        if len(df) and not isinstance(df.index, pd.RangeIndex):
            # An over-long first row makes pandas infer an index column;
            # read again with positional columns, extra fields truncated
            warnings.append(IngestParseWarning(
                row=2,
                message=f"Too many fields: expected {field_count} on the first data row",
            ))
            df = pd.read_csv(io.StringIO(content), index_col=False, **read_options)
    except pd.errors.ParserError as e:
        raise IngestEmptyError(f"No valid boat tracks found in CSV: {e}") from e

    df.columns = [str(col).strip() for col in df.columns]
    warnings.extend(_short_row_warnings(df, field_count))
    df = df.fillna('')
    warnings.extend(_multiline_warnings(df))
    return df, warnings


def _short_row_warnings(df: pd.DataFrame, field_count: int) -> List[IngestParseWarning]:
    """Rows pandas padded because they had fewer fields than the header."""
    # Explicitly empty cells read as ''; only padding is NaN
    missing = df.isna()
    warnings = []
    for index in df.index[missing.any(axis=1)]:
        tokens = tuple(df.loc[index][~missing.loc[index]])
        warnings.append(IngestParseWarning(
            row=None,
            message=f"Too few fields: expected {field_count}, found {len(tokens)}",
            raw=tokens,
        ))
    return warnings


def _multiline_warnings(df: pd.DataFrame) -> List[IngestParseWarning]:
    """Rows with a line break inside a field, the mark of an unterminated quote."""
    if df.empty:
        return []
    multiline = df.apply(lambda col: col.astype(str).str.contains('[\r\n]', regex=True)).any(axis=1)
    return [
        IngestParseWarning(
            row=None,
            message="Missing quotes: a quoted field runs across lines",
            raw=tuple(df.loc[index]),
        )
        for index in df.index[multiline]
    ]


def _find_columns(columns: List[str]) -> Dict[str, str]:
    """Map lower-cased column names to the first matching header name."""
    lookup: Dict[str, str] = {}
    for col in columns:
        lookup.setdefault(col.lower(), col)
    return lookup


def _column(df: pd.DataFrame, lookup: Dict[str, str], name: str) -> pd.Series:
    """Stripped string values of a column, or empty strings if absent."""
    if name not in lookup:
        return pd.Series('', index=df.index, dtype=object)
    return df[lookup[name]].astype(str).str.strip()


def _to_finite(values: pd.Series) -> pd.Series:
    """Parse strings as floats; anything non-numeric or infinite becomes NaN."""
    numbers = pd.to_numeric(values, errors='coerce').astype(float)
    return numbers.where(np.isfinite(numbers))


def normalize_timestamps(values: pd.Series) -> pd.Series:
    """
    Convert timestamp strings to epoch milliseconds.

    ISO-8601 is tried first (times without an offset are read as UTC); values
    that are not dates are read as numeric epoch milliseconds, which must be
    finite and positive. Fractional milliseconds are truncated.

    Args:
        values: Series of timestamp strings

    Returns:
        Float Series of epoch milliseconds, NaN where neither form parses
    """
    parsed = pd.to_datetime(values, format='ISO8601', utc=True, errors='coerce')
    millis = (parsed - _EPOCH) // pd.Timedelta(milliseconds=1)
    millis = millis.astype(float)

    numeric = _to_finite(values)
    use_numeric = millis.isna() & numeric.notna() & (numeric > 0)
    millis = millis.where(~use_numeric, np.trunc(numeric))

    return millis


def _normalize_wind(values: pd.Series) -> pd.Series:
    return values.map(lambda v: normalize_angle(v) if pd.notna(v) else v)


def _optional(value) -> Optional[float]:
    return None if pd.isna(value) else float(value)


def load_csv(content: str) -> Tuple[RaceDataset, List[IngestParseWarning]]:
    """
    Parse telemetry CSV content into a RaceDataset.

    Args:
        content: CSV text with a header row

    Returns:
        tuple: (RaceDataset, list of non-fatal tokenizer warnings)

    Raises:
        IngestEmptyError: If no vehicle ends up with a valid sample
    """
    raw, warnings = _read_table(content)
    for warning in warnings:
        logger.warning(f"CSV parsing warning: {warning.message}")

    lookup = _find_columns(list(raw.columns))

    timestamps = normalize_timestamps(_column(raw, lookup, TIMESTAMP_COLUMN))
    latitudes = _to_finite(_column(raw, lookup, LATITUDE_COLUMN))
    longitudes = _to_finite(_column(raw, lookup, LONGITUDE_COLUMN))
    vehicle_ids = _column(raw, lookup, VEHICLE_ID_COLUMN)

    valid = (
        timestamps.notna()
        & latitudes.between(LATITUDE_MIN_DEGREES, LATITUDE_MAX_DEGREES)
        & longitudes.between(LONGITUDE_MIN_DEGREES, LONGITUDE_MAX_DEGREES)
        & (vehicle_ids != '')
    )

    dropped = int((~valid).sum())
    if dropped:
        logger.debug(f"Dropped {dropped} of {len(raw)} rows with missing or invalid required values")

    clean = pd.DataFrame({
        'timestamp': timestamps,
        'latitude': latitudes,
        'longitude': longitudes,
        'vehicle_id': vehicle_ids,
        'display_name': _column(raw, lookup, VEHICLE_NAME_COLUMN),
    })
    for column, attribute in MOTION_COLUMNS.items():
        clean[attribute] = _to_finite(_column(raw, lookup, column))
    for column, attribute in WIND_ANGLE_COLUMNS.items():
        clean[attribute] = _normalize_wind(_to_finite(_column(raw, lookup, column)))
    clean = clean[valid]

    extra_columns = [col for col in raw.columns if col.lower() not in SCHEMA_COLUMNS]

    tracks = []
    for vehicle_id, group in clean.groupby('vehicle_id', sort=False):
        # Name from the first row in file order
        display_name = group['display_name'].iloc[0] or vehicle_id
        group = group.sort_values('timestamp', kind='mergesort')

        samples = []
        for index, row in group.iterrows():
            samples.append(TelemetrySample(
                timestamp=int(row['timestamp']),
                latitude=float(row['latitude']),
                longitude=float(row['longitude']),
                speed_over_ground=_optional(row['speed_over_ground']),
                course_over_ground=_optional(row['course_over_ground']),
                true_wind_direction=_optional(row['true_wind_direction']),
                apparent_wind_angle=_optional(row['apparent_wind_angle']),
                true_wind_angle=_optional(row['true_wind_angle']),
                extra={col: raw.at[index, col] for col in extra_columns},
            ))

        tracks.append(VehicleTrack(
            id=vehicle_id,
            display_name=display_name,
            color=generate_vehicle_color(vehicle_id),
            samples=tuple(samples),
        ))

    if not tracks:
        raise IngestEmptyError("No valid boat tracks found in CSV")

    dataset = RaceDataset.from_tracks(tracks)
    logger.info(f"Loaded {len(tracks)} vehicles with {dataset.sample_count} samples")
    return dataset, warnings


def ingest(content: str) -> RaceDataset:
    """
    Parse telemetry CSV content, logging and discarding tokenizer warnings.

    Raises:
        IngestEmptyError: If no vehicle ends up with a valid sample
    """
    dataset, _ = load_csv(content)
    return dataset


def load_csv_from_path(file_path: str) -> Tuple[RaceDataset, List[IngestParseWarning]]:
    """
    Load a telemetry CSV file from disk.

    Args:
        file_path: Path to the CSV file

    Returns:
        tuple: (RaceDataset, list of non-fatal tokenizer warnings)

    Raises:
        FileNotFoundError: If the file does not exist
        IngestEmptyError: If no vehicle ends up with a valid sample
    """
    validate_file_path(file_path, "Telemetry CSV")
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Telemetry CSV not found: {file_path}")

    with open(file_path, 'r', encoding='utf-8') as f:
        content = f.read()

    logger.info(f"Reading telemetry from {os.path.basename(file_path)}")
    return load_csv(content)

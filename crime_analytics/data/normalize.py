"""
Per-year column normalization: canonical types for the known columns.
"""
from __future__ import annotations

import numpy as np
import pandas as pd

from crime_analytics.config import (
    IDENTIFIER_COLS, TEXT_COLS, NUMERIC_COLS, FLAG_COLS, SHOOTING_FLAG_TEXT,
)
from crime_analytics.data.errors import MalformedSourceError
from crime_analytics.data.markers import Marker, is_marker, marker_mask


# ---------------------------------------------------------------------------
# Cell-level helpers
# ---------------------------------------------------------------------------

def _strip(value):
    """Trim text; whitespace-only cells become nulls."""
    if isinstance(value, str) and not is_marker(value):
        value = value.strip()
        return value if value else np.nan
    return value


def _identifier_text(value):
    if is_marker(value) or pd.isna(value):
        return value
    # 1.42e8-style floats from numeric readers lose nothing once integral
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return str(int(value))
    return str(value).strip()


def _category_text(value):
    if is_marker(value) or pd.isna(value):
        return value
    text = str(value).strip()
    return text if text else np.nan


# ---------------------------------------------------------------------------
# Column coercions
# ---------------------------------------------------------------------------

def to_identifier(series: pd.Series) -> pd.Series:
    """Incident numbers as text, never round-tripped through a number."""
    return series.map(_identifier_text).astype(object)


def to_text(series: pd.Series) -> pd.Series:
    return series.map(_category_text).astype(object)


def to_number(series: pd.Series) -> pd.Series:
    """Numeric values; present-but-malformed cells become Marker.UNPARSEABLE.

    Integral columns come back as integers, nulls stay null.
    """
    text = series.map(_strip)
    markers = marker_mask(text)
    parsed = pd.to_numeric(text.mask(markers), errors="coerce")
    failed = parsed.isna() & text.notna() & ~markers

    valid = parsed.dropna()
    if len(valid) == 0 or (valid % 1 == 0).all():
        # whole numbers outside the int64 range have no integer form
        limit = float(np.iinfo(np.int64).max)
        too_big = parsed.astype("float64").abs() >= limit
        failed |= too_big
        parsed = parsed.mask(too_big).astype("Int64")

    out = parsed.astype(object)
    out[failed] = Marker.UNPARSEABLE
    out[markers] = text[markers]
    return out


def to_flag(series: pd.Series) -> pd.Series:
    """Shooting flag: literal 'Y' is kept, anything else is coerced to a number."""
    text = series.map(_strip)
    literal = text.map(
        lambda v: isinstance(v, str) and not is_marker(v) and v == SHOOTING_FLAG_TEXT
    ).astype(bool)
    out = to_number(text.mask(literal))
    out[literal] = SHOOTING_FLAG_TEXT
    return out


# ---------------------------------------------------------------------------
# Table-level normalization
# ---------------------------------------------------------------------------

def normalize_year(df: pd.DataFrame) -> pd.DataFrame:
    """Coerce the known columns of one year's table to canonical types.

    Absent known columns are left absent (the merge marks them); unrecognized
    columns pass through untouched. Returns a new frame.
    """
    if not isinstance(df, pd.DataFrame):
        raise MalformedSourceError(f"Expected a row/column table, got {type(df).__name__}")

    df = df.copy()
    for col in IDENTIFIER_COLS:
        if col in df.columns:
            df[col] = to_identifier(df[col])
    for col in TEXT_COLS:
        if col in df.columns:
            df[col] = to_text(df[col])
    for col in NUMERIC_COLS:
        if col in df.columns:
            df[col] = to_number(df[col])
    for col in FLAG_COLS:
        if col in df.columns:
            df[col] = to_flag(df[col])
    return df


def unparseable_counts(df: pd.DataFrame) -> dict[str, int]:
    """Number of Marker.UNPARSEABLE cells per column (non-zero only)."""
    counts = {}
    for col in df.columns:
        n = int(marker_mask(df[col], Marker.UNPARSEABLE).sum())
        if n:
            counts[col] = n
    return counts

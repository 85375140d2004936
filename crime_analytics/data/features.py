"""
Feature derivation: calendar fields, shift bucket and shooting state.
"""
from __future__ import annotations

import datetime as dt
import re

import pandas as pd

from crime_analytics.config import (
    OCCURRED_ON_DATE, SHOOTING, YEAR, MONTH, HOUR, DAY_OF_WEEK, SHIFT, IS_SHOOTING,
    CALENDAR_COLS, SHIFTS, TIMESTAMP_FORMAT, TIMESTAMP_OFFSET_RE,
    SHOOTING_FLAG_TEXT, SHOOTING_FLAG_NUMBER,
)
from crime_analytics.data.markers import Marker, as_marker, is_marker, is_unassigned

_OFFSET_RE = re.compile(TIMESTAMP_OFFSET_RE)


# ---------------------------------------------------------------------------
# Timestamp parsing
# ---------------------------------------------------------------------------

def _timestamp_text(value):
    if isinstance(value, (pd.Timestamp, dt.datetime)) and not pd.isna(value):
        return value.strftime(TIMESTAMP_FORMAT)
    if isinstance(value, str) and not is_marker(value):
        return _OFFSET_RE.sub("", value.strip())
    return None


def parse_timestamps(series: pd.Series) -> pd.Series:
    """Parse occurred-on values; anything unusable becomes NaT."""
    return pd.to_datetime(series.map(_timestamp_text), format=TIMESTAMP_FORMAT, errors="coerce")


def _occurred_on(df: pd.DataFrame) -> pd.Series:
    if OCCURRED_ON_DATE not in df.columns:
        return pd.Series(pd.NaT, index=df.index, dtype="datetime64[ns]")
    return parse_timestamps(df[OCCURRED_ON_DATE])


def calendar_fields(stamps: pd.Series) -> dict[str, pd.Series]:
    """YEAR/MONTH/HOUR/DAY_OF_WEEK from parsed timestamps, Marker.UNKNOWN where unparsed."""
    valid = stamps.notna()
    fields = {
        YEAR: stamps.dt.year.astype("Int64").astype(object),
        MONTH: stamps.dt.month.astype("Int64").astype(object),
        HOUR: stamps.dt.hour.astype("Int64").astype(object),
        DAY_OF_WEEK: stamps.dt.day_name().astype(object),
    }
    for values in fields.values():
        values[~valid] = Marker.UNKNOWN
    return fields


# ---------------------------------------------------------------------------
# Shift / shooting
# ---------------------------------------------------------------------------

def shift_for_hour(hour) -> str:
    """Night [0,8), Day [8,16), Evening [16,24); Marker.UNKNOWN otherwise."""
    if is_marker(hour) or pd.isna(hour):
        return Marker.UNKNOWN
    for name, start, end in SHIFTS:
        if start <= hour < end:
            return name
    return Marker.UNKNOWN


def shooting_state(flag):
    """True for 'Y' or 1; pd.NA when the year has no shooting column; False otherwise."""
    if as_marker(flag) is Marker.MISSING:
        return pd.NA
    if isinstance(flag, str) and not is_marker(flag):
        return flag == SHOOTING_FLAG_TEXT
    if is_marker(flag) or pd.isna(flag):
        return False
    return bool(flag == SHOOTING_FLAG_NUMBER)


# ---------------------------------------------------------------------------
# Table-level derivation
# ---------------------------------------------------------------------------

def derive_features(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of the merged table with the derived columns set.

    Calendar fields come from OCCURRED_ON_DATE. A supplied calendar column
    keeps its position but holds the derived value; disagreements are
    reported by calendar_conflicts(), not reconciled here.
    """
    df = df.copy()
    for col, values in calendar_fields(_occurred_on(df)).items():
        df[col] = values
    df[SHIFT] = df[HOUR].map(shift_for_hour).astype(object)

    if SHOOTING in df.columns:
        df[IS_SHOOTING] = df[SHOOTING].map(shooting_state).astype("boolean")
    else:
        df[IS_SHOOTING] = pd.Series(pd.NA, index=df.index, dtype="boolean")
    return df


def calendar_conflicts(df: pd.DataFrame) -> dict[str, int]:
    """Rows per supplied calendar column whose value disagrees with the timestamp.

    Only rows where both the supplied value and the timestamp are usable count.
    """
    derived = calendar_fields(_occurred_on(df))
    conflicts = {}
    for col in CALENDAR_COLS:
        if col not in df.columns:
            continue
        supplied = df[col]
        comparable = ~is_unassigned(supplied) & ~is_unassigned(derived[col])
        if col == DAY_OF_WEEK:
            differs = supplied[comparable].astype(str).str.strip().str.title() != derived[col][comparable]
        else:
            differs = supplied[comparable].astype(float) != derived[col][comparable].astype(float)
        conflicts[col] = int(differs.sum())
    return conflicts

"""
Data-quality profile of the unified table: missing/unparseable cells, calendar
divergence, and the distribution of the derived shooting and shift fields.
"""
from __future__ import annotations

import pandas as pd

from crime_analytics.config import IS_SHOOTING, SHIFT, SHIFTS
from crime_analytics.data.markers import Marker, marker_mask
from crime_analytics.analytics.common import pct_of_total


def column_health(df: pd.DataFrame) -> list[dict]:
    """Per column: source nulls and cells holding each marker."""
    rows = []
    total = len(df)
    for col in df.columns:
        series = df[col]
        missing = int(marker_mask(series, Marker.MISSING).sum())
        unparseable = int(marker_mask(series, Marker.UNPARSEABLE).sum())
        unknown = int(marker_mask(series, Marker.UNKNOWN).sum())
        nulls = int(series.isna().sum())
        rows.append({
            "column": col,
            "missing": missing,
            "unparseable": unparseable,
            "unknown": unknown,
            "null": nulls,
            "pct_usable": round(pct_of_total(total - missing - unparseable - unknown - nulls, total), 2),
        })
    return rows


def shooting_distribution(df: pd.DataFrame) -> dict[str, int]:
    if IS_SHOOTING not in df.columns:
        return {"true": 0, "false": 0, "unknown": len(df)}
    flags = df[IS_SHOOTING].astype("boolean")
    return {
        "true": int(flags.fillna(False).sum()),
        "false": int((~flags.fillna(True)).sum()),
        "unknown": int(flags.isna().sum()),
    }


def shift_distribution(df: pd.DataFrame) -> dict[str, int]:
    """Rows per shift in Night/Day/Evening order, with the unknown bucket last."""
    if SHIFT not in df.columns:
        return {}
    shifts = df[SHIFT]
    counts = {name: int((shifts == name).sum()) for name, _, _ in SHIFTS}
    counts[Marker.UNKNOWN.value] = int(marker_mask(shifts, Marker.UNKNOWN).sum())
    return counts


def data_quality(df: pd.DataFrame, conflicts: dict[str, int] | None = None) -> dict:
    return {
        "rows": len(df),
        "columns": column_health(df),
        "calendar_conflicts": dict(conflicts or {}),
        "is_shooting": shooting_distribution(df),
        "shift": shift_distribution(df),
    }

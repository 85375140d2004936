"""
Sentinel values for cells that carry no usable data.
"""
from __future__ import annotations

from enum import Enum

import numpy as np
import pandas as pd


class Marker(str, Enum):
    MISSING = "<missing>"          # column not supplied by the row's source year
    UNPARSEABLE = "<unparseable>"  # value present but failed type coercion
    UNKNOWN = "<unknown>"          # derived field whose input is unusable

    def __str__(self) -> str:
        return self.value


_BY_VALUE = {m.value: m for m in Marker}


def as_marker(value) -> Marker | None:
    """The Marker a cell holds, also when a string dtype has stored it as plain text."""
    if isinstance(value, Marker):
        return value
    if isinstance(value, str):
        return _BY_VALUE.get(value)
    return None


def is_marker(value) -> bool:
    return as_marker(value) is not None


def marker_mask(series: pd.Series, marker: Marker | None = None) -> pd.Series:
    """Boolean mask of cells holding a marker (any marker when marker is None)."""
    if marker is None:
        return series.map(is_marker).astype(bool)
    return series.map(lambda v: as_marker(v) is marker).astype(bool)


def is_unassigned(series: pd.Series) -> pd.Series:
    """True where a cell is a source null or any marker."""
    return series.isna() | marker_mask(series)


def order_key(value) -> tuple:
    """Ascending sort key: numbers, then text, then markers, then nulls."""
    marker = as_marker(value)
    if marker is not None:
        return (2, 0, marker.value)
    if isinstance(value, (int, float, np.number)) and not pd.isna(value):
        return (0, 0, value)
    if isinstance(value, str):
        return (0, 1, value)
    if value is None or pd.isna(value):
        return (3, 0, 0)
    return (1, 0, str(value))

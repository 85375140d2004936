"""
Schema merge: align the per-year tables on the union of their columns.
"""
from __future__ import annotations

from typing import Sequence

import pandas as pd

from crime_analytics.config import CATEGORICAL_COLS
from crime_analytics.data.errors import MalformedSourceError
from crime_analytics.data.markers import Marker, is_unassigned, order_key


def union_columns(tables: Sequence[pd.DataFrame]) -> list[str]:
    """All column names across tables, in first-seen order."""
    seen: dict[str, None] = {}
    for table in tables:
        for col in table.columns:
            seen.setdefault(col, None)
    return list(seen)


def merge_years(tables: Sequence[pd.DataFrame]) -> pd.DataFrame:
    """Concatenate normalized yearly tables (given in year order) into one table.

    Columns a year does not supply are filled with Marker.MISSING. Row order
    within each year and the year order are preserved.
    """
    for i, table in enumerate(tables):
        if not isinstance(table, pd.DataFrame):
            raise MalformedSourceError(f"Source #{i + 1} is not a row/column table: {type(table).__name__}")
    if not tables:
        return pd.DataFrame()

    columns = union_columns(tables)
    aligned = []
    for table in tables:
        absent = [c for c in columns if c not in table.columns]
        filled = table.assign(**{c: pd.Series(Marker.MISSING, index=table.index, dtype=object) for c in absent})
        aligned.append(filled[columns])

    merged = pd.concat(aligned, ignore_index=True, sort=False)

    expected = sum(len(t) for t in tables)
    if len(merged) != expected:
        raise MalformedSourceError(f"Merge produced {len(merged):,} rows, expected {expected:,}")
    return merged


def observed_vocabulary(df: pd.DataFrame, fields: Sequence[str] = CATEGORICAL_COLS) -> dict[str, list]:
    """Distinct values seen per categorical field, sorted; nulls and markers left out."""
    vocab = {}
    for field in fields:
        if field not in df.columns:
            continue
        values = df.loc[~is_unassigned(df[field]), field].unique().tolist()
        vocab[field] = sorted(values, key=order_key)
    return vocab

"""
Grouped summaries over the enriched incident table.

Every operation takes the table plus an optional row filter and returns a new
DataFrame; the input is never modified. Rankings are deterministic: count
descending, then group key ascending (numbers, text, markers, nulls).

Null and marker values form their own groups here. Callers that must not rank
them use split_unassigned() first and keep the Exclusion it returns.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence, Union

import pandas as pd

from crime_analytics.data.markers import Marker, marker_mask, order_key
from crime_analytics.data.schemas import IncidentFilter

RowFilter = Union[IncidentFilter, Callable[[pd.DataFrame], pd.Series], None]
GroupKey = Union[str, Sequence[str]]

COUNT = "count"


@dataclass(frozen=True)
class Exclusion:
    """Rows left out of a summary, and why."""
    field: str
    reason: str
    rows: int


# ---------------------------------------------------------------------------
# Row selection
# ---------------------------------------------------------------------------

def _keys(key: GroupKey) -> list[str]:
    return [key] if isinstance(key, str) else list(key)


def select(df: pd.DataFrame, where: RowFilter = None) -> pd.DataFrame:
    """Rows matching an IncidentFilter or a mask-returning predicate."""
    if where is None:
        return df
    if isinstance(where, IncidentFilter):
        return where.apply(df)
    mask = where(df)
    return df[mask.fillna(False).astype(bool)]


def _field(df: pd.DataFrame, name: str) -> pd.Series:
    # A field no source year supplied is missing on every row
    if name in df.columns:
        return df[name]
    return pd.Series(Marker.MISSING, index=df.index, dtype=object)


_REASONS = (
    (None, "missing {}"),
    (Marker.MISSING, "{} not supplied by the source year"),
    (Marker.UNPARSEABLE, "unparseable {}"),
    (Marker.UNKNOWN, "unknown {}"),
)


def split_unassigned(df: pd.DataFrame, fields: GroupKey) -> tuple[pd.DataFrame, list[Exclusion]]:
    """Drop rows whose field(s) are null or a marker.

    One Exclusion per field and kind of gap: blank cells, columns the source
    year never supplied, unparseable values and unknown derived values.
    """
    keep = pd.Series(True, index=df.index)
    exclusions = []
    for name in _keys(fields):
        values = _field(df, name)
        label = name.lower().replace("_", " ")
        for marker, reason in _REASONS:
            gap = values.isna() if marker is None else marker_mask(values, marker)
            dropped = gap & keep
            n = int(dropped.sum())
            if n:
                exclusions.append(Exclusion(name, reason.format(label), n))
            keep &= ~dropped
    return df[keep], exclusions


# ---------------------------------------------------------------------------
# Counting
# ---------------------------------------------------------------------------

def _ranked(counts: pd.Series, keys: list[str], by_key: bool = False) -> pd.DataFrame:
    rows = []
    for group, n in counts.items():
        values = group if isinstance(group, tuple) else (group,)
        rows.append((values, int(n)))
    if by_key:
        rows.sort(key=lambda r: tuple(order_key(v) for v in r[0]))
    else:
        rows.sort(key=lambda r: (-r[1], tuple(order_key(v) for v in r[0])))
    return pd.DataFrame([(*values, n) for values, n in rows], columns=keys + [COUNT])


def count_by_group(
    df: pd.DataFrame,
    key: GroupKey,
    where: RowFilter = None,
    by_key: bool = False,
) -> pd.DataFrame:
    """Row count per group, sorted by count descending then key ascending.

    by_key=True orders by key ascending only (year tables, chart axes).
    """
    keys = _keys(key)
    df = select(df, where)
    if df.empty:
        return pd.DataFrame(columns=keys + [COUNT])

    frame = pd.DataFrame({name: _field(df, name) for name in keys}, index=df.index)
    counts = frame.groupby(keys, dropna=False, sort=False).size()
    return _ranked(counts, keys, by_key)


def top_n(df: pd.DataFrame, key: GroupKey, n: int, where: RowFilter = None) -> pd.DataFrame:
    """First n groups of count_by_group; ties resolved by key ascending."""
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")
    return count_by_group(df, key, where).head(n).reset_index(drop=True)


def top_per_group(
    df: pd.DataFrame,
    outer: str,
    inner: str,
    where: RowFilter = None,
) -> pd.DataFrame:
    """For each outer value, the inner value with the highest count.

    Ties inside an outer group go to the smallest inner key. Rows are ordered
    by outer key ascending.
    """
    counts = count_by_group(df, [outer, inner], where)
    if counts.empty:
        return counts
    # counts is already ranked, so the first row per outer value is its winner
    winners = counts.drop_duplicates(subset=[outer], keep="first")
    order = sorted(range(len(winners)), key=lambda i: order_key(winners[outer].iloc[i]))
    return winners.iloc[order].reset_index(drop=True)


def filtered_count(df: pd.DataFrame, where: RowFilter, by: GroupKey | None = None):
    """Rows matching where; grouped like count_by_group when by is given."""
    if by is not None:
        return count_by_group(df, by, where)
    return int(len(select(df, where)))


# ---------------------------------------------------------------------------
# Numeric reductions
# ---------------------------------------------------------------------------

def _numeric(series: pd.Series) -> pd.Series:
    if pd.api.types.is_bool_dtype(series.dtype):
        return series.astype("Int64")
    return pd.to_numeric(series.mask(marker_mask(series)), errors="coerce")


def sum_by_group(
    df: pd.DataFrame,
    key: GroupKey,
    value: str,
    where: RowFilter = None,
) -> pd.DataFrame:
    """Sum of a numeric or boolean column per group, nulls skipped, ordered by key ascending."""
    keys = _keys(key)
    df = select(df, where)
    if df.empty:
        return pd.DataFrame(columns=keys + [value])

    frame = pd.DataFrame({name: _field(df, name) for name in keys}, index=df.index)
    frame[value] = _numeric(_field(df, value))
    sums = frame.groupby(keys, dropna=False, sort=False)[value].sum(min_count=0)

    rows = []
    for group, total in sums.items():
        values = group if isinstance(group, tuple) else (group,)
        rows.append((values, total))
    rows.sort(key=lambda r: tuple(order_key(v) for v in r[0]))
    out = pd.DataFrame([(*values, total) for values, total in rows], columns=keys + [value])
    if pd.api.types.is_bool_dtype(_field(df, value).dtype):
        out[value] = out[value].astype(int)
    return out

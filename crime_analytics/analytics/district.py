"""
District query - yearly incident counts for one district and a set of offense codes.
"""
from __future__ import annotations

from typing import Iterable

import pandas as pd

from crime_analytics.config import YEAR
from crime_analytics.data.markers import is_unassigned
from crime_analytics.data.schemas import IncidentFilter
from crime_analytics.analytics.aggregate import (
    COUNT, Exclusion, count_by_group, select, split_unassigned,
)

TOTAL = "Total"


def district_crime(
    df: pd.DataFrame,
    district: str,
    codes: Iterable,
    years: Iterable[int] | None = None,
) -> pd.DataFrame:
    """YEAR → Total for incidents in district whose offense code is in codes.

    One row per year, ascending. Years default to every year present in the
    table, so a year without a match is reported with 0.
    """
    codes = list(codes)
    if not district:
        raise ValueError("A district is required")
    if not codes:
        raise ValueError("At least one offense code is required")

    if years is None:
        known = df.loc[~is_unassigned(df[YEAR]), YEAR] if YEAR in df.columns else pd.Series([], dtype=object)
        years = known.unique().tolist()
    years = sorted(int(y) for y in years)

    # Matches with an unknown YEAR have no place on the year axis; see district_exclusions()
    counts = count_by_group(df, YEAR, district_filter(district, codes))
    wanted = set(years)
    by_year = {int(y): int(n) for y, n in zip(counts[YEAR], counts[COUNT]) if y in wanted}
    return pd.DataFrame(
        {YEAR: years, TOTAL: [by_year.get(y, 0) for y in years]},
        columns=[YEAR, TOTAL],
    )


def district_filter(district: str, codes: Iterable) -> IncidentFilter:
    return IncidentFilter(district=district, offense_codes=frozenset(codes))


def district_exclusions(df: pd.DataFrame, district: str, codes: Iterable) -> list[Exclusion]:
    """Matching rows that district_crime() cannot place on a year."""
    _, exclusions = split_unassigned(select(df, district_filter(district, codes)), YEAR)
    return exclusions

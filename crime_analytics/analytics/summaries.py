"""
Report summaries and chart-ready series built on the aggregation primitives.

Each builder takes the enriched table and returns a Summary: the finished
table plus every exclusion applied on the way, so a reader can account for
each row that is not in it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

import pandas as pd

from crime_analytics.config import (
    YEAR, MONTH, HOUR, DAY_OF_WEEK, DISTRICT, OFFENSE_CODE_GROUP, SHIFT, IS_SHOOTING,
    AUTO_THEFT_DESCRIPTION, DAY_ORDER, HOURS, MONTHS, TOP_N,
)
from crime_analytics.data.schemas import IncidentFilter
from crime_analytics.analytics.aggregate import (
    COUNT, Exclusion, count_by_group, split_unassigned, sum_by_group, top_n, top_per_group,
)
from crime_analytics.analytics.common import records
from crime_analytics.analytics.district import district_crime, district_exclusions

SHOOTINGS = IncidentFilter(shooting_only=True)
AUTO_THEFTS = IncidentFilter(offense_description=AUTO_THEFT_DESCRIPTION)


@dataclass
class Summary:
    """A finished table and the rows excluded from it."""
    name: str
    title: str
    table: pd.DataFrame
    exclusions: list[Exclusion] = field(default_factory=list)

    @property
    def excluded_rows(self) -> int:
        return sum(e.rows for e in self.exclusions)

    def to_json(self) -> dict:
        return {
            "name": self.name,
            "title": self.title,
            "rows": records(self.table),
            "exclusions": [
                {"field": e.field, "reason": e.reason, "rows": e.rows} for e in self.exclusions
            ],
        }


def _unknown_shooting_flag(df: pd.DataFrame) -> list[Exclusion]:
    """Rows whose year has no shooting column cannot be counted as shootings."""
    if IS_SHOOTING not in df.columns:
        return [Exclusion(IS_SHOOTING, "shooting flag not supplied", len(df))] if len(df) else []
    n = int(df[IS_SHOOTING].isna().sum())
    return [Exclusion(IS_SHOOTING, "shooting flag not supplied", n)] if n else []


def _rename(table: pd.DataFrame, label: str) -> pd.DataFrame:
    return table.rename(columns={COUNT: label})


# ---------------------------------------------------------------------------
# Tabular summaries
# ---------------------------------------------------------------------------

def shootings_per_year(df: pd.DataFrame) -> Summary:
    excluded = _unknown_shooting_flag(df)
    kept, dropped = split_unassigned(SHOOTINGS.apply(df), YEAR)
    table = count_by_group(kept, YEAR, by_key=True)
    return Summary("shootings_per_year", "Shootings per Year",
                   _rename(table, "Shootings"), excluded + dropped)


def offense_group_totals(df: pd.DataFrame) -> Summary:
    kept, dropped = split_unassigned(df, OFFENSE_CODE_GROUP)
    return Summary("offense_group_totals", "Crime Totals by Offense Group",
                   _rename(count_by_group(kept, OFFENSE_CODE_GROUP), "totals"), dropped)


def top_districts(df: pd.DataFrame, n: int = TOP_N) -> Summary:
    kept, dropped = split_unassigned(df, DISTRICT)
    return Summary("top_districts", f"Top {n} Districts by Incidents",
                   _rename(top_n(kept, DISTRICT, n), "totals"), dropped)


def top_months(df: pd.DataFrame, n: int = TOP_N) -> Summary:
    kept, dropped = split_unassigned(df, MONTH)
    return Summary("top_months", f"Top {n} Months by Incidents",
                   _rename(top_n(kept, MONTH, n), "totals"), dropped)


def top_auto_theft_district(df: pd.DataFrame) -> Summary:
    kept, dropped = split_unassigned(AUTO_THEFTS.apply(df), DISTRICT)
    return Summary("top_auto_theft_district", "District with Most Auto Thefts",
                   _rename(top_n(kept, DISTRICT, 1), "auto_theft_count"), dropped)


def top_shooting_district(df: pd.DataFrame) -> Summary:
    excluded = _unknown_shooting_flag(df)
    kept, dropped = split_unassigned(SHOOTINGS.apply(df), DISTRICT)
    return Summary("top_shooting_district", "District with Most Shootings",
                   _rename(top_n(kept, DISTRICT, 1), "district_shootings"), excluded + dropped)


def yearly_top_shooting_district(df: pd.DataFrame) -> Summary:
    excluded = _unknown_shooting_flag(df)
    kept, dropped = split_unassigned(SHOOTINGS.apply(df), [YEAR, DISTRICT])
    table = top_per_group(kept, YEAR, DISTRICT)
    return Summary("yearly_top_shooting_district", "District with Most Shootings, by Year",
                   _rename(table, "district_year_shootings"), excluded + dropped)


def shift_counts(df: pd.DataFrame) -> Summary:
    """Incidents per shift; unknown hours stay as their own bucket."""
    return Summary("shift_counts", "Incidents by Shift", _rename(count_by_group(df, SHIFT), "totals"))


def district_summary(
    df: pd.DataFrame,
    district: str,
    codes: Iterable,
    known_districts: Iterable[str] | None = None,
    years: Iterable[int] | None = None,
) -> Summary:
    """Yearly counts for one district and offense-code set; known_districts rejects typos."""
    codes = list(codes)
    if known_districts is not None and district not in set(known_districts):
        raise ValueError(f"Unknown district: {district}")
    table = district_crime(df, district, codes, years)
    title = f"District {district}: offense codes {', '.join(str(c) for c in codes)}"
    return Summary("district_crime", title, table, district_exclusions(df, district, codes))


# ---------------------------------------------------------------------------
# Chart-ready series
# ---------------------------------------------------------------------------

def _on_axis(table: pd.DataFrame, key: str, value: str, axis: list) -> pd.DataFrame:
    """Reindex a key/value table onto a fixed axis, zero-filling absent points."""
    lookup = {k: int(v) for k, v in zip(table[key], table[value])}
    return pd.DataFrame({key: axis, value: [lookup.get(k, 0) for k in axis]})


def incidents_by_hour(df: pd.DataFrame) -> Summary:
    kept, dropped = split_unassigned(df, HOUR)
    table = _on_axis(count_by_group(kept, HOUR, by_key=True), HOUR, COUNT, HOURS)
    return Summary("incidents_by_hour", "Distribution of Crime Incidents by Hour", table, dropped)


def incidents_by_day_of_week(df: pd.DataFrame) -> Summary:
    kept, dropped = split_unassigned(df, DAY_OF_WEEK)
    table = _on_axis(count_by_group(kept, DAY_OF_WEEK), DAY_OF_WEEK, COUNT, DAY_ORDER)
    return Summary("incidents_by_day_of_week", "Total Number of Incidents per Day of the Week", table, dropped)


def shootings_by_month(df: pd.DataFrame) -> Summary:
    excluded = _unknown_shooting_flag(df)
    kept, dropped = split_unassigned(df, MONTH)
    sums = sum_by_group(kept, MONTH, IS_SHOOTING)
    table = _on_axis(sums, MONTH, IS_SHOOTING, MONTHS).rename(columns={IS_SHOOTING: "shooting_count"})
    return Summary("shootings_by_month", "Monthly Shooting Trend", table, excluded + dropped)


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------

SUMMARIES = {
    "shootings_per_year": shootings_per_year,
    "offense_group_totals": offense_group_totals,
    "top_districts": top_districts,
    "top_months": top_months,
    "top_auto_theft_district": top_auto_theft_district,
    "top_shooting_district": top_shooting_district,
    "yearly_top_shooting_district": yearly_top_shooting_district,
    "shift_counts": shift_counts,
}

CHARTS = {
    "incidents_by_hour": incidents_by_hour,
    "incidents_by_day_of_week": incidents_by_day_of_week,
    "shootings_by_month": shootings_by_month,
}


def build_summaries(df: pd.DataFrame) -> dict[str, Summary]:
    return {name: builder(df) for name, builder in SUMMARIES.items()}


def build_charts(df: pd.DataFrame) -> dict[str, Summary]:
    return {name: builder(df) for name, builder in CHARTS.items()}

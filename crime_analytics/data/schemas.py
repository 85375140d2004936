"""
Row filter schema for incident queries.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pandas as pd

from crime_analytics.config import (
    DISTRICT, YEAR, OFFENSE_CODE, OFFENSE_DESCRIPTION, IS_SHOOTING,
)
from crime_analytics.data.markers import is_marker


def _as_codes(codes) -> frozenset:
    """Offense codes compare numerically; '03115' and 3115 are the same code."""
    out = set()
    for code in codes:
        parsed = pd.to_numeric(pd.Series([code]), errors="coerce").iloc[0]
        if pd.isna(parsed):
            raise ValueError(f"Offense code is not numeric: {code!r}")
        out.add(int(parsed) if float(parsed).is_integer() else float(parsed))
    return frozenset(out)


@dataclass(frozen=True)
class IncidentFilter:
    """Optional row restriction applied before any aggregation."""
    district: Optional[str] = None
    years: frozenset = field(default_factory=frozenset)
    offense_codes: frozenset = field(default_factory=frozenset)
    offense_description: Optional[str] = None
    shooting_only: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "years", frozenset(int(y) for y in self.years))
        object.__setattr__(self, "offense_codes", _as_codes(self.offense_codes))

    @property
    def is_empty(self) -> bool:
        return not (self.district or self.years or self.offense_codes
                    or self.offense_description or self.shooting_only)

    def mask(self, df: pd.DataFrame) -> pd.Series:
        """Boolean row mask; markers and nulls never match a concrete value."""
        keep = pd.Series(True, index=df.index)
        if self.district:
            keep &= _column(df, DISTRICT).map(lambda v: _equals(v, self.district)).astype(bool)
        if self.years:
            keep &= _column(df, YEAR).map(lambda v: _in(v, self.years)).astype(bool)
        if self.offense_codes:
            keep &= _column(df, OFFENSE_CODE).map(lambda v: _in(v, self.offense_codes)).astype(bool)
        if self.offense_description:
            keep &= _column(df, OFFENSE_DESCRIPTION).map(lambda v: _equals(v, self.offense_description)).astype(bool)
        if self.shooting_only:
            keep &= _column(df, IS_SHOOTING).fillna(False).astype(bool)
        return keep

    def apply(self, df: pd.DataFrame) -> pd.DataFrame:
        if self.is_empty:
            return df
        return df[self.mask(df)]


def _column(df: pd.DataFrame, col: str) -> pd.Series:
    if col in df.columns:
        return df[col]
    return pd.Series(pd.NA, index=df.index, dtype=object)


def _in(value, allowed: frozenset) -> bool:
    try:
        return value in allowed
    except TypeError:
        return False


def _equals(value, target: str) -> bool:
    return isinstance(value, str) and not is_marker(value) and value == target

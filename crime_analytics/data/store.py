"""
DataStore - In-memory incident table backed by pandas.

Loaded once at startup (read → normalize → merge → derive), then only read.
Every summary works from the frozen table; accessors hand out copies.
"""
from __future__ import annotations

from pathlib import Path
from typing import Mapping

import pandas as pd

from crime_analytics.config import INBOX_FOLDER, YEARS, YEAR, DISTRICT, OCCURRED_ON_DATE
from crime_analytics.data.features import calendar_conflicts, derive_features, parse_timestamps
from crime_analytics.data.loader import load_years
from crime_analytics.data.markers import is_unassigned
from crime_analytics.data.merge import merge_years, observed_vocabulary
from crime_analytics.data.normalize import normalize_year
from crime_analytics.data.schemas import IncidentFilter


class DataStore:
    """Unified, feature-enriched incident table with filtered accessors."""

    def __init__(self) -> None:
        self.df: pd.DataFrame = pd.DataFrame()
        self._year_counts: dict[int, int] = {}
        self._vocabulary: dict[str, list] = {}
        self._conflicts: dict[str, int] = {}
        self._loaded = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, inbox: Path = INBOX_FOLDER, years=YEARS) -> "DataStore":
        """Load every yearly CSV from inbox; any structural failure aborts."""
        print("Loading incident data...")
        tables = load_years(inbox, years)
        return self._build(tables, years)

    @classmethod
    def from_frames(cls, frames: Mapping[int, pd.DataFrame]) -> "DataStore":
        """Build a store from raw per-year tables already in memory."""
        years = sorted(frames)
        tables = [normalize_year(frames[y]) for y in years]
        return cls()._build(tables, years)

    def _build(self, tables: list[pd.DataFrame], years) -> "DataStore":
        merged = merge_years(tables)
        self._conflicts = calendar_conflicts(merged)
        self.df = derive_features(merged)
        self._year_counts = {int(y): len(t) for y, t in zip(years, tables)}
        self._vocabulary = observed_vocabulary(self.df)

        print(f"  Merged: {len(self.df):,} rows, {len(self.df.columns)} columns "
              f"from {len(tables)} yearly files")
        for col, n in self._conflicts.items():
            if n:
                print(f"  Warning: {n:,} row(s) where supplied {col} disagrees with {OCCURRED_ON_DATE}")

        self._loaded = True
        return self

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def get_incidents(self, where: IncidentFilter | None = None) -> pd.DataFrame:
        """Incidents matching an optional filter, as a copy."""
        df = self.df
        if where is not None:
            df = where.apply(df)
        return df.copy()

    # ------------------------------------------------------------------
    # Metadata queries
    # ------------------------------------------------------------------

    def row_count(self) -> int:
        return len(self.df)

    def year_counts(self) -> dict[int, int]:
        """Rows contributed by each source year, in merge order."""
        return dict(self._year_counts)

    def years(self) -> list[int]:
        """Incident years present in the table (from the occurred-on timestamp)."""
        if self.df.empty:
            return []
        values = self.df.loc[~is_unassigned(self.df[YEAR]), YEAR].unique().tolist()
        return sorted(int(v) for v in values)

    def districts(self) -> list[str]:
        return list(self._vocabulary.get(DISTRICT, []))

    def vocabulary(self) -> dict[str, list]:
        """Observed values per categorical field, computed once after merge."""
        return {field: list(values) for field, values in self._vocabulary.items()}

    def calendar_conflicts(self) -> dict[str, int]:
        return dict(self._conflicts)

    def date_range(self) -> str:
        """Human-readable span of parseable occurred-on timestamps."""
        if self.df.empty or OCCURRED_ON_DATE not in self.df.columns:
            return "N/A"
        stamps = parse_timestamps(self.df[OCCURRED_ON_DATE]).dropna()
        if stamps.empty:
            return "N/A"
        return f"{stamps.min():%Y-%m-%d} to {stamps.max():%Y-%m-%d}"

    def quality(self) -> dict:
        """Missing/unparseable counts, calendar divergence and derived-field distributions."""
        from crime_analytics.analytics.quality import data_quality
        return data_quality(self.df, self._conflicts)

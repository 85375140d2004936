"""
FastAPI dependencies - DataStore singleton, district query parsing.
"""
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Query

from crime_analytics.data.store import DataStore

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: DataStore | None = None


def set_store(store: DataStore | None) -> None:
    global _store
    _store = store


def get_store() -> DataStore:
    if _store is None or not _store.is_loaded:
        raise HTTPException(503, "Data not loaded yet")
    return _store


# ---------------------------------------------------------------------------
# District query parsing from query params
# ---------------------------------------------------------------------------

class DistrictQuery:
    """district=B2&codes=3115&codes=3831"""

    def __init__(
        self,
        district: str = Query(..., description="District code, e.g. B2"),
        codes: list[str] = Query(..., description="Offense codes; repeat the parameter for several"),
        year: Optional[list[int]] = Query(None, description="Restrict to these years"),
    ) -> None:
        district = district.strip()
        if not district:
            raise HTTPException(400, "district must not be blank")
        # Accept both codes=3115&codes=3831 and codes=3115,3831
        parsed = [c.strip() for raw in codes for c in raw.split(",") if c.strip()]
        if not parsed:
            raise HTTPException(400, "at least one offense code is required")
        self.district = district
        self.codes = parsed
        self.years = year

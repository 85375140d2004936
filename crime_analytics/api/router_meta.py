"""
Meta endpoints: health, years, districts, vocabulary, data quality.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from crime_analytics.data.store import DataStore
from crime_analytics.analytics.common import sanitize_for_json
from crime_analytics.api.dependencies import get_store
from crime_analytics.api.response_models import (
    HealthResponse, YearsResponse, DistrictsResponse, VocabularyResponse,
)

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: DataStore = Depends(get_store)):
    return HealthResponse(
        status="ok",
        rows=store.row_count(),
        years=len(store.years()),
        districts=len(store.districts()),
        date_range=store.date_range(),
    )


@router.get("/years", response_model=YearsResponse)
def list_years(store: DataStore = Depends(get_store)):
    return YearsResponse(
        years=store.years(),
        rows_per_source_year={str(y): n for y, n in store.year_counts().items()},
    )


@router.get("/districts", response_model=DistrictsResponse)
def list_districts(store: DataStore = Depends(get_store)):
    districts = [str(d) for d in sanitize_for_json(store.districts())]
    return DistrictsResponse(districts=districts, count=len(districts))


@router.get("/vocabulary", response_model=VocabularyResponse)
def vocabulary(store: DataStore = Depends(get_store)):
    return VocabularyResponse(fields=sanitize_for_json(store.vocabulary()))


@router.get("/quality")
def quality(store: DataStore = Depends(get_store)):
    return sanitize_for_json(store.quality())

"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    rows: int
    years: int
    districts: int
    date_range: str


class YearsResponse(BaseModel):
    years: list[int]
    rows_per_source_year: dict[str, int]


class DistrictsResponse(BaseModel):
    districts: list[str]
    count: int


class VocabularyResponse(BaseModel):
    fields: dict[str, list[Any]]


class ExclusionModel(BaseModel):
    field: str
    reason: str
    rows: int


class SummaryResponse(BaseModel):
    name: str
    title: str
    rows: list[dict[str, Any]]
    exclusions: list[ExclusionModel]
    series: Optional[list[dict[str, Any]]] = None

"""
Summary endpoints - report tables, chart series, district query, full report downloads.
"""
from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from crime_analytics.config import REPORTS_FOLDER
from crime_analytics.data.store import DataStore
from crime_analytics.analytics.common import sanitize_for_json
from crime_analytics.analytics.summaries import CHARTS, SUMMARIES, district_summary
from crime_analytics.api.dependencies import DistrictQuery, get_store
from crime_analytics.api.response_models import SummaryResponse
from crime_analytics.reports import crime_report

router = APIRouter(prefix="/api", tags=["summaries"])


def _output_path(name: str) -> Path:
    REPORTS_FOLDER.mkdir(parents=True, exist_ok=True)
    return REPORTS_FOLDER / name


@router.get("/summary")
def all_summaries(store: DataStore = Depends(get_store)):
    return sanitize_for_json({name: build(store.df).to_json() for name, build in SUMMARIES.items()})


@router.get("/summary/{name}", response_model=SummaryResponse)
def one_summary(name: str, store: DataStore = Depends(get_store)):
    build = SUMMARIES.get(name)
    if build is None:
        raise HTTPException(404, f"Unknown summary: {name}. Valid: {list(SUMMARIES.keys())}")
    return build(store.df).to_json()


@router.get("/charts/{name}", response_model=SummaryResponse)
def chart_series(name: str, store: DataStore = Depends(get_store)):
    build = CHARTS.get(name)
    if build is None:
        raise HTTPException(404, f"Unknown chart: {name}. Valid: {list(CHARTS.keys())}")
    chart = build(store.df)
    return {**chart.to_json(), "series": crime_report.series(chart)}


@router.get("/district-crime", response_model=SummaryResponse)
def district_crime(
    query: DistrictQuery = Depends(),
    store: DataStore = Depends(get_store),
):
    try:
        summary = district_summary(store.df, query.district, query.codes,
                                   known_districts=store.districts(), years=query.years)
    except ValueError as exc:
        raise HTTPException(400, str(exc))
    return summary.to_json()


@router.get("/report")
def full_report(store: DataStore = Depends(get_store)):
    return crime_report.generate_json(store)


@router.get("/report/excel")
def report_excel(store: DataStore = Depends(get_store)):
    path = crime_report.generate_excel(store, _output_path("Boston_Crime_Report.xlsx"))
    return FileResponse(path=str(path), filename=path.name,
                        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")

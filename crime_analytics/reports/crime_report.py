"""
Boston Crime Report - every summary table, chart series and the data-quality
profile, as JSON, a styled workbook, or console tables.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pandas as pd

from crime_analytics.config import IS_SHOOTING
from crime_analytics.data.markers import Marker
from crime_analytics.data.store import DataStore
from crime_analytics.analytics.common import records, sanitize_for_json
from crime_analytics.analytics.quality import shooting_distribution
from crime_analytics.analytics.summaries import Summary, build_charts, build_summaries, district_summary
from crime_analytics.excel.writer import ExcelWriter, columns_for


HEALTH_COLS = [
    ("column", "text", "Column"),
    ("missing", "number", "Not Supplied"),
    ("unparseable", "number", "Unparseable"),
    ("unknown", "number", "Unknown"),
    ("null", "number", "Blank"),
    ("pct_usable", "percent", "% Usable"),
]

MARKER_LEGEND = [
    (Marker.MISSING.value, "The row's source year does not supply this column."),
    (Marker.UNPARSEABLE.value, "The source value is present but could not be read as a number."),
    (Marker.UNKNOWN.value, "Derived field whose input (timestamp or hour) is unusable."),
    ("(blank)", "The source supplied the column but left this cell empty."),
]


def series(summary: Summary) -> list[dict]:
    """Chart series as ordered {label, value} points."""
    label_col, value_col = summary.table.columns[0], summary.table.columns[-1]
    return [{"label": row[label_col], "value": row[value_col]} for row in records(summary.table)]


def _exclusion_text(summary: Summary) -> str:
    return "; ".join(f"{e.rows:,} row(s) excluded: {e.reason}" for e in summary.exclusions)


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def generate_json(
    store: DataStore,
    district: str | None = None,
    codes: Iterable | None = None,
) -> dict:
    df = store.df
    summaries = build_summaries(df)
    charts = build_charts(df)

    data = {
        "date_range": store.date_range(),
        "totals": {
            "incidents": store.row_count(),
            "districts": len(store.districts()),
            "shootings": shooting_distribution(df)["true"],
        },
        "year_counts": store.year_counts(),
        "summaries": {name: s.to_json() for name, s in summaries.items()},
        "charts": {
            name: {**c.to_json(), "series": series(c)} for name, c in charts.items()
        },
        "quality": store.quality(),
    }
    if district is not None and codes:
        data["district_crime"] = district_summary(df, district, codes).to_json()
    return sanitize_for_json(data)


# ---------------------------------------------------------------------------
# Excel
# ---------------------------------------------------------------------------

def _write_summary_sheet(ew: ExcelWriter, summary: Summary, sheet_name: str | None = None) -> None:
    ws = ew.add_sheet(sheet_name or summary.name.replace("_", " ").title())
    row = ew.write_section(ws, 1, summary.title.upper())
    row = ew.write_table(ws, row, columns_for(summary.table), records(summary.table), freeze=False)
    if summary.exclusions:
        ew.write_note(ws, row + 1, "Excluded rows", _exclusion_text(summary))


def generate_excel(
    store: DataStore,
    output_path: str | Path,
    district: str | None = None,
    codes: Iterable | None = None,
) -> Path:
    df = store.df
    summaries = build_summaries(df)
    charts = build_charts(df)
    quality = store.quality()
    shootings = quality["is_shooting"]
    ew = ExcelWriter()

    # Summary
    ws = ew.add_sheet("Summary")
    ew.write_title(ws, "BOSTON CRIME INCIDENTS",
                   f"Incident Report  |  {store.date_range()}  |  Generated {pd.Timestamp.now():%B %d, %Y}")

    row = ew.write_section(ws, 5, "OVERVIEW")
    row = ew.write_kpi_row(ws, row, [
        (store.row_count(), "TOTAL INCIDENTS", "number"),
        (len(store.districts()), "DISTRICTS", "number"),
        (shootings["true"], "SHOOTINGS", "number"),
        (shootings["unknown"], "SHOOTING FLAG UNKNOWN", "number"),
    ])

    row = ew.write_section(ws, row, "ROWS PER SOURCE YEAR")
    year_rows = [{"year": y, "rows": n} for y, n in store.year_counts().items()]
    row = ew.write_table(ws, row, [("year", "year", "Source Year"), ("rows", "number", "Rows")],
                         year_rows, freeze=False, show_total=True)

    # One sheet per table and per chart series
    for summary in summaries.values():
        _write_summary_sheet(ew, summary)
    for chart in charts.values():
        _write_summary_sheet(ew, chart)

    if district is not None and codes:
        _write_summary_sheet(ew, district_summary(df, district, codes), f"District {district}")

    # Data quality
    ws_q = ew.add_sheet("Data Quality")
    row = ew.write_section(ws_q, 1, "COLUMN HEALTH")
    row = ew.write_table(ws_q, row, HEALTH_COLS, quality["columns"],
                         flag_row=lambda r: r["unparseable"] > 0)

    row = ew.write_section(ws_q, row + 1, "CALENDAR FIELDS THAT DISAGREE WITH THE TIMESTAMP")
    conflict_rows = [{"field": k, "rows": v} for k, v in quality["calendar_conflicts"].items()]
    row = ew.write_table(ws_q, row, [("field", "text", "Field"), ("rows", "number", "Rows")],
                         conflict_rows, freeze=False)

    row = ew.write_section(ws_q, row + 1, "DERIVED FIELDS")
    derived = [{"field": IS_SHOOTING, "value": k, "rows": v} for k, v in shootings.items()]
    derived += [{"field": "SHIFT", "value": k, "rows": v} for k, v in quality["shift"].items()]
    row = ew.write_table(ws_q, row, [("field", "text", "Field"), ("value", "text", "Value"),
                                     ("rows", "number", "Rows")], derived, freeze=False)

    row = ew.write_section(ws_q, row + 1, "LEGEND")
    ew.write_legend(ws_q, row, MARKER_LEGEND)

    return ew.save(output_path)


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------

def format_summary(summary: Summary) -> str:
    table = summary.table.copy()
    for col in table.columns:
        if table[col].dtype == object:
            table[col] = table[col].map(lambda v: v.value if isinstance(v, Marker) else v)
    lines = [summary.title, "-" * len(summary.title)]
    lines.append(table.to_string(index=False) if not table.empty else "(no rows)")
    for e in summary.exclusions:
        lines.append(f"  excluded {e.rows:,} row(s): {e.reason}")
    return "\n".join(lines)


def print_summary(store: DataStore) -> None:
    df = store.df
    print(f"\nBoston crime incidents  |  {store.date_range()}  |  {store.row_count():,} rows\n")
    for summary in build_summaries(df).values():
        print(format_summary(summary))
        print()
    for chart in build_charts(df).values():
        print(format_summary(chart))
        print()

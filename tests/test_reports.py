import json

import pytest
from openpyxl import load_workbook

from crime_analytics.analytics.summaries import top_districts
from crime_analytics.cli import main
from crime_analytics.reports.crime_report import format_summary, generate_excel, generate_json


def test_generate_json_is_serializable(store):
    data = generate_json(store, district="B2", codes=[3115])
    text = json.dumps(data)
    assert "NaN" not in text
    assert data["year_counts"] == {"2018": 3, "2019": 3, "2020": 2, "2021": 2, "2022": 2}
    assert data["district_crime"]["rows"][0] == {"YEAR": 2018, "Total": 1}
    month = data["charts"]["shootings_by_month"]["series"]
    assert month[2] == {"label": 3, "value": 3}


def test_generate_excel_sheets(store, tmp_path):
    path = generate_excel(store, tmp_path / "out" / "report.xlsx", district="B2", codes=[3115, 3831])
    wb = load_workbook(path)
    assert wb.sheetnames[0] == "Summary"
    assert "Top Districts" in wb.sheetnames
    assert "Incidents By Hour" in wb.sheetnames
    assert "District B2" in wb.sheetnames
    assert wb.sheetnames[-1] == "Data Quality"

    ws = wb["Top Districts"]
    assert ws["A3"].value == "District"
    assert ws["A4"].value == "B2"
    assert ws["B4"].value == 5
    notes = [c.value for c in ws["A"] if isinstance(c.value, str) and "excluded" in c.value]
    assert notes == ["1 row(s) excluded: missing district"]


def test_generate_excel_totals_and_flags_unparseable_columns(store, tmp_path):
    wb = load_workbook(generate_excel(store, tmp_path / "report.xlsx"))
    summary = wb["Summary"]
    total_row = next(c.row for c in summary["A"] if c.value == "TOTAL")
    assert summary.cell(row=total_row, column=2).value == 12

    quality = wb["Data Quality"]
    area = next(c for c in quality["A"] if c.value == "REPORTING_AREA")
    district = next(c for c in quality["A"] if c.value == "DISTRICT")
    assert area.fill.start_color.rgb.endswith("FDE2E1")
    assert not district.fill.start_color.rgb.endswith("FDE2E1")


def test_format_summary_shows_markers_and_exclusions(incidents):
    text = format_summary(top_districts(incidents))
    assert text.splitlines()[0] == "Top 5 Districts by Incidents"
    assert "excluded 1 row(s): missing district" in text


def test_cli_district(inbox, capsys):
    main(["district", "--inbox", str(inbox), "B2", "3115", "3831"])
    out = capsys.readouterr().out
    assert "District B2: offense codes 3115, 3831" in out


def test_cli_export(inbox, tmp_path):
    out = tmp_path / "exports"
    main(["export", "--inbox", str(inbox), "--output", str(out)])
    assert (out / "report.json").is_file()
    assert (out / "summaries" / "top_districts.json").is_file()
    chart = json.loads((out / "charts" / "incidents_by_hour.json").read_text())
    assert len(chart["series"]) == 24


def test_cli_aborts_on_malformed_source(inbox, capsys):
    (inbox / "2019.csv").write_text("")
    with pytest.raises(SystemExit) as exc:
        main(["report", "--inbox", str(inbox)])
    assert exc.value.code == 1
    assert "Load aborted" in capsys.readouterr().out

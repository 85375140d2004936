import pandas as pd
import pytest

from crime_analytics.data.errors import MalformedSourceError
from crime_analytics.data.loader import discover_year_files, load_years, read_year
from crime_analytics.data.schemas import IncidentFilter
from crime_analytics.data.store import DataStore


def test_load_from_inbox_matches_in_memory_build(inbox, store):
    loaded = DataStore().load(inbox)
    assert loaded.is_loaded
    assert loaded.row_count() == store.row_count() == 12
    assert loaded.year_counts() == {2018: 3, 2019: 3, 2020: 2, 2021: 2, 2022: 2}
    assert list(loaded.df["INCIDENT_NUMBER"]) == list(store.df["INCIDENT_NUMBER"])


def test_load_prints_progress(inbox, capsys):
    DataStore().load(inbox)
    out = capsys.readouterr().out
    assert "[1/5] 2018.csv: 3 rows" in out
    assert "unparseable REPORTING_AREA" in out
    assert "Merged: 12 rows" in out


def test_identifiers_keep_leading_zeros(inbox):
    raw = read_year(inbox / "2018.csv")
    assert raw["OFFENSE_CODE"].iloc[0] == "03115"


def test_discover_year_files_searches_subfolders(tmp_path):
    (tmp_path / "2019").mkdir()
    (tmp_path / "2019" / "2019.csv").write_text("INCIDENT_NUMBER\nI1\n")
    (tmp_path / "2018.csv").write_text("INCIDENT_NUMBER\nI0\n")
    found = discover_year_files(tmp_path, (2018, 2019, 2020))
    assert found == {2018: tmp_path / "2018.csv", 2019: tmp_path / "2019" / "2019.csv"}


def test_missing_year_aborts_load(inbox):
    (inbox / "2020.csv").unlink()
    with pytest.raises(MalformedSourceError, match="2020"):
        load_years(inbox)


def test_empty_file_aborts_load(inbox):
    (inbox / "2021.csv").write_text("")
    with pytest.raises(MalformedSourceError):
        DataStore().load(inbox)


def test_ragged_file_aborts_load(inbox):
    (inbox / "2019.csv").write_text('INCIDENT_NUMBER,DISTRICT\nI1,B2\n"I2,B3\n')
    with pytest.raises(MalformedSourceError):
        load_years(inbox)


def test_get_incidents_returns_a_copy(store):
    rows = store.get_incidents(IncidentFilter(district="B3"))
    assert len(rows) == 4
    rows["DISTRICT"] = "XX"
    assert "XX" not in set(store.df["DISTRICT"].dropna())


def test_metadata(store):
    assert store.years() == [2018, 2019, 2020, 2021, 2022]
    assert store.districts() == ["B2", "B3", "D4"]
    assert store.date_range() == "2018-01-05 to 2022-12-31"
    assert store.vocabulary()["UCR_PART"] == ["Part One", "Part Three"]


def test_quality_report(store):
    quality = store.quality()
    assert quality["rows"] == 12
    assert quality["is_shooting"] == {"true": 4, "false": 6, "unknown": 2}
    assert quality["shift"] == {"Night": 3, "Day": 3, "Evening": 5, "<unknown>": 1}
    health = {c["column"]: c for c in quality["columns"]}
    assert health["SHOOTING"]["missing"] == 2
    assert health["REPORTING_AREA"]["unparseable"] == 1
    assert health["DISTRICT"]["null"] == 1
    assert health["OFFENSE_CODE_GROUP"]["missing"] == 9


def test_filter_normalizes_years_and_codes():
    where = IncidentFilter(district="B2", offense_codes=["03115", 3831], years=["2019"])
    assert where.years == frozenset({2019})
    assert where.offense_codes == frozenset({3115, 3831})
    assert not where.is_empty
    assert IncidentFilter().is_empty


def test_from_frames_rejects_non_table():
    with pytest.raises(MalformedSourceError):
        DataStore.from_frames({2018: "not a table"})

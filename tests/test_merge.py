import pandas as pd
import pytest

from crime_analytics.data.errors import MalformedSourceError
from crime_analytics.data.markers import Marker
from crime_analytics.data.merge import merge_years, observed_vocabulary, union_columns
from crime_analytics.data.normalize import normalize_year


def test_single_row_years_with_disjoint_extra_columns():
    tables = [
        pd.DataFrame({"INCIDENT_NUMBER": [f"I{i}"], f"EXTRA_{i}": [f"value {i}"]}, dtype=object)
        for i in range(5)
    ]
    merged = merge_years(tables)

    assert len(merged) == 5
    assert list(merged.columns) == ["INCIDENT_NUMBER"] + [f"EXTRA_{i}" for i in range(5)]
    for i in range(5):
        row = merged.iloc[i]
        assert row["INCIDENT_NUMBER"] == f"I{i}"
        assert row[f"EXTRA_{i}"] == f"value {i}"
        others = [row[f"EXTRA_{j}"] for j in range(5) if j != i]
        assert all(v is Marker.MISSING for v in others)


def test_row_count_is_sum_of_years(yearly_frames):
    tables = [normalize_year(yearly_frames[y]) for y in sorted(yearly_frames)]
    merged = merge_years(tables)
    assert len(merged) == sum(len(t) for t in tables) == 12


def test_year_order_and_row_order_preserved(yearly_frames):
    tables = [normalize_year(yearly_frames[y]) for y in sorted(yearly_frames)]
    merged = merge_years(tables)
    expected = [n for y in sorted(yearly_frames) for n in yearly_frames[y]["INCIDENT_NUMBER"]]
    assert list(merged["INCIDENT_NUMBER"]) == expected


def test_missing_marker_is_distinct_from_source_null(yearly_frames):
    tables = [normalize_year(yearly_frames[y]) for y in sorted(yearly_frames)]
    merged = merge_years(tables).set_index("INCIDENT_NUMBER")
    # 2020 has no SHOOTING column; 2018 left the cell blank
    assert merged.loc["I202000001", "SHOOTING"] is Marker.MISSING
    assert pd.isna(merged.loc["I182070945", "SHOOTING"])


def test_union_columns_first_seen_order():
    a = pd.DataFrame(columns=["A", "B"])
    b = pd.DataFrame(columns=["C", "A"])
    assert union_columns([a, b]) == ["A", "B", "C"]


def test_merge_rejects_non_table_source():
    with pytest.raises(MalformedSourceError):
        merge_years([pd.DataFrame({"A": [1]}), "2019.csv"])


def test_observed_vocabulary_skips_nulls_and_markers(yearly_frames):
    tables = [normalize_year(yearly_frames[y]) for y in sorted(yearly_frames)]
    vocab = observed_vocabulary(merge_years(tables))
    assert vocab["DISTRICT"] == ["B2", "B3", "D4"]
    assert vocab["OFFENSE_CODE_GROUP"] == ["Aggravated Assault", "Auto Theft", "Investigate Person"]
    assert vocab["OFFENSE_CODE"] == [413, 724, 3115, 3831]

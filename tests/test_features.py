import pandas as pd
import pytest

from crime_analytics.data.features import (
    calendar_conflicts, derive_features, parse_timestamps, shift_for_hour, shooting_state,
)
from crime_analytics.data.markers import Marker
from crime_analytics.data.merge import merge_years
from crime_analytics.data.normalize import normalize_year


def _derive(raw: dict) -> pd.DataFrame:
    return derive_features(merge_years([normalize_year(pd.DataFrame(raw, dtype=object))]))


def test_calendar_fields_from_timestamp():
    row = _derive({"OCCURRED_ON_DATE": ["2021-07-04 23:15:00"]}).iloc[0]
    assert row["YEAR"] == 2021
    assert row["MONTH"] == 7
    assert row["HOUR"] == 23
    assert row["DAY_OF_WEEK"] == "Sunday"
    assert row["SHIFT"] == "Evening"


def test_utc_offset_is_ignored():
    stamps = parse_timestamps(pd.Series(["2022-01-01 00:00:00+00", "2022-01-01 00:00:00"]))
    assert stamps.iloc[0] == stamps.iloc[1]


def test_unparseable_timestamp_gives_unknown_calendar_fields():
    row = _derive({"OCCURRED_ON_DATE": ["07/04/2021 11:15 PM"]}).iloc[0]
    for col in ["YEAR", "MONTH", "HOUR", "DAY_OF_WEEK", "SHIFT"]:
        assert row[col] is Marker.UNKNOWN


def test_absent_timestamp_column_gives_unknown():
    df = _derive({"INCIDENT_NUMBER": ["I1"]})
    assert df["HOUR"].iloc[0] is Marker.UNKNOWN


@pytest.mark.parametrize("hour, shift", [
    (0, "Night"), (7, "Night"), (8, "Day"), (15, "Day"), (16, "Evening"), (23, "Evening"),
])
def test_shift_boundaries(hour, shift):
    assert shift_for_hour(hour) == shift


def test_shift_partitions_the_day():
    names = [shift_for_hour(h) for h in range(24)]
    assert names.count("Night") == 8
    assert names.count("Day") == 8
    assert names.count("Evening") == 8
    assert shift_for_hour(24) is Marker.UNKNOWN
    assert shift_for_hour(-1) is Marker.UNKNOWN
    assert shift_for_hour(Marker.UNKNOWN) is Marker.UNKNOWN


def test_shooting_policy():
    assert shooting_state("Y") is True
    assert shooting_state(1) is True
    assert shooting_state(0) is False
    assert shooting_state(pd.NA) is False
    assert shooting_state(Marker.UNPARSEABLE) is False
    assert shooting_state("N") is False
    # flag column not supplied by the row's year: unknown, not False
    assert shooting_state(Marker.MISSING) is pd.NA


def test_is_shooting_across_years(incidents):
    by_id = incidents.set_index("INCIDENT_NUMBER")["IS_SHOOTING"]
    assert by_id["I182070946"] == True  # 'Y'
    assert by_id["I192000002"] == True  # 1
    assert by_id["I192000001"] == False  # 0
    assert by_id["I182070945"] == False  # blank in a year that has the column
    assert pd.isna(by_id["I202000001"])  # 2020 has no SHOOTING column
    assert str(incidents["IS_SHOOTING"].dtype) == "boolean"


def test_derive_does_not_modify_input():
    merged = merge_years([normalize_year(pd.DataFrame({"OCCURRED_ON_DATE": ["2021-07-04 23:15:00"]}))])
    derive_features(merged)
    assert "SHIFT" not in merged.columns


def test_calendar_conflicts_counts_disagreements():
    merged = merge_years([normalize_year(pd.DataFrame({
        "OCCURRED_ON_DATE": ["2021-07-04 23:15:00", "2021-07-04 23:15:00", "bad"],
        "HOUR": ["23", "11", "5"],
        "DAY_OF_WEEK": ["Sunday", "Monday", "Friday"],
    }, dtype=object))])
    conflicts = calendar_conflicts(merged)
    assert conflicts == {"HOUR": 1, "DAY_OF_WEEK": 1}
    # derived value wins
    assert derive_features(merged)["HOUR"].iloc[1] == 23


def test_fixture_calendar_fields_agree(store):
    assert store.calendar_conflicts() == {"YEAR": 0, "MONTH": 0, "DAY_OF_WEEK": 0, "HOUR": 0}

import pandas as pd
import pytest

from crime_analytics.data.store import DataStore

# Twelve incidents over five yearly batches whose schemas drift the way the
# published files do: 2018 carries the full legacy layout, 2020 has no
# SHOOTING column, later years drop the offense group and supplied calendar
# fields, and 2022 timestamps carry a UTC offset.
LEGACY_COLS = [
    "INCIDENT_NUMBER", "OFFENSE_CODE", "OFFENSE_CODE_GROUP", "OFFENSE_DESCRIPTION",
    "DISTRICT", "REPORTING_AREA", "SHOOTING", "OCCURRED_ON_DATE",
    "YEAR", "MONTH", "DAY_OF_WEEK", "HOUR", "UCR_PART",
]
CURRENT_COLS = [
    "INCIDENT_NUMBER", "OFFENSE_CODE", "OFFENSE_DESCRIPTION",
    "DISTRICT", "REPORTING_AREA", "SHOOTING", "OCCURRED_ON_DATE",
]


def _frame(columns, rows):
    return pd.DataFrame(rows, columns=columns, dtype=object)


@pytest.fixture
def yearly_frames():
    return {
        2018: _frame(LEGACY_COLS, [
            ["I182070945", "03115", "Investigate Person", "INVESTIGATE PERSON", "B2", "282", None,
             "2018-01-05 10:00:00", "2018", "1", "Friday", "10", "Part Three"],
            ["I182070946", "413", "Aggravated Assault", "ASSAULT - AGGRAVATED", "B3", "417", "Y",
             "2018-03-10 22:30:00", "2018", "3", "Saturday", "22", "Part One"],
            ["I182070947", "724", "Auto Theft", "AUTO THEFT", "D4", "130", None,
             "2018-07-04 02:00:00", "2018", "7", "Wednesday", "2", "Part One"],
        ]),
        2019: _frame(CURRENT_COLS + ["YEAR", "MONTH", "DAY_OF_WEEK", "HOUR"], [
            ["I192000001", "3115", "INVESTIGATE PERSON", "B2", "282", "0", "2019-02-01 09:00:00",
             "2019", "2", "Friday", "9"],
            ["I192000002", "413", "ASSAULT - AGGRAVATED", "B3", "417", "1", "2019-03-02 23:15:00",
             "2019", "3", "Saturday", "23"],
            ["I192000003", "413", "ASSAULT - AGGRAVATED", "B3", "420", "1", "2019-03-03 01:00:00",
             "2019", "3", "Sunday", "1"],
        ]),
        2020: _frame([c for c in CURRENT_COLS if c != "SHOOTING"], [
            ["I202000001", "724", "AUTO THEFT", "B2", "290", "2020-05-05 12:00:00"],
            ["I202000002", "3831", "M/V - LEAVING SCENE - PROPERTY DAMAGE", "B2", "291", "2020-06-06 17:00:00"],
        ]),
        2021: _frame(CURRENT_COLS, [
            ["I212000001", "413", "ASSAULT - AGGRAVATED", "B3", "417", "1", "2021-07-04 23:15:00"],
            ["I212000002", "724", "AUTO THEFT", "D4", "abc", "0", "not a date"],
        ]),
        2022: _frame(CURRENT_COLS, [
            ["I222000001", "3115", "INVESTIGATE PERSON", None, "", "0", "2022-01-01 00:00:00+00"],
            ["I222000002", "3831", "M/V - LEAVING SCENE - PROPERTY DAMAGE", "B2", "282", "0",
             "2022-12-31 16:00:00+00"],
        ]),
    }


@pytest.fixture
def store(yearly_frames):
    return DataStore.from_frames(yearly_frames)


@pytest.fixture
def incidents(store):
    return store.get_incidents()


@pytest.fixture
def inbox(tmp_path, yearly_frames):
    """The yearly frames written as {year}.csv files."""
    folder = tmp_path / "inbox"
    folder.mkdir()
    for year, frame in yearly_frames.items():
        frame.to_csv(folder / f"{year}.csv", index=False)
    return folder

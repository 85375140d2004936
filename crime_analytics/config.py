"""
Boston Crime Analytics - Configuration: paths, years, column vocabulary, constants.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths - override with CRIME_DATA_DIR env var for server deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("CRIME_DATA_DIR", str(Path.home() / "Desktop" / "Boston Crime")))
INBOX_FOLDER = _data_dir / "inbox"
REPORTS_FOLDER = _data_dir / "reports"
EXPORTS_FOLDER = _data_dir / "exports"

# ---------------------------------------------------------------------------
# Yearly batches (merge order) and their file names
# ---------------------------------------------------------------------------
YEARS = (2018, 2019, 2020, 2021, 2022)
YEAR_FILE_PATTERN = "{year}.csv"

# ---------------------------------------------------------------------------
# Known columns of the yearly incident files (header spelling is exact)
# ---------------------------------------------------------------------------
INCIDENT_NUMBER = "INCIDENT_NUMBER"
OFFENSE_CODE = "OFFENSE_CODE"
OFFENSE_CODE_GROUP = "OFFENSE_CODE_GROUP"
OFFENSE_DESCRIPTION = "OFFENSE_DESCRIPTION"
DISTRICT = "DISTRICT"
REPORTING_AREA = "REPORTING_AREA"
SHOOTING = "SHOOTING"
OCCURRED_ON_DATE = "OCCURRED_ON_DATE"
YEAR = "YEAR"
MONTH = "MONTH"
DAY_OF_WEEK = "DAY_OF_WEEK"
HOUR = "HOUR"
UCR_PART = "UCR_PART"

# Derived columns
SHIFT = "SHIFT"
IS_SHOOTING = "IS_SHOOTING"

# Coercion groups used by the column normalizer
IDENTIFIER_COLS = [INCIDENT_NUMBER]
TEXT_COLS = [OFFENSE_CODE_GROUP, OFFENSE_DESCRIPTION, DISTRICT, UCR_PART, DAY_OF_WEEK]
NUMERIC_COLS = [OFFENSE_CODE, REPORTING_AREA, YEAR, MONTH, HOUR]
FLAG_COLS = [SHOOTING]

KNOWN_COLS = [
    INCIDENT_NUMBER, OFFENSE_CODE, OFFENSE_CODE_GROUP, OFFENSE_DESCRIPTION,
    DISTRICT, REPORTING_AREA, SHOOTING, OCCURRED_ON_DATE,
    YEAR, MONTH, DAY_OF_WEEK, HOUR, UCR_PART,
]

# Fields whose observed values form the categorical vocabulary
CATEGORICAL_COLS = [OFFENSE_CODE, OFFENSE_CODE_GROUP, OFFENSE_DESCRIPTION, DISTRICT, UCR_PART]

# Calendar fields some years supply directly; derived fields must agree with them
CALENDAR_COLS = [YEAR, MONTH, HOUR, DAY_OF_WEEK]

# ---------------------------------------------------------------------------
# Timestamp parsing
# ---------------------------------------------------------------------------
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
# Later exports append a UTC offset ("2022-01-01 00:00:00+00"); wall-clock time is kept
TIMESTAMP_OFFSET_RE = r"\s*(?:[+-]\d{2}(?::?\d{2})?|Z)$"

# ---------------------------------------------------------------------------
# Shooting flag encodings
# ---------------------------------------------------------------------------
SHOOTING_FLAG_TEXT = "Y"
SHOOTING_FLAG_NUMBER = 1

# ---------------------------------------------------------------------------
# Shifts - closed-open hour intervals covering [0, 24)
# ---------------------------------------------------------------------------
SHIFTS = [
    ("Night", 0, 8),
    ("Day", 8, 16),
    ("Evening", 16, 24),
]

DAY_ORDER = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
HOURS = list(range(24))
MONTHS = list(range(1, 13))

# ---------------------------------------------------------------------------
# Report defaults
# ---------------------------------------------------------------------------
AUTO_THEFT_DESCRIPTION = "AUTO THEFT"
TOP_N = 5

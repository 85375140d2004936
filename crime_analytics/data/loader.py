"""
Yearly CSV discovery and loading.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from crime_analytics.config import INBOX_FOLDER, YEARS, YEAR_FILE_PATTERN
from crime_analytics.data.errors import MalformedSourceError
from crime_analytics.data.normalize import normalize_year, unparseable_counts


# ---------------------------------------------------------------------------
# CSV discovery
# ---------------------------------------------------------------------------

def discover_year_files(inbox: Path = INBOX_FOLDER, years=YEARS) -> dict[int, Path]:
    """Map each configured year to its CSV in inbox (top level or any subfolder)."""
    found: dict[int, Path] = {}
    for year in years:
        name = YEAR_FILE_PATTERN.format(year=year)
        direct = inbox / name
        if direct.is_file():
            found[year] = direct
            continue
        nested = sorted(inbox.rglob(name)) if inbox.exists() else []
        if nested:
            found[year] = nested[0]
    return found


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def read_year(filepath: Path) -> pd.DataFrame:
    """Read one yearly CSV fully, every column as text.

    Reading as text keeps incident numbers intact; the normalizer does the typing.
    """
    try:
        df = pd.read_csv(filepath, dtype=str, low_memory=False)
    except FileNotFoundError as exc:
        raise MalformedSourceError(f"Missing source file: {filepath}") from exc
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise MalformedSourceError(f"{Path(filepath).name} is not a readable CSV table: {exc}") from exc
    if len(df.columns) == 0:
        raise MalformedSourceError(f"{Path(filepath).name} has no header row")
    return df


def load_years(inbox: Path = INBOX_FOLDER, years=YEARS) -> list[pd.DataFrame]:
    """Read and normalize every yearly batch, in year order.

    Every configured year must be present; a missing or unreadable file aborts the load.
    """
    files = discover_year_files(inbox, years)
    absent = [y for y in years if y not in files]
    if absent:
        raise MalformedSourceError(
            f"No CSV for year(s) {', '.join(map(str, absent))} in {inbox}"
        )

    tables = []
    for i, year in enumerate(years, 1):
        path = files[year]
        table = normalize_year(read_year(path))
        tables.append(table)
        print(f"  [{i}/{len(years)}] {path.name}: {len(table):,} rows, {len(table.columns)} columns")
        for col, n in unparseable_counts(table).items():
            print(f"    Warning: {n:,} unparseable {col} value(s) in {path.name}")
    return tables

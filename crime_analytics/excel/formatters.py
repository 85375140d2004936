"""
Cell-level writing for the crime workbook: value cleanup, number formats,
header and data styling, column widths.
"""
from __future__ import annotations

import pandas as pd
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from crime_analytics.excel.styles import (
    HEADER_FONT, HEADER_FILL, HEADER_BORDER,
    DATA_FONT, TOTAL_FONT, GRID_BORDER, TOTAL_BORDER,
    STRIPE_FILL, TOTAL_FILL, FLAG_FILL,
    CENTER, LEFT, RIGHT,
)

# Column types that are written as numbers; anything else is text
NUMBER_FORMATS = {
    "number": "#,##0",
    "percent": '0.0"%"',
    "year": "0",
    "integer": "0",
}


def is_numeric(col_type: str) -> bool:
    return col_type in NUMBER_FORMATS


def cell_value(value, col_type: str):
    """What a table cell holds: blanks become 0 or "", markers and keys become text."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return 0 if is_numeric(col_type) else ""
    if is_numeric(col_type):
        return value
    return str(value)


def style_header(ws: Worksheet, row: int, labels: list[str]) -> None:
    for col, label in enumerate(labels, 1):
        cell = ws.cell(row=row, column=col, value=label)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = CENTER
        cell.border = HEADER_BORDER


def write_cell(
    ws: Worksheet,
    row: int,
    col: int,
    value,
    col_type: str = "text",
    total: bool = False,
    flagged: bool = False,
) -> None:
    """Write one table cell with its number format, stripe, total or flag fill."""
    cell = ws.cell(row=row, column=col, value=value)
    cell.font = TOTAL_FONT if total else DATA_FONT
    cell.border = TOTAL_BORDER if total else GRID_BORDER
    if is_numeric(col_type):
        cell.alignment = RIGHT
        cell.number_format = NUMBER_FORMATS[col_type]
    else:
        cell.alignment = LEFT

    if flagged:
        cell.fill = FLAG_FILL
    elif total:
        cell.fill = TOTAL_FILL
    elif row % 2 == 0:
        cell.fill = STRIPE_FILL


def fit_columns(ws: Worksheet, min_width: int = 10, max_width: int = 50) -> None:
    """Widen each column to its longest value, within bounds."""
    for column in ws.columns:
        longest = max((len(str(c.value)) for c in column if c.value is not None), default=0)
        width = min(max(longest + 2, min_width), max_width)
        ws.column_dimensions[get_column_letter(column[0].column)].width = width

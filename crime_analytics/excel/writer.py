"""
ExcelWriter - builds the styled crime workbook sheet by sheet.
"""
from __future__ import annotations

from pathlib import Path
from typing import Callable

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from crime_analytics.excel.styles import (
    TITLE_FONT, SUBTITLE_FONT, SECTION_FONT,
    KPI_VALUE_FONT, KPI_LABEL_FONT,
    NOTE_TITLE_FONT, NOTE_BODY_FONT,
    LEGEND_TERM_FONT, DATA_FONT, LEGEND_FILL, GRID_BORDER,
    CENTER, WRAP,
)
from crime_analytics.excel.formatters import (
    NUMBER_FORMATS, cell_value, fit_columns, style_header, write_cell,
)

# Excel rejects longer sheet names
MAX_SHEET_NAME = 31

ColSpec = tuple[str, str, str]  # (key, col_type, label)


def columns_for(table: pd.DataFrame, labels: dict[str, str] | None = None) -> list[ColSpec]:
    """ColSpecs for every column of a summary table.

    Numeric dtypes are counts; object columns holding only integers (years,
    months, codes) are written without thousands separators.
    """
    labels = labels or {}
    specs = []
    for col in table.columns:
        if pd.api.types.is_numeric_dtype(table[col].dtype):
            col_type = "number"
        elif pd.api.types.infer_dtype(table[col], skipna=True) == "integer":
            col_type = "integer"
        else:
            col_type = "text"
        specs.append((col, col_type, labels.get(col, str(col).replace("_", " ").title())))
    return specs


class ExcelWriter:
    """Fluent builder for the crime workbook."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._fresh = True

    def add_sheet(self, title: str) -> Worksheet:
        """New worksheet; the first call renames the workbook's default sheet."""
        title = title[:MAX_SHEET_NAME]
        if self._fresh:
            self._fresh = False
            ws = self.wb.active
            ws.title = title
            return ws
        return self.wb.create_sheet(title=title)

    # ------------------------------------------------------------------
    # Headings
    # ------------------------------------------------------------------

    def write_title(self, ws: Worksheet, title: str, subtitle: str, width: int = 8) -> int:
        """Title and subtitle across the first two rows. Returns the next free row."""
        for row, text, font in ((1, title, TITLE_FONT), (2, subtitle, SUBTITLE_FONT)):
            ws.cell(row=row, column=1, value=text).font = font
            ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=width)
        for col in range(1, width + 1):
            ws.column_dimensions[get_column_letter(col)].width = 18
        return 4

    def write_section(self, ws: Worksheet, row: int, title: str) -> int:
        ws.cell(row=row, column=1, value=title).font = SECTION_FONT
        return row + 2

    def write_kpi_row(self, ws: Worksheet, row: int, kpis: list[tuple], spacing: int = 2) -> int:
        """KPI cards side by side: a large value above a small label.

        kpis is a list of (value, label, col_type). Returns the next free row.
        """
        for i, (value, label, col_type) in enumerate(kpis):
            col = 1 + i * spacing
            value_cell = ws.cell(row=row, column=col, value=value)
            value_cell.font = KPI_VALUE_FONT
            value_cell.alignment = CENTER
            if col_type in NUMBER_FORMATS:
                value_cell.number_format = NUMBER_FORMATS[col_type]
            label_cell = ws.cell(row=row + 1, column=col, value=label)
            label_cell.font = KPI_LABEL_FONT
            label_cell.alignment = CENTER
        return row + 3

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[ColSpec],
        data: list[dict] | pd.DataFrame,
        flag_row: Callable[[dict], bool] | None = None,
        freeze: bool = True,
        show_total: bool = False,
    ) -> int:
        """Header plus one row per record; returns the row after the table.

        flag_row(record) marks rows to fill red. show_total appends a TOTAL
        row summing the "number" columns.
        """
        rows = data.to_dict("records") if isinstance(data, pd.DataFrame) else list(data)
        style_header(ws, start_row, [label for _, _, label in columns])

        row = start_row + 1
        for record in rows:
            flagged = bool(flag_row and flag_row(record))
            for col, (key, col_type, _) in enumerate(columns, 1):
                write_cell(ws, row, col, cell_value(record.get(key), col_type), col_type, flagged=flagged)
            row += 1

        if show_total and rows:
            for col, (key, col_type, _) in enumerate(columns, 1):
                if col == 1:
                    write_cell(ws, row, col, "TOTAL", total=True)
                elif col_type == "number":
                    total = sum(cell_value(r.get(key), col_type) for r in rows)
                    write_cell(ws, row, col, int(total), col_type, total=True)
                else:
                    write_cell(ws, row, col, "", total=True)
            row += 1

        fit_columns(ws)
        if freeze:
            ws.freeze_panes = f"A{start_row + 1}"
        return row

    # ------------------------------------------------------------------
    # Notes and legend
    # ------------------------------------------------------------------

    def write_note(self, ws: Worksheet, row: int, title: str, body: str, width: int = 8) -> int:
        """Bold title over a wrapped italic paragraph. Returns the next free row."""
        ws.cell(row=row, column=1, value=title).font = NOTE_TITLE_FONT
        body_cell = ws.cell(row=row + 1, column=1, value=body)
        body_cell.font = NOTE_BODY_FONT
        body_cell.alignment = WRAP
        ws.merge_cells(start_row=row + 1, start_column=1, end_row=row + 1, end_column=width)
        return row + 3

    def write_legend(self, ws: Worksheet, start_row: int, items: list[tuple[str, str]]) -> int:
        """Value/Meaning table explaining the markers shown in the workbook."""
        style_header(ws, start_row, ["Value", "Meaning"])
        row = start_row + 1
        for term, meaning in items:
            for col, text, font in ((1, term, LEGEND_TERM_FONT), (2, meaning, DATA_FONT)):
                cell = ws.cell(row=row, column=col, value=text)
                cell.font = font
                cell.fill = LEGEND_FILL
                cell.border = GRID_BORDER
                cell.alignment = WRAP
            row += 1
        ws.column_dimensions["A"].width = 22
        ws.column_dimensions["B"].width = 75
        return row + 1

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path

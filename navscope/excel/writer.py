"""
ExcelWriter — high-level helpers for building styled Excel workbooks.
"""
from __future__ import annotations

import io
from pathlib import Path

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from navscope.config import PCT_PLACEHOLDER
from navscope.excel.styles import (
    TITLE_FONT, SUBTITLE_FONT, SECTION_FONT,
    KPI_LABEL_FONT, POSITIVE_KPI_FONT, NEGATIVE_KPI_FONT,
    INSIGHT_TITLE_FONT, INSIGHT_BODY_FONT,
    LEGEND_BOLD_FONT, DATA_FONT,
    LIGHT_BLUE_FILL, THIN_BORDER, WRAP, CENTER,
)
from navscope.excel.formatters import (
    format_header_row,
    format_data_cell,
    auto_column_width,
    add_kpi_card,
)


ColSpec = tuple[str, str, str]  # (key, col_type, label)


class ExcelWriter:
    """Fluent builder for styled Excel workbooks."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._first_sheet = True

    # ------------------------------------------------------------------
    # Sheet management
    # ------------------------------------------------------------------

    def add_sheet(self, title: str) -> Worksheet:
        """Create a new worksheet (re-uses the default sheet for the first call)."""
        if self._first_sheet:
            ws = self.wb.active
            ws.title = title
            self._first_sheet = False
        else:
            ws = self.wb.create_sheet(title=title)
        return ws

    # ------------------------------------------------------------------
    # Title block
    # ------------------------------------------------------------------

    def write_title(
        self,
        ws: Worksheet,
        title: str,
        subtitle: str,
        merge_cols: int = 8,
    ) -> int:
        """Write title + subtitle rows. Returns next available row."""
        ws.cell(row=1, column=1).value = title
        ws.cell(row=1, column=1).font = TITLE_FONT
        ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=merge_cols)

        ws.cell(row=2, column=1).value = subtitle
        ws.cell(row=2, column=1).font = SUBTITLE_FONT
        ws.merge_cells(start_row=2, start_column=1, end_row=2, end_column=merge_cols)

        for col in range(1, merge_cols + 1):
            ws.column_dimensions[get_column_letter(col)].width = 14

        return 4  # next row

    def write_section(self, ws: Worksheet, row: int, title: str) -> int:
        """Write a section header. Returns next row."""
        ws.cell(row=row, column=1).value = title
        ws.cell(row=row, column=1).font = SECTION_FONT
        return row + 2

    # ------------------------------------------------------------------
    # KPI cards
    # ------------------------------------------------------------------

    def write_kpi_row(
        self,
        ws: Worksheet,
        row: int,
        kpis: list[tuple],  # [(value, label, format_type), ...]
        start_col: int = 1,
        col_spacing: int = 3,
    ) -> int:
        """Write a row of KPI cards. Returns next row (row + 3)."""
        col = start_col
        for value, label, fmt in kpis:
            add_kpi_card(ws, row, col, value, label, fmt)
            col += col_spacing
        return row + 3

    def write_delta_kpi(
        self,
        ws: Worksheet,
        row: int,
        col: int,
        value: float | None,
        label: str,
    ) -> None:
        """Write a return KPI that's green when positive, red when negative."""
        cell = ws.cell(row=row, column=col)
        if value is None:
            cell.value = PCT_PLACEHOLDER
            cell.font = POSITIVE_KPI_FONT
        else:
            cell.value = value
            cell.font = POSITIVE_KPI_FONT if value >= 0 else NEGATIVE_KPI_FONT
            cell.number_format = "+0.0%;-0.0%;0.0%"
        cell.alignment = CENTER

        lbl = ws.cell(row=row + 1, column=col)
        lbl.value = label
        lbl.font = KPI_LABEL_FONT
        lbl.alignment = CENTER

    # ------------------------------------------------------------------
    # Data tables
    # ------------------------------------------------------------------

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[ColSpec],
        data: list[dict] | pd.DataFrame,
        highlight_fn=None,
        freeze: bool = True,
    ) -> int:
        """Write a full table with headers + data rows.

        highlight_fn(key, value) -> str|None  e.g. 'gain', 'loss'

        Returns the row number after the last data row.
        """
        for col_num, (_, _, label) in enumerate(columns, 1):
            ws.cell(row=start_row, column=col_num).value = label
        format_header_row(ws, start_row, len(columns))

        if isinstance(data, pd.DataFrame):
            rows = data.to_dict("records")
        else:
            rows = data

        row = start_row + 1
        for row_data in rows:
            for col_num, (key, col_type, _) in enumerate(columns, 1):
                val = row_data.get(key)
                if val is not None and pd.isna(val):
                    val = None
                hl = highlight_fn(key, val) if highlight_fn else None
                format_data_cell(ws, row, col_num, val, col_type, highlight=hl)
            row += 1

        auto_column_width(ws)
        if freeze:
            ws.freeze_panes = f"A{start_row + 1}"

        return row

    # ------------------------------------------------------------------
    # Insight / legend blocks
    # ------------------------------------------------------------------

    def write_insight(self, ws: Worksheet, row: int, title: str, body: str, merge_cols: int = 8) -> int:
        """Write a key insight block. Returns next row."""
        ws.cell(row=row, column=1).value = title
        ws.cell(row=row, column=1).font = INSIGHT_TITLE_FONT
        ws.cell(row=row + 1, column=1).value = body
        ws.cell(row=row + 1, column=1).font = INSIGHT_BODY_FONT
        ws.merge_cells(start_row=row + 1, start_column=1, end_row=row + 1, end_column=merge_cols)
        return row + 3

    def write_legend(
        self,
        ws: Worksheet,
        start_row: int,
        items: list[tuple[str, str]],
        headers: tuple[str, str] = ("Label", "What It Measures"),
    ) -> int:
        """Write a two-column legend table. Returns next row."""
        ws.cell(row=start_row, column=1).value = headers[0]
        ws.cell(row=start_row, column=2).value = headers[1]
        format_header_row(ws, start_row, 2)

        row = start_row + 1
        for name, desc in items:
            c1 = ws.cell(row=row, column=1)
            c1.value = name
            c1.font = LEGEND_BOLD_FONT
            c1.fill = LIGHT_BLUE_FILL
            c1.border = THIN_BORDER

            c2 = ws.cell(row=row, column=2)
            c2.value = desc
            c2.font = DATA_FONT
            c2.fill = LIGHT_BLUE_FILL
            c2.border = THIN_BORDER
            c2.alignment = WRAP
            ws.merge_cells(start_row=row, start_column=2, end_row=row, end_column=8)
            row += 1

        return row + 1

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self, path: str | Path) -> Path:
        """Save the workbook to disk."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path

    def to_bytes(self) -> bytes:
        """Serialize the workbook in memory (for HTTP downloads)."""
        buf = io.BytesIO()
        self.wb.save(buf)
        return buf.getvalue()

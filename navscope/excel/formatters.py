"""
Reusable Excel cell/row formatting helpers.
"""
from __future__ import annotations

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from navscope.config import PCT_PLACEHOLDER
from navscope.excel.styles import (
    HEADER_FONT, HEADER_FILL, HEADER_BORDER,
    DATA_FONT, PLACEHOLDER_FONT,
    THIN_BORDER, ALTERNATE_FILL,
    KPI_VALUE_FONT, KPI_LABEL_FONT,
    CENTER, LEFT, RIGHT,
    HIGHLIGHT_FILLS, NUMBER_FORMATS,
)


# ---------------------------------------------------------------------------
# Header row
# ---------------------------------------------------------------------------

def format_header_row(ws: Worksheet, row_num: int, num_cols: int) -> None:
    """Apply header styling to an entire row."""
    for col in range(1, num_cols + 1):
        cell = ws.cell(row=row_num, column=col)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = CENTER
        cell.border = HEADER_BORDER


# ---------------------------------------------------------------------------
# Data cell
# ---------------------------------------------------------------------------

def format_data_cell(
    ws: Worksheet,
    row_num: int,
    col_num: int,
    value,
    col_type: str = "text",
    highlight: str | None = None,
) -> None:
    """Write and format a single data cell.

    A missing value in a numeric column is written as the placeholder dash,
    never as zero.
    """
    cell = ws.cell(row=row_num, column=col_num)
    cell.border = THIN_BORDER

    if value is None and col_type != "text":
        cell.value = PCT_PLACEHOLDER
        cell.font = PLACEHOLDER_FONT
        cell.alignment = CENTER
    else:
        cell.value = value
        cell.font = DATA_FONT
        cell.alignment = LEFT if col_type == "text" else RIGHT
        if col_type in NUMBER_FORMATS:
            cell.number_format = NUMBER_FORMATS[col_type]

    if highlight and highlight in HIGHLIGHT_FILLS:
        cell.fill = HIGHLIGHT_FILLS[highlight]
    elif row_num % 2 == 0:
        cell.fill = ALTERNATE_FILL


# ---------------------------------------------------------------------------
# Auto column width
# ---------------------------------------------------------------------------

def auto_column_width(ws: Worksheet, min_width: int = 10, max_width: int = 55) -> None:
    """Auto-fit column widths based on content length."""
    for column in ws.columns:
        max_length = 0
        column_letter = get_column_letter(column[0].column)
        for cell in column:
            if cell.value is not None:
                max_length = max(max_length, len(str(cell.value)))
        adjusted = min(max(max_length + 2, min_width), max_width)
        ws.column_dimensions[column_letter].width = adjusted


# ---------------------------------------------------------------------------
# KPI card
# ---------------------------------------------------------------------------

def add_kpi_card(
    ws: Worksheet,
    row: int,
    col: int,
    value,
    label: str,
    format_type: str = "return",
) -> None:
    """Write a large KPI value + small label below it."""
    value_cell = ws.cell(row=row, column=col)
    label_cell = ws.cell(row=row + 1, column=col)

    value_cell.value = PCT_PLACEHOLDER if value is None else value
    value_cell.font = KPI_VALUE_FONT
    value_cell.alignment = CENTER
    if value is not None and format_type in NUMBER_FORMATS:
        value_cell.number_format = NUMBER_FORMATS[format_type]
    # format_type == "text" → no number_format

    label_cell.value = label
    label_cell.font = KPI_LABEL_FONT
    label_cell.alignment = CENTER

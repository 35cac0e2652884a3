"""openpyxl styling and the ExcelWriter used by the performance workbook."""
from .styles import HIGHLIGHT_FILLS, NUMBER_FORMATS
from .formatters import format_header_row, format_data_cell, auto_column_width, add_kpi_card
from .writer import ExcelWriter

"""Raw-row classification, column inference, series building, and spreadsheet loading."""
from .classifiers import coerce_date, is_date_like, is_numeric_like, to_number
from .detect import ColumnDetectionError, detect_columns, require_columns, score_columns
from .series import build_series, clean_points, series_to_frame
from .schemas import ColumnScore, ColumnSelection, ValuationPoint, SeriesPoint, MonthlyRow
from .loader import SpreadsheetError, read_rows, read_rows_from_bytes

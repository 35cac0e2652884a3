"""
navscope — Configuration: detection thresholds, date anchors, lookback table, upload limits.
"""
import os
from types import MappingProxyType

# ---------------------------------------------------------------------------
# Column detection
# ---------------------------------------------------------------------------
SAMPLE_SIZE = 50            # rows sampled from the top of the sheet
DETECTION_THRESHOLD = 0.6   # share of sampled cells that must classify

DETECTION_FAILURE_MESSAGE = (
    "Could not detect Date/NAV columns. Ensure the sheet has a Date column "
    "and a numeric NAV/Price column."
)

# ---------------------------------------------------------------------------
# Spreadsheet dates
# 1900 date system: serial 0 = 1899-12-30, serial 25569 = 1970-01-01
# ---------------------------------------------------------------------------
SERIAL_UNIX_OFFSET_DAYS = 25569
MS_PER_DAY = 86_400_000
MIN_SERIAL_YEAR = 1900
MAX_SERIAL_YEAR = 9999

# ---------------------------------------------------------------------------
# Series
# ---------------------------------------------------------------------------
BASE_INDEX = 100.0
ROUND_DIGITS = 2

# ---------------------------------------------------------------------------
# Trailing returns: lookback windows in calendar days
# ---------------------------------------------------------------------------
LOOKBACK_PERIODS = MappingProxyType({
    "1D": 1,
    "1W": 7,
    "1M": 30,
    "3M": 90,
    "6M": 180,
    "1Y": 365,
    "3Y": 365 * 3,
    "5Y": 365 * 5,
})

# Display order of the summary row
TRAILING_LABELS = ("YTD", "1D", "1W", "1M", "3M", "6M", "1Y", "3Y", "5Y", "SI", "DD", "MaxDD")

TRAILING_DESCRIPTIONS = {
    "YTD": "From the first point on/after Jan 1 of the latest year",
    "1D": "Versus the last point at least 1 day back",
    "1W": "Versus the last point at least 7 days back",
    "1M": "Versus the last point at least 30 days back",
    "3M": "Versus the last point at least 90 days back",
    "6M": "Versus the last point at least 180 days back",
    "1Y": "Versus the last point at least 365 days back",
    "3Y": "Versus the last point at least 1,095 days back",
    "5Y": "Versus the last point at least 1,825 days back",
    "SI": "Since inception: first point to latest point",
    "DD": "Current drawdown from the running peak",
    "MaxDD": "Deepest drawdown over the whole series",
}

MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

PCT_PLACEHOLDER = "—"

# ---------------------------------------------------------------------------
# Uploads: override with NAVSCOPE_MAX_UPLOAD_MB env var
# ---------------------------------------------------------------------------
EXCEL_EXTENSIONS = (".xlsx", ".xlsm")
CSV_EXTENSIONS = (".csv", ".csv.gz")
SUPPORTED_EXTENSIONS = EXCEL_EXTENSIONS + CSV_EXTENSIONS

MAX_UPLOAD_BYTES = int(float(os.environ.get("NAVSCOPE_MAX_UPLOAD_MB", "20")) * 1024 * 1024)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

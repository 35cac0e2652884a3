"""
Raw-cell classifiers: date coercion, date-likeness, numeric-likeness.

The same permissive coercion backs both column scoring and the actual parse,
so a column that scores as dates always yields dates when the series is built.
"""
from __future__ import annotations

import datetime as dt
import math
import numbers
import re
import warnings

import numpy as np
import pandas as pd
from openpyxl.utils.datetime import from_excel

from navscope.config import (
    SERIAL_UNIX_OFFSET_DAYS, MS_PER_DAY, MIN_SERIAL_YEAR, MAX_SERIAL_YEAR,
)


_PLAIN_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")
_LEADING_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

# Words pandas resolves against the clock; never a valuation date
_RELATIVE_DATE_WORDS = frozenset({"now", "today"})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _is_real(value) -> bool:
    """Real numbers, excluding bools (which Python treats as ints)."""
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def _naive(ts) -> pd.Timestamp:
    """Drop any timezone, keeping the wall-clock time."""
    if ts is pd.NaT or pd.isna(ts):
        return pd.NaT
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts


def _from_serial(serial: float) -> pd.Timestamp:
    """Spreadsheet number → instant.

    Tries the 1900-system date-code decoder first; when that yields nothing
    usable, falls back to a raw day count anchored at 1899-12-30.
    Small integers are ambiguous (45 decodes as 1900-02-14): known limitation.
    """
    if not math.isfinite(serial):
        return pd.NaT

    try:
        decoded = from_excel(serial)
    except (ValueError, OverflowError, TypeError):
        decoded = None
    if isinstance(decoded, dt.datetime) and MIN_SERIAL_YEAR <= decoded.year <= MAX_SERIAL_YEAR:
        try:
            return pd.Timestamp(decoded.replace(microsecond=0))
        except (ValueError, OverflowError):
            return pd.NaT

    try:
        ts = pd.Timestamp((serial - SERIAL_UNIX_OFFSET_DAYS) * MS_PER_DAY, unit="ms")
    except (ValueError, OverflowError):
        return pd.NaT
    return pd.NaT if pd.isna(ts) else ts


def _parse_date_string(text: str) -> pd.Timestamp:
    """Generic calendar-string parse; NaT when pandas can't make sense of it."""
    if text.lower() in _RELATIVE_DATE_WORDS:
        return pd.NaT
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            ts = pd.to_datetime(text, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return pd.NaT
    if not isinstance(ts, pd.Timestamp):
        return pd.NaT
    return _naive(ts)


# ---------------------------------------------------------------------------
# Public classifiers
# ---------------------------------------------------------------------------

def coerce_date(value) -> pd.Timestamp:
    """Coerce a raw cell to a naive Timestamp, or NaT when it isn't a date.

    Priority: native dates → spreadsheet serials → numeric strings →
    calendar strings → leading number of a string.
    """
    if value is None:
        return pd.NaT

    if isinstance(value, (pd.Timestamp, dt.datetime, dt.date, np.datetime64)):
        try:
            return _naive(pd.Timestamp(value))
        except (ValueError, OverflowError):
            return pd.NaT

    if _is_real(value):
        return _from_serial(float(value))

    if isinstance(value, str):
        s = value.strip()
        if s == "":
            return pd.NaT
        if _PLAIN_NUMBER_RE.match(s):
            return _from_serial(float(s))

        ts = _parse_date_string(s)
        if ts is not pd.NaT:
            return ts

        m = _LEADING_NUMBER_RE.match(s)
        if m:
            return _from_serial(float(m.group(0)))
        return pd.NaT

    return pd.NaT


def is_date_like(value) -> bool:
    """True iff the cell coerces to a valid instant."""
    return coerce_date(value) is not pd.NaT


def to_number(value) -> float | None:
    """Finite float for a numeric-like cell ("1,234.5" → 1234.5), else None."""
    if value is None:
        return None
    if _is_real(value):
        f = float(value)
        return f if math.isfinite(f) else None
    if isinstance(value, str):
        s = value.strip().replace(",", "")
        if s == "" or "_" in s:
            return None
        try:
            f = float(s)
        except ValueError:
            return None
        return f if math.isfinite(f) else None
    return None


def is_numeric_like(value) -> bool:
    """True for finite numbers and strings that parse as one once commas are stripped."""
    return to_number(value) is not None

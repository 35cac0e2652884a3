"""
Series builder: raw rows → deduplicated, date-sorted points with equity index and drawdown.
"""
from __future__ import annotations

from dataclasses import dataclass
from itertools import accumulate
from typing import Mapping, Optional, Sequence

import pandas as pd

from navscope.config import BASE_INDEX, ROUND_DIGITS
from navscope.data.classifiers import coerce_date, to_number
from navscope.data.schemas import SeriesPoint, ValuationPoint


# ---------------------------------------------------------------------------
# Cleaning
# ---------------------------------------------------------------------------

def clean_points(
    rows: Sequence[Mapping],
    date_column: str,
    value_column: str,
) -> list[ValuationPoint]:
    """Valid (date, value) pairs, one per calendar day, sorted by date.

    Rows whose date or value cell fails coercion are skipped. When several
    rows fall on the same day the last one in sheet order wins.
    """
    by_day: dict = {}
    for row in rows:
        when = coerce_date(row.get(date_column))
        if when is pd.NaT:
            continue
        value = to_number(row.get(value_column))
        if value is None:
            continue
        by_day[when.date()] = ValuationPoint(when, value)

    return sorted(by_day.values(), key=lambda p: p.date)


# ---------------------------------------------------------------------------
# Equity / drawdown walk
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class _Walk:
    """Fold state carried from one point to the next (full precision)."""
    equity: float
    peak: float
    previous_value: Optional[float]
    point: Optional[ValuationPoint] = None


def _step(acc: _Walk, point: ValuationPoint) -> _Walk:
    prev = acc.previous_value
    ret = point.value / prev - 1 if prev else 0.0
    equity = acc.equity * (1 + ret)
    return _Walk(equity, max(acc.peak, equity), point.value, point)


def _to_series_point(acc: _Walk) -> SeriesPoint:
    drawdown = (acc.equity / acc.peak - 1) * 100
    return SeriesPoint(
        date=acc.point.date,
        value=acc.point.value,
        equity_index=round(acc.equity, ROUND_DIGITS) + 0.0,
        drawdown_pct=round(drawdown, ROUND_DIGITS) + 0.0,
    )


def build_series(
    rows: Sequence[Mapping],
    date_column: Optional[str],
    value_column: Optional[str],
) -> list[SeriesPoint]:
    """Build the equity/drawdown series from raw rows.

    Returns an empty list when a column is missing or nothing survives cleaning.
    """
    if not rows or date_column is None or value_column is None:
        return []

    points = clean_points(rows, date_column, value_column)
    if not points:
        return []

    start = _Walk(equity=BASE_INDEX, peak=BASE_INDEX, previous_value=None)
    walk = accumulate(points, _step, initial=start)
    next(walk)  # drop the seed
    return [_to_series_point(acc) for acc in walk]


def series_to_frame(series: Sequence[SeriesPoint]) -> pd.DataFrame:
    """Points as a DataFrame (date, value, equity_index, drawdown_pct) for charts and export."""
    columns = ["date", "value", "equity_index", "drawdown_pct"]
    if not series:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(
        [(p.date, p.value, p.equity_index, p.drawdown_pct) for p in series],
        columns=columns,
    )

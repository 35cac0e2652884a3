"""
Returns analytics — trailing-period returns and the year x month return grid.
"""
from __future__ import annotations

from bisect import bisect_right
from typing import Mapping, Optional, Sequence

import pandas as pd

from navscope.config import LOOKBACK_PERIODS, TRAILING_LABELS
from navscope.analytics.common import simple_return, compound
from navscope.data.schemas import SeriesPoint, MonthlyRow


# ---------------------------------------------------------------------------
# Point lookups
# ---------------------------------------------------------------------------

def point_on_or_before(series: Sequence[SeriesPoint], target: pd.Timestamp) -> Optional[SeriesPoint]:
    """Most recent point dated at or before `target` (never a later one)."""
    idx = bisect_right(series, target, key=lambda p: p.date)
    return series[idx - 1] if idx else None


def first_point_on_or_after(series: Sequence[SeriesPoint], target: pd.Timestamp) -> Optional[SeriesPoint]:
    """Earliest point dated at or after `target`."""
    for p in series:
        if p.date >= target:
            return p
    return None


# ---------------------------------------------------------------------------
# Trailing returns
# ---------------------------------------------------------------------------

def ytd_return(series: Sequence[SeriesPoint]) -> Optional[float]:
    """Latest value vs the first point on/after Jan 1 of the latest year."""
    if not series:
        return None
    latest = series[-1]
    start = first_point_on_or_after(series, pd.Timestamp(latest.date.year, 1, 1))
    if start is None:
        return None
    return simple_return(latest.value, start.value)


def trailing_returns(
    series: Sequence[SeriesPoint],
    lookbacks: Mapping[str, int] = LOOKBACK_PERIODS,
) -> dict[str, Optional[float]]:
    """Return fractions keyed YTD, 1D … 5Y, SI, DD, MaxDD (None = unavailable).

    Each lookback compares the latest value against the last point at or
    before `latest date - window days`; windows reaching past the start of
    the series are unavailable.
    """
    result: dict[str, Optional[float]] = dict.fromkeys(TRAILING_LABELS)
    if not series:
        return result

    latest = series[-1]
    result["YTD"] = ytd_return(series)

    for label, days in lookbacks.items():
        past = point_on_or_before(series, latest.date - pd.Timedelta(days=days))
        result[label] = None if past is None else simple_return(latest.value, past.value)

    result["SI"] = simple_return(latest.value, series[0].value)
    result["DD"] = latest.drawdown_pct / 100
    result["MaxDD"] = min(p.drawdown_pct for p in series) / 100
    return result


# ---------------------------------------------------------------------------
# Monthly grid
# ---------------------------------------------------------------------------

def _previous_month(year: int, month: int) -> tuple[int, int]:
    return (year - 1, 12) if month == 1 else (year, month - 1)


def month_end_values(series: Sequence[SeriesPoint]) -> dict[tuple[int, int], float]:
    """Last-dated value per (year, month)."""
    closes: dict[tuple[int, int], float] = {}
    for p in series:
        closes[(p.date.year, p.date.month)] = p.value
    return closes


def monthly_returns(series: Sequence[SeriesPoint]) -> dict[tuple[int, int], Optional[float]]:
    """Month-over-month return per (year, month) bucket.

    The baseline is always the immediately preceding calendar month; a
    missing or zero baseline makes that month's return unavailable.
    """
    closes = month_end_values(series)
    out: dict[tuple[int, int], Optional[float]] = {}
    for (year, month), value in closes.items():
        prev = closes.get(_previous_month(year, month))
        out[(year, month)] = None if not prev else value / prev - 1
    return out


def monthly_grid(series: Sequence[SeriesPoint]) -> list[MonthlyRow]:
    """One row per year present (latest first): twelve month slots and a compounded YTD."""
    rets = monthly_returns(series)
    years = sorted({year for year, _ in rets}, reverse=True)

    grid = []
    for year in years:
        months = tuple(rets.get((year, m)) for m in range(1, 13))
        ytd = compound(r for r in months if r is not None)
        grid.append(MonthlyRow(year=year, months=months, ytd=ytd))
    return grid

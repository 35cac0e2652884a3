"""
Record types flowing through the pipeline: column scores, selections, series points, grid rows.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pandas as pd

from navscope.config import MONTH_LABELS


@dataclass(frozen=True)
class ColumnScore:
    """How many sampled cells of one column classify as dates / numbers."""
    column: str
    date_count: int
    num_count: int


@dataclass(frozen=True)
class ColumnSelection:
    """The inferred (date, value) column pair. Either side may be missing."""
    date_column: Optional[str] = None
    value_column: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.date_column is not None and self.value_column is not None

    def missing(self) -> list[str]:
        """Names of the roles that could not be detected."""
        out = []
        if self.date_column is None:
            out.append("date")
        if self.value_column is None:
            out.append("value")
        return out


@dataclass(frozen=True)
class ValuationPoint:
    """One cleaned (date, value) observation before the equity walk."""
    date: pd.Timestamp
    value: float


@dataclass(frozen=True)
class SeriesPoint:
    date: pd.Timestamp
    value: float
    equity_index: float      # 100 at the first point
    drawdown_pct: float      # <= 0, percent

    @property
    def date_label(self) -> str:
        return f"{self.date:%Y-%m-%d}"

    def to_dict(self) -> dict:
        return {
            "date": self.date_label,
            "value": self.value,
            "equity_index": self.equity_index,
            "drawdown_pct": self.drawdown_pct,
        }


@dataclass(frozen=True)
class MonthlyRow:
    """One year of month-over-month returns plus the compounded YTD."""
    year: int
    months: tuple[Optional[float], ...] = field(default=(None,) * 12)
    ytd: Optional[float] = None

    def month(self, month: int) -> Optional[float]:
        """Return for a 1-based calendar month."""
        return self.months[month - 1]

    def to_dict(self) -> dict:
        """Flatten to {"Year", "Jan".."Dec", "YTD"} for tables."""
        rec: dict = {"Year": self.year}
        rec.update(zip(MONTH_LABELS, self.months))
        rec["YTD"] = self.ytd
        return rec

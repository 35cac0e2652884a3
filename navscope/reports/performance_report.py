"""
Fund Performance Report — detection → series → trailing returns + monthly grid, as JSON or Excel.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Sequence

import pandas as pd

from navscope.config import (
    MONTH_LABELS, TRAILING_LABELS, TRAILING_DESCRIPTIONS, SAMPLE_SIZE, DETECTION_THRESHOLD,
)
from navscope.analytics.common import fmt_pct, sanitize_for_json, simple_return
from navscope.analytics.returns import trailing_returns, monthly_grid
from navscope.data.detect import detect_columns, require_columns, score_columns
from navscope.data.schemas import ColumnScore, ColumnSelection, SeriesPoint, MonthlyRow
from navscope.data.series import build_series, series_to_frame
from navscope.excel.writer import ExcelWriter


TRAILING_COLS = [(label, "return", label) for label in TRAILING_LABELS]

GRID_COLS = (
    [("Year", "text", "Year")]
    + [(m, "return", m) for m in MONTH_LABELS]
    + [("YTD", "return", "YTD")]
)

SERIES_COLS = [
    ("date", "date", "Date"),
    ("value", "decimal", "Value"),
    ("equity_index", "decimal", "Equity (100 = start)"),
    ("drawdown_pct", "percent", "Drawdown"),
]


@dataclass
class FundAnalysis:
    """Everything derived from one uploaded sheet."""
    selection: ColumnSelection
    series: list[SeriesPoint]
    trailing: dict[str, Optional[float]]
    grid: list[MonthlyRow]
    source_rows: int = 0
    scores: list[ColumnScore] = field(default_factory=list)

    @property
    def summary(self) -> dict:
        """Headline figures for the equity/drawdown cards."""
        if not self.series:
            return {
                "since_inception": None, "max_drawdown": None, "data_points": 0,
                "first_date": None, "last_date": None,
            }
        first, last = self.series[0], self.series[-1]
        return {
            "since_inception": simple_return(last.equity_index, first.equity_index),
            "max_drawdown": min(p.drawdown_pct for p in self.series),
            "data_points": len(self.series),
            "first_date": first.date_label,
            "last_date": last.date_label,
        }


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def analyze_rows(rows: Sequence[Mapping]) -> FundAnalysis:
    """Run the full pipeline on raw rows.

    Raises ColumnDetectionError when no date or no value column can be inferred;
    an empty series after cleaning is a valid (empty) result.
    """
    selection = require_columns(detect_columns(rows))
    series = build_series(rows, selection.date_column, selection.value_column)
    return FundAnalysis(
        selection=selection,
        series=series,
        trailing=trailing_returns(series),
        grid=monthly_grid(series),
        source_rows=len(rows),
        scores=score_columns(rows),
    )


def grid_to_frame(grid: Sequence[MonthlyRow]) -> pd.DataFrame:
    """Year x (Jan..Dec, YTD) DataFrame, latest year first."""
    columns = ["Year", *MONTH_LABELS, "YTD"]
    if not grid:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame([row.to_dict() for row in grid], columns=columns)


def detection_report(rows: Sequence[Mapping]) -> dict:
    """Detected columns plus per-column scores (no failure raised)."""
    selection = detect_columns(rows)
    return {
        "date_column": selection.date_column,
        "value_column": selection.value_column,
        "complete": selection.is_complete,
        "sample_size": min(SAMPLE_SIZE, len(rows)),
        "threshold": DETECTION_THRESHOLD,
        "scores": [
            {"column": s.column, "date_count": s.date_count, "num_count": s.num_count}
            for s in score_columns(rows)
        ],
    }


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def generate_json(analysis: FundAnalysis) -> dict:
    trailing = analysis.trailing
    grid_rows = [row.to_dict() for row in analysis.grid]

    return sanitize_for_json({
        "columns": {
            "date": analysis.selection.date_column,
            "value": analysis.selection.value_column,
        },
        "source_rows": analysis.source_rows,
        "summary": analysis.summary,
        "series": [p.to_dict() for p in analysis.series],
        "trailing": trailing,
        "trailing_display": {label: fmt_pct(trailing.get(label)) for label in TRAILING_LABELS},
        "monthly": {
            "months": list(MONTH_LABELS),
            "rows": grid_rows,
            "display": [
                {k: (v if k == "Year" else fmt_pct(v)) for k, v in rec.items()}
                for rec in grid_rows
            ],
        },
    })


# ---------------------------------------------------------------------------
# Excel
# ---------------------------------------------------------------------------

def _sign_fill(key: str, value) -> str | None:
    if key == "Year" or not isinstance(value, float):
        return None
    if value > 0:
        return "gain"
    if value < 0:
        return "loss"
    return None


def build_workbook(analysis: FundAnalysis, title: str = "FUND PERFORMANCE") -> ExcelWriter:
    s = analysis.summary
    ew = ExcelWriter()

    # Summary
    ws = ew.add_sheet("Summary")
    period = f"{s['first_date']} to {s['last_date']}" if s["data_points"] else "No data"
    ew.write_title(ws, title,
                   f"{period}  |  {s['data_points']:,} data points  |  Generated {pd.Timestamp.now():%B %d, %Y}",
                   merge_cols=len(TRAILING_LABELS))

    row = ew.write_section(ws, 5, "HEADLINE")
    ew.write_delta_kpi(ws, row, 1, s["since_inception"], "SINCE INCEPTION")
    ew.write_delta_kpi(ws, row, 4, analysis.trailing.get("YTD"), "YEAR TO DATE")
    max_dd = None if s["max_drawdown"] is None else s["max_drawdown"] / 100
    ew.write_delta_kpi(ws, row, 7, max_dd, "MAX DRAWDOWN")
    row = ew.write_kpi_row(ws, row, [(s["data_points"], "DATA POINTS", "number")], start_col=10)

    row = ew.write_section(ws, row, "TRAILING RETURNS")
    row = ew.write_table(ws, row, TRAILING_COLS, [analysis.trailing],
                         highlight_fn=_sign_fill, freeze=False)

    row = ew.write_insight(
        ws, row + 1, "Detected columns",
        f"Date: {analysis.selection.date_column}  |  Value: {analysis.selection.value_column}  |  "
        f"{analysis.source_rows:,} rows read, {s['data_points']:,} kept after cleaning",
        merge_cols=len(TRAILING_LABELS),
    )
    ew.write_legend(ws, row, [(label, TRAILING_DESCRIPTIONS[label]) for label in TRAILING_LABELS])

    # Monthly grid
    ws_m = ew.add_sheet("Monthly Returns")
    ew.write_table(ws_m, 1, GRID_COLS, [r.to_dict() for r in analysis.grid], highlight_fn=_sign_fill)

    # Series
    ws_s = ew.add_sheet("Series")
    ew.write_table(ws_s, 1, SERIES_COLS, series_to_frame(analysis.series))

    return ew


def generate_excel(analysis: FundAnalysis, output_path: str | Path) -> Path:
    return build_workbook(analysis).save(output_path)

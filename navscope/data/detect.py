"""
Column inference — pick the date column and the value column of an unannounced sheet.
"""
from __future__ import annotations

import math
from typing import Mapping, Optional, Sequence

from navscope.config import SAMPLE_SIZE, DETECTION_THRESHOLD, DETECTION_FAILURE_MESSAGE
from navscope.data.classifiers import is_date_like, is_numeric_like
from navscope.data.schemas import ColumnScore, ColumnSelection


class ColumnDetectionError(ValueError):
    """Raised when a sheet has no usable date column or no usable value column."""

    def __init__(self, selection: ColumnSelection, message: str = DETECTION_FAILURE_MESSAGE) -> None:
        super().__init__(message)
        self.selection = selection


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

def score_columns(
    rows: Sequence[Mapping],
    sample_size: int = SAMPLE_SIZE,
) -> list[ColumnScore]:
    """Count date-like and numeric-like cells per column over the top of the sheet.

    Columns are taken from the first row's keys, in order.
    """
    if not rows:
        return []
    sample = rows[:min(sample_size, len(rows))]
    scores = []
    for key in rows[0].keys():
        date_count = num_count = 0
        for row in sample:
            v = row.get(key)
            if is_date_like(v):
                date_count += 1
            if is_numeric_like(v):
                num_count += 1
        scores.append(ColumnScore(str(key), date_count, num_count))
    return scores


def _pick(
    scores: list[ColumnScore],
    attr: str,
    threshold: int,
    avoid: Optional[str] = None,
) -> Optional[str]:
    """Best column by `attr` among those clearing `threshold`.

    When none clears it, fall back to the single best nonzero column.
    Ties go to the first column in key order, except that a column other
    than `avoid` wins a tie against `avoid`. That exception keeps a column of
    "1,000"-style values (date-like through the leading-number read) from
    losing the value role to a serial-date column with the same count.
    """
    pool = [s for s in scores if getattr(s, attr) >= max(threshold, 1)]
    if not pool:
        pool = [s for s in scores if getattr(s, attr) > 0]
    if not pool:
        return None

    best = max(getattr(s, attr) for s in pool)
    leaders = [s.column for s in pool if getattr(s, attr) == best]
    if avoid is not None and len(leaders) > 1:
        leaders = [c for c in leaders if c != avoid] or leaders
    return leaders[0]


def detect_columns(
    rows: Sequence[Mapping],
    sample_size: int = SAMPLE_SIZE,
    threshold: float = DETECTION_THRESHOLD,
) -> ColumnSelection:
    """Infer (date column, value column) from sampled cell classifications."""
    if not rows:
        return ColumnSelection()

    n = min(sample_size, len(rows))
    min_hits = math.ceil(n * threshold)
    scores = score_columns(rows, sample_size)

    date_column = _pick(scores, "date_count", min_hits)
    value_column = _pick(scores, "num_count", min_hits, avoid=date_column)
    return ColumnSelection(date_column, value_column)


def require_columns(selection: ColumnSelection) -> ColumnSelection:
    """Pass a complete selection through; raise ColumnDetectionError otherwise."""
    if not selection.is_complete:
        raise ColumnDetectionError(selection)
    return selection

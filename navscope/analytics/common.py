"""
Safe math and display helpers used across the analytics modules.
"""
from __future__ import annotations

import math
import numbers
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from navscope.config import PCT_PLACEHOLDER


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide safely, returning default if denominator is zero or NaN."""
    if denominator == 0 or pd.isna(denominator):
        return default
    result = numerator / denominator
    return default if pd.isna(result) else result


def simple_return(current: float, previous: float) -> float:
    """current / previous - 1. A zero (or NaN) base counts as no change."""
    if previous == 0 or pd.isna(previous):
        return 0.0
    return safe_divide(current, previous) - 1


def compound(returns: Iterable[float]) -> Optional[float]:
    """prod(1 + r) - 1 over the given returns; None when there are none."""
    rs = list(returns)
    if not rs:
        return None
    return float(np.prod([1.0 + r for r in rs]) - 1.0)


def fmt_pct(value) -> str:
    """Fraction → "12.3%"; unavailable or unparseable → placeholder dash."""
    if value is None:
        return PCT_PLACEHOLDER
    if not isinstance(value, numbers.Real):
        try:
            value = float(value)
        except (TypeError, ValueError):
            return PCT_PLACEHOLDER
    value = float(value)
    if not math.isfinite(value):
        return PCT_PLACEHOLDER
    return f"{value * 100:.1f}%"


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization.

    NaN/inf become None so an unavailable figure never turns into a zero.
    """
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items() if k is not None}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, pd.Timestamp):
        return None if pd.isna(obj) else obj.isoformat()
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, (float, np.floating)):
        v = float(obj)
        return None if (math.isnan(v) or math.isinf(v)) else v
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj

"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    version: str
    sample_size: int
    detection_threshold: float
    lookback_periods: dict[str, int]


class ColumnScoreModel(BaseModel):
    column: str
    date_count: int
    num_count: int


class DetectResponse(BaseModel):
    date_column: Optional[str] = None
    value_column: Optional[str] = None
    complete: bool
    sample_size: int
    threshold: float
    scores: list[ColumnScoreModel]

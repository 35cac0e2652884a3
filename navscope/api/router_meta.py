"""
Meta endpoints: health and active configuration.
"""
from __future__ import annotations

from fastapi import APIRouter

from navscope import __version__
from navscope.config import SAMPLE_SIZE, DETECTION_THRESHOLD, LOOKBACK_PERIODS
from navscope.api.response_models import HealthResponse

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(
        status="ok",
        version=__version__,
        sample_size=SAMPLE_SIZE,
        detection_threshold=DETECTION_THRESHOLD,
        lookback_periods=dict(LOOKBACK_PERIODS),
    )

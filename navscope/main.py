"""
navscope — FastAPI app factory.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from navscope import __version__
from navscope.config import SAMPLE_SIZE, DETECTION_THRESHOLD, MAX_UPLOAD_BYTES
from navscope.api.router_meta import router as meta_router
from navscope.api.router_analyze import router as analyze_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Print the active configuration at startup."""
    print(f"  SAMPLE_SIZE = {SAMPLE_SIZE}")
    print(f"  DETECTION_THRESHOLD = {DETECTION_THRESHOLD}")
    print(f"  MAX_UPLOAD_BYTES = {MAX_UPLOAD_BYTES:,}")
    print(f"\nnavscope {__version__} ready — POST a spreadsheet to /api/analyze\n")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="navscope API",
        description="Fund valuation spreadsheets → equity curve, drawdown, trailing and monthly returns",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(analyze_router)

    return app


app = create_app()

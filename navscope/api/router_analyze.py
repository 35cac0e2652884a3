"""
Analysis endpoints: upload a spreadsheet, get back series + returns as JSON or as an Excel workbook.
Nothing is written to disk; every upload is analysed from scratch.
Routes are plain `def` so FastAPI runs the pandas work in its threadpool.
"""
from __future__ import annotations

import re
from pathlib import Path

from fastapi import APIRouter, HTTPException, UploadFile, File
from fastapi.responses import Response

from navscope.config import MAX_UPLOAD_BYTES, XLSX_MEDIA_TYPE
from navscope.data.detect import ColumnDetectionError
from navscope.data.loader import SpreadsheetError, SpreadsheetTooLargeError, read_rows_from_bytes
from navscope.api.response_models import DetectResponse
from navscope.reports.performance_report import (
    analyze_rows, build_workbook, detection_report, generate_json,
)

router = APIRouter(prefix="/api", tags=["analyze"])


def _read_upload(file: UploadFile) -> list[dict]:
    """Read an uploaded spreadsheet into raw rows, mapping failures to HTTP errors."""
    if not file.filename:
        raise HTTPException(400, "Missing filename")

    content = file.file.read()
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(413, f"File too large ({len(content):,} bytes, limit {MAX_UPLOAD_BYTES:,})")

    try:
        return read_rows_from_bytes(content, file.filename, max_bytes=MAX_UPLOAD_BYTES)
    except SpreadsheetTooLargeError as exc:
        raise HTTPException(413, str(exc))
    except SpreadsheetError as exc:
        raise HTTPException(400, str(exc))


def _analyze(rows: list[dict]):
    try:
        return analyze_rows(rows)
    except ColumnDetectionError as exc:
        raise HTTPException(422, {
            "message": str(exc),
            "missing": exc.selection.missing(),
            "date_column": exc.selection.date_column,
            "value_column": exc.selection.value_column,
        })


@router.post("/analyze")
def analyze_upload(file: UploadFile = File(...)):
    """Detect columns and return the series, trailing returns and monthly grid."""
    rows = _read_upload(file)
    analysis = _analyze(rows)
    data = generate_json(analysis)
    data["filename"] = file.filename
    return data


@router.post("/analyze/excel")
def analyze_upload_excel(file: UploadFile = File(...)):
    """Same analysis, returned as a styled .xlsx download."""
    rows = _read_upload(file)
    analysis = _analyze(rows)

    stem = Path(file.filename).name.split(".")[0] or "fund"
    safe_name = re.sub(r"[^\w\-. ()]", "_", stem)[:40]
    content = build_workbook(analysis).to_bytes()
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="Performance_{safe_name}.xlsx"'},
    )


@router.post("/detect", response_model=DetectResponse)
def detect_upload(file: UploadFile = File(...)):
    """Column detection scores only, for diagnosing sheets that fail /analyze."""
    rows = _read_upload(file)
    return DetectResponse(**detection_report(rows))

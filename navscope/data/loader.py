"""
Spreadsheet decoding: first sheet of an .xlsx/.xlsm workbook or a .csv file → raw row dicts.
"""
from __future__ import annotations

import gzip
import io
from pathlib import Path

import pandas as pd

from navscope.config import EXCEL_EXTENSIONS, CSV_EXTENSIONS, SUPPORTED_EXTENSIONS


class SpreadsheetError(ValueError):
    """The uploaded file could not be decoded into rows."""


class SpreadsheetTooLargeError(SpreadsheetError):
    """The file, once decompressed, is over the size limit."""


# ---------------------------------------------------------------------------
# Format detection
# ---------------------------------------------------------------------------

def spreadsheet_kind(filename: str) -> str:
    """Return "excel" or "csv" from the filename suffix."""
    name = filename.lower()
    if name.endswith(EXCEL_EXTENSIONS):
        return "excel"
    if name.endswith(CSV_EXTENSIONS):
        return "csv"
    raise SpreadsheetError(
        f"Unsupported file type '{filename}'. Accepted: {', '.join(SUPPORTED_EXTENSIONS)}"
    )


# ---------------------------------------------------------------------------
# DataFrame → rows
# ---------------------------------------------------------------------------

def frame_to_rows(df: pd.DataFrame) -> list[dict]:
    """Rows as {column name: raw cell} with empty cells as None.

    Cell types are left as decoded (numbers, strings, Timestamps); fully blank
    rows are dropped.
    """
    df = df.dropna(how="all")
    df.columns = [str(c) for c in df.columns]
    df = df.astype(object).where(df.notna(), None)
    return df.to_dict("records")


def _read_frame(buffer: io.BytesIO, kind: str) -> pd.DataFrame:
    if kind == "excel":
        # First sheet only; openpyxl hands back native datetimes for date cells
        return pd.read_excel(buffer, sheet_name=0, engine="openpyxl")
    # Keep CSV cells as raw text; the classifiers decide what they are
    return pd.read_csv(buffer, dtype=str, keep_default_na=False, na_values=[""])


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _gunzip(content: bytes, filename: str, max_bytes: int | None) -> bytes:
    """Decompress, reading at most one byte past `max_bytes`."""
    limit = -1 if max_bytes is None else max_bytes + 1
    try:
        with gzip.GzipFile(fileobj=io.BytesIO(content)) as gz:
            data = gz.read(limit)
    except (OSError, EOFError) as exc:
        raise SpreadsheetError(f"Could not decompress {filename}: {exc}") from exc
    if max_bytes is not None and len(data) > max_bytes:
        raise SpreadsheetTooLargeError(f"{filename} decompresses to more than {max_bytes:,} bytes")
    return data


def read_rows_from_bytes(content: bytes, filename: str, max_bytes: int | None = None) -> list[dict]:
    """Decode uploaded bytes into raw rows.

    `max_bytes` caps the decompressed size of a .gz upload.
    """
    kind = spreadsheet_kind(filename)
    if filename.lower().endswith(".gz"):
        content = _gunzip(content, filename, max_bytes)

    if not content:
        raise SpreadsheetError(f"{filename} is empty")

    try:
        df = _read_frame(io.BytesIO(content), kind)
    except Exception as exc:
        raise SpreadsheetError(f"Could not read {filename}: {exc}") from exc

    if len(df.columns) == 0:
        raise SpreadsheetError(f"{filename} has no columns")
    return frame_to_rows(df)


def read_rows(path: str | Path) -> list[dict]:
    """Decode a spreadsheet on disk into raw rows."""
    path = Path(path)
    if not path.exists():
        raise SpreadsheetError(f"File not found: {path}")
    return read_rows_from_bytes(path.read_bytes(), path.name)

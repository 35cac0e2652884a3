"""Tests for the HTTP API."""

from __future__ import annotations

import gzip
import inspect
import io

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from navscope.config import XLSX_MEDIA_TYPE
from navscope.main import create_app
from navscope.api import router_analyze


TEXT_ONLY_CSV = b"Name,Comment\nfoo,bar\nbaz,qux\n"


@pytest.fixture
def client():
    return TestClient(create_app())


def _upload(name: str, content: bytes):
    return {"file": (name, content, "application/octet-stream")}


class TestHealth:
    def test_ok(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["sample_size"] == 50
        assert body["detection_threshold"] == 0.6
        assert body["lookback_periods"]["1Y"] == 365


class TestAnalyze:
    def test_csv(self, client, nav_csv_bytes):
        resp = client.post("/api/analyze", files=_upload("nav.csv", nav_csv_bytes))
        assert resp.status_code == 200
        body = resp.json()
        assert body["filename"] == "nav.csv"
        assert body["columns"] == {"date": "Date", "value": "NAV"}
        assert [p["equity_index"] for p in body["series"]] == [100, 110, 99]
        assert body["trailing"]["3M"] is None
        assert body["trailing_display"]["3M"] == "—"

    def test_xlsx(self, client, nav_xlsx_path):
        resp = client.post("/api/analyze", files=_upload("nav.xlsx", nav_xlsx_path.read_bytes()))
        assert resp.status_code == 200
        assert [r["Year"] for r in resp.json()["monthly"]["rows"]] == [2023, 2022]

    def test_detection_failure(self, client):
        resp = client.post("/api/analyze", files=_upload("notes.csv", TEXT_ONLY_CSV))
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert detail["missing"] == ["date", "value"]
        assert "Could not detect Date/NAV columns" in detail["message"]

    def test_unsupported_type(self, client):
        resp = client.post("/api/analyze", files=_upload("nav.txt", b"Date,NAV\n"))
        assert resp.status_code == 400
        assert "Unsupported file type" in resp.json()["detail"]

    def test_unreadable(self, client):
        resp = client.post("/api/analyze", files=_upload("nav.xlsx", b"garbage"))
        assert resp.status_code == 400

    def test_too_large(self, client, nav_csv_bytes, monkeypatch):
        monkeypatch.setattr(router_analyze, "MAX_UPLOAD_BYTES", 10)
        resp = client.post("/api/analyze", files=_upload("nav.csv", nav_csv_bytes))
        assert resp.status_code == 413

    def test_gzip_expanding_past_limit(self, client, monkeypatch):
        packed = gzip.compress(b"Date,NAV\n" + b"2023-01-01,100\n" * 5000)
        monkeypatch.setattr(router_analyze, "MAX_UPLOAD_BYTES", 5000)
        resp = client.post("/api/analyze", files=_upload("nav.csv.gz", packed))
        assert resp.status_code == 413
        assert "decompresses" in resp.json()["detail"]

    def test_gzip_upload(self, client, nav_csv_bytes):
        resp = client.post("/api/analyze", files=_upload("nav.csv.gz", gzip.compress(nav_csv_bytes)))
        assert resp.status_code == 200
        assert len(resp.json()["series"]) == 3


class TestRouteExecution:
    @pytest.mark.parametrize("endpoint", [
        router_analyze.analyze_upload,
        router_analyze.analyze_upload_excel,
        router_analyze.detect_upload,
    ])
    def test_routes_run_in_threadpool(self, endpoint):
        # FastAPI sends plain functions to its threadpool
        assert not inspect.iscoroutinefunction(endpoint)


class TestAnalyzeExcel:
    def test_download(self, client, nav_csv_bytes):
        resp = client.post("/api/analyze/excel", files=_upload("q1 nav.csv", nav_csv_bytes))
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith(XLSX_MEDIA_TYPE)
        assert 'filename="Performance_q1 nav.xlsx"' in resp.headers["content-disposition"]
        wb = load_workbook(io.BytesIO(resp.content))
        assert wb.sheetnames == ["Summary", "Monthly Returns", "Series"]

    def test_detection_failure(self, client):
        resp = client.post("/api/analyze/excel", files=_upload("notes.csv", TEXT_ONLY_CSV))
        assert resp.status_code == 422


class TestDetect:
    def test_scores(self, client, nav_csv_bytes):
        resp = client.post("/api/detect", files=_upload("nav.csv", nav_csv_bytes))
        assert resp.status_code == 200
        body = resp.json()
        assert body["date_column"] == "Date"
        assert body["value_column"] == "NAV"
        assert body["complete"] is True
        assert [s["column"] for s in body["scores"]] == ["Date", "NAV", "Comment"]

    def test_incomplete_is_still_200(self, client):
        resp = client.post("/api/detect", files=_upload("notes.csv", TEXT_ONLY_CSV))
        assert resp.status_code == 200
        assert resp.json()["complete"] is False

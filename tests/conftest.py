"""Shared test fixtures."""

from __future__ import annotations

import datetime as dt

import pytest
from openpyxl import Workbook

from navscope.data.series import build_series


def make_rows(pairs, date_key: str = "Date", value_key: str = "NAV") -> list[dict]:
    """[(date, value), ...] → raw rows keyed like a two-column sheet."""
    return [{date_key: d, value_key: v} for d, v in pairs]


def make_series(pairs):
    """Build a series straight from (date, value) pairs."""
    return build_series(make_rows(pairs), "Date", "NAV")


@pytest.fixture
def scenario_a_rows() -> list[dict]:
    return make_rows([
        ("2023-01-01", 100),
        ("2023-02-01", 110),
        ("2023-03-01", 99),
    ])


@pytest.fixture
def scenario_b_rows() -> list[dict]:
    """Serial-number dates with comma-formatted values."""
    return make_rows([
        (44927, "1,000"),
        (44958, "1,050"),
    ])


@pytest.fixture
def text_only_rows() -> list[dict]:
    return [
        {"Name": "foo", "Comment": "bar"},
        {"Name": "baz", "Comment": "qux"},
    ]


@pytest.fixture
def nav_csv_bytes() -> bytes:
    return (
        "Date,NAV,Comment\n"
        "2023-01-01,100,start\n"
        "2023-02-01,110,\n"
        "2023-03-01,99,\n"
        ",,\n"
        "Total,,footer\n"
    ).encode()


@pytest.fixture
def nav_xlsx_path(tmp_path):
    """A first sheet with real date cells, a blank row, and a second sheet that must be ignored."""
    wb = Workbook()
    ws = wb.active
    ws.title = "NAV History"
    ws.append(["Date", "NAV"])
    ws.append([dt.datetime(2022, 12, 30), 1000.0])
    ws.append([dt.datetime(2023, 1, 31), 1050.0])
    ws.append([None, None])
    ws.append([dt.datetime(2023, 2, 28), 1029.0])

    other = wb.create_sheet("Other")
    other.append(["x", "y"])
    other.append([1, 2])

    path = tmp_path / "nav.xlsx"
    wb.save(path)
    return path

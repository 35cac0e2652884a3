"""Tests for the command-line interface."""

from __future__ import annotations

import json

import pytest

from navscope.cli import main


@pytest.fixture
def nav_csv(tmp_path, nav_csv_bytes):
    path = tmp_path / "nav.csv"
    path.write_bytes(nav_csv_bytes)
    return path


class TestAnalyzeCommand:
    def test_text_report(self, nav_csv, capsys):
        main(["analyze", str(nav_csv)])
        out = capsys.readouterr().out
        assert "Date column:  Date" in out
        assert "Value column: NAV" in out
        assert "TRAILING RETURNS" in out
        assert "MONTHLY RETURNS" in out
        assert "-10.0%" in out

    def test_json(self, nav_csv, capsys):
        main(["analyze", str(nav_csv), "--json"])
        report = json.loads(capsys.readouterr().out)
        assert report["columns"]["value"] == "NAV"
        assert len(report["series"]) == 3

    def test_excel(self, nav_csv, tmp_path, capsys):
        out_path = tmp_path / "out" / "report.xlsx"
        main(["analyze", str(nav_csv), "--excel", str(out_path)])
        assert out_path.exists()
        assert "Workbook saved to" in capsys.readouterr().out

    def test_json_and_excel_together(self, nav_csv, tmp_path, capsys):
        out_path = tmp_path / "report.xlsx"
        main(["analyze", str(nav_csv), "--json", "--excel", str(out_path)])
        captured = capsys.readouterr()
        assert out_path.exists()
        assert json.loads(captured.out)["columns"]["date"] == "Date"
        assert "Workbook saved to" in captured.err

    def test_detection_failure_exits_2(self, tmp_path, capsys):
        path = tmp_path / "notes.csv"
        path.write_text("Name,Comment\nfoo,bar\n")
        with pytest.raises(SystemExit) as exc_info:
            main(["analyze", str(path)])
        assert exc_info.value.code == 2
        assert "Could not detect Date/NAV columns" in capsys.readouterr().err

    def test_missing_file_exits_1(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["analyze", str(tmp_path / "nope.csv")])
        assert exc_info.value.code == 1
        assert "File not found" in capsys.readouterr().err


class TestDetectCommand:
    def test_scores(self, nav_csv, capsys):
        main(["detect", str(nav_csv)])
        out = capsys.readouterr().out
        assert "COLUMN DETECTION" in out
        assert "← date" in out
        assert "← value" in out

    def test_incomplete(self, tmp_path, capsys):
        path = tmp_path / "notes.csv"
        path.write_text("Name,Comment\nfoo,bar\n")
        main(["detect", str(path)])
        assert "Detection incomplete" in capsys.readouterr().out


class TestMain:
    def test_no_command_prints_help(self, capsys):
        main([])
        assert "analyze" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "navscope" in capsys.readouterr().out

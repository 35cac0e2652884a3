"""Tests for the series builder."""

from __future__ import annotations

import datetime as dt
import random

import pandas as pd
import pytest

from navscope.data.series import build_series, clean_points, series_to_frame
from conftest import make_rows, make_series


class TestBuildSeriesBasics:
    def test_scenario_a(self, scenario_a_rows):
        series = build_series(scenario_a_rows, "Date", "NAV")
        assert [p.equity_index for p in series] == [100, 110, 99]
        assert [p.drawdown_pct for p in series] == [0, 0, -10.0]
        assert [p.value for p in series] == [100, 110, 99]

    def test_first_point_is_100_whatever_the_value(self):
        series = make_series([("2023-01-01", 1234.5), ("2023-01-02", 1300)])
        assert series[0].equity_index == 100

    def test_date_labels(self, scenario_a_rows):
        series = build_series(scenario_a_rows, "Date", "NAV")
        assert [p.date_label for p in series] == ["2023-01-01", "2023-02-01", "2023-03-01"]

    def test_comma_values(self, scenario_b_rows):
        series = build_series(scenario_b_rows, "Date", "NAV")
        assert [p.value for p in series] == [1000.0, 1050.0]
        assert series[-1].equity_index == 105.0


class TestBuildSeriesEmpty:
    def test_no_rows(self):
        assert build_series([], "Date", "NAV") == []

    def test_missing_date_column(self, scenario_a_rows):
        assert build_series(scenario_a_rows, None, "NAV") == []

    def test_missing_value_column(self, scenario_a_rows):
        assert build_series(scenario_a_rows, "Date", None) == []

    def test_nothing_survives_cleaning(self):
        assert make_series([("abc", 1), ("2023-01-01", "n/a"), (None, None)]) == []


class TestCleaning:
    def test_invalid_rows_are_skipped(self):
        series = make_series([
            ("2023-01-01", 100),
            ("", 105),
            ("2023-01-03", "abc"),
            (None, None),
            ("2023-01-05", 120),
            ("Total", ""),
        ])
        assert [p.date_label for p in series] == ["2023-01-01", "2023-01-05"]

    def test_relative_date_words_are_skipped(self):
        series = make_series([("2023-01-01", 100), ("today", 105), ("now", 106)])
        assert [p.date_label for p in series] == ["2023-01-01"]

    def test_sorted_ascending(self):
        series = make_series([("2023-03-01", 3), ("2023-01-01", 1), ("2023-02-01", 2)])
        assert [p.value for p in series] == [1, 2, 3]

    def test_duplicate_day_last_row_wins(self):
        # Scenario C
        series = make_series([
            ("2023-01-01", 100),
            ("2023-01-02", 105),
            ("2023-01-01", 101),
        ])
        assert len(series) == 2
        assert series[0].value == 101

    def test_same_day_different_times_collapse(self):
        series = make_series([("2023-01-01 09:00", 100), ("2023-01-01 17:00", 102)])
        assert len(series) == 1
        assert series[0].value == 102

    def test_last_wins_is_by_row_order_not_date_order(self):
        series = make_series([("2023-01-01 17:00", 102), ("2023-01-01 09:00", 100)])
        assert series[0].value == 100

    def test_mixed_date_encodings(self):
        series = make_series([
            (dt.date(2023, 1, 1), 100),
            (44958, 101),
            ("2023-03-01", 102),
        ])
        assert [p.date_label for p in series] == ["2023-01-01", "2023-02-01", "2023-03-01"]

    def test_clean_points_strictly_increasing_days(self):
        rows = make_rows([(f"2023-01-{d:02d}", d) for d in [5, 3, 5, 1, 3, 2]])
        points = clean_points(rows, "Date", "NAV")
        days = [p.date.date() for p in points]
        assert days == sorted(set(days))


class TestPermutation:
    def test_distinct_days_any_order(self):
        pairs = [(f"2023-{m:02d}-15", 100 + m * 3 - (m % 4) * 5) for m in range(1, 13)]
        expected = make_series(pairs)
        rng = random.Random(7)
        for _ in range(5):
            shuffled = pairs[:]
            rng.shuffle(shuffled)
            assert make_series(shuffled) == expected


class TestEquityAndDrawdown:
    @pytest.fixture
    def wavy(self):
        return make_series([
            ("2023-01-01", 50),
            ("2023-01-02", 55),
            ("2023-01-03", 44),
            ("2023-01-04", 48.4),
            ("2023-01-05", 60.5),
            ("2023-01-06", 54.45),
        ])

    def test_equity_compounds_value_ratios(self, wavy):
        for prev, cur in zip(wavy, wavy[1:]):
            assert cur.equity_index == pytest.approx(prev.equity_index * cur.value / prev.value, abs=0.01)

    def test_equity_values(self, wavy):
        assert [p.equity_index for p in wavy] == [100, 110, 88, 96.8, 121, 108.9]

    def test_drawdown_never_positive(self, wavy):
        assert all(p.drawdown_pct <= 0 for p in wavy)

    def test_drawdown_values(self, wavy):
        assert [p.drawdown_pct for p in wavy] == [0, 0, -20.0, -12.0, 0, -10.0]

    def test_drawdown_zero_until_first_loss(self):
        series = make_series([("2023-01-01", 10), ("2023-01-02", 11), ("2023-01-03", 12)])
        assert [p.drawdown_pct for p in series] == [0, 0, 0]

    def test_peak_starts_at_100(self):
        series = make_series([("2023-01-01", 100), ("2023-01-02", 90)])
        assert series[1].drawdown_pct == -10.0

    def test_zero_previous_value_means_no_change(self):
        series = make_series([("2023-01-01", 100), ("2023-01-02", 0), ("2023-01-03", 50)])
        assert [p.equity_index for p in series] == [100, 0, 0]
        assert [p.drawdown_pct for p in series] == [0, -100.0, -100.0]

    def test_rounding(self):
        series = make_series([("2023-01-01", 3), ("2023-01-02", 4)])
        assert series[1].equity_index == 133.33

    def test_compounding_uses_full_precision(self):
        # 1/3 steps would drift if each equity value were rounded before compounding
        pairs = [(f"2023-01-{d:02d}", 3 + d / 3) for d in range(1, 29)]
        series = make_series(pairs)
        exact = 100 * pairs[-1][1] / pairs[0][1]
        assert series[-1].equity_index == round(exact, 2)


class TestSeriesToFrame:
    def test_columns(self, scenario_a_rows):
        df = series_to_frame(build_series(scenario_a_rows, "Date", "NAV"))
        assert list(df.columns) == ["date", "value", "equity_index", "drawdown_pct"]
        assert len(df) == 3
        assert df["date"].iloc[0] == pd.Timestamp("2023-01-01")

    def test_empty(self):
        df = series_to_frame([])
        assert df.empty
        assert list(df.columns) == ["date", "value", "equity_index", "drawdown_pct"]

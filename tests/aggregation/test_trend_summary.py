"""Unit tests for tabular trend summaries."""

from datetime import date

import numpy as np
import pytest

from sleeptrends.aggregation.conventions import METRICS, STAT_FIELDS
from sleeptrends.aggregation.trend_engine import SleepTrendEngine
from sleeptrends.aggregation.trend_summary import (
    SUMMARY_COLUMNS,
    build_summary_table,
    format_trend_result_to_str,
)
from sleeptrends.aggregation.view_state import TrendView


@pytest.fixture
def result(sleep_entry):
    eng = SleepTrendEngine([
        sleep_entry("2024-01-05"),
        sleep_entry("2024-01-06", deep=200),
        sleep_entry("2024-03-05"),
    ])
    return eng.build(TrendView(granularity="month", selection=[("total_sleep_seconds", "mean")]))


def test_summary_table_shape(result):
    table = build_summary_table(result.buckets, result.keys)
    assert list(table.columns) == SUMMARY_COLUMNS
    assert len(table) == len(result.keys) * len(METRICS)


def test_summary_table_empty_bucket_rows(result):
    table = build_summary_table(result.buckets, result.keys)
    feb = table[table["bucket_key"] == "2024-m-2"]
    assert (feb["count"] == 0).all()
    assert np.isnan(feb[list(STAT_FIELDS)].to_numpy()).all()


def test_summary_table_values(result):
    table = build_summary_table(result.buckets, result.keys)
    row = table[(table["bucket_key"] == "2024-m-1") & (table["metric"] == "total_sleep_seconds")].iloc[0]
    assert row["count"] == 2
    assert row["mean"] == pytest.approx(410)
    assert row["p0"] == 360
    assert row["p100"] == 460


def test_summary_table_no_keys():
    table = build_summary_table({}, [])
    assert list(table.columns) == SUMMARY_COLUMNS
    assert len(table) == 0


def test_format_trend_result_to_str(result):
    text = format_trend_result_to_str(result)
    assert text.startswith("=== Params ===")
    assert "granularity\tmonth" in text
    assert "=== Summary table ===" in text
    assert "=== Series ===" in text
    assert "bucket_key\ttotal_sleep_seconds.mean" in text
    # empty month is a blank cell, not 0
    assert text.splitlines()[-3:] == ["2024-m-1\t410.0", "2024-m-2\t", "2024-m-3\t360.0"]


def test_format_trend_result_empty_range(sleep_entry):
    eng = SleepTrendEngine([sleep_entry("2024-01-05")])
    res = eng.build(TrendView(start=date(2024, 2, 1), end=date(2024, 1, 1)))
    text = format_trend_result_to_str(res)
    assert text.endswith("=== Series ===\n(none)")
    assert "=== Summary table ===\n(none)" in text

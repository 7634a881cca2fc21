"""Unit tests for naming and sentinel conventions."""

import pandas as pd
import pytest

from sleeptrends.aggregation.conventions import (
    Granularity,
    Metric,
    drop_unavailable,
    parse_granularity,
    parse_metric,
    parse_statistic,
)


def test_drop_unavailable_keeps_non_negative_in_order():
    s = pd.Series([3.0, -1.0, None, 0.0, 2.0, -0.5])
    assert drop_unavailable(s).tolist() == [3.0, 0.0, 2.0]


def test_drop_unavailable_object_column():
    s = pd.Series([None, None], dtype=object)
    assert drop_unavailable(s).tolist() == []


def test_parse_helpers():
    assert parse_granularity("3months") is Granularity.THREE_MONTHS
    assert parse_metric("lowest_spo2") is Metric.LOWEST_SPO2
    assert parse_statistic("p99") == "p99"


@pytest.mark.parametrize(
    "fn, bad",
    [(parse_granularity, "quarter"), (parse_metric, "averageHR"), (parse_statistic, "median")],
)
def test_parse_helpers_reject_unknown(fn, bad):
    with pytest.raises(ValueError) as exc_info:
        fn(bad)
    assert repr(bad) in str(exc_info.value)

"""Naming and sentinel conventions for the aggregation engine.

Single source of truth for granularity names, metric names, statistic names,
the absent marker and the sentinel rule, so normalize/grouping/series agree.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

import pandas as pd

# Absent marker: "no value" for a statistic or series point. Distinct from 0.
ABSENT = None


class Granularity(str, Enum):
    """Time bucketing unit selectable by the caller."""
    DAY = "day"
    WEEK = "week"
    FORTNIGHT = "fortnight"
    MONTH = "month"
    THREE_MONTHS = "3months"
    SIX_MONTHS = "6months"
    YEAR = "year"
    ALL = "all"


class Metric(str, Enum):
    """Tracked per-record metrics. Values are NormalizedRecord attribute names."""
    DEEP_SLEEP_PERCENT = "deep_sleep_percent"
    LIGHT_SLEEP_PERCENT = "light_sleep_percent"
    REM_SLEEP_PERCENT = "rem_sleep_percent"
    AWAKE_SLEEP_PERCENT = "awake_sleep_percent"
    TOTAL_SLEEP_SECONDS = "total_sleep_seconds"
    AVERAGE_HR = "average_hr"
    AVERAGE_SPO2 = "average_spo2"
    LOWEST_SPO2 = "lowest_spo2"


STAGE_PERCENT_METRICS = (
    Metric.DEEP_SLEEP_PERCENT,
    Metric.LIGHT_SLEEP_PERCENT,
    Metric.REM_SLEEP_PERCENT,
    Metric.AWAKE_SLEEP_PERCENT,
)

VITALS_METRICS = (
    Metric.AVERAGE_HR,
    Metric.AVERAGE_SPO2,
    Metric.LOWEST_SPO2,
)

METRICS = tuple(Metric)

# StatsDescriptor fields a series can select, in display order.
PERCENTILE_FIELDS = ("p0", "p1", "p10", "p25", "p50", "p75", "p90", "p99", "p100")
PERCENTILE_FRACTIONS = (0.0, 0.01, 0.1, 0.25, 0.5, 0.75, 0.9, 0.99, 1.0)
STAT_FIELDS = PERCENTILE_FIELDS + ("mean", "sd")


def parse_granularity(value: Union[str, Granularity]) -> Granularity:
    """Coerce a granularity name to Granularity, raising ValueError for unknown names."""
    try:
        return Granularity(value)
    except ValueError:
        choices = ", ".join(g.value for g in Granularity)
        raise ValueError(f"Unknown granularity {value!r}; expected one of: {choices}") from None


def parse_metric(value: Union[str, Metric]) -> Metric:
    """Coerce a metric name to Metric, raising ValueError for unknown names."""
    try:
        return Metric(value)
    except ValueError:
        choices = ", ".join(m.value for m in Metric)
        raise ValueError(f"Unknown metric {value!r}; expected one of: {choices}") from None


def parse_statistic(value: str) -> str:
    """Validate a statistic name against STAT_FIELDS."""
    if value not in STAT_FIELDS:
        raise ValueError(f"Unknown statistic {value!r}; expected one of: {', '.join(STAT_FIELDS)}")
    return value


def drop_unavailable(values: pd.Series) -> pd.Series:
    """Drop sentinel and missing values from a metric sample.

    Garmin writes a negative number when a metric was not recorded, and the
    vitals block may be missing entirely. Both mean "unavailable" and must
    never reach the statistics engine. Only values >= 0 are kept; order is
    preserved.
    """
    numeric = pd.to_numeric(values, errors="coerce").astype(float)
    return numeric[numeric >= 0]

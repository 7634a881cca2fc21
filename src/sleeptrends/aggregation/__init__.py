"""Sleep-metric aggregation engine.

Pure pandas/numpy pipeline: raw records -> normalize -> group by time bucket
-> per-metric statistics -> chart-ready series aligned to a contiguous
bucket-key axis.
"""

from sleeptrends.aggregation.bucket_keys import get_bucket_key_fn
from sleeptrends.aggregation.conventions import ABSENT, STAT_FIELDS, Granularity, Metric
from sleeptrends.aggregation.errors import (
    EmptyResultError,
    RecordParseError,
    RecordValidationError,
    SleepTrendsError,
)
from sleeptrends.aggregation.grouping import Bucket, filter_by_date_range, group_records
from sleeptrends.aggregation.normalize import normalize_records
from sleeptrends.aggregation.range_enumerator import enumerate_bucket_keys
from sleeptrends.aggregation.records import NormalizedRecord, RawRecord, Vitals
from sleeptrends.aggregation.series import Series, assemble_series, series_to_frame
from sleeptrends.aggregation.stats import StatsDescriptor, compute_stats
from sleeptrends.aggregation.trend_engine import SleepTrendEngine, TrendResult
from sleeptrends.aggregation.trend_summary import build_summary_table, format_trend_result_to_str
from sleeptrends.aggregation.view_state import DEFAULT_SELECTION, TrendView

__all__ = [
    "ABSENT",
    "Bucket",
    "DEFAULT_SELECTION",
    "EmptyResultError",
    "Granularity",
    "Metric",
    "NormalizedRecord",
    "RawRecord",
    "RecordParseError",
    "RecordValidationError",
    "STAT_FIELDS",
    "Series",
    "SleepTrendEngine",
    "SleepTrendsError",
    "StatsDescriptor",
    "TrendResult",
    "TrendView",
    "Vitals",
    "assemble_series",
    "build_summary_table",
    "compute_stats",
    "enumerate_bucket_keys",
    "filter_by_date_range",
    "format_trend_result_to_str",
    "get_bucket_key_fn",
    "group_records",
    "normalize_records",
    "series_to_frame",
]

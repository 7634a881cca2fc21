"""Trend summary builders for text-summarizable report data.

Builds a long-format statistics table and a tab-separated text report from a
TrendResult. Tab separation lets the text paste straight into a spreadsheet.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import pandas as pd

from sleeptrends.aggregation.conventions import METRICS, STAT_FIELDS
from sleeptrends.aggregation.grouping import Bucket
from sleeptrends.aggregation.series import series_to_frame
from sleeptrends.aggregation.stats import EMPTY_STATS
from sleeptrends.aggregation.trend_engine import TrendResult

SUMMARY_COLUMNS = ["bucket_key", "metric", "count", *STAT_FIELDS]


def build_summary_table(buckets: Mapping[str, Bucket], keys: Sequence[str]) -> pd.DataFrame:
    """One row per (bucket key, metric), in key order then metric order.

    Keys without a bucket are included with count 0 and NaN statistics.
    """
    rows: list[dict[str, Any]] = []
    for key in keys:
        bucket = buckets.get(key)
        for metric in METRICS:
            st = bucket.get_stats(metric) if bucket else EMPTY_STATS
            rows.append({"bucket_key": key, "metric": metric.value, **st.to_dict()})
    table = pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
    table[list(STAT_FIELDS)] = table[list(STAT_FIELDS)].astype(float)
    return table


def format_trend_result_to_str(result: TrendResult) -> str:
    """Convert a TrendResult to plain text (params, summary table, series)."""
    lines: list[str] = []
    lines.append("=== Params ===")
    for k, v in result.view.to_dict().items():
        lines.append(f"{k}\t{v}")

    lines.append("")
    lines.append("=== Summary table ===")
    table = build_summary_table(result.buckets, result.keys)
    if len(table) > 0:
        lines.append(table.to_csv(path_or_buf=None, sep="\t", index=False).rstrip("\n"))
    else:
        lines.append("(none)")

    lines.append("")
    lines.append("=== Series ===")
    if result.series and result.keys:
        frame = series_to_frame(list(result.series), result.keys)
        lines.append(frame.to_csv(path_or_buf=None, sep="\t").rstrip("\n"))
    else:
        lines.append("(none)")
    return "\n".join(lines)

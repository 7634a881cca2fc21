"""Series assembly: align selected (metric, statistic) pairs to bucket keys.

Every series has one value per enumerated key. A key with no bucket yields
the absent marker (None), never 0, so charts show a gap for that period.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence, Union

import numpy as np
import pandas as pd

from sleeptrends.aggregation.conventions import ABSENT, Metric, parse_metric, parse_statistic
from sleeptrends.aggregation.grouping import Bucket

Selection = tuple[Union[str, Metric], str]


@dataclass(frozen=True)
class Series:
    """One chart-ready series.

    Attributes:
        metric: Metric name.
        statistic: StatsDescriptor field name.
        keys: Bucket keys, in axis order.
        values: One value per key; None where the bucket has no data.
    """
    metric: str
    statistic: str
    keys: tuple[str, ...]
    values: tuple[Optional[float], ...]

    @property
    def label(self) -> str:
        return f"{self.metric}.{self.statistic}"

    def points(self) -> list[tuple[str, Optional[float]]]:
        return list(zip(self.keys, self.values))

    def __len__(self) -> int:
        return len(self.values)


def assemble_series(
    selection: Iterable[Selection],
    buckets: Mapping[str, Bucket],
    keys: Sequence[str],
) -> list[Series]:
    """Build one Series per selected (metric, statistic) pair.

    Selection order is kept and duplicates are not removed.

    Raises:
        ValueError: On an unknown metric or statistic name.
    """
    keys = tuple(keys)
    out: list[Series] = []
    for metric, statistic in selection:
        metric_name = parse_metric(metric).value
        stat_name = parse_statistic(statistic)
        values = []
        for key in keys:
            bucket = buckets.get(key)
            values.append(bucket.get_stats(metric_name).get(stat_name) if bucket else ABSENT)
        out.append(Series(metric=metric_name, statistic=stat_name, keys=keys, values=tuple(values)))
    return out


def series_to_frame(series: Sequence[Series], keys: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """Wide table: index = bucket key, one float column per series label.

    Absent values become NaN. Duplicate labels give duplicate columns.
    """
    if keys is None:
        keys = series[0].keys if series else ()
    index = pd.Index(list(keys), name="bucket_key")
    data = [
        [np.nan if v is None else v for v in s.values]
        for s in series
    ]
    columns = [s.label for s in series]
    if not data:
        return pd.DataFrame(index=index)
    return pd.DataFrame(np.array(data, dtype=float).T, index=index, columns=columns)

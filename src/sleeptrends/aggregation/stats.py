"""Descriptive statistics over a metric sample.

Edge-case policy (absent marker is None, never 0 or NaN):
  - n == 0: every field is None.
  - n == 1: percentiles and mean equal the value; sd is None.
  - n >= 2: linear-interpolation percentiles (numpy "linear" method),
    arithmetic mean, sample standard deviation (ddof=1).

Callers must drop sentinel values (< 0) before calling compute_stats();
see conventions.drop_unavailable().
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Iterable, Optional

import numpy as np

from sleeptrends.aggregation.conventions import PERCENTILE_FIELDS, PERCENTILE_FRACTIONS


@dataclass(frozen=True)
class StatsDescriptor:
    """Percentile / mean / standard-deviation summary of one sample.

    Attributes:
        count: Sample size (always defined).
        p0..p100: Percentiles at 0, 1, 10, 25, 50, 75, 90, 99, 100 percent.
        mean: Arithmetic mean.
        sd: Sample standard deviation (n - 1 denominator).
    """
    count: int = 0
    p0: Optional[float] = None
    p1: Optional[float] = None
    p10: Optional[float] = None
    p25: Optional[float] = None
    p50: Optional[float] = None
    p75: Optional[float] = None
    p90: Optional[float] = None
    p99: Optional[float] = None
    p100: Optional[float] = None
    mean: Optional[float] = None
    sd: Optional[float] = None

    def get(self, statistic: str) -> Optional[float]:
        """Return one statistic by name (e.g. "p50", "mean")."""
        return getattr(self, statistic)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


EMPTY_STATS = StatsDescriptor()


def compute_stats(values: Iterable[float]) -> StatsDescriptor:
    """Compute a StatsDescriptor over an ordered sample.

    Args:
        values: Non-negative numbers for one metric within one bucket.

    Returns:
        StatsDescriptor following the module's edge-case policy.
    """
    arr = np.asarray(list(values), dtype=float)
    n = int(arr.size)
    if n == 0:
        return EMPTY_STATS
    if n == 1:
        v = float(arr[0])
        return StatsDescriptor(count=1, **{f: v for f in PERCENTILE_FIELDS}, mean=v)

    quantiles = np.quantile(arr, PERCENTILE_FRACTIONS, method="linear")
    percentiles = {f: float(q) for f, q in zip(PERCENTILE_FIELDS, quantiles)}
    return StatsDescriptor(
        count=n,
        **percentiles,
        mean=float(np.mean(arr)),
        sd=float(np.std(arr, ddof=1)),  # sample std
    )

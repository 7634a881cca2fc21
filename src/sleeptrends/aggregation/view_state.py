"""Trend view state.

This module defines the TrendView dataclass describing what the caller wants
charted (granularity, date range, metric/statistic selection) and its
dict serialization.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from sleeptrends.aggregation.conventions import (
    STAGE_PERCENT_METRICS,
    Granularity,
    parse_granularity,
    parse_metric,
    parse_statistic,
)
from sleeptrends.aggregation.range_enumerator import as_date

# Stacked sleep-stage chart: mean percentage of each stage per bucket.
DEFAULT_SELECTION: list[tuple[str, str]] = [(m.value, "mean") for m in STAGE_PERCENT_METRICS]

DEFAULT_GRANULARITY = Granularity.MONTH


@dataclass
class TrendView:
    """Configuration for one trend chart.

    start/end are inclusive; None means "from the first / to the last record".
    Dates may be given as date, datetime or ``yyyy-MM-dd`` strings and are
    stored as calendar dates.
    """
    granularity: Granularity = DEFAULT_GRANULARITY
    start: Optional[date] = None
    end: Optional[date] = None
    selection: list[tuple[str, str]] = field(default_factory=lambda: list(DEFAULT_SELECTION))

    def __post_init__(self) -> None:
        self.granularity = parse_granularity(self.granularity)
        self.start = as_date(self.start) if self.start is not None else None
        self.end = as_date(self.end) if self.end is not None else None
        self.selection = [
            (parse_metric(m).value, parse_statistic(s)) for m, s in self.selection
        ]

    def to_dict(self) -> dict[str, Any]:
        """Serialize TrendView to a JSON-friendly dictionary."""
        return {
            "granularity": self.granularity.value,
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
            "selection": [[m, s] for m, s in self.selection],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TrendView":
        """Deserialize TrendView from a dictionary.

        Missing keys fall back to defaults.

        Raises:
            ValueError: On unknown granularity, metric or statistic names, or
                malformed ISO dates.
        """
        start = data.get("start")
        end = data.get("end")
        selection = data.get("selection")
        return cls(
            granularity=data.get("granularity", DEFAULT_GRANULARITY.value),
            start=date.fromisoformat(start) if start else None,
            end=date.fromisoformat(end) if end else None,
            selection=[tuple(pair) for pair in selection] if selection is not None else list(DEFAULT_SELECTION),
        )

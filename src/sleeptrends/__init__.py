"""
sleeptrends: Time-bucketed statistics over nightly sleep records.

This package provides:
- SleepTrendEngine: normalize Garmin sleep records and aggregate them by
  day, week, fortnight, month, quarter, half-year, year or all-time
- Statistics per bucket (percentiles, mean, sd) and chart-ready series
- Logging utilities for library and application use

For logging configuration in standalone scripts:
    ```python
    from sleeptrends.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```

When used as a library, logging is handled by the parent application's
configuration.
"""

import logging

from sleeptrends.utils.logging import configure_logging, get_logger

from sleeptrends.aggregation import (
    EmptyResultError,
    Granularity,
    Metric,
    RawRecord,
    SleepTrendEngine,
    TrendResult,
    TrendView,
)

# NullHandler so logs don't reach the root logger unless an application
# configures logging.
_logger = logging.getLogger("sleeptrends")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "EmptyResultError",
    "Granularity",
    "Metric",
    "RawRecord",
    "SleepTrendEngine",
    "TrendResult",
    "TrendView",
    "configure_logging",
    "get_logger",
]

__version__ = "0.1.0"

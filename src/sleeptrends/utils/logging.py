"""
Logging utilities for the sleeptrends library.

Library Logging Conventions
---------------------------
1. **Library code never calls configure_logging()** - it only uses get_logger(__name__).
2. **Scripts and notebooks can call configure_logging()** to see log output.
3. When sleeptrends is imported by an application that has configured
   logging, all sleeptrends logs use that application's handlers.

sleeptrends does NOT write any log files; it is a headless library.

Example Usage
-------------
In library code (normalize.py, grouping.py, etc.):
    ```python
    from sleeptrends.utils.logging import get_logger
    logger = get_logger(__name__)
    logger.info("normalized %d records", n)
    ```

In standalone scripts:
    ```python
    from sleeptrends.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "sleeptrends"
LOG_LEVEL_ENV_VAR = "SLEEPTRENDS_LOG_LEVEL"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Optional[Union[str, int]]) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure logging for the sleeptrends logger only (never root).

    Args:
        level: Logging level (e.g. "DEBUG", "INFO"). Defaults to the
            SLEEPTRENDS_LOG_LEVEL env var, or "INFO" if unset.
        fmt: Log message format. Defaults to DEFAULT_FMT.
        datefmt: Date format. Defaults to "%Y-%m-%d %H:%M:%S".
        force: If True, remove existing handlers before adding a new one. If
            False, skip when a stderr handler is already present.
    """
    resolved = _resolve_level(level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)

    formatter = logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(resolved)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger by name.

    If name is None, returns the 'sleeptrends' package logger.

    Use like:
        logger = get_logger(__name__)
    """
    if name is None:
        name = LOGGER_NAME
    return logging.getLogger(name)

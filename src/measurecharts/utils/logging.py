"""
Logging helpers for measurecharts.

Chart modules only call get_logger(__name__); nothing in the package installs
handlers on import. Applications and the demo call configure_logging() to get
output on stderr from the "measurecharts" logger and its children.

The default line is short and carries milliseconds, so the order of window
updates, page moves and delayed y-scale applications can be read off the log:

    10:42:07.118 DEBUG   measurecharts.measurement_chart.chart_model: Moved to page 2, ...
    10:42:07.321 DEBUG   measurecharts.measurement_chart.scale_transition: Applying y scale ...

Environment
-----------
MEASURECHARTS_LOG_LEVEL
    Level used when configure_logging() gets no level (default "INFO").
MEASURECHARTS_LOG_FORMAT
    Format used when configure_logging() gets no fmt.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "measurecharts"
LOG_LEVEL_ENV = "MEASURECHARTS_LOG_LEVEL"
LOG_FORMAT_ENV = "MEASURECHARTS_LOG_FORMAT"

DEFAULT_FMT = "%(asctime)s.%(msecs)03d %(levelname)-7s %(name)s: %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"


def _resolve_level(level: Optional[Union[str, int]]) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        resolved = getattr(logging, level.upper(), None)
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Send measurecharts logs to stderr (the root logger is left alone).

    Parameters
    ----------
    level:
        Logging level name or number. Falls back to MEASURECHARTS_LOG_LEVEL,
        then "INFO". Unknown names mean INFO.
    fmt:
        Log line format. Falls back to MEASURECHARTS_LOG_FORMAT, then DEFAULT_FMT.
    datefmt:
        Time format for %(asctime)s. Defaults to DEFAULT_DATEFMT.
    force:
        Replace existing handlers. Without it a second call keeps the stderr
        handler already installed and only updates the level.

    Returns
    -------
    The configured "measurecharts" logger.
    """
    resolved = _resolve_level(level)
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(resolved)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                h.setLevel(resolved)
                return logger

    formatter = logging.Formatter(
        fmt=fmt or os.environ.get(LOG_FORMAT_ENV) or DEFAULT_FMT,
        datefmt=datefmt or DEFAULT_DATEFMT,
    )
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(resolved)
    console.setFormatter(formatter)
    logger.addHandler(console)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for name, or the package's "measurecharts" logger when name is None."""
    return logging.getLogger(name or ROOT_LOGGER_NAME)

"""
measurecharts: Paged, grouped time-series charts for measurement data.

This package provides:
- MeasurementChartModel: three-page sliding window over grouped samples
  (daily/weekly/monthly/yearly), with y-scale and selection lookup
- MeasurementChartWidget: NiceGUI widget drawing the model with Plotly
- Logging utilities for library and application use

For logging configuration in standalone scripts/demos:
    ```python
    from measurecharts.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```

When used as a library (imported by other applications), logging is
automatically handled by the parent application's configuration.
"""

import logging

from measurecharts.utils.logging import configure_logging, get_logger

from measurecharts.measurement_chart import (
    ChartConfig,
    ChartDataCollection,
    ChartGrouping,
    GroupedEntry,
    MeasurementChartModel,
    MeasurementChartWidget,
    MeasurementSample,
)

# Ensure measurecharts logger has NullHandler so logs don't propagate to root
# when no application has configured logging. Applications/demos call
# configure_logging() to replace this with a real handler.
_logger = logging.getLogger("measurecharts")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "ChartConfig",
    "ChartDataCollection",
    "ChartGrouping",
    "GroupedEntry",
    "MeasurementChartModel",
    "MeasurementChartWidget",
    "MeasurementSample",
    "configure_logging",
    "get_logger",
]

__version__ = "0.1.0"

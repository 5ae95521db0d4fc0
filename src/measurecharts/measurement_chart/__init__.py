"""Paged measurement chart: grouping, paging model and NiceGUI widget."""

from measurecharts.measurement_chart.calendar_utils import ChartCalendar, as_timestamp, clamped
from measurecharts.measurement_chart.chart_collection import ChartDataCollection
from measurecharts.measurement_chart.chart_config import ChartConfig
from measurecharts.measurement_chart.chart_entries import (
    ChartDataEntry,
    GroupedEntry,
    MeasurementSample,
    average_between,
)
from measurecharts.measurement_chart.chart_grouping import CalendarUnit, ChartGrouping
from measurecharts.measurement_chart.chart_model import (
    ChartPage,
    ChartWindow,
    MeasurementChartModel,
    page_index_for_translation,
)
from measurecharts.measurement_chart.chart_widget import MeasurementChartWidget
from measurecharts.measurement_chart.figure_generator import ChartFigureGenerator
from measurecharts.measurement_chart.grouping_engine import GroupingEngine, flatten
from measurecharts.measurement_chart.scale_transition import ScaleTransition
from measurecharts.measurement_chart.selection_handler import ChartSelectionHandler
from measurecharts.measurement_chart.units import MASS_CONVERTER, LinearUnitConverter, identity_converter

__all__ = [
    "CalendarUnit",
    "ChartCalendar",
    "ChartConfig",
    "ChartDataCollection",
    "ChartDataEntry",
    "ChartFigureGenerator",
    "ChartGrouping",
    "ChartPage",
    "ChartSelectionHandler",
    "ChartWindow",
    "GroupedEntry",
    "GroupingEngine",
    "LinearUnitConverter",
    "MASS_CONVERTER",
    "MeasurementChartModel",
    "MeasurementChartWidget",
    "MeasurementSample",
    "ScaleTransition",
    "as_timestamp",
    "average_between",
    "clamped",
    "flatten",
    "identity_converter",
    "page_index_for_translation",
]

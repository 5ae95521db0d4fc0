"""Axis marks and label formatting for measurement charts.

All date inputs are converted to the chart calendar's time zone before their
components are inspected, so labels follow local wall-clock time.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from measurecharts.measurement_chart.calendar_utils import ChartCalendar
from measurecharts.measurement_chart.chart_grouping import ChartGrouping

DEFAULT_CALENDAR = ChartCalendar()
NO_DATA_LABEL = "No data"
AVERAGE_LABEL = "Average"


class UnitStyle(Enum):
    """How a value label shows its unit."""
    VISIBLE = "visible"      # "12.5 kg"
    HIDDEN = "hidden"        # "12.5"
    UNIT_ONLY = "unit_only"  # "kg"


# ------------------ axis marks ------------------


def is_axis_limit_mark(
    date: Any,
    grouping: ChartGrouping,
    calendar: ChartCalendar = DEFAULT_CALENDAR,
) -> bool:
    """True if date starts a page-sized period (drawn as a stronger grid line)."""
    local = calendar.to_local(date)
    if grouping is ChartGrouping.DAILY:
        return local.hour == 0
    if grouping is ChartGrouping.WEEKLY:
        return local.weekday() == calendar.week_start
    if grouping is ChartGrouping.MONTHLY:
        return local.day == 1
    return local.month == 1


def is_axis_mark(
    date: Any,
    grouping: ChartGrouping,
    calendar: ChartCalendar = DEFAULT_CALENDAR,
) -> bool:
    """True if date gets a labelled x-axis tick."""
    if grouping is ChartGrouping.DAILY:
        return calendar.to_local(date).hour % 6 == 0
    if grouping is ChartGrouping.MONTHLY:
        return calendar.to_local(date).weekday() == calendar.week_start
    return True


# ------------------ labels ------------------


def x_axis_label(
    date: Any,
    grouping: ChartGrouping,
    calendar: ChartCalendar = DEFAULT_CALENDAR,
) -> str:
    """Tick label: hour, weekday, day of month, or month initial."""
    local = calendar.to_local(date)
    if grouping is ChartGrouping.DAILY:
        return local.strftime("%H")
    if grouping is ChartGrouping.WEEKLY:
        return local.strftime("%a")
    if grouping is ChartGrouping.MONTHLY:
        return local.strftime("%d")
    return local.strftime("%b")[:1].upper()


def format_value(value: float, precision: int = 0) -> str:
    return f"{float(value):.{precision}f}"


def y_axis_label(
    value: float,
    unit: str,
    precision: int = 0,
    style: UnitStyle = UnitStyle.HIDDEN,
) -> str:
    """Value label with the unit shown according to style."""
    if style is UnitStyle.UNIT_ONLY:
        return unit
    text = format_value(value, precision)
    if style is UnitStyle.VISIBLE:
        return f"{text} {unit}"
    return text


def average_label(average: Optional[float], unit: str, precision: int = 0) -> str:
    """Header value for a page average; "No data" when missing or zero."""
    if average is None or average == 0:
        return NO_DATA_LABEL
    return y_axis_label(average, unit, precision, UnitStyle.VISIBLE)


def page_range_label(
    lower: Any,
    upper: Any,
    grouping: ChartGrouping,
    calendar: ChartCalendar = DEFAULT_CALENDAR,
) -> str:
    """Date range shown under the page average.

    The start date only repeats the month/year when they differ from the end
    date's.

    Args:
        lower: First date of the page.
        upper: Last date of the page.
        grouping: Current grouping mode.
        calendar: Calendar whose time zone the dates are shown in.

    Returns:
        e.g. "01 Jan 2024", "01 - 07 Jan 2024", "Jan 2024" or "2024".
    """
    start = calendar.to_local(lower)
    end = calendar.to_local(upper)

    if grouping is ChartGrouping.DAILY:
        return start.strftime("%d %b %Y")

    if grouping is ChartGrouping.YEARLY:
        if start.year == end.year:
            return start.strftime("%Y")
        return f"{start.strftime('%b %Y')} - {end.strftime('%b %Y')}"

    if grouping is ChartGrouping.MONTHLY and (start.year, start.month) == (end.year, end.month):
        return start.strftime("%b %Y")

    if start.year != end.year:
        start_fmt = "%d %b %Y"
    elif start.month != end.month:
        start_fmt = "%d %b"
    else:
        start_fmt = "%d"
    return f"{start.strftime(start_fmt)} - {end.strftime('%d %b %Y')}"


def annotation_date_label(
    date: Any,
    grouping: ChartGrouping,
    calendar: ChartCalendar = DEFAULT_CALENDAR,
) -> str:
    """Date line of a selected entry's annotation."""
    local = calendar.to_local(date)
    if grouping is ChartGrouping.DAILY:
        return local.strftime("%d %b %Y, %I:%M")
    if grouping is ChartGrouping.YEARLY:
        return local.strftime("%b %Y")
    return local.strftime("%d %b %Y")


def annotation_title(count: int) -> Optional[str]:
    """Title "Average" when the selected bucket holds more than one value."""
    return AVERAGE_LABEL if count > 1 else None

"""Time-based grouping options for measurement charts.

ChartGrouping selects, at once, the bucket granularity used to aggregate
samples and the span of one chart page.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union


class CalendarUnit(Enum):
    """Calendar component used for buckets and x-axis ticks."""
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"


class ChartGrouping(Enum):
    """Enumeration of chart grouping modes."""
    DAILY = 1
    WEEKLY = 2
    MONTHLY = 3
    YEARLY = 4

    @property
    def label(self) -> str:
        """Human readable name, e.g. for a grouping picker."""
        return self.name.capitalize()

    @property
    def x_value_unit(self) -> CalendarUnit:
        """Bucket (and x-axis tick) unit: hours, days, days, months."""
        return _X_VALUE_UNIT[self]

    @property
    def x_value_count(self) -> int:
        """Number of x values shown on one page."""
        return _X_VALUE_COUNT[self]

    @property
    def x_visible_domain(self) -> int:
        """Visible domain of one page in seconds."""
        return _X_VISIBLE_DOMAIN[self]

    @property
    def page_step(self) -> tuple[int, int]:
        """(days, months) one page advances by."""
        return _PAGE_STEP[self]

    @classmethod
    def coerce(cls, value: Union["ChartGrouping", int, str, Any]) -> "ChartGrouping":
        """Return a ChartGrouping from an enum, its int value or its name.

        Raises:
            ValueError: If value does not name a grouping.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
            if key.isdigit():
                value = int(key)
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        raise ValueError(f"Unknown chart grouping: {value!r}")


_X_VALUE_UNIT = {
    ChartGrouping.DAILY: CalendarUnit.HOUR,
    ChartGrouping.WEEKLY: CalendarUnit.DAY,
    ChartGrouping.MONTHLY: CalendarUnit.DAY,
    ChartGrouping.YEARLY: CalendarUnit.MONTH,
}

_X_VALUE_COUNT = {
    ChartGrouping.DAILY: 24,
    ChartGrouping.WEEKLY: 7,
    ChartGrouping.MONTHLY: 31,
    ChartGrouping.YEARLY: 12,
}

_X_VISIBLE_DOMAIN = {
    ChartGrouping.DAILY: 24 * 3600,
    ChartGrouping.WEEKLY: 7 * 24 * 3600,
    ChartGrouping.MONTHLY: 31 * 24 * 3600,
    ChartGrouping.YEARLY: 365 * 24 * 3600,
}

_PAGE_STEP = {
    ChartGrouping.DAILY: (1, 0),
    ChartGrouping.WEEKLY: (7, 0),
    ChartGrouping.MONTHLY: (0, 1),
    ChartGrouping.YEARLY: (0, 12),
}

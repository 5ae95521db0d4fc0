"""Calendar period arithmetic for measurement charts.

All timestamps handled here are timezone-aware ``pandas.Timestamp`` values.
Naive inputs are interpreted as UTC. Period boundaries are computed on the
calendar's local wall-clock time and localized back with pandas, so DST gaps
and overlaps resolve through the time zone database rather than custom rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as Date
from datetime import timedelta
from typing import Any, TypeVar

import pandas as pd

# Smallest tick separating the end of one period from the start of the next.
PERIOD_END_TICK = pd.Timedelta(seconds=1)

_C = TypeVar("_C")


def as_timestamp(value: Any) -> pd.Timestamp:
    """Convert a datetime-like value to a timezone-aware Timestamp.

    Args:
        value: datetime, pandas.Timestamp, numpy.datetime64 or ISO string.
            Naive values are taken as UTC.

    Returns:
        A timezone-aware pandas.Timestamp.

    Raises:
        ValueError: If value is missing or cannot be parsed.
    """
    ts = pd.Timestamp(value)
    if pd.isna(ts):
        raise ValueError(f"Not a valid timestamp: {value!r}")
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return ts


def now() -> pd.Timestamp:
    """Current time as an aware UTC Timestamp."""
    return pd.Timestamp.now(tz="UTC")


def clamped(value: _C, lower: _C, upper: _C) -> _C:
    """Clamp value into the closed range [lower, upper]."""
    return min(max(value, lower), upper)


@dataclass(frozen=True)
class ChartCalendar:
    """Calendar definition used for all period computations.

    Attributes:
        timezone: IANA time zone name the periods are aligned to.
        week_start: First day of the week (0=Monday ... 6=Sunday).
    """

    timezone: str = "UTC"
    week_start: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.week_start, bool) or not isinstance(self.week_start, int):
            raise ValueError(f"week_start must be an int in 0..6, got {self.week_start!r}")
        if not 0 <= self.week_start <= 6:
            raise ValueError(f"week_start must be in 0..6, got {self.week_start}")
        try:
            pd.Timestamp("2000-01-01").tz_localize(self.timezone)
        except Exception as exc:
            raise ValueError(f"Invalid timezone: {self.timezone!r}") from exc

    # ------------------ conversions ------------------

    def to_local(self, value: Any) -> pd.Timestamp:
        """Return value expressed in the calendar's time zone."""
        return as_timestamp(value).tz_convert(self.timezone)

    def localize(self, wall: Any) -> pd.Timestamp:
        """Interpret a wall-clock value in the calendar's time zone.

        Aware values are converted instead. Overlaps resolve to the earlier
        instant, gaps shift forward.
        """
        wall = pd.Timestamp(wall)
        if pd.isna(wall):
            raise ValueError("Not a valid timestamp")
        if wall.tzinfo is not None:
            return wall.tz_convert(self.timezone)
        return wall.tz_localize(self.timezone, ambiguous=True, nonexistent="shift_forward")

    def _midnight(self, day: Date) -> pd.Timestamp:
        return self.localize(pd.Timestamp(year=day.year, month=day.month, day=day.day))

    # ------------------ starts ------------------

    def start_of_hour(self, value: Any) -> pd.Timestamp:
        local = self.to_local(value)
        return local - pd.Timedelta(
            minutes=local.minute,
            seconds=local.second,
            microseconds=local.microsecond,
            nanoseconds=local.nanosecond,
        )

    def start_of_day(self, value: Any) -> pd.Timestamp:
        return self._midnight(self.to_local(value).date())

    def start_of_week(self, value: Any) -> pd.Timestamp:
        return self._midnight(self._week_start_day(value))

    def start_of_month(self, value: Any) -> pd.Timestamp:
        local = self.to_local(value)
        return self._midnight(Date(local.year, local.month, 1))

    def start_of_year(self, value: Any) -> pd.Timestamp:
        return self._midnight(Date(self.to_local(value).year, 1, 1))

    # ------------------ ends ------------------

    def end_of_day(self, value: Any) -> pd.Timestamp:
        day = self.to_local(value).date()
        return self._midnight(day + timedelta(days=1)) - PERIOD_END_TICK

    def end_of_week(self, value: Any) -> pd.Timestamp:
        return self._midnight(self._week_start_day(value) + timedelta(days=7)) - PERIOD_END_TICK

    def end_of_month(self, value: Any) -> pd.Timestamp:
        local = self.to_local(value)
        if local.month == 12:
            first_of_next = Date(local.year + 1, 1, 1)
        else:
            first_of_next = Date(local.year, local.month + 1, 1)
        return self._midnight(first_of_next) - PERIOD_END_TICK

    def end_of_year(self, value: Any) -> pd.Timestamp:
        return self._midnight(Date(self.to_local(value).year + 1, 1, 1)) - PERIOD_END_TICK

    # ------------------ arithmetic ------------------

    def shift(self, value: Any, *, days: int = 0, months: int = 0) -> pd.Timestamp:
        """Move value by calendar days and months, keeping its wall-clock time.

        Month arithmetic clips to the last day of the target month.
        """
        wall = self.to_local(value).tz_localize(None)
        if days:
            wall = wall + pd.DateOffset(days=days)
        if months:
            wall = wall + pd.DateOffset(months=months)
        return self.localize(wall)

    def add_hours(self, value: Any, hours: int) -> pd.Timestamp:
        """Move value by elapsed hours (absolute time)."""
        return self.to_local(value) + pd.Timedelta(hours=hours)

    def _week_start_day(self, value: Any) -> Date:
        day = self.to_local(value).date()
        return day - timedelta(days=(day.weekday() - self.week_start) % 7)

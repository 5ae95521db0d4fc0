"""Grouping of raw samples into calendar-aligned buckets.

This module provides the GroupingEngine class, which maps each sample to the
bucket its date falls into (hour/day/day/month for daily/weekly/monthly/
yearly charts) and aggregates the converted values per bucket.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Iterable, Optional

import pandas as pd

from measurecharts.measurement_chart.calendar_utils import ChartCalendar, as_timestamp
from measurecharts.measurement_chart.chart_entries import ChartDataEntry, GroupedEntry, MeasurementSample
from measurecharts.measurement_chart.chart_grouping import ChartGrouping
from measurecharts.measurement_chart.units import UnitConverter, identity_converter
from measurecharts.utils.logging import get_logger

logger = get_logger(__name__)


class GroupingEngine:
    """Buckets chart entries per grouping mode and computes bucket aggregates.

    Attributes:
        calendar: Calendar used to align buckets.
        display_unit: Unit every value is converted to before aggregation.
        converter: ``(value, from_unit, to_unit) -> float`` conversion function.
    """

    def __init__(
        self,
        calendar: ChartCalendar,
        display_unit: str,
        converter: Optional[UnitConverter] = None,
    ) -> None:
        self.calendar = calendar
        self.display_unit = display_unit
        self.converter: UnitConverter = converter or identity_converter

    def key_date(self, date: Any, grouping: ChartGrouping) -> pd.Timestamp:
        """Start of the bucket containing date."""
        if grouping is ChartGrouping.DAILY:
            return self.calendar.start_of_hour(date)
        if grouping in (ChartGrouping.WEEKLY, ChartGrouping.MONTHLY):
            return self.calendar.start_of_day(date)
        return self.calendar.start_of_month(date)

    def group(
        self,
        entries: Iterable[ChartDataEntry],
        grouping: ChartGrouping,
        date_range: Optional[tuple[pd.Timestamp, pd.Timestamp]] = None,
    ) -> list[GroupedEntry]:
        """Group entries into buckets, optionally restricted to a closed date range.

        Args:
            entries: Source entries (any order).
            grouping: Grouping mode selecting the bucket granularity.
            date_range: Optional (lower, upper); entries outside it are skipped.

        Returns:
            One GroupedEntry per non-empty bucket, ascending by bucket date.
            Equal values in the same bucket are all kept.
        """
        buckets: dict[pd.Timestamp, list[float]] = defaultdict(list)
        skipped = 0

        for entry in entries:
            date = as_timestamp(entry.date)
            if date_range is not None and not (date_range[0] <= date <= date_range[1]):
                skipped += 1
                continue
            value = self.converter(float(entry.value), entry.unit, self.display_unit)
            buckets[self.key_date(date, grouping)].append(value)

        grouped = [
            GroupedEntry(bucket_date=key, unit=self.display_unit, values=tuple(values))
            for key, values in sorted(buckets.items(), key=lambda item: item[0])
        ]
        logger.debug(
            "grouped %s bucket(s) for %s, skipped %s entr(ies) outside range",
            len(grouped),
            grouping.name,
            skipped,
        )
        return grouped


def flatten(entries: Iterable[GroupedEntry]) -> list[MeasurementSample]:
    """Expand grouped entries back into one sample per value at the bucket date."""
    return [
        MeasurementSample(date=entry.bucket_date, value=v, unit=entry.unit)
        for entry in entries
        for v in entry.values
    ]

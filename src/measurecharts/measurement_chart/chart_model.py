"""Paging/window model for measurement charts.

Provides MeasurementChartModel, which keeps a three-page sliding window
(previous, current, next) of calendar pages over a ChartDataCollection, groups
the samples around the current page, derives axis scales and serves point
selection lookups. Every recompute (grouping change, data replacement, page
move) produces an immutable ChartWindow snapshot that is returned and pushed
to listeners.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Union

import pandas as pd

from measurecharts.measurement_chart import scales
from measurecharts.measurement_chart.calendar_utils import PERIOD_END_TICK, clamped
from measurecharts.measurement_chart.chart_collection import ChartDataCollection
from measurecharts.measurement_chart.chart_config import ChartConfig
from measurecharts.measurement_chart.chart_entries import ChartDataEntry, GroupedEntry, average_between
from measurecharts.measurement_chart.chart_grouping import CalendarUnit, ChartGrouping
from measurecharts.measurement_chart.grouping_engine import GroupingEngine
from measurecharts.measurement_chart.selection_handler import ChartSelectionHandler
from measurecharts.measurement_chart.units import UnitConverter
from measurecharts.utils.logging import get_logger

logger = get_logger(__name__)

PAGE_COUNT = 3
CENTER_INDEX = 1


@dataclass(frozen=True)
class ChartPage:
    """One pager slot: its start date, visible date span and average."""
    date: pd.Timestamp
    x_scale: tuple[pd.Timestamp, pd.Timestamp]
    average: Optional[float] = None


@dataclass(frozen=True)
class ChartWindow:
    """Immutable snapshot of the chart state after one update."""
    grouping: ChartGrouping
    pivot_date: pd.Timestamp
    pages: tuple[ChartPage, ChartPage, ChartPage]
    entries: tuple[GroupedEntry, ...]
    y_scale: tuple[float, float]
    y_values: tuple[float, ...]

    @property
    def current(self) -> ChartPage:
        return self.pages[CENTER_INDEX]


OnWindowUpdate = Callable[[ChartWindow], None]


def page_index_for_translation(
    translation: float,
    width: float,
    index: int = CENTER_INDEX,
) -> int:
    """Page index a horizontal drag lands on.

    A drag to the left (negative translation) moves towards the next page.
    The result is clamped to the pager's slots.
    """
    if width <= 0:
        return index
    return int(clamped(round(index - translation / width), 0, PAGE_COUNT - 1))


class MeasurementChartModel:
    """Sliding three-page window over grouped measurement data.

    **Public API:**

    - **update(collection=None)**: Regroup and recompute pages and scales; returns a ChartWindow.
    - **grouping**: Grouping mode; assigning a new one regroups and clears the selection.
    - **can_move(index)** / **did_move(index)**: Pager boundary check and confirmed move.
    - **request_move(offset, on_complete)**: Gesture bridge built on the two above.
    - **lookup(date)** / **model[date]**: Grouped entry for the bucket containing date.
    - **add_listener(callback)**: Receive every new ChartWindow.
    """

    _window: ChartWindow

    def __init__(
        self,
        data: Union[ChartDataCollection, Iterable[ChartDataEntry]],
        config: ChartConfig,
        *,
        display_at: Optional[Any] = None,
        converter: Optional[UnitConverter] = None,
    ) -> None:
        """Initialize the model and compute the first window.

        Args:
            data: Source entries, or an already built ChartDataCollection.
            config: Chart configuration (display unit, grouping, calendar, scale options).
            display_at: Initial date to show; defaults to the last sample date.
            converter: Unit conversion function applied before grouping.
        """
        self.config = config
        self.calendar = config.calendar()
        self.engine = GroupingEngine(self.calendar, config.display_unit, converter)
        self._data: ChartDataCollection = self._as_collection(data)
        self._grouping: ChartGrouping = config.grouping
        self._listeners: list[OnWindowUpdate] = []
        self._entry_index: dict[pd.Timestamp, GroupedEntry] = {}
        self._last_y_scale: Optional[tuple[float, float]] = None

        self.selection_handler = ChartSelectionHandler(lookup=self.lookup)

        start = display_at if display_at is not None else self._data.date_range[1]
        self._pivot_date: pd.Timestamp = self.page_date(start)
        self.update()

    # ------------------ state ------------------

    @property
    def data(self) -> ChartDataCollection:
        return self._data

    @property
    def window(self) -> ChartWindow:
        return self._window

    @property
    def pages(self) -> tuple[ChartPage, ChartPage, ChartPage]:
        return self.window.pages

    @property
    def entries(self) -> tuple[GroupedEntry, ...]:
        return self.window.entries

    @property
    def y_scale(self) -> tuple[float, float]:
        return self.window.y_scale

    @property
    def y_values(self) -> tuple[float, ...]:
        return self.window.y_values

    @property
    def pivot_date(self) -> pd.Timestamp:
        return self._pivot_date

    @property
    def selection(self) -> Optional[GroupedEntry]:
        return self.selection_handler.selection

    @property
    def grouping(self) -> ChartGrouping:
        return self._grouping

    @grouping.setter
    def grouping(self, value: Union[ChartGrouping, int, str]) -> None:
        grouping = ChartGrouping.coerce(value)
        if grouping is self._grouping:
            return
        logger.info("Grouping changed %s -> %s", self._grouping.name, grouping.name)
        self._grouping = grouping
        self.selection_handler.clear()
        self.update()

    def add_listener(self, callback: OnWindowUpdate) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: OnWindowUpdate) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    # ------------------ calendar pages ------------------

    def page_date(self, date: Any, grouping: Optional[ChartGrouping] = None) -> pd.Timestamp:
        """Start of the page containing date."""
        grouping = grouping or self._grouping
        if grouping is ChartGrouping.DAILY:
            return self.calendar.start_of_day(date)
        if grouping is ChartGrouping.WEEKLY:
            return self.calendar.start_of_week(date)
        if grouping is ChartGrouping.MONTHLY:
            return self.calendar.start_of_month(date)
        return self.calendar.start_of_year(date)

    def next_page_date(
        self,
        date: Any,
        offset: int = 0,
        grouping: Optional[ChartGrouping] = None,
    ) -> pd.Timestamp:
        """Start of the page ``offset`` pages away from the page containing date."""
        grouping = grouping or self._grouping
        days, months = grouping.page_step
        return self.calendar.shift(
            self.page_date(date, grouping),
            days=days * offset,
            months=months * offset,
        )

    def x_scale(
        self,
        date: Any,
        grouping: Optional[ChartGrouping] = None,
    ) -> tuple[pd.Timestamp, pd.Timestamp]:
        """Visible date span (closed) of the page containing date."""
        grouping = grouping or self._grouping
        cal = self.calendar
        if grouping is ChartGrouping.DAILY:
            return cal.start_of_day(date), cal.end_of_day(date)
        if grouping is ChartGrouping.WEEKLY:
            return cal.start_of_week(date), cal.end_of_week(date)
        if grouping is ChartGrouping.MONTHLY:
            return cal.start_of_month(date), cal.end_of_month(date)
        return cal.start_of_year(date), cal.end_of_year(date)

    def x_values(self, date: Any) -> list[pd.Timestamp]:
        """X-axis tick dates of the page containing date, one per bucket unit."""
        lower, upper = self.x_scale(date)
        unit = self._grouping.x_value_unit
        result: list[pd.Timestamp] = []
        current = lower
        while current <= upper:
            result.append(current)
            if unit is CalendarUnit.HOUR:
                current = self.calendar.add_hours(current, 1)
            elif unit is CalendarUnit.DAY:
                current = self.calendar.shift(current, days=1)
            else:
                current = self.calendar.shift(current, months=1)
        return result

    # ------------------ update ------------------

    def update(
        self,
        collection: Optional[Union[ChartDataCollection, Iterable[ChartDataEntry]]] = None,
    ) -> ChartWindow:
        """Recompute grouping, scales and the three pages around the pivot date.

        Args:
            collection: Optional replacement for the source data.

        Returns:
            The new ChartWindow (also pushed to listeners).
        """
        if collection is not None:
            self._data = self._as_collection(collection)
            logger.info("Source data replaced: %s entries", len(self._data))

        lower, upper = self._data.date_range
        self._pivot_date = self.page_date(clamped(self._pivot_date, lower, upper))

        n = self.config.window_pages
        work_range = (
            self.next_page_date(self._pivot_date, -n),
            self.next_page_date(self._pivot_date, n + 1) - PERIOD_END_TICK,
        )
        entries = tuple(self.engine.group(self._data, self._grouping, work_range))
        self._entry_index = {e.bucket_date: e for e in entries}

        y_scale = scales.y_scale(
            entries,
            allow_negative=self.config.allow_negative,
            margin=self.config.scale_margin,
        )

        pages = []
        for offset in (-1, 0, 1):
            date = self.next_page_date(self._pivot_date, offset)
            x_scale = self.x_scale(date)
            pages.append(ChartPage(date=date, x_scale=x_scale, average=average_between(entries, *x_scale)))

        self._window = ChartWindow(
            grouping=self._grouping,
            pivot_date=self._pivot_date,
            pages=(pages[0], pages[1], pages[2]),
            entries=entries,
            y_scale=y_scale,
            y_values=tuple(scales.y_values(y_scale)),
        )

        if self._last_y_scale is not None and self._last_y_scale != y_scale:
            self.selection_handler.clear()
        self._last_y_scale = y_scale

        logger.debug(
            "Window updated: grouping=%s pivot=%s entries=%s y_scale=%s",
            self._grouping.name,
            self._pivot_date,
            len(entries),
            y_scale,
        )
        for listener in list(self._listeners):
            listener(self._window)
        return self._window

    # ------------------ paging ------------------

    def can_move(self, index: int) -> bool:
        """True if page ``index`` overlaps the source data's date range."""
        if not 0 <= index < PAGE_COUNT:
            return False
        page_lower, page_upper = self.window.pages[index].x_scale
        data_lower, data_upper = self._data.date_range
        return page_upper >= data_lower and page_lower <= data_upper

    def did_move(self, index: int) -> ChartWindow:
        """Make page ``index`` the new center page and regenerate its neighbours.

        A move that can_move refuses leaves the state unchanged.
        """
        if not self.can_move(index):
            logger.debug("Refused move to page %s", index)
            return self.window
        self._pivot_date = self.window.pages[index].date
        self.selection_handler.clear()
        logger.debug("Moved to page %s, pivot=%s", index, self._pivot_date)
        return self.update()

    def request_move(
        self,
        offset: int,
        on_complete: Optional[Callable[[bool], None]] = None,
    ) -> bool:
        """Move ``offset`` pages from the center (clamped to the window).

        Args:
            offset: Requested page delta, e.g. -1 for previous, +1 for next.
            on_complete: Called with True if the window moved, False otherwise.

        Returns:
            Whether the window moved.
        """
        index = int(clamped(CENTER_INDEX + offset, 0, PAGE_COUNT - 1))
        moved = index != CENTER_INDEX and self.can_move(index)
        if moved:
            self.did_move(index)
        if on_complete is not None:
            on_complete(moved)
        return moved

    # ------------------ selection lookup ------------------

    def lookup(self, date: Optional[Any]) -> Optional[GroupedEntry]:
        """Grouped entry of the bucket containing date, or None."""
        if date is None:
            return None
        return self._entry_index.get(self.engine.key_date(date, self._grouping))

    def __getitem__(self, date: Optional[Any]) -> Optional[GroupedEntry]:
        return self.lookup(date)

    def _as_collection(
        self,
        data: Union[ChartDataCollection, Iterable[ChartDataEntry]],
    ) -> ChartDataCollection:
        # rebuilt so value_range is always in the display unit
        return ChartDataCollection(
            data,
            unit=self.config.display_unit,
            converter=self.engine.converter,
        )

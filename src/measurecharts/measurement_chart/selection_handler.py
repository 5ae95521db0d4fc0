"""Point selection for measurement charts (tap/click, Escape to clear)."""

from __future__ import annotations

from typing import Any, Callable, Optional

from measurecharts.measurement_chart.calendar_utils import as_timestamp
from measurecharts.measurement_chart.chart_entries import GroupedEntry
from measurecharts.utils.logging import get_logger

logger = get_logger(__name__)

OnSelectionChange = Callable[[Optional[GroupedEntry]], None]


def parse_plotly_click_date(payload: Any) -> Optional[Any]:
    """Return the x value of the first clicked point in a plotly_click payload, if any."""
    if not isinstance(payload, dict):
        return None
    points = payload.get("points") or []
    if not points or not isinstance(points[0], dict):
        return None
    return points[0].get("x")


class ChartSelectionHandler:
    """Holds the raw selected date and resolves it to the grouped entry it falls into.

    The raw date is kept as given (any point in time); ``selection`` maps it
    through ``lookup`` on every access, so it always reflects the current
    grouping and entries.
    """

    def __init__(
        self,
        lookup: Callable[[Any], Optional[GroupedEntry]],
        on_change: Optional[OnSelectionChange] = None,
    ) -> None:
        self._lookup = lookup
        self._on_change = on_change
        self._raw_selection: Optional[Any] = None

    @property
    def raw_selection(self) -> Optional[Any]:
        return self._raw_selection

    @property
    def selection(self) -> Optional[GroupedEntry]:
        return self._lookup(self._raw_selection)

    def set_on_change(self, on_change: Optional[OnSelectionChange]) -> None:
        self._on_change = on_change

    def select(self, date: Optional[Any]) -> Optional[GroupedEntry]:
        """Select the bucket containing date; None clears the selection."""
        if date is None:
            self.clear()
            return None
        self._raw_selection = as_timestamp(date)
        entry = self.selection
        logger.debug(
            "Selection at %s -> %s",
            self._raw_selection,
            entry.bucket_date if entry is not None else None,
        )
        self._emit(entry)
        return entry

    def clear(self) -> None:
        if self._raw_selection is None:
            return
        self._raw_selection = None
        logger.debug("Selection cleared")
        self._emit(None)

    def handle_click(
        self,
        payload: Any,
        to_date: Optional[Callable[[Any], Any]] = None,
    ) -> Optional[GroupedEntry]:
        """Select from a plotly_click payload; payloads without a point are ignored.

        Args:
            payload: plotly_click event args.
            to_date: Optional conversion of the clicked x value (e.g. local wall
                time back to an aware timestamp).
        """
        date = parse_plotly_click_date(payload)
        if date is None:
            return self.selection
        try:
            return self.select(to_date(date) if to_date is not None else date)
        except ValueError:
            logger.warning("Ignoring click with unparsable x value: %r", date)
            return self.selection

    def handle_key(self, key_name: Optional[str]) -> None:
        if key_name == "Escape":
            self.clear()

    def _emit(self, entry: Optional[GroupedEntry]) -> None:
        if self._on_change is not None:
            self._on_change(entry)

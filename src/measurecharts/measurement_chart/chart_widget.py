"""NiceGUI widget for paged measurement charts.

Shows a grouping toggle, an average header (or the annotation of the selected
entry), the center page plot with previous/next pager buttons, and a "No data"
placeholder. Y-scale changes are applied through ScaleTransition so that fast
paging settles into one rescale. Uses Plotly dicts only for ui.plotly.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from nicegui import ui

from measurecharts.measurement_chart.axis_format import (
    AVERAGE_LABEL,
    NO_DATA_LABEL,
    UnitStyle,
    annotation_date_label,
    annotation_title,
    average_label,
    page_range_label,
    y_axis_label,
)
from measurecharts.measurement_chart.chart_entries import GroupedEntry
from measurecharts.measurement_chart.chart_grouping import ChartGrouping
from measurecharts.measurement_chart.chart_model import CENTER_INDEX, ChartWindow, MeasurementChartModel
from measurecharts.measurement_chart.figure_generator import ChartFigureGenerator
from measurecharts.measurement_chart.scale_transition import ScaleTransition
from measurecharts.utils.logging import get_logger

logger = get_logger(__name__)

OnSelectionChange = Callable[[Optional[GroupedEntry]], None]


def _safe_call(func: Callable, *args, **kwargs) -> None:
    """Safely call a function, catching 'client deleted' RuntimeErrors only."""
    try:
        func(*args, **kwargs)
    except RuntimeError as e:
        if "deleted" not in str(e).lower():
            raise


class MeasurementChartWidget:
    """Reusable measurement chart widget.

    Construct with a MeasurementChartModel, then call render() inside a NiceGUI
    container. The widget listens to the model, so any model update (data
    replacement, grouping change, page move) refreshes the UI.
    """

    def __init__(
        self,
        model: MeasurementChartModel,
        *,
        on_selection_change: Optional[OnSelectionChange] = None,
    ) -> None:
        self.model = model
        self.config = model.config
        self._figures = ChartFigureGenerator(model)
        self._on_selection_change = on_selection_change
        self._updating_programmatically = False

        self._displayed_y_scale: Optional[tuple[float, float]] = None
        self._last_grouping: ChartGrouping = model.grouping
        self._transition = ScaleTransition(self._apply_y_scale, delay_s=self.config.transition_delay_s)

        self._grouping_toggle: Optional[ui.toggle] = None
        self._title_label: Optional[ui.label] = None
        self._value_label: Optional[ui.label] = None
        self._date_label: Optional[ui.label] = None
        self._no_data_label: Optional[ui.label] = None
        self._prev_button: Optional[ui.button] = None
        self._next_button: Optional[ui.button] = None
        self._plot: Optional[ui.plotly] = None

        model.add_listener(self._on_window_update)
        model.selection_handler.set_on_change(self._on_selection)

    @property
    def displayed_y_scale(self) -> Optional[tuple[float, float]]:
        """Y range currently drawn (lags the model's while a transition is pending)."""
        return self._displayed_y_scale

    def render(self) -> None:
        """Create the chart UI inside the current container."""
        self._grouping_toggle = None
        self._title_label = None
        self._value_label = None
        self._date_label = None
        self._no_data_label = None
        self._prev_button = None
        self._next_button = None
        self._plot = None
        self._updating_programmatically = False

        with ui.column().classes("w-full gap-2"):
            self._grouping_toggle = ui.toggle(
                {g.value: g.label for g in ChartGrouping},
                value=self.model.grouping.value,
            ).classes("w-full")
            self._grouping_toggle.on("update:model-value", self._on_grouping_toggle)

            with ui.column().classes("gap-0"):
                self._title_label = ui.label(AVERAGE_LABEL).classes("text-xs uppercase text-gray-500")
                self._value_label = ui.label("").classes("text-3xl font-medium")
                self._date_label = ui.label("").classes("text-sm text-gray-500")

            with ui.row().classes("w-full items-center no-wrap gap-1"):
                self._prev_button = ui.button(
                    icon="chevron_left",
                    on_click=lambda: self.move(-1),
                ).props("flat round dense")
                self._plot = ui.plotly(self._make_figure()).classes("flex-1 h-64")
                self._plot.on("plotly_click", self._on_plotly_click)
                self._next_button = ui.button(
                    icon="chevron_right",
                    on_click=lambda: self.move(1),
                ).props("flat round dense")

            self._no_data_label = ui.label(NO_DATA_LABEL).classes("text-gray-500")

            # Arrow keys page, Esc clears the selection
            ui.keyboard(on_key=self._on_keyboard_key)

        self._transition.reset()
        self._transition.request(self.model.y_scale)
        self.refresh()

    # ------------------ public ------------------

    def move(self, offset: int) -> bool:
        """Page by offset (-1 previous, +1 next); returns whether the window moved."""
        return self.model.request_move(offset)

    def set_grouping(self, grouping: Any) -> None:
        self.model.grouping = grouping

    def set_data(self, collection: Any) -> None:
        """Replace the source data and redraw."""
        self.model.update(collection)

    def refresh(self) -> None:
        """Redraw labels, pager buttons and the plot from the model's state."""
        _safe_call(self._refresh_impl)

    # ------------------ model callbacks ------------------

    def _on_window_update(self, window: ChartWindow) -> None:
        if window.grouping is not self._last_grouping:
            self._last_grouping = window.grouping
            self._transition.reset()
        if window.y_scale == self._displayed_y_scale:
            # back at the drawn range: a rescale still waiting is stale
            self._transition.cancel()
        elif window.y_scale != self._transition.pending:
            self._transition.request(window.y_scale)
        self.refresh()

    def _on_selection(self, entry: Optional[GroupedEntry]) -> None:
        self.refresh()
        if self._on_selection_change is not None:
            self._on_selection_change(entry)

    def _apply_y_scale(self, scale: tuple[float, float]) -> None:
        self._displayed_y_scale = scale
        self._update_plot()

    # ------------------ UI events ------------------

    def _on_grouping_toggle(self) -> None:
        if self._updating_programmatically or self._grouping_toggle is None:
            return
        self.set_grouping(self._grouping_toggle.value)

    def _on_plotly_click(self, e: Any) -> None:
        self.model.selection_handler.handle_click(
            getattr(e, "args", None),
            to_date=self._figures.from_plot_x,
        )

    def _on_keyboard_key(self, e: Any) -> None:
        key_name = getattr(getattr(e, "key", None), "name", None) if e else None
        action = getattr(e, "action", None)
        if action is not None and not getattr(action, "keydown", False):
            return
        if key_name == "ArrowLeft":
            self.move(-1)
        elif key_name == "ArrowRight":
            self.move(1)
        else:
            self.model.selection_handler.handle_key(key_name)

    # ------------------ rendering ------------------

    def _make_figure(self) -> dict:
        return self._figures.make_page_figure(
            self.model.window,
            CENTER_INDEX,
            selection=self.model.selection,
            y_scale=self._displayed_y_scale,
        )

    def _header_texts(self) -> tuple[str, str, str]:
        """(title, value, date) for the header: selection annotation or page average."""
        unit = self.config.display_unit
        precision = self.config.precision
        calendar = self.model.calendar
        grouping = self.model.grouping

        entry = self.model.selection
        if entry is not None:
            return (
                annotation_title(entry.count) or "",
                y_axis_label(entry.average, unit, precision, UnitStyle.VISIBLE),
                annotation_date_label(entry.date, grouping, calendar),
            )

        page = self.model.window.current
        return (
            AVERAGE_LABEL,
            average_label(page.average, unit, precision),
            page_range_label(page.x_scale[0], page.x_scale[1], grouping, calendar),
        )

    def _refresh_impl(self) -> None:
        has_data = not self.model.data.is_empty
        title, value, date = self._header_texts()

        self._updating_programmatically = True
        try:
            if self._grouping_toggle is not None:
                self._grouping_toggle.value = self.model.grouping.value
                self._grouping_toggle.set_visibility(self.config.show_grouping_picker and has_data)
        finally:
            self._updating_programmatically = False

        if self._title_label is not None:
            self._title_label.text = title
        if self._value_label is not None:
            self._value_label.text = value
        if self._date_label is not None:
            self._date_label.text = date
        if self._no_data_label is not None:
            self._no_data_label.set_visibility(not has_data)
        if self._prev_button is not None:
            self._prev_button.set_enabled(self.model.can_move(0))
        if self._next_button is not None:
            self._next_button.set_enabled(self.model.can_move(2))
        self._update_plot()

    def _update_plot(self) -> None:
        if self._plot is None:
            return
        try:
            self._plot.update_figure(self._make_figure())
        except RuntimeError as e:
            if "deleted" not in str(e).lower():
                raise

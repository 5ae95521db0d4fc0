"""Plotly figure generation for measurement chart pages.

This module provides the ChartFigureGenerator class, which turns a ChartWindow
page into a Plotly figure dictionary, keeping figure construction separate
from the NiceGUI widget.

Plotly.js has no time zone support, so dates are sent as naive wall-clock
strings in the chart calendar's time zone (see to_plot_x / from_plot_x).
"""

from __future__ import annotations

from typing import Any, Optional

import pandas as pd
import plotly.graph_objects as go

from measurecharts.measurement_chart.axis_format import is_axis_limit_mark, is_axis_mark, x_axis_label
from measurecharts.measurement_chart.chart_entries import GroupedEntry
from measurecharts.measurement_chart.chart_model import CENTER_INDEX, ChartWindow, MeasurementChartModel
from measurecharts.utils.logging import get_logger

logger = get_logger(__name__)

LIMIT_GRID_COLOR = "rgba(128, 128, 128, 0.5)"
GRID_COLOR = "rgba(128, 128, 128, 0.25)"
MARKER_SIZE = 7


class ChartFigureGenerator:
    """Generates Plotly figure dictionaries for the pages of a chart model.

    Attributes:
        model: MeasurementChartModel providing calendar, config and x tick dates.
    """

    def __init__(self, model: MeasurementChartModel) -> None:
        self.model = model

    @property
    def calendar(self):
        return self.model.calendar

    def to_plot_x(self, date: Any) -> str:
        """Aware timestamp -> naive local ISO string for plotly."""
        return self.calendar.to_local(date).tz_localize(None).isoformat()

    def from_plot_x(self, value: Any) -> pd.Timestamp:
        """Plotly x value (local wall-clock) -> aware timestamp."""
        return self.calendar.localize(value)

    def make_page_figure(
        self,
        window: ChartWindow,
        page_index: int = CENTER_INDEX,
        selection: Optional[GroupedEntry] = None,
        y_scale: Optional[tuple[float, float]] = None,
    ) -> dict:
        """Generate the figure dictionary for one pager slot.

        Args:
            window: Window snapshot to draw.
            page_index: Pager slot (0, 1 or 2) whose x span is shown.
            selection: Selected grouped entry, highlighted with a marker and rule line.
            y_scale: Displayed y range; defaults to window.y_scale. The widget
                passes the currently applied (debounced) scale here.

        Returns:
            Plotly figure dict.
        """
        page = window.pages[page_index]
        config = self.model.config
        grouping = window.grouping
        lower, upper = y_scale if y_scale is not None else window.y_scale

        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=[self.to_plot_x(e.date) for e in window.entries],
            y=[e.value for e in window.entries],
            mode="lines+markers",
            line=dict(color=config.foreground_color, width=2),
            marker=dict(color=config.foreground_color, size=MARKER_SIZE),
            hovertemplate="%{y:." + str(config.precision) + "f} " + config.display_unit + "<extra></extra>",
            name=config.display_unit,
        ))

        if selection is not None:
            fig.add_trace(go.Scatter(
                x=[self.to_plot_x(selection.date)],
                y=[selection.value],
                mode="markers",
                marker=dict(color=config.selection_color, size=MARKER_SIZE * 2),
                hoverinfo="skip",
                name="selection",
            ))

        tick_vals: list[str] = []
        tick_text: list[str] = []
        shapes: list[dict] = []
        for date in self.model.x_values(page.date):
            x = self.to_plot_x(date)
            limit = is_axis_limit_mark(date, grouping, self.calendar)
            mark = is_axis_mark(date, grouping, self.calendar)
            if mark:
                tick_vals.append(x)
                tick_text.append(x_axis_label(date, grouping, self.calendar))
            if limit or mark:
                shapes.append(dict(
                    type="line",
                    xref="x",
                    yref="paper",
                    x0=x,
                    x1=x,
                    y0=0,
                    y1=1,
                    layer="below",
                    line=dict(
                        color=LIMIT_GRID_COLOR if limit else GRID_COLOR,
                        width=1.3 if limit else 1,
                        dash="solid" if limit else "dot",
                    ),
                ))

        if selection is not None:
            x = self.to_plot_x(selection.date)
            shapes.append(dict(
                type="line",
                xref="x",
                yref="paper",
                x0=x,
                x1=x,
                y0=0,
                y1=1,
                line=dict(color=config.selection_color, width=1),
            ))

        fig.update_layout(
            margin=dict(l=40, r=20, t=10, b=30),
            showlegend=False,
            xaxis=dict(
                type="date",
                range=[self.to_plot_x(page.x_scale[0]), self.to_plot_x(page.x_scale[1])],
                tickmode="array",
                tickvals=tick_vals,
                ticktext=tick_text,
                showgrid=False,
                fixedrange=True,
            ),
            yaxis=dict(
                range=[lower, upper],
                tickmode="array",
                tickvals=list(window.y_values),
                showgrid=True,
                gridcolor=GRID_COLOR,
                fixedrange=True,
            ),
            shapes=shapes,
            hovermode="closest",
            uirevision="keep",
        )
        logger.debug(
            "page %s figure: %s entries, %s ticks, selection=%s",
            page_index,
            len(window.entries),
            len(tick_vals),
            selection.bucket_date if selection is not None else None,
        )
        return fig.to_dict()

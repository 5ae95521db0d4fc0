"""Tests for MeasurementChartWidget with mocked NiceGUI elements."""

from __future__ import annotations

import asyncio
from typing import Any, Optional
from unittest.mock import MagicMock, PropertyMock

import pandas as pd
import pytest

from measurecharts.measurement_chart.chart_config import ChartConfig
from measurecharts.measurement_chart.chart_entries import GroupedEntry, MeasurementSample
from measurecharts.measurement_chart.chart_grouping import ChartGrouping
from measurecharts.measurement_chart.chart_model import MeasurementChartModel
from measurecharts.measurement_chart.chart_widget import MeasurementChartWidget

pytestmark = pytest.mark.requires_nicegui


def ts(value: str) -> pd.Timestamp:
    return pd.Timestamp(value, tz="UTC")


def attach_mock_ui(widget: MeasurementChartWidget) -> MeasurementChartWidget:
    """Stand-in elements for what render() would create."""
    widget._grouping_toggle = MagicMock()
    widget._title_label = MagicMock()
    widget._value_label = MagicMock()
    widget._date_label = MagicMock()
    widget._no_data_label = MagicMock()
    widget._prev_button = MagicMock()
    widget._next_button = MagicMock()
    widget._plot = MagicMock()
    return widget


def key_event(name: str, keydown: bool = True) -> Any:
    e = MagicMock()
    e.key.name = name
    e.action.keydown = keydown
    return e


def test_refresh_shows_page_average(week_samples, weekly_config) -> None:
    model = MeasurementChartModel(week_samples, weekly_config)
    widget = attach_mock_ui(MeasurementChartWidget(model))

    widget._refresh_impl()

    assert widget._title_label.text == "Average"
    assert widget._value_label.text == "15 kg"
    assert widget._date_label.text == "01 - 07 Jan 2024"
    widget._prev_button.set_enabled.assert_called_with(False)
    widget._next_button.set_enabled.assert_called_with(False)
    widget._grouping_toggle.set_visibility.assert_called_with(True)
    widget._no_data_label.set_visibility.assert_called_with(False)
    assert widget._grouping_toggle.value == ChartGrouping.WEEKLY.value
    widget._plot.update_figure.assert_called()


def test_refresh_without_data(weekly_config) -> None:
    model = MeasurementChartModel([], weekly_config)
    widget = attach_mock_ui(MeasurementChartWidget(model))

    widget._refresh_impl()

    assert widget._value_label.text == "No data"
    widget._grouping_toggle.set_visibility.assert_called_with(False)
    widget._no_data_label.set_visibility.assert_called_with(True)


def test_grouping_picker_hidden_by_config(week_samples) -> None:
    model = MeasurementChartModel(week_samples, ChartConfig(display_unit="kg", show_grouping_picker=False))
    widget = attach_mock_ui(MeasurementChartWidget(model))
    widget._refresh_impl()
    widget._grouping_toggle.set_visibility.assert_called_with(False)


def test_selection_shows_annotation(week_samples, weekly_config) -> None:
    received: list[Optional[GroupedEntry]] = []
    model = MeasurementChartModel(week_samples, weekly_config)
    widget = attach_mock_ui(MeasurementChartWidget(model, on_selection_change=received.append))

    model.selection_handler.select("2024-01-03T08:00:00Z")

    assert len(received) == 1
    assert received[0] is not None and received[0].value == 20.0
    assert widget._title_label.text == ""
    assert widget._value_label.text == "20 kg"
    assert widget._date_label.text == "03 Jan 2024"


def test_plotly_click_selects(week_samples, weekly_config) -> None:
    model = MeasurementChartModel(week_samples, weekly_config)
    widget = attach_mock_ui(MeasurementChartWidget(model))

    e = MagicMock()
    e.args = {"points": [{"x": "2024-01-01 10:00:00"}]}
    widget._on_plotly_click(e)

    assert model.selection is not None
    assert model.selection.bucket_date == ts("2024-01-01")
    assert widget._value_label.text == "10 kg"


def test_arrow_keys_page(four_week_samples, weekly_config) -> None:
    model = MeasurementChartModel(four_week_samples, weekly_config)
    widget = attach_mock_ui(MeasurementChartWidget(model))

    widget._on_keyboard_key(key_event("ArrowLeft"))
    assert model.pivot_date == ts("2024-01-15")

    widget._on_keyboard_key(key_event("ArrowLeft", keydown=False))
    assert model.pivot_date == ts("2024-01-15")

    widget._on_keyboard_key(key_event("ArrowRight"))
    assert model.pivot_date == ts("2024-01-22")
    widget._prev_button.set_enabled.assert_called_with(True)
    widget._next_button.set_enabled.assert_called_with(False)


def test_escape_clears_selection(week_samples, weekly_config) -> None:
    model = MeasurementChartModel(week_samples, weekly_config)
    widget = attach_mock_ui(MeasurementChartWidget(model))
    model.selection_handler.select("2024-01-03T08:00:00Z")

    widget._on_keyboard_key(key_event("Escape"))

    assert model.selection is None
    assert widget._title_label.text == "Average"


def test_grouping_toggle_changes_model(four_week_samples, weekly_config) -> None:
    model = MeasurementChartModel(four_week_samples, weekly_config)
    widget = attach_mock_ui(MeasurementChartWidget(model))

    widget._grouping_toggle.value = ChartGrouping.MONTHLY.value
    widget._on_grouping_toggle()

    assert model.grouping is ChartGrouping.MONTHLY
    assert widget._date_label.text == "Jan 2024"
    assert widget._value_label.text == "25 kg"


def test_grouping_toggle_ignored_while_updating(four_week_samples, weekly_config) -> None:
    model = MeasurementChartModel(four_week_samples, weekly_config)
    widget = attach_mock_ui(MeasurementChartWidget(model))
    widget._updating_programmatically = True
    widget._grouping_toggle.value = ChartGrouping.DAILY.value

    widget._on_grouping_toggle()

    assert model.grouping is ChartGrouping.WEEKLY


def test_y_scale_applied_without_event_loop(four_week_samples, weekly_config) -> None:
    model = MeasurementChartModel(four_week_samples, weekly_config)
    widget = attach_mock_ui(MeasurementChartWidget(model))
    assert widget.displayed_y_scale is None

    doubled = [
        MeasurementSample(date=s.date, value=s.value * 2, unit=s.unit) for s in four_week_samples
    ]
    widget.set_data(doubled)
    assert widget.displayed_y_scale == model.y_scale == (15.0, 100.0)


def test_refresh_tolerates_deleted_client(week_samples, weekly_config) -> None:
    model = MeasurementChartModel(week_samples, weekly_config)
    widget = attach_mock_ui(MeasurementChartWidget(model))
    type(widget._value_label).text = PropertyMock(side_effect=RuntimeError("The client this element belongs to has been deleted."))

    widget.refresh()


def test_refresh_propagates_other_errors(week_samples, weekly_config) -> None:
    model = MeasurementChartModel(week_samples, weekly_config)
    widget = attach_mock_ui(MeasurementChartWidget(model))
    type(widget._value_label).text = PropertyMock(side_effect=RuntimeError("boom"))

    with pytest.raises(RuntimeError):
        widget.refresh()


def test_plot_update_tolerates_deleted_client(week_samples, weekly_config) -> None:
    model = MeasurementChartModel(week_samples, weekly_config)
    widget = attach_mock_ui(MeasurementChartWidget(model))
    widget._plot.update_figure.side_effect = RuntimeError("Client deleted")

    widget._update_plot()


@pytest.mark.asyncio
async def test_returning_to_drawn_scale_drops_pending_rescale() -> None:
    samples = [
        MeasurementSample(date=ts("2024-01-01 09:00") + pd.Timedelta(weeks=i), value=10.0 * (i + 1), unit="kg")
        for i in range(12)
    ]
    model = MeasurementChartModel(samples, ChartConfig(display_unit="kg", transition_delay_s=0.02))
    widget = attach_mock_ui(MeasurementChartWidget(model))
    widget._transition.request(model.y_scale)
    drawn = widget.displayed_y_scale
    assert drawn == model.y_scale

    model.did_move(0)
    assert model.y_scale != drawn
    assert widget._transition.pending == model.y_scale

    model.did_move(2)
    assert model.y_scale == drawn
    assert widget._transition.pending is None

    await asyncio.sleep(0.1)
    assert widget.displayed_y_scale == model.y_scale == drawn


@pytest.mark.asyncio
async def test_latest_scale_wins_after_burst_of_moves() -> None:
    samples = [
        MeasurementSample(date=ts("2024-01-01 09:00") + pd.Timedelta(weeks=i), value=10.0 * (i + 1), unit="kg")
        for i in range(12)
    ]
    model = MeasurementChartModel(samples, ChartConfig(display_unit="kg", transition_delay_s=0.02))
    widget = attach_mock_ui(MeasurementChartWidget(model))
    widget._transition.request(model.y_scale)

    model.did_move(0)
    model.did_move(0)
    assert widget.displayed_y_scale != model.y_scale

    await asyncio.sleep(0.1)
    assert widget.displayed_y_scale == model.y_scale
    assert widget._transition.pending is None

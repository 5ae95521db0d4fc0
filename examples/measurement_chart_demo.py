"""
Measurement chart demo with a year of synthetic body-weight samples.

Demonstrates:
- MeasurementChartModel built from a pandas DataFrame (mixed kg/lb units)
- MeasurementChartWidget with grouping toggle, paging and point selection
- Replacing the data at runtime

Run:
    python examples/measurement_chart_demo.py
"""

import numpy as np
import pandas as pd
from nicegui import ui

from measurecharts import (
    ChartConfig,
    ChartDataCollection,
    ChartGrouping,
    MeasurementChartModel,
    MeasurementChartWidget,
)
from measurecharts.measurement_chart.units import MASS_CONVERTER
from measurecharts.utils.logging import configure_logging, get_logger

configure_logging(level="INFO")
logger = get_logger(__name__)


def create_sample_df(days: int = 365, seed: int = 0) -> pd.DataFrame:
    """Two to four weigh-ins per day drifting around 80 kg, every fifth one in lb."""
    rng = np.random.default_rng(seed)
    end = pd.Timestamp.now(tz="UTC").floor("D")
    rows = []
    for day in pd.date_range(end=end, periods=days, freq="D"):
        trend = 80.0 + 3.0 * np.sin(day.dayofyear / 58.0)
        for _ in range(rng.integers(2, 5)):
            when = day + pd.Timedelta(minutes=int(rng.integers(6 * 60, 22 * 60)))
            kg = trend + rng.normal(0.0, 0.6)
            if rng.random() < 0.2:
                rows.append({"date": when, "value": kg / 0.45359237, "unit": "lb"})
            else:
                rows.append({"date": when, "value": kg, "unit": "kg"})
    return pd.DataFrame(rows)


@ui.page("/")
def index():
    ui.label("Measurement Chart Demo").classes("text-3xl font-bold mb-4")

    config = ChartConfig(display_unit="kg", precision=1, grouping=ChartGrouping.WEEKLY)
    collection = ChartDataCollection.from_dataframe(create_sample_df(), unit_col="unit")
    model = MeasurementChartModel(collection, config, converter=MASS_CONVERTER)

    selected_label = ui.label("Selected: (none)").classes("text-sm")

    def on_selection_change(entry) -> None:
        if entry is None:
            selected_label.text = "Selected: (none)"
        else:
            selected_label.text = f"Selected: {entry.bucket_date:%Y-%m-%d %H:%M} ({entry.count} value(s))"

    with ui.card().classes("w-full max-w-3xl"):
        chart = MeasurementChartWidget(model, on_selection_change=on_selection_change)
        chart.render()

    def load_short_history() -> None:
        chart.set_data(ChartDataCollection.from_dataframe(create_sample_df(days=20, seed=1), unit_col="unit"))

    def clear_data() -> None:
        chart.set_data(ChartDataCollection())

    with ui.row().classes("items-center gap-2"):
        ui.button("Load 20 days", on_click=load_short_history)
        ui.button("Clear data", on_click=clear_data)


if __name__ in {"__main__", "__mp_main__"}:
    ui.run()

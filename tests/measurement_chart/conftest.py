"""Fixtures for measurement chart tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Ensure `src` is importable when running tests from the repo root.
    repo_root = Path(__file__).resolve().parents[2]
    src_dir = repo_root / "src"
    if src_dir.exists():
        sys.path.insert(0, str(src_dir))


@pytest.fixture
def week_samples():
    """Two samples in the week starting Monday 2024-01-01 (UTC)."""
    from measurecharts.measurement_chart.chart_entries import MeasurementSample

    return [
        MeasurementSample(date="2024-01-03T00:00:00Z", value=20.0, unit="kg"),
        MeasurementSample(date="2024-01-01T10:00:00Z", value=10.0, unit="kg"),
    ]


@pytest.fixture
def four_week_samples():
    """One sample per Monday for four consecutive weeks (10, 20, 30, 40 kg)."""
    from measurecharts.measurement_chart.chart_entries import MeasurementSample

    return [
        MeasurementSample(date="2024-01-01T09:00:00Z", value=10.0, unit="kg"),
        MeasurementSample(date="2024-01-08T09:00:00Z", value=20.0, unit="kg"),
        MeasurementSample(date="2024-01-15T09:00:00Z", value=30.0, unit="kg"),
        MeasurementSample(date="2024-01-22T09:00:00Z", value=40.0, unit="kg"),
    ]


@pytest.fixture
def weekly_config():
    from measurecharts.measurement_chart.chart_config import ChartConfig

    return ChartConfig(display_unit="kg")

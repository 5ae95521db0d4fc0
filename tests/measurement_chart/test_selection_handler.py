"""Tests for ChartSelectionHandler."""

from __future__ import annotations

from typing import Any, Optional

import pandas as pd
import pytest

from measurecharts.measurement_chart.chart_entries import GroupedEntry
from measurecharts.measurement_chart.selection_handler import ChartSelectionHandler, parse_plotly_click_date


def ts(value: str) -> pd.Timestamp:
    return pd.Timestamp(value, tz="UTC")


@pytest.fixture
def day_entry() -> GroupedEntry:
    return GroupedEntry(bucket_date=ts("2024-01-01"), unit="kg", values=(4.0, 6.0))


@pytest.fixture
def handler(day_entry: GroupedEntry) -> ChartSelectionHandler:
    def lookup(date: Optional[Any]) -> Optional[GroupedEntry]:
        if date is None:
            return None
        return day_entry if date.floor("D") == day_entry.bucket_date else None

    return ChartSelectionHandler(lookup)


def test_parse_plotly_click_date() -> None:
    assert parse_plotly_click_date({"points": [{"x": "2024-01-01 10:00"}]}) == "2024-01-01 10:00"
    assert parse_plotly_click_date({"points": []}) is None
    assert parse_plotly_click_date({}) is None
    assert parse_plotly_click_date(None) is None
    assert parse_plotly_click_date({"points": ["bad"]}) is None


def test_select_resolves_entry(handler: ChartSelectionHandler, day_entry: GroupedEntry) -> None:
    received: list[Optional[GroupedEntry]] = []
    handler.set_on_change(received.append)

    assert handler.select("2024-01-01T13:00:00Z") is day_entry
    assert handler.raw_selection == ts("2024-01-01 13:00")
    assert handler.selection is day_entry
    assert received == [day_entry]


def test_select_outside_any_bucket(handler: ChartSelectionHandler) -> None:
    assert handler.select("2024-02-01T13:00:00Z") is None
    assert handler.raw_selection is not None
    assert handler.selection is None


def test_clear_emits_once(handler: ChartSelectionHandler) -> None:
    received: list[Optional[GroupedEntry]] = []
    handler.set_on_change(received.append)

    handler.clear()
    assert received == []

    handler.select("2024-01-01T13:00:00Z")
    handler.clear()
    assert handler.raw_selection is None
    assert received[-1] is None
    assert len(received) == 2


def test_select_none_clears(handler: ChartSelectionHandler) -> None:
    handler.select("2024-01-01T13:00:00Z")
    assert handler.select(None) is None
    assert handler.raw_selection is None


def test_handle_click(handler: ChartSelectionHandler, day_entry: GroupedEntry) -> None:
    assert handler.handle_click({"points": [{"x": "2024-01-01 08:00"}]}) is day_entry
    # payload without points keeps the current selection
    assert handler.handle_click({"points": []}) is day_entry


def test_handle_click_with_conversion(handler: ChartSelectionHandler, day_entry: GroupedEntry) -> None:
    seen: list[Any] = []

    def to_date(value: Any) -> pd.Timestamp:
        seen.append(value)
        return ts("2024-01-01 23:00")

    assert handler.handle_click({"points": [{"x": "whatever"}]}, to_date=to_date) is day_entry
    assert seen == ["whatever"]


def test_handle_click_unparsable_keeps_selection(
    handler: ChartSelectionHandler,
    day_entry: GroupedEntry,
) -> None:
    handler.select("2024-01-01T13:00:00Z")
    assert handler.handle_click({"points": [{"x": "not-a-date"}]}) is day_entry
    assert handler.raw_selection == ts("2024-01-01 13:00")


def test_escape_clears(handler: ChartSelectionHandler) -> None:
    handler.select("2024-01-01T13:00:00Z")
    handler.handle_key("ArrowLeft")
    assert handler.raw_selection is not None
    handler.handle_key("Escape")
    assert handler.raw_selection is None

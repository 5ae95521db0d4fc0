"""Tests for the debounced y-scale transition."""

from __future__ import annotations

import asyncio

import pytest

from measurecharts.measurement_chart.scale_transition import ScaleTransition

DELAY = 0.02


def test_first_request_applies_immediately() -> None:
    applied: list[tuple[float, float]] = []
    transition = ScaleTransition(applied.append, delay_s=DELAY)
    transition.request((0.0, 10.0))
    assert applied == [(0.0, 10.0)]
    assert transition.pending is None


def test_without_event_loop_every_request_applies() -> None:
    applied: list[tuple[float, float]] = []
    transition = ScaleTransition(applied.append, delay_s=DELAY)
    transition.request((0.0, 10.0))
    transition.request((0.0, 20.0))
    assert applied == [(0.0, 10.0), (0.0, 20.0)]


def test_negative_delay_rejected() -> None:
    with pytest.raises(ValueError):
        ScaleTransition(lambda scale: None, delay_s=-0.1)


@pytest.mark.asyncio
async def test_later_requests_are_delayed() -> None:
    applied: list[tuple[float, float]] = []
    transition = ScaleTransition(applied.append, delay_s=DELAY)

    transition.request((0.0, 10.0))
    transition.request((0.0, 20.0))
    assert applied == [(0.0, 10.0)]
    assert transition.pending == (0.0, 20.0)

    await asyncio.sleep(DELAY * 5)
    assert applied == [(0.0, 10.0), (0.0, 20.0)]
    assert transition.pending is None


@pytest.mark.asyncio
async def test_new_request_cancels_pending_one() -> None:
    applied: list[tuple[float, float]] = []
    transition = ScaleTransition(applied.append, delay_s=DELAY)

    transition.request((0.0, 10.0))
    transition.request((0.0, 20.0))
    transition.request((0.0, 30.0))
    transition.request((0.0, 40.0))

    await asyncio.sleep(DELAY * 5)
    assert applied == [(0.0, 10.0), (0.0, 40.0)]


@pytest.mark.asyncio
async def test_cancel_drops_pending() -> None:
    applied: list[tuple[float, float]] = []
    transition = ScaleTransition(applied.append, delay_s=DELAY)

    transition.request((0.0, 10.0))
    transition.request((0.0, 20.0))
    transition.cancel()
    assert transition.pending is None

    await asyncio.sleep(DELAY * 5)
    assert applied == [(0.0, 10.0)]


@pytest.mark.asyncio
async def test_reset_makes_next_request_immediate() -> None:
    applied: list[tuple[float, float]] = []
    transition = ScaleTransition(applied.append, delay_s=DELAY)

    transition.request((0.0, 10.0))
    transition.request((0.0, 20.0))
    transition.reset()
    transition.request((0.0, 30.0))
    assert applied == [(0.0, 10.0), (0.0, 30.0)]

    await asyncio.sleep(DELAY * 5)
    assert applied == [(0.0, 10.0), (0.0, 30.0)]

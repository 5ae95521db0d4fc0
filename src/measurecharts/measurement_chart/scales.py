"""Y-axis scale and tick computation for grouped chart entries."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from measurecharts.measurement_chart.chart_entries import GroupedEntry, entries_max, entries_min

DEFAULT_SCALE_MARGIN = 0.25
Y_VALUE_COUNT = 4


def y_scale(
    entries: Sequence[GroupedEntry],
    allow_negative: bool = True,
    margin: float = DEFAULT_SCALE_MARGIN,
) -> tuple[float, float]:
    """Y-axis bounds covering the entry averages plus a relative margin.

    Bounds are rounded half-to-even (Python ``round``). The result is never
    inverted: when clamping to non-negative values would invert it, the upper
    bound is raised to ``max(0, lower)``.

    Args:
        entries: Grouped entries; an empty sequence yields (0.0, 0.0).
        allow_negative: If False, both bounds are clamped to >= 0.
        margin: Fraction of |min| / |max| added below / above.

    Returns:
        (lower, upper) with lower <= upper.
    """
    min_value = entries_min(entries)
    max_value = entries_max(entries)
    min_value = 0.0 if min_value is None else min_value
    max_value = 0.0 if max_value is None else max_value

    lower = float(round(min_value - abs(min_value) * margin))
    upper = float(round(max_value + abs(max_value) * margin))

    if not allow_negative:
        lower = max(0.0, lower)
        upper = max(0.0, upper)

    if lower <= upper:
        return lower, upper
    return lower, max(0.0, lower)


def y_values(scale: tuple[float, float]) -> list[float]:
    """Four evenly spaced tick values from scale[0] to scale[1] inclusive."""
    lower, upper = scale
    return [float(v) for v in np.linspace(lower, upper, num=Y_VALUE_COUNT)]

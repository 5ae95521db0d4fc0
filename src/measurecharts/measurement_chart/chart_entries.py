"""Chart data entries: raw measurement samples and grouped (bucket) entries.

Any object exposing ``date``, ``value`` and ``unit`` can feed a chart
(see ChartDataEntry). GroupedEntry is the frozen aggregate of one calendar
bucket produced by the grouping engine.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Protocol, Sequence, runtime_checkable

import pandas as pd


@runtime_checkable
class ChartDataEntry(Protocol):
    """Capability contract for anything plotted on a measurement chart."""

    @property
    def date(self) -> Any: ...

    @property
    def value(self) -> float: ...

    @property
    def unit(self) -> str: ...


@dataclass(frozen=True)
class MeasurementSample:
    """A single measurement. ``id`` is opaque and ignored for equality."""

    date: Any
    value: float
    unit: str
    id: Optional[str] = field(default=None, compare=False)


@dataclass(frozen=True, eq=False)
class GroupedEntry:
    """Aggregate of all values that fell into one calendar bucket.

    Two grouped entries are equal only if they are the same entry (same
    synthetic ``id``), even when their buckets and values coincide.
    """

    bucket_date: pd.Timestamp
    unit: str
    values: tuple[float, ...] = ()
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GroupedEntry):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def date(self) -> pd.Timestamp:
        return self.bucket_date

    @property
    def count(self) -> int:
        return len(self.values)

    @property
    def sum(self) -> float:
        return float(sum(self.values, 0.0))

    @property
    def average(self) -> float:
        """Mean of the bucket values; 0.0 for an empty bucket."""
        if not self.values:
            return 0.0
        return self.sum / self.count

    @property
    def value(self) -> float:
        return self.average


# ------------------ aggregates over entry sequences ------------------


def entries_min(entries: Iterable[ChartDataEntry]) -> Optional[float]:
    """Smallest entry value, or None when there are no entries."""
    return min((float(e.value) for e in entries), default=None)


def entries_max(entries: Iterable[ChartDataEntry]) -> Optional[float]:
    """Largest entry value, or None when there are no entries."""
    return max((float(e.value) for e in entries), default=None)


def entries_sum(entries: Iterable[ChartDataEntry]) -> Optional[float]:
    values = [float(e.value) for e in entries]
    if not values:
        return None
    return float(sum(values, 0.0))


def entries_average(entries: Sequence[ChartDataEntry]) -> Optional[float]:
    """Mean of entry values (for grouped entries: mean of bucket averages)."""
    total = entries_sum(entries)
    if total is None:
        return None
    return total / len(entries)


def average_between(
    entries: Iterable[ChartDataEntry],
    lower: pd.Timestamp,
    upper: pd.Timestamp,
) -> Optional[float]:
    """Average of the entries whose date lies in the closed range [lower, upper]."""
    inside = [e for e in entries if lower <= e.date <= upper]
    return entries_average(inside)

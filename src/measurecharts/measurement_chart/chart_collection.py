"""Date-sorted, read-only collection of chart entries.

ChartDataCollection is built once from any iterable of entries and never
mutated afterwards; callers replace it wholesale when the source data
changes.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Optional, Sequence, TypeVar, Union, overload

import pandas as pd

from measurecharts.measurement_chart.calendar_utils import as_timestamp, now
from measurecharts.measurement_chart.chart_entries import ChartDataEntry, MeasurementSample
from measurecharts.measurement_chart.units import UnitConverter, identity_converter
from measurecharts.utils.logging import get_logger

logger = get_logger(__name__)

E = TypeVar("E", bound=ChartDataEntry)


class ChartDataCollection(Sequence[E]):
    """Entries sorted ascending by date, with precomputed date and value ranges.

    Attributes:
        date_range: (first date, last date); (now, now) when empty.
        value_range: (min value, max value); (0.0, 0.0) when empty.
    """

    def __init__(
        self,
        entries: Iterable[E] = (),
        *,
        unit: Optional[str] = None,
        converter: Optional[UnitConverter] = None,
    ) -> None:
        """Sort entries and compute their ranges.

        Args:
            entries: Any iterable of objects exposing date/value/unit.
            unit: If set, value_range is computed over values converted to this unit.
            converter: Conversion function used with ``unit``.
        """
        # sorted() is stable, so entries sharing a date keep their input order
        self._data: tuple[E, ...] = tuple(sorted(entries, key=lambda e: as_timestamp(e.date)))

        if self._data:
            self.date_range: tuple[pd.Timestamp, pd.Timestamp] = (
                as_timestamp(self._data[0].date),
                as_timestamp(self._data[-1].date),
            )
            convert = converter or identity_converter
            values = [
                convert(float(e.value), e.unit, unit) if unit is not None else float(e.value)
                for e in self._data
            ]
            self.value_range: tuple[float, float] = (min(values), max(values))
        else:
            current = now()
            self.date_range = (current, current)
            self.value_range = (0.0, 0.0)

    @classmethod
    def build(
        cls,
        entries: Iterable[E] = (),
        *,
        unit: Optional[str] = None,
        converter: Optional[UnitConverter] = None,
    ) -> "ChartDataCollection[E]":
        return cls(entries, unit=unit, converter=converter)

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        *,
        date_col: str = "date",
        value_col: str = "value",
        unit_col: Optional[str] = None,
        unit: Optional[str] = None,
        id_col: Optional[str] = None,
    ) -> "ChartDataCollection[MeasurementSample]":
        """Build a collection from a DataFrame with one sample per row.

        Rows with a missing date or value are dropped.

        Raises:
            ValueError: If required columns are missing, or neither unit_col nor unit is given.
        """
        required = [date_col, value_col] + [c for c in (unit_col, id_col) if c is not None]
        missing = [c for c in required if c not in df.columns]
        if missing:
            raise ValueError(f"df is missing required column(s) {missing}")
        if unit_col is None and unit is None:
            raise ValueError("Either unit_col or unit must be given")

        df_f = df.dropna(subset=[date_col, value_col])
        dropped = len(df) - len(df_f)
        if dropped:
            logger.warning("Dropped %s row(s) with missing %s/%s", dropped, date_col, value_col)

        dates = pd.to_datetime(df_f[date_col])
        values = pd.to_numeric(df_f[value_col], errors="raise").astype(float)
        units = df_f[unit_col].astype(str) if unit_col is not None else [unit] * len(df_f)
        ids = df_f[id_col].astype(str) if id_col is not None else [None] * len(df_f)

        samples = [
            MeasurementSample(date=as_timestamp(d), value=v, unit=u, id=i)
            for d, v, u, i in zip(dates, values, units, ids)
        ]
        return cls(samples)

    def to_dataframe(self) -> pd.DataFrame:
        """Return the sorted entries as a DataFrame with date/value/unit columns."""
        return pd.DataFrame(
            {
                "date": [as_timestamp(e.date) for e in self._data],
                "value": [float(e.value) for e in self._data],
                "unit": [e.unit for e in self._data],
            },
            columns=["date", "value", "unit"],
        )

    @property
    def is_empty(self) -> bool:
        return not self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[E]:
        return iter(self._data)

    @overload
    def __getitem__(self, index: int) -> E: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[E, ...]: ...

    def __getitem__(self, index: Union[int, slice]) -> Any:
        return self._data[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChartDataCollection):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"ChartDataCollection(n={len(self._data)}, "
            f"date_range=({self.date_range[0]}, {self.date_range[1]}))"
        )

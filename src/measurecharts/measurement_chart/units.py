"""Unit conversion for chart values.

The chart never interprets units itself; it only applies a converter with the
signature ``(value, from_unit, to_unit) -> float`` before grouping.
"""

from __future__ import annotations

from typing import Callable, Mapping

UnitConverter = Callable[[float, str, str], float]


def identity_converter(value: float, from_unit: str, to_unit: str) -> float:
    """Return value unchanged (default when samples are already in the display unit)."""
    return float(value)


class LinearUnitConverter:
    """Converts between units that differ by a constant factor.

    Each unit is described by the number of base units it represents, e.g.
    ``{"kg": 1.0, "g": 0.001}`` with base unit ``"kg"``.
    """

    def __init__(self, base_unit: str, factors: Mapping[str, float]) -> None:
        if base_unit not in factors:
            raise ValueError(f"Base unit {base_unit!r} missing from factors")
        if factors[base_unit] != 1.0:
            raise ValueError(f"Base unit {base_unit!r} must have factor 1.0")
        self.base_unit = base_unit
        self._factors = {unit: float(f) for unit, f in factors.items()}

    @property
    def units(self) -> list[str]:
        return list(self._factors)

    def to_base(self, value: float, unit: str) -> float:
        return float(value) * self._factor(unit)

    def __call__(self, value: float, from_unit: str, to_unit: str) -> float:
        if from_unit == to_unit:
            return float(value)
        return self.to_base(value, from_unit) / self._factor(to_unit)

    def _factor(self, unit: str) -> float:
        try:
            return self._factors[unit]
        except KeyError:
            raise ValueError(
                f"Unknown unit {unit!r}; expected one of {sorted(self._factors)}"
            ) from None


MASS_CONVERTER = LinearUnitConverter(
    "kg",
    {
        "kg": 1.0,
        "g": 0.001,
        "lb": 0.45359237,
        "oz": 0.028349523125,
    },
)

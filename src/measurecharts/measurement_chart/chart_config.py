"""Configuration for measurement charts.

ChartConfig collects the display and paging settings of one chart and can be
serialized to/from a plain dict (e.g. for an application's own settings file).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from measurecharts.measurement_chart.calendar_utils import ChartCalendar
from measurecharts.measurement_chart.chart_grouping import ChartGrouping
from measurecharts.measurement_chart.scales import DEFAULT_SCALE_MARGIN


@dataclass(frozen=True)
class ChartConfig:
    """Display, calendar and paging settings for a measurement chart."""
    display_unit: str
    precision: int = 0                 # decimal places for value labels
    grouping: ChartGrouping = ChartGrouping.WEEKLY
    timezone: str = "UTC"
    week_start: int = 0                # 0=Monday ... 6=Sunday
    allow_negative: bool = True        # allow the y scale to go below zero
    scale_margin: float = DEFAULT_SCALE_MARGIN
    window_pages: int = 3              # pages grouped before/after the pivot page
    transition_delay_s: float = 0.2    # settle delay for animated y-scale changes
    show_grouping_picker: bool = True
    foreground_color: str = "rgb(75, 0, 130)"      # indigo
    selection_color: str = "rgba(0, 128, 128, 0.7)"  # teal

    def __post_init__(self) -> None:
        if not self.display_unit:
            raise ValueError("display_unit must be a non-empty unit tag")
        object.__setattr__(self, "grouping", ChartGrouping.coerce(self.grouping))
        if self.precision < 0:
            raise ValueError(f"precision must be >= 0, got {self.precision}")
        if self.scale_margin < 0:
            raise ValueError(f"scale_margin must be >= 0, got {self.scale_margin}")
        if self.window_pages < 1:
            raise ValueError(f"window_pages must be >= 1, got {self.window_pages}")
        if self.transition_delay_s < 0:
            raise ValueError(f"transition_delay_s must be >= 0, got {self.transition_delay_s}")
        # Validates timezone and week_start.
        self.calendar()

    def calendar(self) -> ChartCalendar:
        """Calendar built from timezone and week_start."""
        return ChartCalendar(timezone=self.timezone, week_start=self.week_start)

    def to_dict(self) -> dict[str, Any]:
        """Serialize ChartConfig to a dictionary.

        Returns:
            Dictionary with all fields; grouping is stored by name.
        """
        return {
            "display_unit": self.display_unit,
            "precision": self.precision,
            "grouping": self.grouping.name.lower(),
            "timezone": self.timezone,
            "week_start": self.week_start,
            "allow_negative": self.allow_negative,
            "scale_margin": self.scale_margin,
            "window_pages": self.window_pages,
            "transition_delay_s": self.transition_delay_s,
            "show_grouping_picker": self.show_grouping_picker,
            "foreground_color": self.foreground_color,
            "selection_color": self.selection_color,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChartConfig":
        """Deserialize ChartConfig from a dictionary.

        Args:
            data: Dictionary containing ChartConfig fields; missing fields use defaults.

        Returns:
            ChartConfig instance.

        Raises:
            ValueError: If display_unit is missing or a value is invalid.
        """
        if "display_unit" not in data:
            raise ValueError("ChartConfig requires 'display_unit'")
        defaults = cls(display_unit=str(data["display_unit"]))
        return cls(
            display_unit=str(data["display_unit"]),
            precision=int(data.get("precision", defaults.precision)),
            grouping=ChartGrouping.coerce(data.get("grouping", defaults.grouping)),
            timezone=str(data.get("timezone", defaults.timezone)),
            week_start=int(data.get("week_start", defaults.week_start)),
            allow_negative=bool(data.get("allow_negative", defaults.allow_negative)),
            scale_margin=float(data.get("scale_margin", defaults.scale_margin)),
            window_pages=int(data.get("window_pages", defaults.window_pages)),
            transition_delay_s=float(data.get("transition_delay_s", defaults.transition_delay_s)),
            show_grouping_picker=bool(data.get("show_grouping_picker", defaults.show_grouping_picker)),
            foreground_color=str(data.get("foreground_color", defaults.foreground_color)),
            selection_color=str(data.get("selection_color", defaults.selection_color)),
        )

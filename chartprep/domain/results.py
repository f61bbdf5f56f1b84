"""Domain-level results handed to the rendering layer."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

from .models import AssetSeries, ShichenCell


@dataclass(frozen=True)
class ShichenGrid:
    """Dense 12 x D grid of one app's minutes, flattened period-major."""

    app_name: str
    cells: Sequence[ShichenCell] = field(default_factory=tuple)
    dates: Sequence[str] = field(default_factory=tuple)
    weekday_by_date: Mapping[str, str] = field(default_factory=dict)
    max_minutes: float = 0.0

    @property
    def num_dates(self) -> int:
        return len(self.dates)

    @property
    def total_minutes(self) -> float:
        return sum(cell.minutes for cell in self.cells)

    def is_empty(self) -> bool:
        return not self.cells

    def drawable_cells(self) -> Iterable[ShichenCell]:
        return (cell for cell in self.cells if cell.minutes > 0)

    def cell(self, period_index: int, date_str: str) -> ShichenCell | None:
        try:
            date_index = list(self.dates).index(date_str)
        except ValueError:
            return None
        return self.cells[(period_index % 12) * self.num_dates + date_index]

    def peak(self) -> ShichenCell | None:
        """Return the max-minutes cell; the first one in grid order wins ties."""
        best: ShichenCell | None = None
        for cell in self.cells:
            if best is None or cell.minutes > best.minutes:
                best = cell
        if best is None or not best.minutes:
            return None
        return best


@dataclass(frozen=True)
class AssetSeriesBundle:
    series: Sequence[AssetSeries] = field(default_factory=tuple)
    years: Sequence[int] = field(default_factory=tuple)
    y_domain: tuple[float, float] = (0.0, 1.0)
    normalize: bool = False

    def is_empty(self) -> bool:
        return not self.series

    @property
    def year_range(self) -> tuple[int, int] | None:
        if not self.years:
            return None
        return (self.years[0], self.years[-1])

    def get(self, key: str) -> AssetSeries | None:
        for item in self.series:
            if item.key == key:
                return item
        return None

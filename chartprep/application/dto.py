"""Application-level DTOs for chart data preparation."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from chartprep.domain.models import AssetPriceRow, UsageRecord
from chartprep.domain.results import AssetSeriesBundle, ShichenGrid


@dataclass(slots=True, frozen=True)
class UsageChartsResponse:
    grids: Mapping[str, ShichenGrid]
    records: Sequence[UsageRecord] = field(default_factory=tuple)

    def drawable_apps(self) -> list[str]:
        return [name for name, grid in self.grids.items() if grid.max_minutes > 0]


@dataclass(slots=True, frozen=True)
class AssetChartResponse:
    bundle: AssetSeriesBundle
    rows: Sequence[AssetPriceRow] = field(default_factory=tuple)

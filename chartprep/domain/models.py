"""Domain models for the chart data pipelines.

These dataclasses capture the typed shapes produced at the ingestion boundary
and the derived points handed to the rendering layer.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Mapping


@dataclass(frozen=True)
class ShichenPeriod:
    """One of the 12 two-hour periods of a traditional day."""

    index: int
    name: str
    pinyin: str
    description: str


@dataclass(frozen=True)
class UsageRecord:
    """One day of one app's usage, split into 24 hourly minute values."""

    date_str: str
    app_name: str
    minutes: tuple[float, ...]
    day: date | None = None
    weekday: str = ""
    package_name: str = ""
    total_minutes: float = 0.0


@dataclass(frozen=True)
class HourlyUsage:
    """Long-format usage: a single hour of a UsageRecord with minutes > 0."""

    date_str: str
    weekday: str
    app_name: str
    package_name: str
    hour: int
    hour_label: str
    minutes: float
    shichen_index: int
    shichen_name: str


@dataclass(frozen=True)
class ShichenCell:
    app_name: str
    period_index: int
    period_label: str
    date_str: str
    date_index: int
    weekday: str
    minutes: float


@dataclass(frozen=True)
class AssetMeta:
    key: str
    label: str
    column: str


@dataclass(frozen=True)
class AssetPriceRow:
    """Annual prices; absent or unparseable prices are stored as None."""

    year: int
    prices: Mapping[str, float | None] = field(default_factory=dict)

    def price(self, key: str) -> float | None:
        return self.prices.get(key)


@dataclass(frozen=True)
class AssetPoint:
    year: int
    raw_value: float
    normalized_value: float | None = None

    @property
    def value(self) -> float:
        if self.normalized_value is None:
            return self.raw_value
        return self.normalized_value


@dataclass(frozen=True)
class AssetSeries:
    key: str
    label: str
    points: tuple[AssetPoint, ...]
    normalized: bool = False

    @property
    def years(self) -> tuple[int, ...]:
        return tuple(point.year for point in self.points)

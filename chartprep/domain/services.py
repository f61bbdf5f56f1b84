"""Domain services implementing the bucketing and series rules."""
from __future__ import annotations

import logging
import math
import numbers
from typing import Callable, Hashable, Iterable, Mapping, Sequence, TypeVar

from chartprep.config import SETTINGS

from .models import (
    AssetPoint,
    AssetPriceRow,
    AssetSeries,
    HourlyUsage,
    ShichenCell,
    ShichenPeriod,
    UsageRecord,
)
from .results import AssetSeriesBundle, ShichenGrid

logger = logging.getLogger(__name__)

PERIOD_COUNT = 12
HOURS_PER_DAY = 24

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def shichen_index(hour: int) -> int:
    """Map an hour of day to its shichen; 23:00 and 00:00 share period 0."""
    h = hour % HOURS_PER_DAY
    return ((h + 1) % HOURS_PER_DAY) // 2


def hours_in_period(index: int) -> tuple[int, ...]:
    return tuple(h for h in range(HOURS_PER_DAY) if shichen_index(h) == index % PERIOD_COUNT)


def _is_finite(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def usable_minutes(value: object) -> float:
    """Minutes that may enter a bucket; non-finite and non-positive values give 0."""
    try:
        minutes = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(minutes) or minutes <= 0:
        return 0.0
    return minutes


def expand_hourly(record: UsageRecord, periods: Sequence[ShichenPeriod] | None = None) -> list[HourlyUsage]:
    periods = periods or SETTINGS.shichen
    items: list[HourlyUsage] = []
    for hour, raw in enumerate(record.minutes[:HOURS_PER_DAY]):
        minutes = usable_minutes(raw)
        if not minutes:
            continue
        index = shichen_index(hour)
        items.append(
            HourlyUsage(
                date_str=record.date_str,
                weekday=record.weekday,
                app_name=record.app_name,
                package_name=record.package_name,
                hour=hour,
                hour_label=SETTINGS.hour_columns[hour],
                minutes=minutes,
                shichen_index=index,
                shichen_name=periods[index].name,
            )
        )
    return items


def group_by(items: Iterable[T], key: Callable[[T], K]) -> dict[K, list[T]]:
    groups: dict[K, list[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return groups


class HourBucketAggregator:
    """Sums hourly minutes into a shichen x day grid per app."""

    def __init__(self, periods: Sequence[ShichenPeriod] | None = None) -> None:
        self._periods = tuple(periods or SETTINGS.shichen)
        if len(self._periods) != PERIOD_COUNT:
            raise ValueError(f"Expected {PERIOD_COUNT} periods, got {len(self._periods)}")

    def aggregate(self, records: Iterable[UsageRecord], app_name: str) -> ShichenGrid:
        app_records = [record for record in records if record.app_name == app_name]

        weekday_by_date: dict[str, str] = {}
        for record in app_records:
            if not record.date_str or not any(usable_minutes(m) for m in record.minutes):
                continue
            if not weekday_by_date.get(record.date_str):
                weekday_by_date[record.date_str] = record.weekday or ""

        # Lexicographic order is chronological for YYYY-MM-DD.
        dates = sorted(weekday_by_date)
        date_index = {date_str: idx for idx, date_str in enumerate(dates)}
        num_dates = len(dates)

        totals = [0.0] * (PERIOD_COUNT * num_dates)
        for record in app_records:
            idx = date_index.get(record.date_str)
            if idx is None:
                continue
            for item in expand_hourly(record, self._periods):
                totals[item.shichen_index * num_dates + idx] += item.minutes

        cells = tuple(
            ShichenCell(
                app_name=app_name,
                period_index=s,
                period_label=self._periods[s].name,
                date_str=dates[di],
                date_index=di,
                weekday=weekday_by_date[dates[di]],
                minutes=totals[s * num_dates + di],
            )
            for s in range(PERIOD_COUNT)
            for di in range(num_dates)
        )
        return ShichenGrid(
            app_name=app_name,
            cells=cells,
            dates=tuple(dates),
            weekday_by_date=weekday_by_date,
            max_minutes=max(totals, default=0.0),
        )

    def aggregate_many(self, records: Sequence[UsageRecord], app_names: Iterable[str]) -> dict[str, ShichenGrid]:
        grids: dict[str, ShichenGrid] = {}
        for app_name in app_names:
            grid = self.aggregate(records, app_name)
            if grid.is_empty():
                logger.warning("No usage records for app %r", app_name)
            grids[app_name] = grid
        return grids


class MultiAssetSeriesBuilder:
    """Builds per-asset annual series with an optional first-value normalization."""

    def __init__(
        self,
        labels: Mapping[str, str] | None = None,
        normalized_floor: float | None = None,
        normalized_ceiling: float | None = None,
    ) -> None:
        self._labels = dict(SETTINGS.asset_labels() if labels is None else labels)
        self._floor = SETTINGS.normalized_floor if normalized_floor is None else normalized_floor
        self._ceiling = SETTINGS.normalized_ceiling if normalized_ceiling is None else normalized_ceiling

    def build(
        self,
        rows: Sequence[AssetPriceRow],
        asset_keys: Sequence[str] | None = None,
        normalize: bool = True,
    ) -> AssetSeriesBundle:
        keys = tuple(asset_keys) if asset_keys is not None else SETTINGS.asset_keys()

        series_list: list[AssetSeries] = []
        for key in keys:
            series = self._build_series(rows, key, normalize)
            if series is None:
                logger.info("Asset %s has no finite prices; dropped", key)
                continue
            series_list.append(series)

        years = sorted({point.year for series in series_list for point in series.points})
        return AssetSeriesBundle(
            series=tuple(series_list),
            years=tuple(years),
            y_domain=self._value_domain(series_list, normalize),
            normalize=normalize,
        )

    def _build_series(self, rows: Sequence[AssetPriceRow], key: str, normalize: bool) -> AssetSeries | None:
        candidates = [
            (row.year, row.price(key))
            for row in rows
            if _is_finite(row.year) and _is_finite(row.price(key))
        ]
        if not candidates:
            return None

        # Stable sort keeps the first row of a duplicated year ahead of later ones.
        candidates.sort(key=lambda pair: pair[0])
        points: list[tuple[int, float]] = []
        for year, value in candidates:
            if points and points[-1][0] == year:
                logger.warning("Duplicate year %s for asset %s; keeping first value", year, key)
                continue
            points.append((int(year), float(value)))  # type: ignore[arg-type]

        base = points[0][1]
        can_normalize = normalize and math.isfinite(base) and base > 0
        if normalize and not can_normalize:
            logger.warning("Asset %s has non-positive base %s; leaving raw values", key, base)

        return AssetSeries(
            key=key,
            label=self._labels.get(key, key),
            points=tuple(
                AssetPoint(
                    year=year,
                    raw_value=value,
                    normalized_value=value / base if can_normalize else None,
                )
                for year, value in points
            ),
            normalized=can_normalize,
        )

    def _value_domain(self, series_list: Sequence[AssetSeries], normalize: bool) -> tuple[float, float]:
        values = [point.value for series in series_list for point in series.points if math.isfinite(point.value)]
        y_min = min(values) if values else 0.0
        y_max = max(values) if values else 1.0
        if normalize:
            y_min = min(self._floor, y_min)
            y_max = max(self._ceiling, y_max)
        return (y_min, y_max)

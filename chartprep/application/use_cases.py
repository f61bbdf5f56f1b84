"""Application services orchestrating the two chart pipelines.

Each use case loads one dataset and runs its pipeline. A load failure only
short-circuits that dataset: it is logged and the use case returns None.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from chartprep.application.dto import AssetChartResponse, UsageChartsResponse
from chartprep.config import SETTINGS
from chartprep.domain.errors import DataLoadError
from chartprep.domain.repositories import AssetPriceRepository, UsageRecordRepository
from chartprep.domain.services import HourBucketAggregator, MultiAssetSeriesBuilder

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UsageChartContext:
    repository: UsageRecordRepository
    aggregator: HourBucketAggregator = field(default_factory=HourBucketAggregator)


@dataclass(slots=True)
class AssetChartContext:
    repository: AssetPriceRepository
    builder: MultiAssetSeriesBuilder = field(default_factory=MultiAssetSeriesBuilder)


class BuildUsageChartsUseCase:
    def __init__(self, context: UsageChartContext) -> None:
        self._context = context

    def execute(self, app_names: Sequence[str] | None = None) -> UsageChartsResponse | None:
        try:
            records = self._context.repository.list_usage_records()
        except DataLoadError:
            logger.exception("Usage data failed to load; skipping usage charts")
            return None
        apps = list(app_names) if app_names else list(SETTINGS.default_apps)
        grids = self._context.aggregator.aggregate_many(records, apps)
        return UsageChartsResponse(grids=grids, records=tuple(records))


class BuildAssetChartUseCase:
    def __init__(self, context: AssetChartContext) -> None:
        self._context = context

    def execute(
        self,
        normalize: bool = SETTINGS.normalize,
        asset_keys: Sequence[str] | None = None,
    ) -> AssetChartResponse | None:
        try:
            rows = self._context.repository.list_price_rows()
        except DataLoadError:
            logger.exception("Asset price data failed to load; skipping asset chart")
            return None
        bundle = self._context.builder.build(rows, asset_keys=asset_keys, normalize=normalize)
        if bundle.is_empty():
            logger.warning("No asset has any finite price; nothing to draw")
        return AssetChartResponse(bundle=bundle, rows=tuple(rows))

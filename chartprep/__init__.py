"""Data preparation for the shichen usage and multi-asset charts."""
from chartprep.application.use_cases import (
    AssetChartContext,
    BuildAssetChartUseCase,
    BuildUsageChartsUseCase,
    UsageChartContext,
)
from chartprep.domain.services import HourBucketAggregator, MultiAssetSeriesBuilder, shichen_index
from chartprep.infrastructure.repositories.file_repositories import (
    AssetPriceFileRepository,
    UsageFileRepository,
)

__all__ = [
    "AssetChartContext",
    "BuildAssetChartUseCase",
    "BuildUsageChartsUseCase",
    "UsageChartContext",
    "HourBucketAggregator",
    "MultiAssetSeriesBuilder",
    "shichen_index",
    "AssetPriceFileRepository",
    "UsageFileRepository",
]

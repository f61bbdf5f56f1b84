"""File-backed repositories for chart datasets."""
from __future__ import annotations

from typing import Sequence

from chartprep.domain.models import AssetMeta, AssetPriceRow, UsageRecord
from chartprep.domain.repositories import AssetPriceRepository, UsageRecordRepository
from chartprep.infrastructure.parsing.app_usage import usage_to_records
from chartprep.infrastructure.parsing.asset_prices import prices_to_rows
from chartprep.infrastructure.parsing.utils import Source


class UsageFileRepository(UsageRecordRepository):
    def __init__(self, source: Source, suffix: str | None = None) -> None:
        self._source = source
        self._suffix = suffix

    def list_usage_records(self) -> Sequence[UsageRecord]:
        return usage_to_records(self._source, suffix=self._suffix)


class AssetPriceFileRepository(AssetPriceRepository):
    def __init__(
        self,
        source: Source,
        suffix: str | None = None,
        assets: Sequence[AssetMeta] | None = None,
    ) -> None:
        self._source = source
        self._suffix = suffix
        self._assets = assets

    def list_price_rows(self) -> Sequence[AssetPriceRow]:
        return prices_to_rows(self._source, suffix=self._suffix, assets=self._assets)

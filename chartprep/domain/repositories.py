"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol, Sequence

from .models import AssetPriceRow, UsageRecord


class UsageRecordRepository(Protocol):
    """Provides per-day, per-app hourly usage records."""

    def list_usage_records(self) -> Sequence[UsageRecord]:
        ...


class AssetPriceRepository(Protocol):
    """Provides annual asset price rows."""

    def list_price_rows(self) -> Sequence[AssetPriceRow]:
        ...

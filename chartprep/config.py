"""Central configuration for the chartprep package."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from chartprep.domain.models import AssetMeta, ShichenPeriod

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = BASE_DIR / "data"

HOUR_COLUMNS: tuple[str, ...] = tuple(f"{h}:00-{h}:59" for h in range(24))

SHICHEN: tuple[ShichenPeriod, ...] = (
    ShichenPeriod(0, "子", "Zi", "23:00-01:00"),
    ShichenPeriod(1, "丑", "Chou", "01:00-03:00"),
    ShichenPeriod(2, "寅", "Yin", "03:00-05:00"),
    ShichenPeriod(3, "卯", "Mao", "05:00-07:00"),
    ShichenPeriod(4, "辰", "Chen", "07:00-09:00"),
    ShichenPeriod(5, "巳", "Si", "09:00-11:00"),
    ShichenPeriod(6, "午", "Wu", "11:00-13:00"),
    ShichenPeriod(7, "未", "Wei", "13:00-15:00"),
    ShichenPeriod(8, "申", "Shen", "15:00-17:00"),
    ShichenPeriod(9, "酉", "You", "17:00-19:00"),
    ShichenPeriod(10, "戌", "Xu", "19:00-21:00"),
    ShichenPeriod(11, "亥", "Hai", "21:00-23:00"),
)

# Source column headers of the app usage export.
COL_DATE = "日期"
COL_APP = "应用名称"
COL_PACKAGE = "包名"
COL_TOTAL = "总时长"

COL_YEAR = "Year"

ASSETS: tuple[AssetMeta, ...] = (
    AssetMeta(key="SPX", label="S&P 500", column="S&P 500 (Jan 1 close)"),
    AssetMeta(key="NASDAQ", label="Nasdaq Composite", column="Nasdaq Composite (first trading day in Jan)"),
    AssetMeta(key="BTC", label="Bitcoin", column="Bitcoin USD (Jan 1)"),
)


@dataclass(slots=True, frozen=True)
class Settings:
    hour_columns: tuple[str, ...]
    shichen: tuple[ShichenPeriod, ...]
    assets: tuple[AssetMeta, ...]
    default_apps: tuple[str, ...]
    normalize: bool
    normalized_floor: float
    normalized_ceiling: float
    data_dir: Path

    def asset_keys(self) -> tuple[str, ...]:
        return tuple(asset.key for asset in self.assets)

    def asset_labels(self) -> dict[str, str]:
        return {asset.key: asset.label for asset in self.assets}


SETTINGS = Settings(
    hour_columns=HOUR_COLUMNS,
    shichen=SHICHEN,
    assets=ASSETS,
    default_apps=("微信", "Bilibili"),
    normalize=True,
    normalized_floor=0.8,
    normalized_ceiling=1.2,
    data_dir=DATA_DIR,
)

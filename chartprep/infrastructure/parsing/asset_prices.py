"""Annual asset price parser producing typed AssetPriceRows."""
from __future__ import annotations

import logging
from typing import Sequence

import pandas as pd

from chartprep.config import COL_YEAR, SETTINGS
from chartprep.domain.models import AssetMeta, AssetPriceRow
from chartprep.infrastructure.parsing.utils import (
    Source,
    describe_source,
    parse_float,
    parse_year,
    read_table,
    require_columns,
)

logger = logging.getLogger(__name__)


def price_rows_from_frame(
    df: pd.DataFrame,
    assets: Sequence[AssetMeta] | None = None,
    source: str = "<frame>",
) -> Sequence[AssetPriceRow]:
    assets = assets or SETTINGS.assets
    require_columns(df, [COL_YEAR], source)
    for asset in assets:
        if asset.column not in df.columns:
            logger.warning("%s has no column %r; asset %s will be empty", source, asset.column, asset.key)

    rows: list[AssetPriceRow] = []
    seen: set[int] = set()
    for idx, row in df.iterrows():
        year = parse_year(row.get(COL_YEAR))
        if year is None:
            logger.debug("Skipping row %s without a parseable year", idx)
            continue
        if year in seen:
            logger.warning("%s repeats year %s at row %s; keeping first", source, year, idx)
            continue
        seen.add(year)
        rows.append(
            AssetPriceRow(
                year=year,
                prices={asset.key: parse_float(row.get(asset.column)) for asset in assets},
            )
        )
    return rows


def prices_to_rows(
    source: Source,
    suffix: str | None = None,
    assets: Sequence[AssetMeta] | None = None,
) -> Sequence[AssetPriceRow]:
    name = describe_source(source)
    dataframe = read_table(source, suffix=suffix)
    rows = price_rows_from_frame(dataframe, assets=assets, source=name)
    logger.info("Loaded %d price rows from %s", len(rows), name)
    return rows

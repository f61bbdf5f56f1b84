"""App usage export parser producing typed UsageRecords."""
from __future__ import annotations

import logging
from typing import Sequence

import pandas as pd

from chartprep.config import COL_APP, COL_DATE, COL_PACKAGE, COL_TOTAL, SETTINGS
from chartprep.domain.models import UsageRecord
from chartprep.infrastructure.parsing.utils import (
    Source,
    describe_source,
    parse_iso_date,
    parse_minutes,
    read_table,
    require_columns,
)

logger = logging.getLogger(__name__)


def _cell(row: pd.Series, column: str) -> str:
    value = row.get(column, "")
    return "" if value is None else str(value).strip()


def row_to_usage_record(row: pd.Series) -> UsageRecord:
    date_str = _cell(row, COL_DATE)
    day = parse_iso_date(date_str)
    return UsageRecord(
        date_str=date_str,
        app_name=_cell(row, COL_APP),
        minutes=tuple(parse_minutes(row.get(col)) for col in SETTINGS.hour_columns),
        day=day,
        weekday=day.strftime("%a") if day else "",
        package_name=_cell(row, COL_PACKAGE),
        total_minutes=parse_minutes(row.get(COL_TOTAL)),
    )


def usage_records_from_frame(df: pd.DataFrame, source: str = "<frame>") -> Sequence[UsageRecord]:
    require_columns(df, [COL_DATE, COL_APP], source)
    absent = [c for c in SETTINGS.hour_columns if c not in df.columns]
    if absent:
        logger.warning("%s lacks %d hour columns; treating them as zero", source, len(absent))

    records: list[UsageRecord] = []
    for idx, row in df.iterrows():
        record = row_to_usage_record(row)
        if not record.app_name:
            logger.debug("Skipping row %s without app name", idx)
            continue
        records.append(record)
    return records


def usage_to_records(source: Source, suffix: str | None = None) -> Sequence[UsageRecord]:
    name = describe_source(source)
    dataframe = read_table(source, suffix=suffix)
    records = usage_records_from_frame(dataframe, source=name)
    logger.info("Loaded %d usage records from %s", len(records), name)
    return records

"""Shared parsing utilities for table ingestion."""
from __future__ import annotations

import math
from datetime import date
from io import BytesIO
from pathlib import Path
from zipfile import BadZipFile

import pandas as pd
from xlrd import XLRDError

from chartprep.domain.errors import DataLoadError

Source = BytesIO | Path | bytes

EXCEL_ENGINES = {".xlsx": "openpyxl", ".xlsm": "openpyxl", ".xls": "xlrd"}


def ensure_bytes(source: Source) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, Path):
        return source.read_bytes()
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def describe_source(source: Source) -> str:
    if isinstance(source, Path):
        return str(source)
    return f"<{type(source).__name__}>"


def read_table(source: Source, suffix: str | None = None) -> pd.DataFrame:
    """Read a CSV or Excel table with every cell kept as text."""
    name = describe_source(source)
    if suffix is None:
        suffix = source.suffix if isinstance(source, Path) else ".csv"
    suffix = suffix.lower()
    try:
        raw = BytesIO(ensure_bytes(source))
        if suffix in EXCEL_ENGINES:
            return pd.read_excel(raw, engine=EXCEL_ENGINES[suffix], dtype=str, keep_default_na=False)
        return pd.read_csv(raw, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    except FileNotFoundError as exc:
        raise DataLoadError(name, "file not found") from exc
    except OSError as exc:
        raise DataLoadError(name, f"cannot read source ({exc})") from exc
    except pd.errors.EmptyDataError as exc:
        raise DataLoadError(name, "no data") from exc
    except (BadZipFile, XLRDError) as exc:
        raise DataLoadError(name, f"corrupt workbook ({exc})") from exc
    except (pd.errors.ParserError, UnicodeDecodeError, ValueError) as exc:
        raise DataLoadError(name, f"unreadable table ({exc})") from exc


def require_columns(df: pd.DataFrame, columns: list[str], source: str) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise DataLoadError(source, f"missing required columns: {', '.join(missing)}")


def parse_float(value: object) -> float | None:
    if value is None:
        return None
    s = str(value).strip().replace(",", "")
    if not s:
        return None
    try:
        result = float(s)
    except ValueError:
        return None
    return result if math.isfinite(result) else None


def parse_minutes(value: object) -> float:
    minutes = parse_float(value)
    if minutes is None or minutes < 0:
        return 0.0
    return minutes


def parse_year(value: object) -> int | None:
    year = parse_float(value)
    if year is None or not year.is_integer():
        return None
    return int(year)


def parse_iso_date(value: object) -> date | None:
    s = "" if value is None else str(value).strip()
    try:
        return date.fromisoformat(s)
    except ValueError:
        return None

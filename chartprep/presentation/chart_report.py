"""Tabular reports of the derived chart data."""
from __future__ import annotations

import csv
import html
import io
from typing import Mapping, Sequence

from chartprep.domain.results import AssetSeriesBundle, ShichenGrid


def grid_to_rows(grid: ShichenGrid, drawable_only: bool = False) -> list[dict[str, str]]:
    cells = grid.drawable_cells() if drawable_only else grid.cells
    return [
        {
            "app_name": cell.app_name,
            "period_index": str(cell.period_index),
            "period_label": cell.period_label,
            "date": cell.date_str,
            "date_index": str(cell.date_index),
            "weekday": cell.weekday,
            "minutes": f"{cell.minutes:g}",
        }
        for cell in cells
    ]


def series_to_rows(bundle: AssetSeriesBundle) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for series in bundle.series:
        for point in series.points:
            rows.append(
                {
                    "asset": series.key,
                    "label": series.label,
                    "year": str(point.year),
                    "raw_value": f"{point.raw_value:g}",
                    "normalized_value": "" if point.normalized_value is None else f"{point.normalized_value:.6g}",
                    "value": f"{point.value:.6g}",
                }
            )
    return rows


def peak_annotation(grid: ShichenGrid) -> str | None:
    peak = grid.peak()
    if peak is None:
        return None
    weekday = f" ({peak.weekday})" if peak.weekday else ""
    return f"Peak: {peak.date_str}{weekday} {peak.period_label} · {peak.minutes:.1f} min"


def summary_rows(grids: Mapping[str, ShichenGrid]) -> list[dict[str, str]]:
    rows = []
    for name, grid in grids.items():
        rows.append(
            {
                "app_name": name,
                "days": str(grid.num_dates),
                "total_minutes": f"{grid.total_minutes:.1f}",
                "max_minutes": f"{grid.max_minutes:.1f}",
                "peak": peak_annotation(grid) or "",
            }
        )
    return rows


def render_csv(rows: Sequence[Mapping[str, str]]) -> bytes:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(rows[0].keys()) if rows else [])
    if rows:
        writer.writeheader()
        writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def render_html(rows: Sequence[Mapping[str, str]]) -> str:
    if not rows:
        return "<p>Nothing to draw.</p>"
    header = "".join(f"<th>{html.escape(str(col))}</th>" for col in rows[0].keys())
    body_parts = []
    for row in rows:
        body_parts.append("<tr>" + "".join(f"<td>{html.escape(str(value))}</td>" for value in row.values()) + "</tr>")
    body_html = "".join(body_parts)
    return f"<table><thead><tr>{header}</tr></thead><tbody>{body_html}</tbody></table>"

"""Command-line entrypoint for chart data preparation."""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from chartprep.application.dto import AssetChartResponse, UsageChartsResponse
from chartprep.application.export.use_cases import ExportChartDataUseCase
from chartprep.application.use_cases import (
    AssetChartContext,
    BuildAssetChartUseCase,
    BuildUsageChartsUseCase,
    UsageChartContext,
)
from chartprep.config import SETTINGS
from chartprep.domain.export.entities import ExportFile, ExportRequest
from chartprep.infrastructure.log_setup import setup_logging
from chartprep.infrastructure.repositories.file_repositories import (
    AssetPriceFileRepository,
    UsageFileRepository,
)
from chartprep.presentation.chart_report import (
    grid_to_rows,
    peak_annotation,
    render_csv,
    series_to_rows,
    summary_rows,
)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Prepare app-usage and multi-asset chart data")
    parser.add_argument("usage", type=Path, help="Path to the app usage CSV/Excel export")
    parser.add_argument("prices", type=Path, help="Path to the annual asset price CSV/Excel file")
    parser.add_argument("--apps", nargs="+", default=list(SETTINGS.default_apps), help="App names to aggregate")
    parser.add_argument("--assets", nargs="+", default=list(SETTINGS.asset_keys()), help="Asset keys to include")
    parser.add_argument("--raw", action="store_true", help="Keep raw prices instead of normalizing to 1.0")
    parser.add_argument("--output-dir", type=Path, help="Export chart tables into this directory")
    parser.add_argument("--run-id", type=str, help="Run identifier for the export folder")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def print_usage_summary(usage: UsageChartsResponse) -> None:
    print("App Usage")
    print("=========")
    for name, grid in usage.grids.items():
        print(f"{name}: {grid.num_dates} days, {grid.total_minutes:.1f} minutes")
        print(f"  {peak_annotation(grid) or 'Nothing to draw.'}")


def print_asset_summary(assets: AssetChartResponse) -> None:
    bundle = assets.bundle
    print("Asset Series")
    print("============")
    if bundle.is_empty():
        print("Nothing to draw.")
        return
    for series in bundle.series:
        first, last = series.points[0], series.points[-1]
        print(f"{series.label}: {len(series.points)} points, {first.year}-{last.year}, last value {last.value:.4g}")
    y_min, y_max = bundle.y_domain
    print(f"Value domain: [{y_min:.4g}, {y_max:.4g}]")


def build_export_files(usage: UsageChartsResponse | None, assets: AssetChartResponse | None) -> list[ExportFile]:
    files: list[ExportFile] = []
    if usage is not None:
        grid_rows = [row for grid in usage.grids.values() for row in grid_to_rows(grid)]
        files.append(ExportFile(name="usage_grid.csv", content=render_csv(grid_rows)))
        files.append(ExportFile(name="usage_summary.csv", content=render_csv(summary_rows(usage.grids))))
    if assets is not None:
        files.append(ExportFile(name="asset_series.csv", content=render_csv(series_to_rows(assets.bundle))))
    return files


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    usage = BuildUsageChartsUseCase(UsageChartContext(repository=UsageFileRepository(args.usage))).execute(args.apps)
    assets = BuildAssetChartUseCase(AssetChartContext(repository=AssetPriceFileRepository(args.prices))).execute(
        normalize=not args.raw,
        asset_keys=args.assets,
    )

    if usage is not None:
        print_usage_summary(usage)
    if assets is not None:
        if usage is not None:
            print()
        print_asset_summary(assets)

    if args.output_dir is not None and (usage is not None or assets is not None):
        request = ExportRequest(
            run_id=args.run_id or datetime.now().strftime("%Y%m%d_%H%M%S"),
            files=build_export_files(usage, assets),
            target=args.output_dir,
        )
        receipt = ExportChartDataUseCase().execute(request)
        if receipt is not None:
            print(f"\nExported {len(receipt.files)} files to {receipt.location}")

    return 1 if usage is None and assets is None else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

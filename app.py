"""Streamlit front-end for the chart data pipelines."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pandas as pd
import streamlit as st

from chartprep import (
    AssetChartContext,
    AssetPriceFileRepository,
    BuildAssetChartUseCase,
    BuildUsageChartsUseCase,
    UsageChartContext,
    UsageFileRepository,
)
from chartprep.config import SETTINGS
from chartprep.domain.results import AssetSeriesBundle, ShichenGrid
from chartprep.infrastructure.log_setup import setup_logging
from chartprep.presentation.chart_report import (
    grid_to_rows,
    peak_annotation,
    render_csv,
    series_to_rows,
)


setup_logging()
st.set_page_config(page_title="Usage & Assets", layout="wide")
st.title("App Usage and Multi-Asset Charts")


def grid_to_dataframe(grid: ShichenGrid) -> pd.DataFrame:
    """Pivot a grid into periods x days for display."""
    frame = pd.DataFrame(
        [
            {"period": f"{cell.period_index:02d} {cell.period_label}", "date": cell.date_str, "minutes": cell.minutes}
            for cell in grid.cells
        ]
    )
    if frame.empty:
        return frame
    return frame.pivot(index="period", columns="date", values="minutes")


def bundle_to_dataframe(bundle: AssetSeriesBundle) -> pd.DataFrame:
    frame = pd.DataFrame(
        [
            {"year": point.year, "label": series.label, "value": point.value}
            for series in bundle.series
            for point in series.points
        ]
    )
    if frame.empty:
        return frame
    return frame.pivot(index="year", columns="label", values="value")


col1, col2 = st.columns(2)
with col1:
    usage_file = st.file_uploader("Upload app usage file", type=["csv", "xlsx", "xls"])
with col2:
    prices_file = st.file_uploader("Upload asset price file", type=["csv", "xlsx", "xls"])
    if prices_file is None:
        st.caption("Using bundled annual S&P 500 / Nasdaq / Bitcoin prices.")

st.subheader("Series 1: App usage by shichen")
if usage_file is None:
    st.info("Upload an app usage export to draw the polar usage chart.")
else:
    apps_text = st.text_input("Apps (comma separated)", value=", ".join(SETTINGS.default_apps))
    apps = [name.strip() for name in apps_text.split(",") if name.strip()]
    repository = UsageFileRepository(BytesIO(usage_file.getvalue()), suffix=Path(usage_file.name).suffix)
    usage = BuildUsageChartsUseCase(UsageChartContext(repository=repository)).execute(apps)
    if usage is None:
        st.error("Usage data could not be loaded.")
    else:
        tabs = st.tabs(list(usage.grids.keys()))
        for tab, (name, grid) in zip(tabs, usage.grids.items()):
            with tab:
                if grid.max_minutes <= 0:
                    st.warning(f"No usage recorded for {name}.")
                    continue
                st.metric("Total minutes", f"{grid.total_minutes:.1f}")
                st.caption(peak_annotation(grid) or "")
                st.dataframe(grid_to_dataframe(grid), use_container_width=True)
                st.download_button(
                    "Download grid CSV",
                    data=render_csv(grid_to_rows(grid, drawable_only=True)),
                    file_name=f"usage_{name}.csv",
                    mime="text/csv",
                    key=f"download_{name}",
                )

st.subheader("Series 2: Annual multi-asset prices")
normalize = st.checkbox("Normalize each asset to 1.0 at its first year", value=SETTINGS.normalize)
asset_keys = st.multiselect("Assets", options=list(SETTINGS.asset_keys()), default=list(SETTINGS.asset_keys()))
if prices_file is None:
    price_source: BytesIO | Path = SETTINGS.data_dir / "SP500_Nasdaq_BTC_20yrs_annual.csv"
    suffix = ".csv"
else:
    price_source = BytesIO(prices_file.getvalue())
    suffix = Path(prices_file.name).suffix
assets = BuildAssetChartUseCase(
    AssetChartContext(repository=AssetPriceFileRepository(price_source, suffix=suffix))
).execute(normalize=normalize, asset_keys=asset_keys)
if assets is None:
    st.error("Asset price data could not be loaded.")
elif assets.bundle.is_empty():
    st.warning("No asset has any price to draw.")
else:
    st.line_chart(bundle_to_dataframe(assets.bundle))
    y_min, y_max = assets.bundle.y_domain
    st.caption(f"Value domain [{y_min:.4g}, {y_max:.4g}]")
    st.download_button(
        "Download series CSV",
        data=render_csv(series_to_rows(assets.bundle)),
        file_name="asset_series.csv",
        mime="text/csv",
    )

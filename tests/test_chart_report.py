from chartprep.domain.models import AssetPriceRow, UsageRecord
from chartprep.domain.services import HourBucketAggregator, MultiAssetSeriesBuilder
from chartprep.presentation.chart_report import (
    grid_to_rows,
    peak_annotation,
    render_csv,
    render_html,
    series_to_rows,
    summary_rows,
)


def make_grid():
    record = UsageRecord(
        date_str="2025-01-01",
        app_name="X",
        minutes=tuple([30.0] + [0.0] * 22 + [45.0]),
        weekday="Wed",
    )
    return HourBucketAggregator().aggregate([record], "X")


def test_grid_rows_and_drawable_filter():
    grid = make_grid()

    assert len(grid_to_rows(grid)) == 12
    rows = grid_to_rows(grid, drawable_only=True)
    assert rows == [
        {
            "app_name": "X",
            "period_index": "0",
            "period_label": "子",
            "date": "2025-01-01",
            "date_index": "0",
            "weekday": "Wed",
            "minutes": "75",
        }
    ]


def test_peak_annotation_and_summary():
    grid = make_grid()

    assert peak_annotation(grid) == "Peak: 2025-01-01 (Wed) 子 · 75.0 min"
    assert summary_rows({"X": grid})[0]["total_minutes"] == "75.0"
    assert peak_annotation(HourBucketAggregator().aggregate([], "X")) is None


def test_series_rows():
    rows = [AssetPriceRow(2010, {"BTC": 0.09}), AssetPriceRow(2012, {"BTC": 5.28})]
    bundle = MultiAssetSeriesBuilder().build(rows, asset_keys=["BTC"], normalize=True)

    out = series_to_rows(bundle)

    assert [r["normalized_value"] for r in out] == ["1", "58.6667"]
    assert out[1]["raw_value"] == "5.28"


def test_render_csv_and_html():
    rows = [{"a": "1", "b": "2"}]

    assert render_csv(rows) == b"a,b\r\n1,2\r\n"
    assert render_csv([]) == b""
    assert "<th>a</th>" in render_html(rows)
    assert render_html([]) == "<p>Nothing to draw.</p>"


def test_render_html_escapes_cells():
    table = render_html([{"app<name>": "<script>alert(1)</script>", "minutes": "5 & 6"}])

    assert "<script>" not in table
    assert "<th>app&lt;name&gt;</th>" in table
    assert "<td>&lt;script&gt;alert(1)&lt;/script&gt;</td>" in table
    assert "<td>5 &amp; 6</td>" in table

import json
import logging
from pathlib import Path

from chartprep.application.export.use_cases import ExportChartDataUseCase
from chartprep.domain.export.entities import ExportFile, ExportRequest


def test_export_use_case_creates_run_directory(tmp_path: Path) -> None:
    use_case = ExportChartDataUseCase()
    request = ExportRequest(
        run_id="20241005_101500",
        files=[
            ExportFile(name="usage_grid.csv", content=b"grid-bytes"),
            ExportFile(name="asset_series.csv", content=b"series"),
        ],
        target=tmp_path / "exports",
    )

    receipt = use_case.execute(request)

    run_dir = tmp_path / "exports" / "20241005_101500"
    assert run_dir.is_dir()
    assert (run_dir / "usage_grid.csv").read_bytes() == b"grid-bytes"
    assert (run_dir / "asset_series.csv").read_bytes() == b"series"

    manifest = json.loads((run_dir / "manifest.json").read_text())
    assert manifest["run_id"] == "20241005_101500"
    assert manifest["files"] == [
        {"name": "usage_grid.csv", "bytes": len(b"grid-bytes")},
        {"name": "asset_series.csv", "bytes": len(b"series")},
    ]

    assert receipt is not None
    assert receipt.location == run_dir
    assert receipt.files == ("usage_grid.csv", "asset_series.csv")


def test_export_use_case_sanitizes_run_id(tmp_path: Path) -> None:
    request = ExportRequest(run_id=" demo run/../1 ", files=[], target=tmp_path)

    receipt = ExportChartDataUseCase().execute(request)

    assert receipt.location == tmp_path / "demorun1"
    assert json.loads((receipt.location / "manifest.json").read_text())["files"] == []


def test_export_use_case_falls_back_for_blank_run_id(tmp_path: Path) -> None:
    receipt = ExportChartDataUseCase().execute(ExportRequest(run_id=" / ", files=[], target=tmp_path))

    assert receipt.run_id == "run"
    assert (tmp_path / "run" / "manifest.json").is_file()


def test_export_without_target_writes_nothing(tmp_path: Path, caplog) -> None:
    calls: list[Path] = []

    def factory(root: Path):
        calls.append(root)
        raise AssertionError("repository must not be created")

    request = ExportRequest(run_id="run", files=[ExportFile(name="a.csv", content=b"a")], target=None)

    with caplog.at_level(logging.ERROR):
        receipt = ExportChartDataUseCase(repository_factory=factory).execute(request)

    assert receipt is None
    assert calls == []
    assert "no target directory" in caplog.text

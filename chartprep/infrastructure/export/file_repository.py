"""Filesystem repository for exported chart data runs."""
from __future__ import annotations

import json
import re
from pathlib import Path

from chartprep.domain.export.entities import ExportFile, ExportReceipt, ExportRequest


def _safe_run_id(run_id: str) -> str:
    """Reduce a run id to a single safe directory name."""
    return re.sub(r"[^0-9A-Za-z_-]+", "", run_id.strip()) or "run"


class FileSystemExportRepository:
    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    def save_run(self, request: ExportRequest) -> ExportReceipt:
        run_id = _safe_run_id(request.run_id)
        run_dir = self._root / run_id
        run_dir.mkdir(parents=True, exist_ok=True)

        for file in request.files:
            self._write_file(run_dir, file)

        manifest = {
            "run_id": run_id,
            "files": [self._manifest_entry(file) for file in request.files],
        }
        (run_dir / "manifest.json").write_text(json.dumps(manifest, indent=2, ensure_ascii=False), encoding="utf-8")

        return ExportReceipt(run_id=run_id, location=run_dir, files=tuple(file.name for file in request.files))

    @staticmethod
    def _write_file(run_dir: Path, export_file: ExportFile) -> None:
        target = run_dir / Path(export_file.name).name
        target.write_bytes(export_file.content)

    @staticmethod
    def _manifest_entry(export_file: ExportFile) -> dict[str, object]:
        return {"name": export_file.name, "bytes": len(export_file.content)}

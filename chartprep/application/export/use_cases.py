"""Export application use cases."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from chartprep.domain.export.entities import ExportReceipt, ExportRequest
from chartprep.infrastructure.export.file_repository import FileSystemExportRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ExportChartDataUseCase:
    repository_factory: Callable[[Path], FileSystemExportRepository] = FileSystemExportRepository

    def execute(self, request: ExportRequest) -> ExportReceipt | None:
        if not request.target:
            logger.error("Export %r has no target directory; nothing written", request.run_id)
            return None
        receipt = self.repository_factory(Path(request.target)).save_run(request)
        logger.info("Exported %d files to %s", len(receipt.files), receipt.location)
        return receipt

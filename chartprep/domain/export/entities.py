"""Export domain entities for storing chart data runs."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence


@dataclass(frozen=True)
class ExportFile:
    name: str
    content: bytes


@dataclass(frozen=True)
class ExportRequest:
    run_id: str
    files: Sequence[ExportFile] = field(default_factory=tuple)
    target: Path | None = None


@dataclass(frozen=True)
class ExportReceipt:
    run_id: str
    location: Path
    files: Sequence[str] = field(default_factory=tuple)

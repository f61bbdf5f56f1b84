"""Errors raised at the ingestion boundary."""
from __future__ import annotations


class DataLoadError(ValueError):
    """A dataset could not be read or lacks its required columns."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source

"""Exception types raised by the optimizer pipeline."""

from __future__ import annotations

from pathlib import Path


class OptimizerError(Exception):
    """Base class for failures that abort an optimization run."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = str(path) if path is not None else None
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.path:
            return f"{message} ({self.path})"
        return message


class ScanError(OptimizerError):
    """Raised when the source tree cannot be walked or a source file read."""


class StylesheetReadError(OptimizerError):
    """Raised when the source stylesheet cannot be read."""


class OutputError(OptimizerError):
    """Raised when an output artifact cannot be written."""

"""Exceptions raised by the digest pipeline."""

from __future__ import annotations

from pathlib import Path


class DigestError(Exception):
    """Base class for digest failures that abort a run."""


class ProjectNotFoundError(DigestError, FileNotFoundError):
    """The project directory does not exist or is not a directory."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Project directory not found: {self.path}")


class DigestWriteError(DigestError, OSError):
    """Wraps an OSError raised while touching the output file."""

    def __init__(self, path: Path | str, operation: str, cause: Exception) -> None:
        self.path = Path(path)
        self.operation = operation
        super().__init__(f"Failed to {operation} digest file '{self.path}': {cause}")
        self.__cause__ = cause


class DigestCancelledError(DigestError):
    """The run was cancelled before the digest was written."""

"""Project enumeration."""

from digestai.scanner.models import FileCandidate, ScanResult
from digestai.scanner.walker import scan_project

__all__ = [
    "FileCandidate",
    "ScanResult",
    "scan_project",
]

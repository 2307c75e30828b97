"""DigestAI - aggregate a codebase into one Markdown digest for AI assistants."""

from digestai.config import DigestConfig, DigestSettings, load_settings
from digestai.errors import (
    DigestCancelledError,
    DigestError,
    DigestWriteError,
    ProjectNotFoundError,
)
from digestai.filters import FilterEngine, InclusionDecision, Reason, matches
from digestai.output import DigestResult, DigestWriter
from digestai.scanner import FileCandidate, scan_project
from digestai.tree import TreeRenderer

__version__ = "0.1.0"

__all__ = [
    "DigestCancelledError",
    "DigestConfig",
    "DigestError",
    "DigestResult",
    "DigestSettings",
    "DigestWriteError",
    "DigestWriter",
    "FileCandidate",
    "FilterEngine",
    "InclusionDecision",
    "ProjectNotFoundError",
    "Reason",
    "TreeRenderer",
    "load_settings",
    "matches",
    "scan_project",
]

"""Recursive project enumeration."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from digestai.scanner.models import FileCandidate, ScanResult, printable_path

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64


def scan_project(
    root: Path,
    *,
    prune: Callable[[str], bool] | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ScanResult:
    """Walk *root* and collect every regular file as a FileCandidate.

    Symlinked directories are not followed. Directories whose name makes
    *prune* return True are skipped entirely, as is anything deeper than
    *max_depth* levels below *root*. Directories that cannot be listed are
    recorded in ``denied_dirs`` and the walk continues.
    """
    root = root.resolve()
    result = ScanResult()

    def _on_error(err: OSError) -> None:
        failed = Path(err.filename) if err.filename else root
        rel = _relative(root, failed)
        logger.warning("Cannot list directory %s: %s", rel or ".", err.strerror or err)
        if rel:
            result.denied_dirs.append(rel)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        current = Path(dirpath)
        depth = len(current.relative_to(root).parts)

        kept = sorted(d for d in dirnames if not (prune and prune(d)))
        if depth >= max_depth and kept:
            logger.warning(
                "Max depth %d reached at %s, skipping %d subdirectories",
                max_depth,
                _relative(root, current) or ".",
                len(kept),
            )
            kept = []
        dirnames[:] = kept

        for filename in sorted(filenames):
            path = current / filename
            try:
                st = path.stat()
            except OSError as e:
                logger.warning("Skipping %s: %s", _relative(root, path), e.strerror or e)
                continue
            if not path.is_file():
                continue
            candidate = FileCandidate.from_path(root, path, st.st_size)
            if candidate.name != filename:
                logger.warning(
                    "File name %r is not valid UTF-8, shown as %s", filename, candidate.relative_path
                )
            result.candidates.append(candidate)

    result.denied_dirs.sort()
    logger.debug(
        "Scanned %s: %d files, %d unreadable directories",
        root,
        len(result.candidates),
        len(result.denied_dirs),
    )
    return result


def _relative(root: Path, path: Path) -> str:
    try:
        rel = path.relative_to(root).as_posix()
    except ValueError:
        return printable_path(path.as_posix())
    return "" if rel == "." else printable_path(rel)

"""DigestWriter — scans a project and streams the digest document to disk."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
import threading
from collections import deque
from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from digestai.config.models import DigestConfig
from digestai.errors import DigestCancelledError, DigestWriteError, ProjectNotFoundError
from digestai.filters.engine import FilterEngine, Reason
from digestai.output.languages import language_for
from digestai.scanner.models import FileCandidate
from digestai.scanner.walker import scan_project
from digestai.tree.renderer import TreeRenderer

logger = logging.getLogger(__name__)

# File blocks stay in memory up to this size before spilling to disk.
SPOOL_MAX_BYTES = 8 * 1024 * 1024

ProgressCallback = Callable[[int, int, str], None]


@dataclass
class DigestResult:
    """Outcome of a digest run."""

    output_path: Path
    written: bool = False
    files_included: list[str] = field(default_factory=list)
    skipped: list[tuple[str, str]] = field(default_factory=list)  # (relative path, reason)


def read_source(path: Path) -> str:
    """Read a file as strict UTF-8, keeping its newlines untouched."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def format_header(count: int, tree_text: str) -> str:
    return (
        f"Total files included: {count}\n"
        "\n"
        "## Project Structure\n"
        "\n"
        "```\n"
        f"{tree_text}\n"
        "```\n"
        "\n"
        "---\n"
    )


def format_file_block(relative_path: str, language: str, content: str) -> str:
    if content and not content.endswith("\n"):
        content += "\n"
    return (
        "\n"
        f"## File: `{relative_path}`\n"
        f"Language: `{language}`\n"
        "\n"
        f"```{language}\n"
        f"{content}"
        "```\n"
        "\n"
        "---\n"
    )


class DigestWriter:
    """Builds the digest for one configured project.

    File contents are read by a small thread pool but written strictly in
    sorted relative-path order. Blocks are spooled while reading, so the
    header can report the number of files actually written; the final
    document is then written to a temp file and renamed into place.
    """

    def __init__(
        self,
        config: DigestConfig,
        *,
        engine: FilterEngine | None = None,
        renderer: TreeRenderer | None = None,
        cancel: threading.Event | None = None,
        progress: ProgressCallback | None = None,
    ) -> None:
        self.config = config
        self.engine = engine or FilterEngine(config)
        self.renderer = renderer or TreeRenderer()
        self.cancel = cancel
        self.progress = progress

    def generate(self) -> DigestResult:
        cfg = self.config
        root = cfg.project_path
        if not root.is_dir():
            raise ProjectNotFoundError(root)

        output = cfg.output_path
        self._remove_existing(output)
        result = DigestResult(output_path=output)

        logger.info("Scanning project: %s", root)
        scan = scan_project(root, prune=self.engine.prunes_directory, max_depth=cfg.max_depth)
        selected, tree_paths = self._select(scan.candidates, output, result)
        logger.info("Found %d relevant files to include", len(selected))

        denied = [d for d in scan.denied_dirs if not self.engine.is_tree_hidden(d.split("/"))]

        with tempfile.SpooledTemporaryFile(
            max_size=SPOOL_MAX_BYTES, mode="w+", encoding="utf-8", newline=""
        ) as spool:
            try:
                written, failed = self._stream_blocks(selected, spool, result)
            except OSError as e:
                raise DigestWriteError(output, "buffer", e) from e

            if not written:
                logger.warning("No relevant files found to generate the digest for %s", root)
                return result

            if cfg.tree_mode == "included":
                tree_paths = written
            else:
                tree_paths = [p for p in tree_paths if p not in failed]
            tree_text = self.renderer.render_text(root, tree_paths, denied)

            self._check_cancelled()
            self._write_document(output, format_header(len(written), tree_text), spool)

        result.written = True
        result.files_included = written
        logger.info("Digest written to %s (%d files)", output, len(written))
        return result

    # -- selection ---------------------------------------------------------

    def _select(
        self,
        candidates: Iterable[FileCandidate],
        output: Path,
        result: DigestResult,
    ) -> tuple[list[FileCandidate], list[str]]:
        """Classify candidates; return digest files in ordinal order plus tree paths."""
        log_exclusion = logger.info if self.config.verbose else logger.debug
        output_resolved = output.resolve()
        selected: list[FileCandidate] = []
        tree_paths: list[str] = []

        for candidate in candidates:
            if candidate.absolute_path.resolve() == output_resolved:
                continue
            decision = self.engine.classify(candidate)
            if decision.include_in_tree:
                tree_paths.append(candidate.relative_path)
            if decision.include_in_digest:
                selected.append(candidate)
            elif decision.reason is Reason.too_large:
                logger.info(
                    "Skipping %s: %d bytes exceeds the %d byte limit",
                    candidate.relative_path,
                    candidate.size_bytes,
                    self.config.max_file_size_bytes,
                )
                result.skipped.append((candidate.relative_path, decision.reason.value))
            else:
                log_exclusion("Excluded %s (%s)", candidate.relative_path, decision.reason.value)

        # Plain str ordering is ordinal (code point) ordering.
        selected.sort(key=lambda c: c.relative_path)
        return selected, tree_paths

    # -- reading -----------------------------------------------------------

    def _stream_blocks(
        self,
        selected: list[FileCandidate],
        spool: TextIO,
        result: DigestResult,
    ) -> tuple[list[str], set[str]]:
        written: list[str] = []
        failed: set[str] = set()
        total = len(selected)

        for index, (candidate, content, error) in enumerate(self._read_in_order(selected), 1):
            rel = candidate.relative_path
            if self.progress is not None:
                self.progress(index, total, rel)
            if error is not None:
                logger.warning("Skipping %s due to read error: %s", rel, error)
                result.skipped.append((rel, f"read error: {error}"))
                failed.add(rel)
                continue

            spool.write(format_file_block(rel, language_for(candidate.extension), content))
            written.append(rel)
            if len(written) % self.config.flush_every == 0:
                spool.flush()

        spool.flush()
        return written, failed

    def _read_in_order(
        self, candidates: list[FileCandidate]
    ) -> Iterator[tuple[FileCandidate, str | None, Exception | None]]:
        """Read files concurrently, yielding results in input order.

        At most ``2 * max_workers`` reads are in flight at any time.
        """
        window_size = 2 * self.config.max_workers
        pending = iter(candidates)
        window: deque[tuple[FileCandidate, Future[str]]] = deque()

        with ThreadPoolExecutor(
            max_workers=self.config.max_workers, thread_name_prefix="digestai-read"
        ) as pool:
            def _submit_next() -> None:
                candidate = next(pending, None)
                if candidate is not None:
                    window.append((candidate, pool.submit(read_source, candidate.absolute_path)))

            for _ in range(window_size):
                _submit_next()

            while window:
                self._check_cancelled()
                candidate, future = window.popleft()
                try:
                    outcome = (candidate, future.result(), None)
                except (OSError, UnicodeDecodeError) as e:
                    outcome = (candidate, None, e)
                # Refill only once the head read is done, keeping the window bound.
                _submit_next()
                yield outcome

    # -- output ------------------------------------------------------------

    def _remove_existing(self, output: Path) -> None:
        if not output.exists() and not output.is_symlink():
            return
        try:
            output.unlink()
        except OSError as e:
            raise DigestWriteError(output, "delete existing", e) from e
        logger.debug("Removed existing digest %s", output)

    def _write_document(self, output: Path, header: str, spool: TextIO) -> None:
        """Write header plus spooled blocks to a temp file, then rename it over *output*."""
        tmp_path: str | None = None
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{output.name}.", suffix=".tmp", dir=output.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as out:
                out.write(header)
                spool.seek(0)
                shutil.copyfileobj(spool, out)
                out.flush()
            os.replace(tmp_path, output)
            tmp_path = None
        except OSError as e:
            raise DigestWriteError(output, "write", e) from e
        finally:
            if tmp_path is not None:
                _discard(Path(tmp_path))

    def _check_cancelled(self) -> None:
        if self.cancel is not None and self.cancel.is_set():
            raise DigestCancelledError("Digest generation cancelled")


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not remove temp file %s: %s", path, e)

"""Shared test fixtures for DigestAI."""

import logging
import os
from pathlib import Path

import pytest

from digestai.config.models import DigestConfig, DigestSettings
from digestai.scanner.models import FileCandidate


def write_file(root: Path, rel: str, content: str = "") -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def sample_project(tmp_path):
    """Project with a source file, an ignored folder, a README and VCS metadata."""
    root = tmp_path / "proj"
    root.mkdir()
    write_file(root, "src/a.py", "x = 1\n" * 33 + "#\n")  # 200 bytes
    write_file(root, "bin/ignored.cs", "class Ignored {}\n")
    write_file(root, "README.md", "# Project\n")
    write_file(root, ".git/config", "[core]\n")
    return root


@pytest.fixture
def make_config(tmp_path):
    """Factory for DigestConfig pointing at a project and an output file under tmp_path."""

    def _make(project: Path, **kwargs) -> DigestConfig:
        kwargs.setdefault("output_path", tmp_path / "out" / "digest.md")
        return DigestConfig(project_path=project, **kwargs)

    return _make


@pytest.fixture
def sample_settings():
    return DigestSettings()


@pytest.fixture
def make_candidate():
    """Factory for in-memory FileCandidates (no file on disk)."""

    def _make(rel: str, size: int = 10) -> FileCandidate:
        path = Path("/proj") / rel
        return FileCandidate(
            absolute_path=path,
            relative_path=rel,
            name=path.name,
            extension=path.suffix.lower(),
            size_bytes=size,
        )

    return _make


@pytest.fixture
def make_file():
    """Return the write_file helper: make_file(root, rel, content)."""
    return write_file


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo handlers and levels installed by CLI invocations."""
    pkg_logger = logging.getLogger("digestai")
    handlers = list(pkg_logger.handlers)
    level = pkg_logger.level
    yield
    pkg_logger.handlers[:] = handlers
    pkg_logger.setLevel(level)


@pytest.fixture
def make_raw_file():
    """Create a file whose name is given as raw bytes; skip where the OS refuses it."""

    def _make(root: Path, raw_name: bytes, content: str = "") -> Path:
        root.mkdir(parents=True, exist_ok=True)
        path = root / os.fsdecode(raw_name)
        try:
            path.write_text(content, encoding="utf-8")
        except (OSError, UnicodeError) as e:
            pytest.skip(f"filesystem rejects non-UTF-8 names: {e}")
        return path

    return _make

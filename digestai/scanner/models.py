"""Models for directory enumeration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, ConfigDict, Field


def printable_path(text: str) -> str:
    """Replace bytes that are not valid UTF-8 in a file name with U+FFFD.

    ``os.walk`` hands such names back as lone surrogates, which cannot be
    written to a UTF-8 document.
    """
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


class FileCandidate(BaseModel):
    """A file found under the project root."""

    model_config = ConfigDict(frozen=True)

    absolute_path: Path
    relative_path: str = Field(description="Path relative to the project root, '/' separated")
    name: str
    extension: str = Field(description="Lowercased suffix including the dot, or ''")
    size_bytes: int = Field(ge=0)

    @property
    def directory_parts(self) -> tuple[str, ...]:
        """Directory segments between the project root and the file."""
        return PurePosixPath(self.relative_path).parts[:-1]

    @classmethod
    def from_path(cls, root: Path, path: Path, size_bytes: int) -> FileCandidate:
        rel = printable_path(path.relative_to(root).as_posix())
        name = printable_path(path.name)
        return cls(
            absolute_path=path,
            relative_path=rel,
            name=name,
            extension=PurePosixPath(name).suffix.lower(),
            size_bytes=size_bytes,
        )


@dataclass
class ScanResult:
    """Output of a project scan."""

    candidates: list[FileCandidate] = field(default_factory=list)
    denied_dirs: list[str] = field(default_factory=list)  # relative posix paths

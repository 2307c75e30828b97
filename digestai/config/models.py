from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

_BYTES_PER_MB = 1024 * 1024

TreeMode = Literal["included", "all"]


def normalize_extension(ext: str) -> str:
    """Lowercase an extension and make sure it starts with a dot."""
    ext = ext.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


class DigestSettings(BaseModel):
    """File-backed defaults, loaded from digestai.yaml."""

    output: str = "digestedCode.txt"
    exclude_patterns: list[str] = Field(default_factory=list)
    include_extensions: list[str] = Field(default_factory=list)
    max_file_size_mb: int = 10
    tree_mode: TreeMode = "included"
    max_workers: int = Field(default=4, gt=0)
    flush_every: int = Field(default=32, gt=0)
    max_depth: int = Field(default=64, gt=0)
    log_level: Literal["debug", "info", "warn", "error"] = "info"


class DigestConfig(BaseModel):
    """Resolved, immutable configuration for a single digest run."""

    model_config = ConfigDict(frozen=True)

    project_path: Path
    output_path: Path
    exclude_patterns: frozenset[str] = frozenset()
    include_extensions: frozenset[str] = frozenset()
    max_file_size_bytes: int = Field(default=10 * _BYTES_PER_MB, ge=0)
    verbose: bool = False
    tree_mode: TreeMode = "included"
    max_workers: int = Field(default=4, gt=0)
    flush_every: int = Field(default=32, gt=0)
    max_depth: int = Field(default=64, gt=0)

    @field_validator("project_path", "output_path")
    @classmethod
    def _absolute(cls, v: Path) -> Path:
        return Path(v).expanduser().absolute()

    @field_validator("exclude_patterns")
    @classmethod
    def _strip_patterns(cls, v: frozenset[str]) -> frozenset[str]:
        return frozenset(p.strip() for p in v if p.strip())

    @field_validator("include_extensions")
    @classmethod
    def _normalize_extensions(cls, v: frozenset[str]) -> frozenset[str]:
        return frozenset(e for e in (normalize_extension(x) for x in v) if e)

    @classmethod
    def from_mb(cls, max_file_size_mb: int, **kwargs) -> "DigestConfig":
        """Build a config from a size limit in megabytes (<= 0 disables it)."""
        size = max_file_size_mb * _BYTES_PER_MB if max_file_size_mb > 0 else 0
        return cls(max_file_size_bytes=size, **kwargs)

    @classmethod
    def from_settings(
        cls,
        settings: DigestSettings,
        project_path: Path | str,
        **overrides,
    ) -> "DigestConfig":
        """Merge file settings with explicit overrides (None values are ignored)."""
        overrides = {k: v for k, v in overrides.items() if v is not None}
        exclude = set(settings.exclude_patterns) | set(overrides.pop("exclude_patterns", ()))
        include = set(settings.include_extensions) | set(overrides.pop("include_extensions", ()))
        max_mb = overrides.pop("max_file_size_mb", settings.max_file_size_mb)
        output = overrides.pop("output_path", settings.output)
        fields = {
            "tree_mode": settings.tree_mode,
            "max_workers": settings.max_workers,
            "flush_every": settings.flush_every,
            "max_depth": settings.max_depth,
        }
        fields.update(overrides)
        return cls.from_mb(
            max_mb,
            project_path=project_path,
            output_path=output,
            exclude_patterns=frozenset(exclude),
            include_extensions=frozenset(include),
            **fields,
        )

"""YAML settings loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import DigestSettings

SETTINGS_FILENAME = "digestai.yaml"


def load_settings(cli_path: str | None = None) -> DigestSettings:
    """Load settings with resolution order: CLI > project-local > user-global > defaults."""
    settings_paths = [
        Path(cli_path) if cli_path else None,
        Path(".") / SETTINGS_FILENAME,
        Path.home() / ".digestai" / "config.yaml",
    ]

    for path in settings_paths:
        if path and path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                if not isinstance(raw, dict):
                    raise ValueError(f"Invalid settings in {path}: expected a mapping")
                raw = _expand_env_vars(raw)
                return DigestSettings(**raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid settings in {path}: {e}") from e

    return DigestSettings()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `digestai config init`
DEFAULT_SETTINGS_TEMPLATE = """\
# digestai.yaml

# Output file (relative paths resolve against the working directory)
output: "digestedCode.txt"

# Extra file-name patterns to ignore (exact name or a single * wildcard)
exclude_patterns: []
#  - "*.generated.ts"
#  - "fixtures.*"

# Extra extensions to include on top of the built-in list
include_extensions: []
#  - ".toml"
#  - ".proto"

# Files larger than this are skipped (0 disables the limit)
max_file_size_mb: 10

# Tree rendering: "included" shows only folders holding digested files,
# "all" shows every file outside VCS/IDE/build folders
tree_mode: "included"

# Concurrent file reads
max_workers: 4

# Flush the output buffer every N file blocks
flush_every: 32

# Maximum directory depth to scan
max_depth: 64

# Logging
log_level: "info"              # debug | info | warn | error
"""

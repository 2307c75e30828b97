"""Connector-style text tree of the project's files."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from digestai.scanner.models import printable_path

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "
ACCESS_DENIED = "[Access Denied]"

# Marks a directory whose listing failed.
_DENIED = object()


class TreeRenderer:
    """Renders relative file paths as a tree rooted at the project folder.

    Only directories that are ancestors of a rendered path appear. Entries
    within a level are sorted by name (ordinal), files and folders mixed.
    """

    def render(
        self,
        project_path: Path | str,
        paths: Iterable[str],
        denied_dirs: Iterable[str] = (),
    ) -> list[str]:
        root = _build(paths, denied_dirs)
        lines = [f"{printable_path(Path(project_path).name)}/"]
        self._render_level(root, "", lines)
        return lines

    def render_text(
        self,
        project_path: Path | str,
        paths: Iterable[str],
        denied_dirs: Iterable[str] = (),
    ) -> str:
        return "\n".join(self.render(project_path, paths, denied_dirs))

    def _render_level(self, node: dict, prefix: str, lines: list[str]) -> None:
        if node.get(_DENIED):
            lines.append(f"{prefix}{LAST_BRANCH}{ACCESS_DENIED}")
            return
        names = sorted(k for k in node if isinstance(k, str))
        for i, name in enumerate(names):
            is_last = i == len(names) - 1
            child = node[name]
            connector = LAST_BRANCH if is_last else BRANCH
            if child is None:
                lines.append(f"{prefix}{connector}{name}")
                continue
            lines.append(f"{prefix}{connector}{name}/")
            self._render_level(child, prefix + (SPACE if is_last else PIPE), lines)


def _build(paths: Iterable[str], denied_dirs: Iterable[str]) -> dict:
    """Nest paths into dicts: directories map to dicts, files to None."""
    root: dict = {}
    for path in paths:
        parts = [p for p in path.split("/") if p]
        if not parts:
            continue
        node = root
        for part in parts[:-1]:
            child = node.get(part)
            if child is None:
                child = node[part] = {}
            node = child
        node.setdefault(parts[-1], None)
    for rel in denied_dirs:
        node = root
        for part in (p for p in rel.split("/") if p):
            child = node.get(part)
            if child is None:
                child = node[part] = {}
            node = child
        if node is not root:
            node[_DENIED] = True
    return root

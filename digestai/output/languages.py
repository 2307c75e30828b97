"""Fence language tags by file extension."""

from __future__ import annotations

DEFAULT_LANGUAGE = "text"

LANGUAGES: dict[str, str] = {
    ".cs": "csharp",
    ".js": "javascript",
    ".ts": "typescript",
    ".jsx": "jsx",
    ".tsx": "tsx",
    ".py": "python",
    ".java": "java",
    ".cpp": "cpp", ".cxx": "cpp", ".cc": "cpp", ".c++": "cpp",
    # C/C++ headers highlight best as cpp
    ".h": "cpp", ".hpp": "cpp", ".hh": "cpp",
    ".c": "c",
    ".html": "html", ".htm": "html",
    ".css": "css",
    ".scss": "scss", ".sass": "scss",
    ".vue": "vue",
    ".php": "php",
    ".rb": "ruby",
    ".go": "go",
    ".rs": "rust",
    ".kt": "kotlin", ".kts": "kotlin",
    ".swift": "swift",
    ".sql": "sql",
    ".json": "json",
    ".xml": "xml",
    ".yaml": "yaml", ".yml": "yaml",
    ".md": "markdown", ".markdown": "markdown",
    ".sh": "bash",
    ".ps1": "powershell",
    ".fs": "fsharp", ".fsi": "fsharp", ".fsx": "fsharp",
    ".csproj": "xml",
    ".sln": "text",
    ".txt": "text",
}


def language_for(extension: str) -> str:
    """Return the fence tag for *extension*, falling back to ``text``."""
    return LANGUAGES.get(extension.lower(), DEFAULT_LANGUAGE)

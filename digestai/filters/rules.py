"""Built-in filtering rules.

These sets are the immutable base. Per-run additions from the config are
merged with :meth:`RuleSet.extended`, which returns a new instance.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from digestai.config.models import normalize_extension

# Always included unless inside an ignored folder (case-insensitive).
PRIORITY_FILES: frozenset[str] = frozenset({
    "README", "README.md", "README.txt", "README.rst",
    "CHANGELOG", "CHANGELOG.md", "CHANGELOG.txt",
    "LICENSE", "LICENSE.md", "LICENSE.txt",
})

IGNORED_FOLDERS: frozenset[str] = frozenset({
    # .NET
    "bin", "obj", "packages", "TestResults", ".vs", "publish",
    # Frontend
    "node_modules", "dist", "build", "out", ".next", ".nuxt", ".svelte-kit",
    # Python
    "__pycache__", ".venv", "venv", ".tox", ".mypy_cache", ".pytest_cache",
    # Caches and temp
    ".vscode", ".idea", "temp", "tmp", ".cache", ".parcel-cache",
    # Version control
    ".git", ".svn", ".hg",
    # Coverage
    "coverage", "nyc_output", ".nyc_output", "TestCoverage",
    # Logs
    "logs", "log",
})

IGNORED_PATTERNS: frozenset[str] = frozenset({
    # Sensitive config
    "appsettings.json", "appsettings.*.json", "secrets.json", "web.config",
    "app.config", "connectionstrings.json",
    # Build output
    "*.dll", "*.pdb", "*.exe", "*.msi", "*.nupkg", "*.snupkg",
    "GlobalAssemblyInfo.cs", "AssemblyInfo.cs", "*.Generated.cs",
    "*.pyc", "*.pyo", "*.so",
    # Lock files
    "package-lock.json", "yarn.lock", "pnpm-lock.yaml", "composer.lock",
    "poetry.lock", "uv.lock",
    # Bundled / generated frontend
    "*.min.js", "*.min.css", "*.map", "*.bundle.js", "*.chunk.js",
    "manifest.json",
    # Environment and secrets
    ".env", ".env.*", "*.pem", "*.key", "*.crt", "*.pfx",
    # Git
    ".gitignore", ".gitattributes", ".gitmodules",
    # Editor
    "*.swp", "*.swo", "*~", "*.user", "*.suo", "*.userprefs",
    # Coverage
    "*.coverage", "coverage.xml", "*.lcov",
    # Logs
    "*.log", "npm-debug.log*", "yarn-debug.log*", "lerna-debug.log*",
    # OS
    ".DS_Store", "Thumbs.db", "ehthumbs.db",
    # Docs
    "CONTRIBUTING.md",
    # Databases
    "*.db", "*.sqlite", "*.sqlite3", "*.mdf", "*.ldf",
    # Backups
    "*.bak", "*.backup", "*.old", "*.orig",
})

ALLOWED_EXTENSIONS: frozenset[str] = frozenset({
    ".cs", ".js", ".ts", ".jsx", ".tsx", ".py", ".java",
    ".cpp", ".h", ".hpp", ".hh", ".c", ".cc",
    ".html", ".css", ".scss", ".vue", ".php", ".rb", ".go", ".rs",
    ".sql", ".json", ".xml", ".yaml", ".yml", ".md", ".txt",
    ".sh", ".ps1", ".csproj", ".sln",
})

# Noise folders hidden from the tree when every file is shown.
TREE_HIDDEN_FOLDERS: frozenset[str] = frozenset({
    ".git", ".svn", ".hg", ".vs", ".vscode", ".idea",
    "node_modules", "__pycache__", ".venv", "venv",
    "bin", "obj", "dist", "build", "out",
})


def _lower(items: Iterable[str]) -> frozenset[str]:
    return frozenset(i.lower() for i in items)


@dataclass(frozen=True)
class RuleSet:
    """Inclusion rules. Folder and file names are stored lowercased."""

    priority_files: frozenset[str]
    ignored_folders: frozenset[str]
    ignored_patterns: frozenset[str]
    allowed_extensions: frozenset[str]
    tree_hidden_folders: frozenset[str]

    @classmethod
    def build(
        cls,
        *,
        priority_files: Iterable[str] = PRIORITY_FILES,
        ignored_folders: Iterable[str] = IGNORED_FOLDERS,
        ignored_patterns: Iterable[str] = IGNORED_PATTERNS,
        allowed_extensions: Iterable[str] = ALLOWED_EXTENSIONS,
        tree_hidden_folders: Iterable[str] = TREE_HIDDEN_FOLDERS,
    ) -> RuleSet:
        return cls(
            priority_files=_lower(priority_files),
            ignored_folders=_lower(ignored_folders),
            ignored_patterns=frozenset(ignored_patterns),
            allowed_extensions=frozenset(
                e for e in (normalize_extension(x) for x in allowed_extensions) if e
            ),
            tree_hidden_folders=_lower(tree_hidden_folders),
        )

    def extended(
        self,
        *,
        exclude_patterns: Iterable[str] = (),
        include_extensions: Iterable[str] = (),
    ) -> RuleSet:
        """Return a copy with extra ignore patterns and allowed extensions."""
        extra_ext = {e for e in (normalize_extension(x) for x in include_extensions) if e}
        return replace(
            self,
            ignored_patterns=self.ignored_patterns | frozenset(exclude_patterns),
            allowed_extensions=self.allowed_extensions | extra_ext,
        )


DEFAULT_RULES = RuleSet.build()

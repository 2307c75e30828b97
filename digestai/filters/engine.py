"""Per-file inclusion decisions for the digest body and the tree."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from digestai.config.models import DigestConfig
from digestai.filters.patterns import matches_any
from digestai.filters.rules import DEFAULT_RULES, RuleSet
from digestai.scanner.models import FileCandidate


class Reason(str, Enum):
    """Why a file was included in or excluded from the digest."""

    priority = "priority"
    ignored_folder = "ignored-folder"
    ignored_pattern = "ignored-pattern"
    not_allowed_extension = "not-allowed-extension"
    too_large = "too-large"
    included = "included"


@dataclass(frozen=True)
class InclusionDecision:
    candidate: FileCandidate
    include_in_digest: bool
    include_in_tree: bool
    reason: Reason


class FilterEngine:
    """Classifies candidates against the built-in rules plus config additions.

    The merged rule set is computed once and never mutated, so a single
    engine can be shared by concurrent readers.
    """

    def __init__(self, config: DigestConfig, rules: RuleSet = DEFAULT_RULES) -> None:
        self.config = config
        self.rules = rules.extended(
            exclude_patterns=config.exclude_patterns,
            include_extensions=config.include_extensions,
        )

    def classify(self, candidate: FileCandidate) -> InclusionDecision:
        reason = self._digest_reason(candidate)
        in_digest = reason in (Reason.priority, Reason.included)
        if self.config.tree_mode == "all":
            in_tree = not self.is_tree_hidden(candidate.relative_path.split("/"))
        else:
            in_tree = in_digest
        return InclusionDecision(
            candidate=candidate,
            include_in_digest=in_digest,
            include_in_tree=in_tree,
            reason=reason,
        )

    def _digest_reason(self, candidate: FileCandidate) -> Reason:
        # Folder exclusion outranks priority files.
        if any(part.lower() in self.rules.ignored_folders for part in candidate.directory_parts):
            return Reason.ignored_folder

        if candidate.name.lower() in self.rules.priority_files:
            return Reason.priority

        if matches_any(candidate.name, self.rules.ignored_patterns):
            return Reason.ignored_pattern

        limit = self.config.max_file_size_bytes
        if limit > 0 and candidate.size_bytes > limit:
            return Reason.too_large

        if candidate.extension and candidate.extension in self.rules.allowed_extensions:
            return Reason.included

        return Reason.not_allowed_extension

    def is_tree_hidden(self, parts: list[str] | tuple[str, ...]) -> bool:
        """True if any path segment is a tree noise folder."""
        return any(p.lower() in self.rules.tree_hidden_folders for p in parts)

    def prunes_directory(self, name: str) -> bool:
        """True if nothing under a directory called *name* can be shown.

        In "included" tree mode an ignored folder contributes nothing. In
        "all" mode the folder must also be hidden from the tree.
        """
        key = name.lower()
        if key not in self.rules.ignored_folders:
            return False
        if self.config.tree_mode == "all":
            return key in self.rules.tree_hidden_folders
        return True

"""Tests for digestai.filters — rule sets and FilterEngine."""

from pathlib import Path

import pytest

from digestai.config.models import DigestConfig
from digestai.filters.engine import FilterEngine, Reason
from digestai.filters.rules import DEFAULT_RULES, IGNORED_PATTERNS, RuleSet


def _config(**kwargs) -> DigestConfig:
    return DigestConfig(project_path=Path("/proj"), output_path=Path("/out/digest.md"), **kwargs)


@pytest.fixture
def engine():
    return FilterEngine(_config())


# ── Rule sets ────────────────────────────────────────────────────────


class TestRuleSet:
    def test_default_rules_are_lowercased(self):
        assert "testresults" in DEFAULT_RULES.ignored_folders
        assert "readme.md" in DEFAULT_RULES.priority_files

    def test_extended_returns_new_instance(self):
        extended = DEFAULT_RULES.extended(
            exclude_patterns={"*.gen.py"}, include_extensions={"toml", ".PROTO"}
        )
        assert extended is not DEFAULT_RULES
        assert "*.gen.py" in extended.ignored_patterns
        assert {".toml", ".proto"} <= extended.allowed_extensions
        # Base is untouched
        assert "*.gen.py" not in DEFAULT_RULES.ignored_patterns
        assert ".toml" not in DEFAULT_RULES.allowed_extensions
        assert DEFAULT_RULES.ignored_patterns == IGNORED_PATTERNS

    def test_rule_set_is_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_RULES.ignored_patterns = frozenset()  # type: ignore[misc]

    def test_build_normalizes_extensions(self):
        rules = RuleSet.build(allowed_extensions=["PY", ".Rs", ""])
        assert rules.allowed_extensions == frozenset({".py", ".rs"})


# ── Classification order ─────────────────────────────────────────────


class TestClassify:
    def test_included_by_extension(self, engine, make_candidate):
        d = engine.classify(make_candidate("src/a.py"))
        assert d.include_in_digest is True
        assert d.reason is Reason.included

    def test_folder_ignored(self, engine, make_candidate):
        d = engine.classify(make_candidate("bin/ignored.cs"))
        assert d.include_in_digest is False
        assert d.reason is Reason.ignored_folder

    def test_folder_match_is_case_insensitive(self, engine, make_candidate):
        d = engine.classify(make_candidate("src/Node_Modules/lib/index.js"))
        assert d.reason is Reason.ignored_folder

    def test_folder_ignored_outranks_priority(self, engine, make_candidate):
        d = engine.classify(make_candidate("bin/README.md"))
        assert d.include_in_digest is False
        assert d.reason is Reason.ignored_folder

    def test_only_directory_segments_count(self, engine, make_candidate):
        # A file named like an ignored folder is not folder-ignored.
        d = engine.classify(make_candidate("src/build"))
        assert d.reason is Reason.not_allowed_extension

    def test_priority_bypasses_patterns_and_extension(self, engine, make_candidate):
        for name in ("README", "readme.md", "CHANGELOG.md", "LICENSE", "License.txt"):
            d = engine.classify(make_candidate(f"docs/{name}"))
            assert d.reason is Reason.priority, name
            assert d.include_in_digest is True

    def test_priority_bypasses_size_limit(self, make_candidate):
        engine = FilterEngine(_config(max_file_size_bytes=5))
        d = engine.classify(make_candidate("README.md", size=10_000))
        assert d.include_in_digest is True

    def test_ignored_pattern(self, engine, make_candidate):
        d = engine.classify(make_candidate("config/appsettings.Production.json"))
        assert d.reason is Reason.ignored_pattern
        assert d.include_in_digest is False

    def test_pattern_checked_before_extension(self, engine, make_candidate):
        d = engine.classify(make_candidate("static/app.min.js"))
        assert d.reason is Reason.ignored_pattern

    def test_user_exclude_pattern(self, make_candidate):
        engine = FilterEngine(_config(exclude_patterns=frozenset({"*_pb2.py"})))
        d = engine.classify(make_candidate("proto/user_pb2.py"))
        assert d.reason is Reason.ignored_pattern

    def test_not_allowed_extension(self, engine, make_candidate):
        d = engine.classify(make_candidate("assets/logo.png"))
        assert d.reason is Reason.not_allowed_extension
        assert d.include_in_digest is False

    def test_no_extension_excluded(self, engine, make_candidate):
        assert engine.classify(make_candidate("Makefile")).include_in_digest is False

    def test_user_include_extension(self, make_candidate):
        engine = FilterEngine(_config(include_extensions=frozenset({"toml"})))
        assert engine.classify(make_candidate("pyproject.toml")).include_in_digest is True

    def test_extension_match_is_case_insensitive(self, engine, make_candidate):
        assert engine.classify(make_candidate("Program.CS")).include_in_digest is True


# ── Size limit ───────────────────────────────────────────────────────


class TestSizeLimit:
    def test_exactly_at_limit_is_included(self, make_candidate):
        engine = FilterEngine(_config(max_file_size_bytes=100))
        assert engine.classify(make_candidate("a.py", size=100)).include_in_digest is True

    def test_one_byte_over_is_excluded(self, make_candidate):
        engine = FilterEngine(_config(max_file_size_bytes=100))
        d = engine.classify(make_candidate("a.py", size=101))
        assert d.include_in_digest is False
        assert d.reason is Reason.too_large

    def test_zero_disables_limit(self, make_candidate):
        engine = FilterEngine(_config(max_file_size_bytes=0))
        assert engine.classify(make_candidate("a.py", size=10**12)).include_in_digest is True

    def test_from_mb_zero_and_negative_disable(self):
        base = {"project_path": Path("/proj"), "output_path": Path("/o.md")}
        assert DigestConfig.from_mb(0, **base).max_file_size_bytes == 0
        assert DigestConfig.from_mb(-3, **base).max_file_size_bytes == 0
        assert DigestConfig.from_mb(2, **base).max_file_size_bytes == 2 * 1024 * 1024


# ── Tree inclusion ───────────────────────────────────────────────────


class TestTreeInclusion:
    def test_included_mode_mirrors_digest(self, engine, make_candidate):
        assert engine.classify(make_candidate("src/a.py")).include_in_tree is True
        assert engine.classify(make_candidate("assets/logo.png")).include_in_tree is False

    def test_all_mode_shows_non_noise_files(self, make_candidate):
        engine = FilterEngine(_config(tree_mode="all"))
        assert engine.classify(make_candidate("assets/logo.png")).include_in_tree is True
        assert engine.classify(make_candidate(".git/config")).include_in_tree is False
        assert engine.classify(make_candidate("web/node_modules/x/index.js")).include_in_tree is False

    def test_all_mode_keeps_non_noise_ignored_folders(self, make_candidate):
        engine = FilterEngine(_config(tree_mode="all"))
        d = engine.classify(make_candidate("logs/today.txt"))
        assert d.include_in_digest is False
        assert d.include_in_tree is True


class TestPrunesDirectory:
    def test_included_mode_prunes_ignored_folders(self, engine):
        assert engine.prunes_directory(".git")
        assert engine.prunes_directory("Logs")
        assert not engine.prunes_directory("src")

    def test_all_mode_prunes_only_hidden_folders(self):
        engine = FilterEngine(_config(tree_mode="all"))
        assert engine.prunes_directory(".git")
        assert not engine.prunes_directory("logs")

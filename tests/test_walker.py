"""Tests for the deep tree walker."""

import os

import pytest

from check_ai.core.walker import (
    DEFAULT_SKIP_DIRS,
    DeepTreeWalker,
    collect_patterns,
)


def nested(depth: int, name: str) -> str:
    """Relative path of a file inside `depth` nested directories."""
    return "/".join(f"d{i}" for i in range(1, depth + 1)) + f"/{name}"


class TestDeepTreeWalker:
    """Tests for DeepTreeWalker class."""

    def test_nested_matches_exclude_root(self, make_repo):
        """Test that nested files match and the root-level file does not."""
        root = make_repo({
            "AGENTS.md": "root",
            "src/AGENTS.md": "a",
            "src/lib/AGENTS.md": "b",
        })

        result = DeepTreeWalker().walk(root, ["AGENTS.md"])

        assert sorted(result.get_matches("AGENTS.md")) == ["src/AGENTS.md", "src/lib/AGENTS.md"]

    def test_suffix_patterns(self, make_repo):
        """Test that a pattern matches as a filename suffix."""
        root = make_repo({
            ".github/prompts/review.prompt.yml": "x",
            "docs/plain.yml": "x",
        })

        result = DeepTreeWalker().walk(root, [".prompt.yml"])

        assert result.get_matches(".prompt.yml") == [".github/prompts/review.prompt.yml"]

    def test_skips_denylisted_directories(self, make_repo):
        """Test that denylisted directories are never entered."""
        files = {f"{d}/pkg/SKILL.md": "x" for d in DEFAULT_SKIP_DIRS}
        files["skills/one/SKILL.md"] = "x"
        root = make_repo(files)

        matches = DeepTreeWalker().walk(root, ["SKILL.md"]).get_matches("SKILL.md")

        assert matches == ["skills/one/SKILL.md"]
        for match in matches:
            assert not set(match.split("/")) & DEFAULT_SKIP_DIRS

    def test_hidden_directories(self, make_repo):
        """Test that only allowlisted hidden directories are walked."""
        root = make_repo({
            ".claude/skills/a/SKILL.md": "x",
            ".windsurf/skills/b/SKILL.md": "x",
            ".secret/SKILL.md": "x",
            ".idea/SKILL.md": "x",
        })

        matches = DeepTreeWalker().walk(root, ["SKILL.md"]).get_matches("SKILL.md")

        assert matches == [".claude/skills/a/SKILL.md", ".windsurf/skills/b/SKILL.md"]

    def test_depth_bound(self, make_repo):
        """Test that files beyond max depth are absent."""
        root = make_repo({
            nested(3, "AGENTS.md"): "x",
            nested(3, "SKILL.md"): "x",
            nested(7, "AGENTS.md"): "x",
            nested(7, "SKILL.md"): "x",
        })

        result = DeepTreeWalker(max_depth=6).walk(root, ["AGENTS.md", "SKILL.md"])

        assert result.get_matches("AGENTS.md") == [nested(3, "AGENTS.md")]
        assert result.get_matches("SKILL.md") == [nested(3, "SKILL.md")]

    def test_file_at_max_depth_is_found(self, make_repo):
        """Test that the deepest allowed level is still inspected."""
        root = make_repo({nested(6, "AGENTS.md"): "x"})

        result = DeepTreeWalker(max_depth=6).walk(root, ["AGENTS.md"])

        assert result.get_matches("AGENTS.md") == [nested(6, "AGENTS.md")]

    def test_every_pattern_has_a_list(self, make_repo):
        """Test that unmatched patterns map to empty lists."""
        root = make_repo({"src/main.py": "print()"})

        result = DeepTreeWalker().walk(root, ["AGENTS.md", "SKILL.md", "AGENTS.md"])

        assert result.matches == {"AGENTS.md": [], "SKILL.md": []}
        assert result.files_scanned == 1
        assert result.dirs_scanned == 2

    def test_repeated_walks_are_identical(self, make_repo):
        """Test that walking twice gives the same ordered result."""
        root = make_repo({
            "b/AGENTS.md": "x",
            "a/z/AGENTS.md": "x",
            "a/AGENTS.md": "x",
        })
        walker = DeepTreeWalker()

        first = walker.walk(root, ["AGENTS.md"]).matches
        second = walker.walk(root, ["AGENTS.md"]).matches

        assert first == second
        assert first["AGENTS.md"] == ["a/AGENTS.md", "a/z/AGENTS.md", "b/AGENTS.md"]

    def test_missing_root_is_empty(self, tmp_path):
        """Test that a missing root walks as empty instead of raising."""
        result = DeepTreeWalker().walk(tmp_path / "nope", ["AGENTS.md"])

        assert result.matches == {"AGENTS.md": []}
        assert result.files_scanned == 0

    def test_custom_skip_dirs(self, make_repo):
        """Test injecting a different denylist."""
        root = make_repo({"generated/AGENTS.md": "x", "node_modules/AGENTS.md": "x"})

        walker = DeepTreeWalker(skip_dirs={"generated"})
        matches = walker.walk(root, ["AGENTS.md"]).get_matches("AGENTS.md")

        assert matches == ["node_modules/AGENTS.md"]

    def test_symlinks_are_not_counted(self, make_repo):
        """Test that symlinked and dangling entries are neither matched nor counted."""
        root = make_repo({"src/notes.md": "x", "docs/real.md": "x"})
        os.symlink(root / "docs" / "real.md", root / "src" / "SKILL.md")
        os.symlink(root / "src" / "gone.md", root / "src" / "AGENTS.md")

        result = DeepTreeWalker().walk(root, ["SKILL.md", "AGENTS.md"])

        assert result.get_matches("SKILL.md") == []
        assert result.get_matches("AGENTS.md") == []
        assert result.files_scanned == 2

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="no named pipes on this platform")
    def test_fifo_is_not_counted(self, make_repo):
        """Test that a named pipe is not counted as a file."""
        root = make_repo({"src/main.py": "print()"})
        os.mkfifo(root / "src" / "AGENTS.md")

        result = DeepTreeWalker().walk(root, ["AGENTS.md"])

        assert result.get_matches("AGENTS.md") == []
        assert result.files_scanned == 1

    def test_should_enter(self):
        """Test directory admission rules."""
        walker = DeepTreeWalker()

        assert walker.should_enter("src")
        assert walker.should_enter(".github")
        assert not walker.should_enter("node_modules")
        assert not walker.should_enter(".venv")


class TestCollectPatterns:
    """Tests for pattern collection."""

    def test_dedupes_and_drops_empty(self):
        """Test first-seen order without duplicates or None."""
        assert collect_patterns(["a", None, "b", "a", ""]) == ("a", "b")

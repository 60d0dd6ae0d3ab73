"""Tests for the check evaluator."""

from check_ai.core.checks import CheckDefinition, CheckType, CustomResult
from check_ai.core.evaluator import CheckEvaluator


def make_check(check_id: str, check_type: CheckType, **kwargs) -> CheckDefinition:
    return CheckDefinition(
        id=check_id,
        label=check_id,
        section="Test",
        weight=kwargs.pop("weight", 2),
        type=check_type,
        description="",
        **kwargs,
    )


def evaluate_one(root, check, walk_matches=None, custom_results=None):
    findings = CheckEvaluator().evaluate(root, [check], walk_matches or {}, custom_results or {})
    assert len(findings) == 1
    return findings[0]


class TestPathChecks:
    """Tests for file, dir and any checks."""

    def test_file_check_counts_lines(self, make_repo):
        """Test that a matched file reports its non-blank line count."""
        root = make_repo({"README.md": "# Title\n\nline one\n\nline two\n"})
        check = make_check("readme", CheckType.FILE, paths=("README.md",))

        finding = evaluate_one(root, check)

        assert finding.found is True
        assert finding.matched_path == "README.md"
        assert finding.detail == "3 line(s)"

    def test_file_check_takes_first_match(self, make_repo):
        """Test that candidates are tried in order."""
        root = make_repo({"readme.md": "a\n", "README.md": "a\nb\n"})
        check = make_check("readme", CheckType.FILE, paths=("README.md", "readme.md"))

        assert evaluate_one(root, check).matched_path == "README.md"

    def test_file_check_ignores_directory(self, make_repo):
        """Test that a directory does not satisfy a file check."""
        root = make_repo({"CHANGELOG.md/": None})
        check = make_check("changelog", CheckType.FILE, paths=("CHANGELOG.md",))

        finding = evaluate_one(root, check)

        assert finding.found is False
        assert finding.matched_path is None
        assert finding.detail is None

    def test_dir_check_counts_visible_items(self, make_repo):
        """Test that a matched directory reports non-hidden entries."""
        root = make_repo({
            "docs/a.md": "x",
            "docs/b.md": "x",
            "docs/.hidden": "x",
            "docs/sub/": None,
        })
        check = make_check("docs-dir", CheckType.DIR, paths=("docs",))

        finding = evaluate_one(root, check)

        assert finding.found is True
        assert finding.detail == "3 item(s)"

    def test_dir_check_ignores_file(self, make_repo):
        """Test that a regular file does not satisfy a dir check."""
        root = make_repo({"docs": "not a directory"})
        check = make_check("docs-dir", CheckType.DIR, paths=("docs",))

        assert evaluate_one(root, check).found is False

    def test_any_check_accepts_both(self, make_repo):
        """Test that an any check matches files and directories."""
        root = make_repo({"api/": None, "openapi.yaml": "openapi: 3.0.0\n"})
        dir_check = make_check("api-dir", CheckType.ANY, paths=("api",))
        file_check = make_check("openapi", CheckType.ANY, paths=("openapi.yaml",))

        assert evaluate_one(root, dir_check).detail == "0 item(s)"
        assert evaluate_one(root, file_check).detail == "1 line(s)"

    def test_missing_paths(self, make_repo):
        """Test that missing candidates produce a plain miss."""
        root = make_repo()
        check = make_check("nothing", CheckType.ANY, paths=("a", "b/c"))

        finding = evaluate_one(root, check)

        assert finding.found is False
        assert finding.earned == 0


class TestDeepScanChecks:
    """Tests for deep-scan checks."""

    def test_matches_are_copied(self, tmp_path):
        """Test that walk matches become the finding's matches."""
        check = make_check("nested", CheckType.DEEP_SCAN, deep_pattern="AGENTS.md")
        walk = {"AGENTS.md": ["a/AGENTS.md", "b/AGENTS.md"]}

        finding = evaluate_one(tmp_path, check, walk_matches=walk)

        assert finding.found is True
        assert finding.matches == ("a/AGENTS.md", "b/AGENTS.md")
        assert finding.detail == "2 file(s) found"

    def test_no_matches(self, tmp_path):
        """Test a pattern without matches."""
        check = make_check("nested", CheckType.DEEP_SCAN, deep_pattern="AGENTS.md")

        finding = evaluate_one(tmp_path, check, walk_matches={"AGENTS.md": []})

        assert finding.found is False
        assert finding.matches == ()
        assert finding.detail is None


class TestCustomChecks:
    """Tests for custom checks."""

    def test_result_is_copied(self, tmp_path):
        """Test that analyzer output is copied onto the finding."""
        check = make_check("quality", CheckType.CUSTOM, custom_key="quality-key")
        result = CustomResult(found=True, detail="good (4/6)", matches=["x"], metadata={"score": 4})

        finding = evaluate_one(tmp_path, check, custom_results={"quality-key": result})

        assert finding.found is True
        assert finding.detail == "good (4/6)"
        assert finding.matches == ("x",)
        assert finding.metadata == {"score": 4}

    def test_absent_key_is_not_found(self, tmp_path):
        """Test that a missing custom key is a miss, not an error."""
        check = make_check("quality", CheckType.CUSTOM, custom_key="quality-key")

        finding = evaluate_one(tmp_path, check, custom_results={"other": CustomResult(found=True)})

        assert finding.found is False
        assert finding.detail is None


class TestEvaluate:
    """Tests for evaluating a whole check list."""

    def test_one_finding_per_check_in_order(self, make_repo):
        """Test cardinality and ordering of findings."""
        root = make_repo({"b.txt": "x"})
        checks = [
            make_check("first", CheckType.FILE, paths=("a.txt",)),
            make_check("second", CheckType.FILE, paths=("b.txt",)),
            make_check("third", CheckType.DIR, paths=("c",)),
        ]

        findings = CheckEvaluator().evaluate(root, checks, {}, {})

        assert [f.id for f in findings] == ["first", "second", "third"]
        assert [f.found for f in findings] == [False, True, False]

    def test_progress_callback(self, tmp_path):
        """Test that the callback sees every check with its position."""
        checks = [make_check(f"c{i}", CheckType.FILE, paths=("x",)) for i in range(3)]
        calls = []

        CheckEvaluator().evaluate(
            tmp_path, checks, {}, {},
            progress_callback=lambda current, total, check: calls.append((current, total, check.id)),
        )

        assert calls == [(1, 3, "c0"), (2, 3, "c1"), (3, 3, "c2")]


class TestCheckDefinition:
    """Tests for check definition serialization."""

    def test_from_dict(self):
        """Test building a definition from plain data."""
        check = CheckDefinition.from_dict({
            "id": "nested",
            "label": "Nested AGENTS.md",
            "section": "Agent Configs",
            "weight": 4,
            "type": "deep-scan",
            "deep_pattern": "AGENTS.md",
        })

        assert check.type is CheckType.DEEP_SCAN
        assert check.paths == ()
        assert check.to_dict()["type"] == "deep-scan"

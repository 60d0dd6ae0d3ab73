"""Tests for the command-line interface."""

import json
import logging

import pytest
from click.testing import CliRunner

from check_ai import __version__
from check_ai.cli.main import cli, is_interactive
from check_ai.core import profiles as profiles_module
from check_ai.core.checks import CheckDefinition, CheckType
from check_ai.core.registry import AuditLoadError, AuditModule, AuditRegistry
from check_ai.logging_config import LOG_LEVEL_ENV, resolve_level, setup_logging


@pytest.fixture
def runner():
    return CliRunner()


class TestScanCommand:
    """Tests for the scan command."""

    def test_help(self, runner):
        """Test the group help text."""
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "scan" in result.output
        assert "badge" in result.output

    def test_version(self, runner):
        """Test the version option."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_json_on_empty_repo(self, runner, make_repo):
        """Test JSON output and the failing exit code of an empty repository."""
        root = make_repo()

        result = runner.invoke(cli, ["scan", str(root), "--json"])

        assert result.exit_code == 1
        report = json.loads(result.stdout)
        assert report["score"] == 0.0
        assert report["grade"] == "F"
        assert "tools" not in report

    def test_console_output(self, runner, make_repo):
        """Test the non-interactive console report."""
        root = make_repo({"README.md": "# Demo\n"})

        result = runner.invoke(cli, ["scan", str(root), "--ci"])

        assert result.exit_code == 1
        assert "Auditing" in result.output
        assert "AI Readiness" in result.output
        assert "Quick start" in result.output

    def test_passing_repo_exits_zero(self, runner, make_repo):
        """Test that a well-prepared repository passes the gate."""
        root = make_repo({
            "AGENTS.md": "# Overview\n\n## Build\nRun `npm install`.\n\n## Test\nnpm test\n",
            "CLAUDE.md": "# Claude\n",
            ".agents/skills/review/SKILL.md": "x",
            "README.md": "# Demo\n",
            ".gitignore": "x\n",
            ".git/": None,
            "tests/": None,
            "prompts/": None,
            "docs/ARCHITECTURE.md": "x\n",
            ".cursorignore": "x\n",
            "packages/api/AGENTS.md": "x\n",
        })

        result = runner.invoke(cli, ["scan", str(root), "--json"])

        assert json.loads(result.stdout)["score"] >= 3.0
        assert result.exit_code == 0

    def test_tools_in_json(self, runner, make_repo):
        """Test that --tools scores the detected tools."""
        root = make_repo({"CLAUDE.md": "# Claude\n"})

        result = runner.invoke(cli, ["scan", str(root), "--json", "--tools"])

        keys = [t["key"] for t in json.loads(result.stdout)["tools"]]
        assert "claude" in keys
        assert "clio" not in keys

    def test_single_tool(self, runner, make_repo):
        """Test that --tool limits scoring to the given profile."""
        root = make_repo({"CLAUDE.md": "# Claude\n"})

        result = runner.invoke(cli, ["scan", str(root), "--json", "--tool", "clio"])

        assert [t["key"] for t in json.loads(result.stdout)["tools"]] == ["clio"]

    def test_unknown_tool(self, runner, make_repo):
        """Test that an unknown profile key is reported and skipped."""
        root = make_repo()

        result = runner.invoke(cli, ["scan", str(root), "--ci", "--tool", "nope"])

        assert result.exit_code == 1
        assert "Unknown tool profile 'nope'" in result.output
        assert "No AI tool configuration detected" in result.output

    def test_audit_load_error(self, runner, make_repo, monkeypatch):
        """Test that a malformed audit module exits with status 2."""
        def broken(self):
            raise AuditLoadError("Duplicate check id 'readme'")

        monkeypatch.setattr(AuditRegistry, "load_all", broken)

        result = runner.invoke(cli, ["scan", str(make_repo()), "--ci"])

        assert result.exit_code == 2
        assert "Duplicate check id 'readme'" in result.output

    def test_malformed_analyzer_result_exits_two(self, runner, make_repo, monkeypatch):
        """Test that an analyzer returning a bare value exits with status 2."""
        module = AuditModule(
            source="flags",
            section="Flags",
            checks=[CheckDefinition(id="flag", label="flag", section="Flags", weight=1,
                                    type=CheckType.CUSTOM, description="", custom_key="flag")],
            analyzer=lambda root, probe: {"flag": True},
        )
        monkeypatch.setattr(AuditRegistry, "load_all", lambda self: [module])

        result = runner.invoke(cli, ["scan", str(make_repo()), "--ci"])

        assert result.exit_code == 2
        assert "returned bool for key 'flag'" in result.output

    def test_output_saves_json_report(self, runner, make_repo, tmp_path):
        """Test that --output writes a JSON report with scan metadata."""
        root = make_repo({"README.md": "# Demo\n"})
        out_dir = tmp_path / "reports"

        result = runner.invoke(cli, ["scan", str(root), "--ci", "--output", str(out_dir)])

        saved = list(out_dir.glob("check_ai_repo_*.json"))
        assert result.exit_code == 1
        assert len(saved) == 1
        assert "Report saved" in result.output
        report = json.loads(saved[0].read_text())
        assert report["metadata"]["project_name"] == "repo"
        assert report["metadata"]["check_ai_version"] == __version__
        assert report["findings"]

    def test_missing_path(self, runner, tmp_path):
        """Test that a nonexistent path is a usage error."""
        result = runner.invoke(cli, ["scan", str(tmp_path / "missing")])

        assert result.exit_code == 2

    def test_default_command_scans_cwd(self, runner, tmp_path):
        """Test that running without a command scans the current directory."""
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, [])

        assert result.exit_code == 1
        assert "AI Readiness" in result.output


class TestBadgeCommand:
    """Tests for the badge command."""

    def test_badge(self, runner, make_repo):
        """Test the Markdown badge of an empty repository."""
        result = runner.invoke(cli, ["badge", str(make_repo())])

        assert result.exit_code == 1
        assert result.stdout == (
            "[![AI Ready](https://img.shields.io/badge/AI%20Ready-F%200.0%2F10-red)]"
            "(https://github.com/f/check-ai)\n"
        )


class TestProfilesCommand:
    """Tests for the profiles command."""

    def test_lists_profiles(self, runner):
        """Test the profile table."""
        result = runner.invoke(cli, ["profiles"])

        assert result.exit_code == 0
        assert "Tool Profiles" in result.output
        for key in ("clio", "cursor", "claude", "windsurf", "copilot"):
            assert key in result.output

    def test_malformed_profiles(self, runner, tmp_path, monkeypatch):
        """Test that a broken profile file exits with status 2."""
        path = tmp_path / "profiles.yaml"
        path.write_text("profiles: [unclosed\n")
        monkeypatch.setattr(profiles_module, "DEFAULT_PROFILES_PATH", path)

        result = runner.invoke(cli, ["profiles"])

        assert result.exit_code == 2
        assert "Invalid YAML" in result.output


class TestEnvironment:
    """Tests for interactivity and logging setup."""

    def test_not_interactive_in_ci(self, monkeypatch):
        """Test that CI disables animated output."""
        monkeypatch.setenv("CI", "true")

        assert is_interactive() is False

    def test_disabled(self):
        """Test the explicit switch."""
        assert is_interactive(disabled=True) is False

    def test_level_precedence(self, monkeypatch):
        """Test option over environment over default."""
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        assert resolve_level() == "WARNING"

        monkeypatch.setenv(LOG_LEVEL_ENV, "INFO")
        assert resolve_level() == "INFO"
        assert resolve_level("DEBUG") == "DEBUG"

    def test_setup_logging(self):
        """Test that setup configures a single package handler."""
        setup_logging("debug")
        level = setup_logging("INFO")

        package_logger = logging.getLogger("check_ai")
        assert level == logging.INFO
        assert package_logger.level == logging.INFO
        assert len(package_logger.handlers) == 1

    def test_unknown_level_falls_back(self):
        """Test that an unknown level name means WARNING."""
        assert setup_logging("LOUD") == logging.WARNING

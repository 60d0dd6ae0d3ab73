"""Repo Hygiene - foundational signals of a well-structured repository."""

import json
import logging
import os
import re
import subprocess
from pathlib import Path
from typing import Dict, List

from ..core.checks import CheckDefinition, CheckType, CustomResult
from ..core.probe import FileProbe

logger = logging.getLogger(__name__)

SECTION = "Repo Hygiene"

STANDARD_SCRIPTS = ("start", "test", "lint")
RECENT_COMMITS = 10
GIT_TIMEOUT = 5

LAZY_COMMIT = re.compile(r"^(fix|update|wip|test|changes|stuff|misc|tmp|asdf|todo|\.|-)$", re.IGNORECASE)
CONVENTIONAL_COMMIT = re.compile(
    r"^(feat|fix|chore|docs|style|refactor|perf|test|build|ci|revert)(\(.+\))?!?:",
    re.IGNORECASE,
)

CHECKS = [
    CheckDefinition(
        id="git-repo",
        label=".git",
        section=SECTION,
        weight=5,
        type=CheckType.DIR,
        paths=(".git",),
        description="Repository is under Git version control",
        hint="git init",
    ),
    CheckDefinition(
        id="gitignore",
        label=".gitignore",
        section=SECTION,
        weight=5,
        type=CheckType.FILE,
        paths=(".gitignore",),
        description="Prevents tracking of generated / sensitive files",
    ),
    CheckDefinition(
        id="license",
        label="LICENSE",
        section=SECTION,
        weight=2,
        type=CheckType.FILE,
        paths=("LICENSE", "LICENSE.md", "LICENSE.txt", "license", "COPYING"),
        description="Explicit license tells agents and contributors how code may be reused",
    ),
    CheckDefinition(
        id="env-example",
        label=".env.example / .env.sample",
        section=SECTION,
        weight=3,
        type=CheckType.FILE,
        paths=(".env.example", ".env.sample", ".env.template"),
        description="Documents required env vars without exposing secrets",
    ),
    CheckDefinition(
        id="editorconfig",
        label=".editorconfig",
        section=SECTION,
        weight=2,
        type=CheckType.FILE,
        paths=(".editorconfig",),
        description="Consistent editor settings across contributors and agents",
    ),
    CheckDefinition(
        id="linter",
        label="Linter config",
        section=SECTION,
        weight=4,
        type=CheckType.FILE,
        paths=(
            ".eslintrc",
            ".eslintrc.js",
            ".eslintrc.json",
            ".eslintrc.yml",
            ".eslintrc.cjs",
            "eslint.config.js",
            "eslint.config.mjs",
            "eslint.config.cjs",
            ".pylintrc",
            "pyproject.toml",
            "setup.cfg",
            "ruff.toml",
            ".rubocop.yml",
            ".golangci.yml",
            ".golangci.yaml",
        ),
        description="Linting enforces consistent style for humans and agents alike",
    ),
    CheckDefinition(
        id="formatter",
        label="Formatter config",
        section=SECTION,
        weight=3,
        type=CheckType.FILE,
        paths=(
            ".prettierrc",
            ".prettierrc.js",
            ".prettierrc.json",
            ".prettierrc.yml",
            ".prettierrc.cjs",
            "prettier.config.js",
            "prettier.config.mjs",
            "prettier.config.cjs",
            ".prettierrc.toml",
            "biome.json",
            "biome.jsonc",
            "deno.json",
            "deno.jsonc",
            ".clang-format",
            "rustfmt.toml",
        ),
        description="Auto-formatting keeps agent-generated code consistent",
    ),
    CheckDefinition(
        id="ci-config",
        label="CI pipeline",
        section=SECTION,
        weight=4,
        type=CheckType.ANY,
        paths=(
            ".github/workflows",
            ".gitlab-ci.yml",
            ".circleci",
            "Jenkinsfile",
            ".travis.yml",
            "bitbucket-pipelines.yml",
        ),
        description="CI pipeline catches agent regressions before they merge",
    ),
    CheckDefinition(
        id="scripts",
        label="Standard scripts",
        section=SECTION,
        weight=4,
        type=CheckType.CUSTOM,
        custom_key="scripts",
        description="Single obvious commands for start / test / lint",
    ),
    CheckDefinition(
        id="devcontainer",
        label="Dev container",
        section=SECTION,
        weight=3,
        type=CheckType.ANY,
        paths=(".devcontainer", ".devcontainer/devcontainer.json", ".devcontainer.json"),
        description="Reproducible dev environment for agents and contributors",
    ),
    CheckDefinition(
        id="commit-messages",
        label="Descriptive commits",
        section=SECTION,
        weight=3,
        type=CheckType.CUSTOM,
        custom_key="commit-messages",
        description='Recent commit messages are descriptive (not just "fix" or "update")',
    ),
    CheckDefinition(
        id="conventional-commits",
        label="Conventional commits",
        section=SECTION,
        weight=2,
        type=CheckType.CUSTOM,
        custom_key="conventional-commits",
        description="Commit messages follow conventional format (feat:, fix:, chore:, etc.)",
    ),
]


def analyze(root: Path, probe: FileProbe) -> Dict[str, CustomResult]:
    """Inspect standard scripts and recent commit history."""
    commits = get_recent_commits(root)
    return {
        "scripts": standard_scripts(root, probe),
        "commit-messages": descriptive_commits(commits),
        "conventional-commits": conventional_commits(commits),
    }


def standard_scripts(root: Path, probe: FileProbe) -> CustomResult:
    """Find start/test/lint entry points in package.json and the Makefile.

    Returns:
        Result found when at least two of the three commands exist
    """
    found: List[str] = []

    content = probe.read_text(root / "package.json")
    if content:
        try:
            package = json.loads(content)
        except json.JSONDecodeError:
            package = None
        scripts = package.get("scripts") if isinstance(package, dict) else None
        if isinstance(scripts, dict):
            found.extend(f"npm run {name}" for name in STANDARD_SCRIPTS if scripts.get(name))

    makefile = probe.read_text(root / "Makefile")
    if makefile:
        for name in STANDARD_SCRIPTS:
            if f"{name}:" in makefile and not any(name in entry for entry in found):
                found.append(f"make {name}")

    missing = [name for name in STANDARD_SCRIPTS if not any(name in entry for entry in found)]
    ok = len(found) >= 2

    if ok:
        detail = f"{len(found)}/3 ({', '.join(found)})"
    elif found:
        detail = f"{len(found)}/3 - missing: {', '.join(missing)}"
    else:
        detail = None

    return CustomResult(found=ok, detail=detail, matches=found)


def get_recent_commits(root: Path, count: int = RECENT_COMMITS) -> List[str]:
    """Read the subjects of the most recent commits.

    Args:
        root: Repository root
        count: Number of commits to read

    Returns:
        Commit subjects, newest first, or [] when git is unavailable or
        root is not itself the top of a work tree
    """
    root = Path(root).resolve()
    # Discovery must not climb above root
    env = dict(os.environ, GIT_CEILING_DIRECTORIES=str(root.parent))
    env.pop("GIT_DIR", None)
    env.pop("GIT_WORK_TREE", None)

    try:
        completed = subprocess.run(
            ["git", "log", "--no-decorate", "-n", str(count), "--format=%s"],
            cwd=str(root),
            env=env,
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT,
            check=True,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("No git history for %s: %s", root, e)
        return []

    return [line for line in completed.stdout.strip().split("\n") if line.strip()]


def descriptive_commits(commits: List[str]) -> CustomResult:
    """Check that at least 60% of recent commits say something useful."""
    if not commits:
        return CustomResult(found=False, detail="no git history")

    good = [m for m in commits if len(m) >= 10 and not LAZY_COMMIT.match(m.strip())]
    return CustomResult(
        found=len(good) / len(commits) >= 0.6,
        detail=f"{len(good)}/{len(commits)} recent commits are descriptive",
    )


def conventional_commits(commits: List[str]) -> CustomResult:
    """Check that at least half of recent commits use conventional prefixes."""
    if not commits:
        return CustomResult(found=False, detail="no git history")

    matching = [m for m in commits if CONVENTIONAL_COMMIT.match(m.strip())]
    return CustomResult(
        found=len(matching) / len(commits) >= 0.5,
        detail=f"{len(matching)}/{len(commits)} use conventional format",
    )

"""Grounding Docs - documentation that helps agents understand the project."""

import re
from pathlib import Path
from typing import Dict

from ..core.checks import CheckDefinition, CheckType, CustomResult
from ..core.probe import FileProbe

SECTION = "Grounding Docs"

README_FILES = ("README.md", "readme.md", "Readme.md")

CHECKS = [
    CheckDefinition(
        id="readme",
        label="README.md",
        section=SECTION,
        weight=5,
        type=CheckType.FILE,
        paths=("README.md", "readme.md", "README", "Readme.md"),
        description="Project overview for humans and agents",
    ),
    CheckDefinition(
        id="readme-quality",
        label="README quality",
        section=SECTION,
        weight=3,
        type=CheckType.CUSTOM,
        custom_key="readme-quality",
        description="README has install instructions, usage examples, and structure",
    ),
    CheckDefinition(
        id="contributing",
        label="CONTRIBUTING.md",
        section=SECTION,
        weight=2,
        type=CheckType.FILE,
        paths=("CONTRIBUTING.md", "contributing.md", ".github/CONTRIBUTING.md"),
        description="Contribution guidelines help agents follow project conventions",
    ),
    CheckDefinition(
        id="architecture-doc",
        label="Architecture doc",
        section=SECTION,
        weight=4,
        type=CheckType.FILE,
        paths=(
            "architecture.md",
            "ARCHITECTURE.md",
            "docs/architecture.md",
            ".ai/docs/architecture.md",
            "ARCHITECTURE",
            "docs/ARCHITECTURE.md",
        ),
        description="High-level architecture reference for agents tackling large tasks",
    ),
    CheckDefinition(
        id="tech-stack-doc",
        label="Tech stack doc",
        section=SECTION,
        weight=3,
        type=CheckType.FILE,
        paths=("tech-stack.md", "TECH-STACK.md", "docs/tech-stack.md", ".ai/docs/tech-stack.md"),
        description="Prevents agents from introducing unwanted frameworks",
    ),
    CheckDefinition(
        id="ai-requirements",
        label="AI requirements / PRDs",
        section=SECTION,
        weight=3,
        type=CheckType.DIR,
        paths=(".ai/requirements", ".ai/docs", "docs/requirements", "docs/prd"),
        description="Product specs that ground agent work in business intent",
    ),
    CheckDefinition(
        id="llms-txt",
        label="llms.txt",
        section=SECTION,
        weight=3,
        type=CheckType.FILE,
        paths=("llms.txt", "llms-full.txt"),
        description="LLM-friendly project description (llms.txt standard)",
    ),
    CheckDefinition(
        id="changelog",
        label="CHANGELOG.md",
        section=SECTION,
        weight=2,
        type=CheckType.FILE,
        paths=("CHANGELOG.md", "changelog.md", "CHANGES.md", "HISTORY.md"),
        description="Change history helps agents understand recent project evolution",
    ),
    CheckDefinition(
        id="conventions-doc",
        label="Conventions / Development doc",
        section=SECTION,
        weight=3,
        type=CheckType.FILE,
        paths=(
            "CONVENTIONS.md",
            "conventions.md",
            "DEVELOPMENT.md",
            "development.md",
            "docs/conventions.md",
            "docs/development.md",
            "CODING_GUIDELINES.md",
            "docs/DEVELOPER_GUIDE.md",
            "docs/developer_guide.md",
            "DEVELOPER_GUIDE.md",
        ),
        description="Coding conventions and development setup guide for agents",
    ),
    CheckDefinition(
        id="api-docs",
        label="API documentation",
        section=SECTION,
        weight=2,
        type=CheckType.ANY,
        paths=("docs/api", "API.md", "api.md", "docs/API.md"),
        description="API reference helps agents understand interfaces and contracts",
    ),
    CheckDefinition(
        id="docs-dir",
        label="docs/ directory",
        section=SECTION,
        weight=2,
        type=CheckType.DIR,
        paths=("docs", "doc"),
        description="Organized documentation directory for project knowledge",
    ),
]

_HEADING = re.compile(r"^#{1,3}\s", re.MULTILINE)
_README_SIGNALS = {
    "has_installation": re.compile(r"\b(install|setup|getting.started|quick.start)\b"),
    "has_usage": re.compile(r"\b(usage|how.to.use|example|demo)\b"),
    "has_structure": re.compile(r"\b(structure|directory|folder|layout|architecture)\b"),
}


def analyze(root: Path, probe: FileProbe) -> Dict[str, CustomResult]:
    """Grade the README content."""
    return {"readme-quality": readme_quality(root, probe)}


def readme_quality(root: Path, probe: FileProbe) -> CustomResult:
    """Score the first README found against six content signals.

    Args:
        root: Repository root
        probe: Filesystem probe

    Returns:
        Result found at three or more signals, detailed as rich (4+),
        adequate (2-3) or sparse
    """
    content = ""
    for name in README_FILES:
        if probe.exists(root / name):
            content = probe.read_text(root / name)
            break

    if not content:
        return CustomResult(found=False)

    lower = content.lower()
    signals = {name: bool(pattern.search(lower)) for name, pattern in _README_SIGNALS.items()}
    signals["has_code_blocks"] = "```" in content
    signals["has_headings"] = len(_HEADING.findall(content)) >= 3
    signals["is_substantial"] = len([l for l in content.split("\n") if l.strip()]) >= 20

    score = sum(signals.values())
    if score >= 4:
        detail = "rich"
    elif score >= 2:
        detail = "adequate"
    else:
        detail = "sparse"

    return CustomResult(
        found=score >= 3,
        detail=detail,
        metadata={"signals": signals, "score": score, "max_score": 6},
    )

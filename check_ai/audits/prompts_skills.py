"""Prompts & Skills - reusable prompt templates and agent skill definitions."""

from pathlib import Path
from typing import Dict

from ..core.checks import CheckDefinition, CheckType, CustomResult
from ..core.probe import FileProbe

SECTION = "Prompts & Skills"

PROMPT_SIGNALS = ("prompts", ".prompts", ".ai/prompts", ".claude/commands")

CHECKS = [
    CheckDefinition(
        id="has-any-prompt-or-skill",
        label="At least one prompt or skill",
        section=SECTION,
        weight=8,
        type=CheckType.CUSTOM,
        custom_key="has-any-prompt-or-skill",
        description="Repo has at least one prompt template, skill definition, or command",
        hint="mkdir -p prompts  # or add a SKILL.md",
    ),
    CheckDefinition(
        id="prompt-yml",
        label=".prompt.yml files",
        section=SECTION,
        weight=0,
        type=CheckType.DEEP_SCAN,
        deep_pattern=".prompt.yml",
        description="Structured prompt templates for repeatable AI workflows",
    ),
    CheckDefinition(
        id="prompt-md",
        label=".prompt.md files",
        section=SECTION,
        weight=0,
        type=CheckType.DEEP_SCAN,
        deep_pattern=".prompt.md",
        description="Markdown prompt templates",
    ),
    CheckDefinition(
        id="prompts-dir",
        label="prompts/ directory",
        section=SECTION,
        weight=0,
        type=CheckType.DIR,
        paths=("prompts", ".prompts", ".ai/prompts"),
        description="Centralized prompt library directory",
    ),
    CheckDefinition(
        id="skill-md",
        label="SKILL.md files",
        section=SECTION,
        weight=0,
        type=CheckType.DEEP_SCAN,
        deep_pattern="SKILL.md",
        description="Agent skill definitions (progressive disclosure)",
    ),
    CheckDefinition(
        id="claude-commands",
        label=".claude/commands/",
        section=SECTION,
        weight=0,
        type=CheckType.DIR,
        paths=(".claude/commands",),
        description="Custom Claude slash commands",
    ),
]


def analyze(root: Path, probe: FileProbe) -> Dict[str, CustomResult]:
    """Look for prompt libraries and command directories.

    Analyzers run before the deep walk, so nested SKILL.md and prompt files
    are reported by their own deep-scan checks, not here.
    """
    matched = [p for p in PROMPT_SIGNALS if probe.exists(root / p)]
    if not matched:
        return {"has-any-prompt-or-skill": CustomResult(found=False)}

    return {
        "has-any-prompt-or-skill": CustomResult(
            found=True,
            detail=f"{len(matched)} source(s): {', '.join(matched[:5])}",
            matches=matched,
        )
    }

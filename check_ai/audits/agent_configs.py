"""Agent Configs - AI tool configurations and agent instruction files.

Having any one tool configured earns the big bonus: a repository is usually
set up for Cursor or Windsurf or Claude Code, not all of them at once. The
per-tool checks carry no weight and exist for tool profiles.
"""

import re
from pathlib import Path
from typing import Dict

from ..core.checks import CheckDefinition, CheckType, CustomResult
from ..core.probe import FileProbe

SECTION = "Agent Configs"

# Paths whose presence means some AI coding tool is configured
TOOL_SIGNALS = (
    ".cursorrules",
    ".cursor/rules",
    ".windsurfrules",
    ".windsurf/rules",
    "CLAUDE.md",
    "claude.md",
    ".claude",
    ".github/copilot-instructions.md",
    "AGENTS.md",
    "agents.md",
    ".codex",
    "CODEX.md",
    ".gemini",
    ".aider.conf.yml",
    ".aider.conf.yaml",
    ".roo",
    ".continue",
    ".continuerc.json",
    ".junie",
    ".entire",
    "opencode.json",
    ".opencode",
    ".rules",
    ".trae",
    ".trae/rules",
    ".clinerules",
    ".goosehints",
    ".amazonq",
    ".amazonq/rules",
    ".augment",
    ".augment/rules",
    ".augment-guidelines.md",
    ".qodo",
    ".kiro",
    ".clio",
    ".clio/instructions.md",
)

INSTRUCTION_FILES = ("AGENTS.md", "agents.md", "CLAUDE.md", "claude.md")


def _tool_check(check_id: str, label: str, paths, check_type: CheckType, description: str):
    return CheckDefinition(
        id=check_id,
        label=label,
        section=SECTION,
        weight=0,
        type=check_type,
        description=description,
        paths=tuple(paths),
    )


CHECKS = [
    CheckDefinition(
        id="has-any-agent-tool",
        label="At least one AI tool configured",
        section=SECTION,
        weight=20,
        type=CheckType.CUSTOM,
        custom_key="has-any-agent-tool",
        description="Repo has config for at least one AI coding tool (Cursor, Windsurf, Claude, Copilot, etc.)",
    ),
    CheckDefinition(
        id="agents-md",
        label="AGENTS.md",
        section=SECTION,
        weight=10,
        type=CheckType.FILE,
        paths=("AGENTS.md", "agents.md"),
        description="Universal agent instructions, the cross-tool standard",
        hint="touch AGENTS.md",
    ),
    CheckDefinition(
        id="agents-md-quality",
        label="AGENTS.md quality",
        section=SECTION,
        weight=5,
        type=CheckType.CUSTOM,
        custom_key="agents-md-quality",
        description="AGENTS.md covers build, test, style, and project overview",
    ),
    CheckDefinition(
        id="agents-md-nested",
        label="Nested AGENTS.md",
        section=SECTION,
        weight=4,
        type=CheckType.DEEP_SCAN,
        deep_pattern="AGENTS.md",
        description="Sub-directory AGENTS.md for module-specific instructions",
    ),
    CheckDefinition(
        id="agents-dir",
        label=".agents/ directory",
        section=SECTION,
        weight=4,
        type=CheckType.DIR,
        paths=(".agents",),
        description="Organized AI assets directory (skills, plans, tmp)",
    ),
    CheckDefinition(
        id="agents-skills",
        label=".agents/skills/",
        section=SECTION,
        weight=4,
        type=CheckType.DIR,
        paths=(".agents/skills",),
        description="Reusable agent skills with progressive disclosure",
    ),
    # Claude Code
    _tool_check("claude-md", "CLAUDE.md", ["CLAUDE.md", "claude.md"], CheckType.FILE,
                "Claude Code project instructions"),
    _tool_check("claude-dir", ".claude/", [".claude"], CheckType.DIR,
                "Claude settings, skills, and commands"),
    _tool_check("claude-settings", ".claude/settings.json",
                [".claude/settings.json", ".claude/settings.local.json"], CheckType.FILE,
                "Claude project settings (permissions, allowed tools)"),
    # Cursor
    _tool_check("cursorrules", ".cursorrules", [".cursorrules"], CheckType.FILE,
                "Cursor AI rules file (legacy format)"),
    _tool_check("cursor-rules-dir", ".cursor/rules/", [".cursor/rules"], CheckType.DIR,
                "Cursor project rules directory (recommended format)"),
    # Windsurf
    _tool_check("windsurfrules", ".windsurfrules", [".windsurfrules"], CheckType.FILE,
                "Windsurf AI rules file (legacy format)"),
    _tool_check("windsurf-rules-dir", ".windsurf/rules/", [".windsurf/rules"], CheckType.DIR,
                "Windsurf rules directory with always-on, glob, model-decision and manual rules"),
    _tool_check("windsurf-skills", ".windsurf/skills/", [".windsurf/skills"], CheckType.DIR,
                "Windsurf workspace-level skills (SKILL.md bundles)"),
    _tool_check("windsurf-workflows", ".windsurf/workflows/", [".windsurf/workflows"],
                CheckType.DIR, "Windsurf workflow sequences invoked via /command"),
    # GitHub Copilot
    _tool_check("copilot-instructions", ".github/copilot-instructions.md",
                [".github/copilot-instructions.md"], CheckType.FILE,
                "GitHub Copilot project-level custom instructions"),
    _tool_check("copilot-instructions-dir", ".github/instructions/", [".github/instructions"],
                CheckType.DIR, "Scoped .instructions.md files for Copilot"),
    # Other agents
    _tool_check("codex-dir", ".codex/", [".codex"], CheckType.DIR,
                "OpenAI Codex configuration directory"),
    _tool_check("codex-md", "CODEX.md", ["CODEX.md", "codex.md"], CheckType.FILE,
                "OpenAI Codex instructions file"),
    _tool_check("gemini-dir", ".gemini/", [".gemini"], CheckType.DIR,
                "Google Gemini CLI configuration"),
    _tool_check("aider-conf", ".aider.conf.yml",
                [".aider.conf.yml", ".aider.conf.yaml", ".aiderignore"], CheckType.FILE,
                "Aider configuration file"),
    _tool_check("roo-dir", ".roo/", [".roo"], CheckType.DIR,
                "Roo Code rules and configuration"),
    _tool_check("continue-config", ".continue/", [".continue", ".continuerc.json"], CheckType.ANY,
                "Continue.dev configuration"),
    _tool_check("amp-config", "Amp config", ["ampcode.md", ".amp"], CheckType.ANY,
                "Sourcegraph Amp configuration (Amp also reads AGENTS.md)"),
    _tool_check("junie-guidelines", ".junie/ guidelines", [".junie", ".junie/guidelines.md"],
                CheckType.ANY, "JetBrains Junie agent guidelines"),
    _tool_check("entire-dir", ".entire/", [".entire"], CheckType.DIR,
                "Entire HQ agent session capture"),
    _tool_check("opencode-json", "opencode.json", ["opencode.json"], CheckType.FILE,
                "OpenCode project config (model, instructions, MCP servers)"),
    _tool_check("opencode-dir", ".opencode/", [".opencode"], CheckType.DIR,
                "OpenCode agents, commands, skills, and plugins directory"),
    _tool_check("zed-rules", ".rules (Zed)", [".rules"], CheckType.FILE,
                "Zed editor project-level AI rules file"),
    _tool_check("trae-rules", ".trae/rules/", [".trae/rules", ".trae"], CheckType.ANY,
                "Trae IDE project rules directory"),
    _tool_check("clinerules", ".clinerules", [".clinerules"], CheckType.FILE,
                "Cline AI assistant project rules file"),
    _tool_check("goosehints", ".goosehints", [".goosehints"], CheckType.FILE,
                "Goose AI agent project hints file"),
    _tool_check("amazonq-rules", ".amazonq/rules/", [".amazonq/rules", ".amazonq"], CheckType.ANY,
                "Amazon Q Developer project rules directory"),
    _tool_check("augment-rules", ".augment/rules/",
                [".augment/rules", ".augment", ".augment-guidelines.md"], CheckType.ANY,
                "Augment Code project rules and guidelines"),
    _tool_check("qodo-config", ".qodo/", [".qodo"], CheckType.ANY,
                "Qodo AI code quality configuration"),
    # CLIO
    _tool_check("clio-dir", ".clio/", [".clio"], CheckType.DIR,
                "CLIO AI assistant configuration directory"),
    _tool_check("clio-instructions-file", ".clio/instructions.md", [".clio/instructions.md"],
                CheckType.FILE, "CLIO project-specific agent instructions"),
]

_BUILD_WORDS = re.compile(r"\b(build|compile|install|setup)\b")
_COMMAND_WORDS = re.compile(r"\b(run|command|npm|yarn|pnpm|make|cargo|pip|go)\b")
_TEST_WORDS = re.compile(r"\b(test|testing|spec|jest|vitest|pytest|rspec)\b")
_STYLE_WORDS = re.compile(r"\b(style|convention|format|lint|naming|pattern)\b")
_OVERVIEW_WORDS = re.compile(r"\b(overview|architecture|structure|about|description)\b")
_HEADING = re.compile(r"^#{1,3}\s", re.MULTILINE)


def analyze(root: Path, probe: FileProbe) -> Dict[str, CustomResult]:
    """Analyze agent tool presence and instruction file quality."""
    return {
        "has-any-agent-tool": _any_agent_tool(root, probe),
        "agents-md-quality": _instructions_quality(root, probe),
    }


def _any_agent_tool(root: Path, probe: FileProbe) -> CustomResult:
    matched = [p for p in TOOL_SIGNALS if probe.exists(root / p)]
    if not matched:
        return CustomResult(found=False)
    return CustomResult(
        found=True,
        detail=f"{len(matched)} tool(s): {', '.join(matched[:5])}",
        matches=matched,
    )


def _quality_label(score: int) -> str:
    """Map a 0-6 signal count to a quality tier."""
    if score >= 5:
        return "comprehensive"
    if score >= 3:
        return "good"
    if score >= 1:
        return "basic"
    return "minimal"


def _instructions_quality(root: Path, probe: FileProbe) -> CustomResult:
    # The longest instructions file is the one worth grading
    best_file = None
    best_content = ""
    for name in INSTRUCTION_FILES:
        content = probe.read_text(root / name)
        if len(content) > len(best_content):
            best_file, best_content = name, content

    if not best_content:
        return CustomResult(found=False)

    lower = best_content.lower()
    signals = {
        "has_build_commands": bool(_BUILD_WORDS.search(lower) and _COMMAND_WORDS.search(lower)),
        "has_test_instructions": bool(_TEST_WORDS.search(lower)),
        "has_style_guide": bool(_STYLE_WORDS.search(lower)),
        "has_project_overview": bool(_OVERVIEW_WORDS.search(lower)),
        "has_code_examples": "```" in best_content,
        "has_headings": bool(_HEADING.search(best_content)),
    }
    score = sum(signals.values())
    quality = _quality_label(score)

    return CustomResult(
        found=score >= 3,
        detail=f"{quality} ({score}/6 signals in {best_file})" if score >= 3 else None,
        metadata={
            "file": best_file,
            "signals": signals,
            "quality": quality,
            "score": score,
            "max_score": 6,
        },
    )

"""AI Context - files that control what AI agents can and cannot see."""

from ..core.checks import CheckDefinition, CheckType

SECTION = "AI Context"

CHECKS = [
    CheckDefinition(
        id="cursorignore",
        label=".cursorignore",
        section=SECTION,
        weight=3,
        type=CheckType.FILE,
        paths=(".cursorignore",),
        description="Tells Cursor which files to exclude from indexing",
    ),
    CheckDefinition(
        id="cursorindexingignore",
        label=".cursorindexingignore",
        section=SECTION,
        weight=2,
        type=CheckType.FILE,
        paths=(".cursorindexingignore",),
        description="Cursor indexing exclusion list",
    ),
    CheckDefinition(
        id="aiignore",
        label=".aiignore / .aiexclude",
        section=SECTION,
        weight=2,
        type=CheckType.FILE,
        paths=(".aiignore", ".aiexclude"),
        description="Generic AI exclusion file",
    ),
    CheckDefinition(
        id="coderabbit",
        label=".coderabbit.yaml",
        section=SECTION,
        weight=2,
        type=CheckType.FILE,
        paths=(".coderabbit.yaml", ".coderabbit.yml"),
        description="CodeRabbit AI code review configuration",
    ),
    CheckDefinition(
        id="copilotignore",
        label=".copilotignore",
        section=SECTION,
        weight=2,
        type=CheckType.FILE,
        paths=(".copilotignore",),
        description="GitHub Copilot file exclusion list",
    ),
    CheckDefinition(
        id="codeiumignore",
        label=".codeiumignore",
        section=SECTION,
        weight=2,
        type=CheckType.FILE,
        paths=(".codeiumignore",),
        description="Windsurf/Codeium global ignore file",
    ),
    CheckDefinition(
        id="vscode-instructions",
        label=".instructions.md files",
        section=SECTION,
        weight=2,
        type=CheckType.DEEP_SCAN,
        deep_pattern=".instructions.md",
        description="VS Code / Copilot scoped instruction files",
    ),
]

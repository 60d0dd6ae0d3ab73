"""CLIO - Command Line Intelligence Orchestrator configuration.

CLIO is a Perl-based coding assistant with long-term memory, session
management and multi-agent coordination, all kept under ``.clio/``.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List

from ..core.checks import CheckDefinition, CheckType, CustomResult
from ..core.probe import FileProbe

SECTION = "CLIO"

INSTRUCTIONS_PATH = ".clio/instructions.md"
LTM_PATH = ".clio/ltm.json"

CHECKS = [
    CheckDefinition(
        id="clio-config-dir",
        label=".clio/ directory",
        section=SECTION,
        weight=5,
        type=CheckType.DIR,
        paths=(".clio",),
        description="CLIO configuration and state directory",
    ),
    CheckDefinition(
        id="clio-instructions",
        label=".clio/instructions.md",
        section=SECTION,
        weight=4,
        type=CheckType.FILE,
        paths=(INSTRUCTIONS_PATH,),
        description="CLIO project-specific agent instructions (methodology, checkpoints, workflows)",
    ),
    CheckDefinition(
        id="clio-ltm",
        label=".clio/ltm.json",
        section=SECTION,
        weight=3,
        type=CheckType.FILE,
        paths=(LTM_PATH,),
        description="CLIO long-term memory of discoveries, solutions, and patterns",
    ),
    CheckDefinition(
        id="clio-memory",
        label=".clio/memory/",
        section=SECTION,
        weight=2,
        type=CheckType.DIR,
        paths=(".clio/memory",),
        description="CLIO session memory storage directory",
    ),
    CheckDefinition(
        id="clio-sessions",
        label=".clio/sessions/",
        section=SECTION,
        weight=2,
        type=CheckType.DIR,
        paths=(".clio/sessions",),
        description="CLIO session state persistence (todos, tool results, conversation history)",
    ),
    CheckDefinition(
        id="clio-embeddings",
        label=".clio/embeddings/",
        section=SECTION,
        weight=2,
        type=CheckType.DIR,
        paths=(".clio/embeddings",),
        description="CLIO code embeddings for semantic search",
    ),
    CheckDefinition(
        id="clio-logs",
        label=".clio/logs/",
        section=SECTION,
        weight=1,
        type=CheckType.DIR,
        paths=(".clio/logs",),
        description="CLIO debug and tool execution logs",
    ),
    CheckDefinition(
        id="clio-instructions-quality",
        label="Instructions quality",
        section=SECTION,
        weight=3,
        type=CheckType.CUSTOM,
        custom_key="clio-instructions-quality",
        description="CLIO instructions cover methodology, checkpoints, and workflows",
    ),
    CheckDefinition(
        id="clio-ltm-quality",
        label="LTM knowledge depth",
        section=SECTION,
        weight=2,
        type=CheckType.CUSTOM,
        custom_key="clio-ltm-quality",
        description="CLIO long-term memory contains learned patterns and solutions",
    ),
]

_HEADING = re.compile(r"^#{1,3}\s", re.MULTILINE)
_INSTRUCTION_SIGNALS = {
    "has_methodology": re.compile(r"\b(methodology|unbroken method|principles|framework)\b"),
    "has_checkpoints": re.compile(r"\b(checkpoint|collaboration|approval|verification)\b"),
    "has_workflow": re.compile(r"\b(workflow|protocol|process|procedure)\b"),
    "has_ownership": re.compile(r"\b(ownership|scope|responsibility|authority)\b"),
    "has_handoff": re.compile(r"\b(handoff|handover|session|continuity)\b"),
}


def analyze(root: Path, probe: FileProbe) -> Dict[str, CustomResult]:
    """Grade the CLIO instructions and long-term memory files."""
    return {
        "clio-instructions-quality": _instructions_quality(root, probe),
        "clio-ltm-quality": _ltm_quality(root, probe),
    }


def _instructions_quality(root: Path, probe: FileProbe) -> CustomResult:
    content = probe.read_text(root / INSTRUCTIONS_PATH)
    if not content:
        return CustomResult(found=False)

    lower = content.lower()
    signals = {name: bool(pattern.search(lower)) for name, pattern in _INSTRUCTION_SIGNALS.items()}
    signals["has_code_examples"] = "```" in content
    signals["has_headings"] = len(_HEADING.findall(content)) >= 5
    signals["is_substantial"] = len([l for l in content.split("\n") if l.strip()]) >= 50

    score = sum(signals.values())
    if score >= 6:
        quality = "comprehensive"
    elif score >= 4:
        quality = "good"
    elif score >= 2:
        quality = "basic"
    else:
        quality = "minimal"

    return CustomResult(
        found=score >= 4,
        detail=f"{quality} ({score}/8 signals)",
        metadata={"signals": signals, "quality": quality, "score": score, "max_score": 8},
    )


def _entries(patterns: Dict[str, Any], name: str) -> List[Any]:
    value = patterns.get(name)
    return value if isinstance(value, list) else []


def _ltm_quality(root: Path, probe: FileProbe) -> CustomResult:
    ltm_file = root / LTM_PATH
    if not probe.exists(ltm_file):
        return CustomResult(found=False)

    try:
        ltm = json.loads(probe.read_text(ltm_file))
    except json.JSONDecodeError:
        return CustomResult(found=False, detail="invalid JSON")

    patterns = ltm.get("patterns") if isinstance(ltm, dict) else None
    if not isinstance(patterns, dict):
        patterns = {}

    discoveries = _entries(patterns, "discoveries")
    solutions = _entries(patterns, "problem_solutions")
    code_patterns = _entries(patterns, "code_patterns")
    total = len(discoveries) + len(solutions) + len(code_patterns)

    def confidence(entry: Any) -> float:
        value = entry.get("confidence") if isinstance(entry, dict) else None
        return value if isinstance(value, (int, float)) else 0

    signals = {
        "has_discoveries": len(discoveries) > 0,
        "has_solutions": len(solutions) > 0,
        "has_patterns": len(code_patterns) > 0,
        "has_high_confidence": any(confidence(e) >= 0.8 for e in discoveries + code_patterns),
        "has_verified": any(
            isinstance(d, dict) and d.get("verified") in (True, 1) for d in discoveries
        ),
    }
    score = sum(signals.values())

    detail = None
    if total > 0:
        detail = (
            f"{len(discoveries)} discoveries, {len(solutions)} solutions, "
            f"{len(code_patterns)} patterns"
        )

    return CustomResult(
        found=total >= 3 and score >= 2,
        detail=detail,
        metadata={
            "discoveries": len(discoveries),
            "solutions": len(solutions),
            "patterns": len(code_patterns),
            "signals": signals,
            "score": score,
            "max_score": 5,
        },
    )

"""Scorer Module - Calculates AI-readiness scores from findings."""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .checks import Finding


@dataclass(frozen=True)
class Tier:
    """One grade band of the 0-10 scale."""
    min: float
    grade: str
    label: str
    color: str


# Ordered highest first; the final tier (min 0) makes the lookup total
TIERS: Tuple[Tier, ...] = (
    Tier(9, "A+", "Exemplary - fully AI-ready", "green"),
    Tier(7, "A", "Strong - AI-ready", "green"),
    Tier(5, "B", "Decent - partially AI-ready", "yellow"),
    Tier(3, "C", "Weak - minimal AI setup", "yellow"),
    Tier(1, "D", "Poor - barely AI-aware", "red"),
    Tier(0, "F", "None - not AI-ready", "red"),
)

DEFAULT_SECTION_ORDER: Tuple[str, ...] = (
    "Repo Hygiene",
    "Grounding Docs",
    "Testing",
    "Agent Configs",
    "AI Context",
    "Prompts & Skills",
    "MCP",
    "AI Deps",
)

DEFAULT_READINESS_THRESHOLD = 3.0


def round_half_up(value: float, digits: int = 0) -> float:
    """Round half away from zero (for the non-negative scores used here)."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def tier_for(normalized: float, tiers: Sequence[Tier] = TIERS) -> Tier:
    """Get the first tier whose minimum is at or below the normalized score."""
    for tier in tiers:
        if normalized >= tier.min:
            return tier
    return tiers[-1]


@dataclass
class SectionScore:
    """Score for a single section."""
    name: str
    earned: int = 0
    max: int = 0
    items: List[Finding] = field(default_factory=list)

    @property
    def percentage(self) -> int:
        """Share of section points earned, 0-100."""
        if self.max == 0:
            return 0
        return int(round_half_up(self.earned / self.max * 100))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "earned": self.earned,
            "max": self.max,
            "pct": self.percentage,
            "items": [f.id for f in self.items],
        }


@dataclass
class Score:
    """Overall AI-readiness score."""
    earned_points: int
    max_points: int
    normalized: float  # 0-10, one decimal
    tier: Tier
    sections: Dict[str, SectionScore] = field(default_factory=dict)
    found_count: int = 0
    total_checks: int = 0
    readiness_threshold: float = DEFAULT_READINESS_THRESHOLD

    @property
    def grade(self) -> str:
        return self.tier.grade

    @property
    def label(self) -> str:
        return self.tier.label

    @property
    def color(self) -> str:
        return self.tier.color

    @property
    def is_ready(self) -> bool:
        """Whether the score reaches the readiness threshold."""
        return self.normalized >= self.readiness_threshold

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "earned_points": self.earned_points,
            "max_points": self.max_points,
            "normalized": self.normalized,
            "grade": self.grade,
            "label": self.label,
            "color": self.color,
            "is_ready": self.is_ready,
            "readiness_threshold": self.readiness_threshold,
            "found_count": self.found_count,
            "total_checks": self.total_checks,
            "sections": {k: v.to_dict() for k, v in self.sections.items()},
        }


class Scorer:
    """Aggregates findings into a weighted, normalized 0-10 score."""

    def __init__(
        self,
        section_order: Optional[Iterable[str]] = None,
        readiness_threshold: float = DEFAULT_READINESS_THRESHOLD,
        tiers: Sequence[Tier] = TIERS,
    ):
        """Initialize the scorer.

        Args:
            section_order: Sections always reported, in this order
            readiness_threshold: Minimum normalized score considered ready
            tiers: Grade bands, highest minimum first
        """
        self.section_order: Tuple[str, ...] = (
            tuple(section_order) if section_order is not None else DEFAULT_SECTION_ORDER
        )
        self.readiness_threshold = readiness_threshold
        self.tiers: Tuple[Tier, ...] = tuple(tiers)

    def score(self, findings: Sequence[Finding]) -> Score:
        """Calculate the score of a finding list.

        Args:
            findings: Findings of one scan

        Returns:
            Score with overall and per-section results
        """
        max_points = sum(f.weight for f in findings)
        earned_points = sum(f.weight for f in findings if f.found)

        if max_points > 0:
            normalized = round_half_up(earned_points / max_points * 10, 1)
        else:
            normalized = 0.0

        return Score(
            earned_points=earned_points,
            max_points=max_points,
            normalized=normalized,
            tier=tier_for(normalized, self.tiers),
            sections=self._group_sections(findings),
            found_count=len([f for f in findings if f.found]),
            total_checks=len(findings),
            readiness_threshold=self.readiness_threshold,
        )

    def _group_sections(self, findings: Sequence[Finding]) -> Dict[str, SectionScore]:
        """Group findings by section, seeding the fixed order first."""
        sections: Dict[str, SectionScore] = {
            name: SectionScore(name=name) for name in self.section_order
        }

        for finding in findings:
            name = finding.section or "Other"
            if name not in sections:
                sections[name] = SectionScore(name=name)
            section = sections[name]
            section.max += finding.weight
            section.earned += finding.earned
            section.items.append(finding)

        return sections


def get_recommendations(
    findings: Sequence[Finding],
    include_nice_to_have: bool = False,
) -> Dict[str, List[Finding]]:
    """Get missing checks bucketed by impact.

    Args:
        findings: Findings of one scan
        include_nice_to_have: Also return low-impact misses

    Returns:
        Mapping of priority ("critical", "important", "nice") to findings
    """
    missing = [f for f in findings if not f.found]
    recommendations = {
        "critical": [f for f in missing if f.weight >= 10],
        "important": [f for f in missing if 5 <= f.weight < 10],
    }
    if include_nice_to_have:
        recommendations["nice"] = [f for f in missing if 3 <= f.weight < 5]
    return recommendations

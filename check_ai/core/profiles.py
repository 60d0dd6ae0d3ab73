"""Profile Resolver Module - Scores findings against per-tool profiles."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple

import yaml

from .checks import Finding
from .scorer import TIERS, Tier, round_half_up, tier_for

logger = logging.getLogger(__name__)

DEFAULT_PROFILES_PATH = Path(__file__).resolve().parent.parent / "configs" / "tool_profiles.yaml"

REQUIRED_POINTS = 2
VALUABLE_POINTS = 1


class ProfileConfigError(ValueError):
    """Raised when the tool profile configuration is malformed."""


@dataclass(frozen=True)
class ToolProfile:
    """Which checks matter for one AI tool."""
    key: str
    name: str
    description: str = ""
    icon: str = ""
    required: Tuple[str, ...] = ()
    valuable: Tuple[str, ...] = ()
    alternatives: Tuple[Tuple[str, str], ...] = ()
    not_applicable: FrozenSet[str] = frozenset()

    @property
    def applicable_required(self) -> Tuple[str, ...]:
        return tuple(i for i in self.required if i not in self.not_applicable)

    @property
    def applicable_valuable(self) -> Tuple[str, ...]:
        return tuple(i for i in self.valuable if i not in self.not_applicable)

    def referenced_ids(self) -> List[str]:
        """Check ids this profile scores on, first-seen order."""
        ids = list(self.required) + list(self.valuable)
        for pair in self.alternatives:
            ids.extend(pair)
        return list(dict.fromkeys(ids))

    @classmethod
    def from_dict(cls, key: str, data: Mapping[str, Any]) -> "ToolProfile":
        """Create a profile from one YAML mapping.

        Raises:
            ProfileConfigError: If a field has the wrong shape
        """
        if not isinstance(data, Mapping):
            raise ProfileConfigError(f"Profile '{key}' must be a mapping")

        def id_list(name: str) -> Tuple[str, ...]:
            value = data.get(name) or []
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ProfileConfigError(f"Profile '{key}': '{name}' must be a list of check ids")
            return tuple(value)

        alternatives = []
        for pair in data.get("alternatives") or []:
            if (
                not isinstance(pair, list)
                or len(pair) != 2
                or not all(isinstance(v, str) for v in pair)
            ):
                raise ProfileConfigError(
                    f"Profile '{key}': each alternative must be a pair of check ids"
                )
            alternatives.append((pair[0], pair[1]))

        return cls(
            key=key,
            name=str(data.get("name") or key),
            description=str(data.get("description") or ""),
            icon=str(data.get("icon") or ""),
            required=id_list("required"),
            valuable=id_list("valuable"),
            alternatives=tuple(alternatives),
            not_applicable=frozenset(id_list("not_applicable")),
        )


@dataclass
class RequiredStatus:
    """Pass/fail state of one required check."""
    id: str
    found: bool
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "found": self.found, "label": self.label}


@dataclass
class ToolScore:
    """Score of a finding list viewed through one tool profile."""
    profile: ToolProfile
    required_passed: int
    required_total: int
    required_status: List[RequiredStatus]
    valuable_passed: int
    valuable_total: int
    alternatives_satisfied: int
    earned: int
    max: int
    percentage: int
    normalized: float
    tier: Tier
    applicable_checks: int = 0

    @property
    def key(self) -> str:
        return self.profile.key

    @property
    def name(self) -> str:
        return self.profile.name

    @property
    def grade(self) -> str:
        return self.tier.grade

    @property
    def color(self) -> str:
        return self.tier.color

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "key": self.profile.key,
            "name": self.profile.name,
            "icon": self.profile.icon,
            "description": self.profile.description,
            "required": {
                "passed": self.required_passed,
                "total": self.required_total,
                "status": [s.to_dict() for s in self.required_status],
            },
            "valuable": {
                "passed": self.valuable_passed,
                "total": self.valuable_total,
            },
            "alternatives_satisfied": self.alternatives_satisfied,
            "earned": self.earned,
            "max": self.max,
            "percentage": self.percentage,
            "normalized": self.normalized,
            "grade": self.grade,
            "color": self.color,
            "applicable_checks": self.applicable_checks,
        }


def load_profiles(path: Optional[str | Path] = None) -> Dict[str, ToolProfile]:
    """Load tool profiles from a YAML file.

    Args:
        path: YAML file to read (defaults to the bundled configuration)

    Returns:
        Mapping of profile key to profile, in file order

    Raises:
        ProfileConfigError: If the file is unreadable or malformed
    """
    path = Path(path) if path else DEFAULT_PROFILES_PATH

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ProfileConfigError(f"Cannot read tool profiles {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ProfileConfigError(f"Invalid YAML in tool profiles {path}: {e}") from e

    if data is None:
        return {}

    profiles_data = data.get("profiles", data) if isinstance(data, dict) else data
    if not isinstance(profiles_data, dict):
        raise ProfileConfigError(f"Tool profiles {path} must be a mapping of key to profile")

    profiles = {}
    for key, entry in profiles_data.items():
        profiles[str(key)] = ToolProfile.from_dict(str(key), entry)

    logger.debug("Loaded %d tool profile(s) from %s", len(profiles), path)
    return profiles


class ProfileResolver:
    """Re-scores the same findings against named tool profiles."""

    def __init__(
        self,
        profiles: Optional[Mapping[str, ToolProfile] | Iterable[ToolProfile]] = None,
        tiers: Sequence[Tier] = TIERS,
    ):
        """Initialize the resolver.

        Args:
            profiles: Profiles keyed by tool key, or an iterable of profiles;
                defaults to the bundled configuration
            tiers: Grade bands shared with the overall score
        """
        if profiles is None:
            profiles = load_profiles()
        if isinstance(profiles, Mapping):
            self.profiles: Dict[str, ToolProfile] = dict(profiles)
        else:
            self.profiles = {p.key: p for p in profiles}
        self.tiers = tuple(tiers)

    @property
    def keys(self) -> List[str]:
        return list(self.profiles)

    def get(self, key: str) -> Optional[ToolProfile]:
        return self.profiles.get(key)

    def score_for_profile(self, findings: Sequence[Finding], key: str) -> Optional[ToolScore]:
        """Score findings for one tool.

        Args:
            findings: Findings of one scan
            key: Profile key

        Returns:
            ToolScore, or None if the key is unknown
        """
        profile = self.profiles.get(key)
        if profile is None:
            return None

        by_id = {f.id: f for f in findings}

        def is_found(check_id: str) -> bool:
            finding = by_id.get(check_id)
            return finding is not None and finding.found

        required = profile.applicable_required
        valuable = profile.applicable_valuable

        required_status = [
            RequiredStatus(
                id=check_id,
                found=is_found(check_id),
                label=by_id[check_id].label if check_id in by_id else check_id,
            )
            for check_id in required
        ]
        required_passed = len([s for s in required_status if s.found])
        valuable_passed = len([i for i in valuable if is_found(i)])

        # Reported only; alternatives never change earned or max
        alternatives_satisfied = len([
            pair for pair in profile.alternatives if is_found(pair[0]) or is_found(pair[1])
        ])

        earned = required_passed * REQUIRED_POINTS + valuable_passed * VALUABLE_POINTS
        max_points = len(required) * REQUIRED_POINTS + len(valuable) * VALUABLE_POINTS

        if max_points > 0:
            percentage = int(round_half_up(earned / max_points * 100))
            normalized = round_half_up(earned / max_points * 10, 1)
        else:
            percentage = 0
            normalized = 0.0

        return ToolScore(
            profile=profile,
            required_passed=required_passed,
            required_total=len(required),
            required_status=required_status,
            valuable_passed=valuable_passed,
            valuable_total=len(valuable),
            alternatives_satisfied=alternatives_satisfied,
            earned=earned,
            max=max_points,
            percentage=percentage,
            normalized=normalized,
            tier=tier_for(normalized, self.tiers),
            applicable_checks=len(required) + len(valuable),
        )

    def detect_configured_tools(self, findings: Sequence[Finding]) -> List[str]:
        """Detect which tools the scanned repository is set up for.

        A tool counts as configured when all its required checks pass, or when
        one of its tool-specific valuable checks (id equal to the key or
        starting with ``key-``) passes.

        Returns:
            Profile keys in configuration order
        """
        found_ids = {f.id for f in findings if f.found}
        configured = []

        for key, profile in self.profiles.items():
            has_required = all(i in found_ids for i in profile.required)
            has_tool_specific = any(
                i in found_ids
                for i in profile.valuable
                if i == key or i.startswith(f"{key}-")
            )
            if has_required or has_tool_specific:
                configured.append(key)

        return configured

    def score_all_tools(self, findings: Sequence[Finding]) -> List[ToolScore]:
        """Score every detected tool."""
        return self.score_tools(findings, self.detect_configured_tools(findings))

    def score_tools(self, findings: Sequence[Finding], keys: Iterable[str]) -> List[ToolScore]:
        """Score the given tools, skipping unknown keys."""
        scores = []
        for key in keys:
            score = self.score_for_profile(findings, key)
            if score is None:
                logger.debug("Skipping unknown tool profile '%s'", key)
                continue
            scores.append(score)
        return scores

    def unknown_check_ids(self, known_ids: Iterable[str]) -> Dict[str, List[str]]:
        """Find profile references to checks no audit module defines.

        Args:
            known_ids: Ids of all loaded checks

        Returns:
            Mapping of profile key to unknown ids (profiles without any omitted)
        """
        known = set(known_ids)
        unknown = {}
        for key, profile in self.profiles.items():
            missing = [i for i in profile.referenced_ids() if i not in known]
            if missing:
                unknown[key] = missing
        return unknown

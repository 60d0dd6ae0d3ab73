"""Check Models - Defines check definitions, custom results and findings."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class CheckType(Enum):
    """How a check decides whether it passes."""
    FILE = "file"
    DIR = "dir"
    ANY = "any"
    DEEP_SCAN = "deep-scan"
    CUSTOM = "custom"


@dataclass(frozen=True)
class CheckDefinition:
    """A declarative rule describing what filesystem condition is a pass."""
    id: str
    label: str
    section: str
    weight: int
    type: CheckType
    description: str
    paths: Tuple[str, ...] = ()
    deep_pattern: Optional[str] = None
    custom_key: Optional[str] = None
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert check definition to dictionary."""
        return {
            "id": self.id,
            "label": self.label,
            "section": self.section,
            "weight": self.weight,
            "type": self.type.value,
            "description": self.description,
            "paths": list(self.paths),
            "deep_pattern": self.deep_pattern,
            "custom_key": self.custom_key,
            "hint": self.hint,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CheckDefinition":
        """Create check definition from dictionary."""
        return cls(
            id=data["id"],
            label=data["label"],
            section=data["section"],
            weight=data["weight"],
            type=CheckType(data["type"]),
            description=data.get("description", ""),
            paths=tuple(data.get("paths", ())),
            deep_pattern=data.get("deep_pattern"),
            custom_key=data.get("custom_key"),
            hint=data.get("hint"),
        )


@dataclass
class CustomResult:
    """Outcome of a content-inspecting check, produced by an audit analyzer.

    ``metadata`` carries whatever diagnostic fields the analyzer wants to
    expose (signal maps, counters, ...). The evaluator copies it verbatim.
    """
    found: bool
    detail: Optional[str] = None
    matches: Optional[List[str]] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Finding:
    """The evaluated outcome of one check against one scanned directory."""
    check: CheckDefinition
    found: bool
    detail: Optional[str] = None
    matched_path: Optional[str] = None
    matches: Optional[Tuple[str, ...]] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def id(self) -> str:
        return self.check.id

    @property
    def label(self) -> str:
        return self.check.label

    @property
    def section(self) -> str:
        return self.check.section

    @property
    def weight(self) -> int:
        return self.check.weight

    @property
    def type(self) -> CheckType:
        return self.check.type

    @property
    def description(self) -> str:
        return self.check.description

    @property
    def earned(self) -> int:
        """Points contributed to the numerator of the score."""
        return self.weight if self.found else 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert finding to a flat dictionary."""
        data = self.check.to_dict()
        data.update({
            "found": self.found,
            "detail": self.detail,
            "matched_path": self.matched_path,
            "matches": list(self.matches) if self.matches is not None else None,
            "metadata": self.metadata,
        })
        return data

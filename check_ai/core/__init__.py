"""Core modules for check-ai."""

from .checks import CheckDefinition, CheckType, CustomResult, Finding
from .probe import FileProbe
from .walker import DeepTreeWalker, WalkResult
from .registry import AuditLoadError, AuditModule, AuditRegistry
from .evaluator import CheckEvaluator
from .scanner import Scanner, ScanEvent, ScanResult
from .scorer import Scorer, Score, SectionScore, Tier, TIERS
from .profiles import ProfileConfigError, ProfileResolver, ToolProfile, ToolScore, load_profiles

__all__ = [
    "CheckDefinition",
    "CheckType",
    "CustomResult",
    "Finding",
    "FileProbe",
    "DeepTreeWalker",
    "WalkResult",
    "AuditLoadError",
    "AuditModule",
    "AuditRegistry",
    "CheckEvaluator",
    "Scanner",
    "ScanEvent",
    "ScanResult",
    "Scorer",
    "Score",
    "SectionScore",
    "Tier",
    "TIERS",
    "ProfileConfigError",
    "ProfileResolver",
    "ToolProfile",
    "ToolScore",
    "load_profiles",
]

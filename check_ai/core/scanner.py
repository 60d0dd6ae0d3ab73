"""Scanner Module - Orchestrates one audit of a repository."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .checks import CheckDefinition, CheckType, Finding
from .evaluator import CheckEvaluator
from .probe import FileProbe
from .registry import AuditModule, AuditRegistry
from .walker import DeepTreeWalker, collect_patterns

logger = logging.getLogger(__name__)


@dataclass
class ScanEvent:
    """Progress notification emitted while scanning.

    ``phase`` is one of ``deep-scan``, ``deep-scan-done``, ``checking`` or
    ``done``.
    """
    phase: str
    current: int = 0
    total: int = 0
    check: Optional[CheckDefinition] = None
    files_scanned: int = 0
    dirs_scanned: int = 0


ProgressCallback = Callable[[ScanEvent], None]


@dataclass
class ScanResult:
    """Result of scanning one repository."""
    target_path: str
    findings: List[Finding] = field(default_factory=list)
    files_scanned: int = 0
    dirs_scanned: int = 0
    audit_count: int = 0
    scan_duration_ms: int = 0
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def found_count(self) -> int:
        """Get number of passing checks."""
        return len([f for f in self.findings if f.found])

    def get_finding(self, check_id: str) -> Optional[Finding]:
        """Get the finding of a check by id."""
        for finding in self.findings:
            if finding.id == check_id:
                return finding
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert scan result to dictionary."""
        return {
            "target_path": self.target_path,
            "findings": [f.to_dict() for f in self.findings],
            "found_count": self.found_count,
            "total_checks": len(self.findings),
            "files_scanned": self.files_scanned,
            "dirs_scanned": self.dirs_scanned,
            "audit_count": self.audit_count,
            "scan_duration_ms": self.scan_duration_ms,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }


class Scanner:
    """Runs every audit module against a directory.

    One scan is: load modules, run analyzers, walk the tree once for all
    deep-scan patterns, then evaluate every check in module order.
    """

    def __init__(
        self,
        registry: Optional[AuditRegistry] = None,
        walker: Optional[DeepTreeWalker] = None,
        evaluator: Optional[CheckEvaluator] = None,
        probe: Optional[FileProbe] = None,
    ):
        """Initialize the scanner.

        Args:
            registry: Source of audit modules
            walker: Deep tree walker for deep-scan checks
            evaluator: Check evaluator
            probe: Filesystem probe shared by analyzers and the evaluator
        """
        self.probe = probe or FileProbe()
        self.registry = registry or AuditRegistry()
        self.walker = walker or DeepTreeWalker()
        self.evaluator = evaluator or CheckEvaluator(self.probe)

    def load_checks(self) -> List[CheckDefinition]:
        """Get every check definition, in module order."""
        return [check for module in self.registry.load_all() for check in module.checks]

    def scan(
        self,
        target_path: str | Path,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> ScanResult:
        """Scan a directory.

        Args:
            target_path: Repository root to audit
            progress_callback: Optional hook receiving ScanEvent updates

        Returns:
            ScanResult with one finding per check

        Raises:
            AuditLoadError: If any audit module is malformed
        """
        started_at = datetime.now()
        root_path = Path(target_path).resolve()
        result = self._create_result(root_path, started_at)

        def emit(event: ScanEvent) -> None:
            if progress_callback:
                progress_callback(event)

        modules = self.registry.load_all()
        checks = [check for module in modules for check in module.checks]
        result.audit_count = len(modules)

        custom_results = self.registry.run_analyzers(modules, root_path, self.probe)

        patterns = collect_patterns(
            c.deep_pattern for c in checks if c.type is CheckType.DEEP_SCAN
        )
        emit(ScanEvent(phase="deep-scan", total=len(patterns)))
        walk = self.walker.walk(root_path, patterns)
        result.files_scanned = walk.files_scanned
        result.dirs_scanned = walk.dirs_scanned
        emit(ScanEvent(
            phase="deep-scan-done",
            files_scanned=walk.files_scanned,
            dirs_scanned=walk.dirs_scanned,
        ))

        def on_check(current: int, total: int, check: CheckDefinition) -> None:
            emit(ScanEvent(phase="checking", current=current, total=total, check=check))

        result.findings = self.evaluator.evaluate(
            root_path,
            checks,
            walk.matches,
            custom_results,
            progress_callback=on_check,
        )
        emit(ScanEvent(phase="done", current=len(checks), total=len(checks)))

        result = self._complete_result(result, started_at)
        logger.info(
            "Scanned %s: %d/%d checks passed in %dms",
            root_path, result.found_count, len(result.findings), result.scan_duration_ms,
        )
        return result

    def _create_result(self, target_path: Path, started_at: datetime) -> ScanResult:
        return ScanResult(target_path=str(target_path), started_at=started_at)

    def _complete_result(self, result: ScanResult, started_at: datetime) -> ScanResult:
        """Complete a scan result with timing info."""
        completed_at = datetime.now()
        result.completed_at = completed_at
        result.scan_duration_ms = int((completed_at - started_at).total_seconds() * 1000)
        return result


def scan_modules(modules: List[AuditModule], target_path: str | Path, **kwargs) -> ScanResult:
    """Scan a directory with an explicit set of audit modules."""
    return Scanner(registry=AuditRegistry.from_modules(modules), **kwargs).scan(target_path)

"""Audit Registry Module - Discovers, validates and runs audit modules.

An audit module is a plain Python module inside ``check_ai.audits`` that
exposes:

* ``SECTION`` - the section name it owns,
* ``CHECKS`` - an ordered list of :class:`CheckDefinition`,
* ``analyze(root, probe)`` - optional, required when any check is CUSTOM;
  returns a mapping of custom key to :class:`CustomResult`.
"""

import importlib
import logging
import pkgutil
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Set

from .checks import CheckDefinition, CheckType, CustomResult
from .probe import FileProbe

logger = logging.getLogger(__name__)

DEFAULT_AUDIT_PACKAGE = "check_ai.audits"

MIN_WEIGHT = 0
MAX_WEIGHT = 20

Analyzer = Callable[[Path, FileProbe], Dict[str, CustomResult]]


class AuditLoadError(ValueError):
    """Raised when an audit module is malformed. Fatal for the whole scan."""


@dataclass
class AuditModule:
    """A named bundle of check definitions plus optional content analysis."""
    source: str
    section: str
    checks: List[CheckDefinition] = field(default_factory=list)
    analyzer: Optional[Analyzer] = None

    @property
    def custom_keys(self) -> List[str]:
        """Custom keys declared by this module's CUSTOM checks."""
        return [c.custom_key for c in self.checks if c.type is CheckType.CUSTOM and c.custom_key]

    @classmethod
    def from_module(cls, module: ModuleType) -> "AuditModule":
        """Build an audit module from an imported Python module.

        Raises:
            AuditLoadError: If the module lacks the required exports
        """
        source = module.__name__.rsplit(".", 1)[-1]
        section = getattr(module, "SECTION", None)
        checks = getattr(module, "CHECKS", None)
        analyzer = getattr(module, "analyze", None)

        if not isinstance(section, str) or not section:
            raise AuditLoadError(f"Audit '{source}' must export a non-empty SECTION string")
        if not isinstance(checks, (list, tuple)):
            raise AuditLoadError(f"Audit '{source}' must export a CHECKS list")
        if analyzer is not None and not callable(analyzer):
            raise AuditLoadError(f"Audit '{source}' exports a non-callable analyze")

        return cls(source=source, section=section, checks=list(checks), analyzer=analyzer)


class AuditRegistry:
    """Registry supplying the ordered, validated set of audit modules."""

    def __init__(self, package: Optional[str] = DEFAULT_AUDIT_PACKAGE):
        """Initialize the registry.

        Args:
            package: Dotted name of the package scanned for audit modules,
                or None to rely only on explicit registration
        """
        self.package = package
        self._registered: Dict[str, AuditModule] = {}

    @classmethod
    def from_modules(cls, modules: Iterable[AuditModule]) -> "AuditRegistry":
        """Create a registry holding only the given modules."""
        registry = cls(package=None)
        for module in modules:
            registry.register(module)
        return registry

    def register(self, module: AuditModule) -> "AuditRegistry":
        """Register an audit module explicitly.

        Args:
            module: Audit module to add

        Returns:
            Self for chaining
        """
        if module.source in self._registered:
            raise AuditLoadError(f"Audit source '{module.source}' registered twice")
        self._registered[module.source] = module
        return self

    def discover(self) -> List[AuditModule]:
        """Import every module of the audit package, sorted by module name."""
        if not self.package:
            return []

        try:
            package = importlib.import_module(self.package)
        except ImportError as e:
            raise AuditLoadError(f"Cannot import audit package '{self.package}': {e}") from e

        names = sorted(
            info.name for info in pkgutil.iter_modules(package.__path__)
            if not info.name.startswith("_")
        )

        modules = []
        for name in names:
            dotted = f"{self.package}.{name}"
            try:
                module = importlib.import_module(dotted)
            except Exception as e:
                raise AuditLoadError(f"Failed to load audit '{name}': {e}") from e
            modules.append(AuditModule.from_module(module))
            logger.debug("Loaded audit module %s", dotted)

        return modules

    def load_all(self) -> List[AuditModule]:
        """Load all audit modules in deterministic (lexicographic) order.

        Returns:
            Validated audit modules

        Raises:
            AuditLoadError: If any module is malformed
        """
        modules = {m.source: m for m in self.discover()}
        for source, module in self._registered.items():
            if source in modules:
                raise AuditLoadError(f"Audit source '{source}' registered twice")
            modules[source] = module

        ordered = [modules[source] for source in sorted(modules)]
        validate_modules(ordered)
        logger.debug("Loaded %d audit module(s)", len(ordered))
        return ordered

    def run_analyzers(
        self,
        modules: List[AuditModule],
        root_path: str | Path,
        probe: Optional[FileProbe] = None,
    ) -> Dict[str, CustomResult]:
        """Run every module's analyzer once and merge the results.

        Args:
            modules: Loaded audit modules
            root_path: Directory being scanned
            probe: Filesystem probe handed to analyzers

        Returns:
            Mapping of custom key to result

        Raises:
            AuditLoadError: If an analyzer returns something other than a
                mapping of custom key to CustomResult or dict
        """
        root_path = Path(root_path)
        probe = probe or FileProbe()
        merged: Dict[str, CustomResult] = {}

        for module in modules:
            if module.analyzer is None:
                continue
            try:
                results = module.analyzer(root_path, probe)
            except Exception as e:
                logger.warning("Analyzer of audit '%s' failed: %s", module.source, e)
                continue

            if results is None:
                continue
            if not isinstance(results, Mapping):
                raise AuditLoadError(
                    f"Analyzer of audit '{module.source}' returned {type(results).__name__}, "
                    f"expected a mapping of custom key to result"
                )

            for key, value in results.items():
                if isinstance(value, Mapping):
                    value = _custom_result_from_dict(value)
                elif not isinstance(value, CustomResult):
                    raise AuditLoadError(
                        f"Analyzer of audit '{module.source}' returned "
                        f"{type(value).__name__} for key '{key}', expected a CustomResult or dict"
                    )
                merged[key] = value

        return merged


def validate_modules(modules: List[AuditModule]) -> None:
    """Validate the structural invariants of a set of audit modules.

    Raises:
        AuditLoadError: On the first violated invariant
    """
    sections: Set[str] = set()
    check_ids: Dict[str, str] = {}
    custom_keys: Dict[str, str] = {}

    for module in modules:
        if module.section in sections:
            raise AuditLoadError(f"Duplicate section '{module.section}' (audit '{module.source}')")
        sections.add(module.section)

        for check in module.checks:
            _validate_check(module, check)

            if check.id in check_ids:
                raise AuditLoadError(
                    f"Duplicate check id '{check.id}' in audits "
                    f"'{check_ids[check.id]}' and '{module.source}'"
                )
            check_ids[check.id] = module.source

            if check.type is CheckType.CUSTOM:
                owner = custom_keys.get(check.custom_key)
                if owner is not None and owner != module.source:
                    raise AuditLoadError(
                        f"Custom key '{check.custom_key}' used by audits "
                        f"'{owner}' and '{module.source}'"
                    )
                custom_keys[check.custom_key] = module.source

        if module.custom_keys and module.analyzer is None:
            raise AuditLoadError(
                f"Audit '{module.source}' has custom checks but no analyze() function"
            )


def _validate_check(module: AuditModule, check: CheckDefinition) -> None:
    if not isinstance(check, CheckDefinition):
        raise AuditLoadError(f"Audit '{module.source}' has a check that is not a CheckDefinition")
    if not check.id:
        raise AuditLoadError(f"Audit '{module.source}' has a check without an id")
    if check.section != module.section:
        raise AuditLoadError(
            f"Check '{check.id}' in '{module.source}' has section '{check.section}' "
            f"but the audit exports '{module.section}'"
        )
    if isinstance(check.weight, bool) or not isinstance(check.weight, int):
        raise AuditLoadError(f"Check '{check.id}' weight must be an integer")
    if not MIN_WEIGHT <= check.weight <= MAX_WEIGHT:
        raise AuditLoadError(
            f"Check '{check.id}' weight {check.weight} out of range [{MIN_WEIGHT}, {MAX_WEIGHT}]"
        )
    if not isinstance(check.type, CheckType):
        raise AuditLoadError(f"Check '{check.id}' has invalid type {check.type!r}")
    if check.type is CheckType.DEEP_SCAN and not check.deep_pattern:
        raise AuditLoadError(f"Deep-scan check '{check.id}' needs a deep_pattern")
    if check.type is CheckType.CUSTOM and not check.custom_key:
        raise AuditLoadError(f"Custom check '{check.id}' needs a custom_key")


def _custom_result_from_dict(data: Mapping) -> CustomResult:
    extra = {k: v for k, v in data.items() if k not in ("found", "detail", "matches")}
    return CustomResult(
        found=bool(data.get("found", False)),
        detail=data.get("detail"),
        matches=data.get("matches"),
        metadata=extra,
    )

"""Check Evaluator Module - Turns check definitions into findings."""

import stat
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Sequence, Tuple

from .checks import CheckDefinition, CheckType, CustomResult, Finding
from .probe import FileProbe

# Called with (current index, total, check) before each check is evaluated
CheckCallback = Callable[[int, int, CheckDefinition], None]


class CheckEvaluator:
    """Evaluates check definitions against one scanned directory.

    Each definition yields exactly one finding, in input order. Path probes
    use :class:`FileProbe`, so no check type raises.
    """

    def __init__(self, probe: Optional[FileProbe] = None):
        """Initialize the evaluator.

        Args:
            probe: Filesystem probe used for path checks
        """
        self.probe = probe or FileProbe()

    def evaluate(
        self,
        root_path: str | Path,
        checks: Sequence[CheckDefinition],
        walk_matches: Mapping[str, Sequence[str]],
        custom_results: Mapping[str, CustomResult],
        progress_callback: Optional[CheckCallback] = None,
    ) -> List[Finding]:
        """Evaluate every check.

        Args:
            root_path: Directory being scanned
            checks: Check definitions, in display order
            walk_matches: Deep-scan matches keyed by pattern
            custom_results: Analyzer results keyed by custom key
            progress_callback: Optional hook called before each check

        Returns:
            One Finding per check
        """
        root_path = Path(root_path)
        findings: List[Finding] = []
        total = len(checks)

        for index, check in enumerate(checks, start=1):
            if progress_callback:
                progress_callback(index, total, check)
            findings.append(self.evaluate_check(root_path, check, walk_matches, custom_results))

        return findings

    def evaluate_check(
        self,
        root_path: Path,
        check: CheckDefinition,
        walk_matches: Mapping[str, Sequence[str]],
        custom_results: Mapping[str, CustomResult],
    ) -> Finding:
        """Evaluate a single check."""
        if check.type is CheckType.DEEP_SCAN:
            return self._evaluate_deep_scan(check, walk_matches)

        if check.type is CheckType.CUSTOM:
            return self._evaluate_custom(check, custom_results)

        return self._evaluate_paths(root_path, check)

    def _evaluate_deep_scan(
        self,
        check: CheckDefinition,
        walk_matches: Mapping[str, Sequence[str]],
    ) -> Finding:
        matches = tuple(walk_matches.get(check.deep_pattern, ()))
        return Finding(
            check=check,
            found=len(matches) > 0,
            matches=matches,
            detail=f"{len(matches)} file(s) found" if matches else None,
        )

    def _evaluate_custom(
        self,
        check: CheckDefinition,
        custom_results: Mapping[str, CustomResult],
    ) -> Finding:
        result = custom_results.get(check.custom_key)
        if result is None:
            return Finding(check=check, found=False)

        return Finding(
            check=check,
            found=bool(result.found),
            detail=result.detail,
            matches=tuple(result.matches) if result.matches is not None else None,
            metadata=dict(result.metadata),
        )

    def _evaluate_paths(self, root_path: Path, check: CheckDefinition) -> Finding:
        matched_path, detail = self._first_existing(root_path, check.paths, check.type)
        return Finding(
            check=check,
            found=matched_path is not None,
            matched_path=matched_path,
            detail=detail,
        )

    def _first_existing(
        self,
        root_path: Path,
        paths: Sequence[str],
        check_type: CheckType,
    ) -> Tuple[Optional[str], Optional[str]]:
        """Find the first candidate path that exists as the required kind.

        Returns:
            Tuple of (matched relative path, detail) or (None, None)
        """
        for candidate in paths:
            full_path = root_path / candidate
            stat_info = self.probe.stat(full_path)
            if stat_info is None:
                continue

            is_file = stat.S_ISREG(stat_info.st_mode)
            is_dir = stat.S_ISDIR(stat_info.st_mode)

            if check_type is CheckType.FILE and not is_file:
                continue
            if check_type is CheckType.DIR and not is_dir:
                continue
            if check_type is CheckType.ANY and not (is_file or is_dir):
                continue

            if is_file:
                return candidate, f"{self.probe.line_count(full_path)} line(s)"
            return candidate, f"{self.probe.item_count(full_path)} item(s)"

        return None, None


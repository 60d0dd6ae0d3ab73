"""JSON Reporter Module - Machine-readable audit results."""

import json
from typing import Any, Dict, List

from ..core.profiles import ToolScore
from .base_reporter import BaseReporter, ReportData


class JSONReporter(BaseReporter):
    """Generate reports in JSON format."""

    def __init__(self, output_dir=None, indent: int = 2, include_metadata: bool = False):
        """Initialize the JSON reporter.

        Args:
            output_dir: Directory to save reports
            indent: JSON indentation level
            include_metadata: Include scan timing and analyzer metadata
        """
        super().__init__(output_dir)
        self.indent = indent
        self.include_metadata = include_metadata

    @property
    def format(self) -> str:
        return "json"

    @property
    def extension(self) -> str:
        return "json"

    def generate(self, report_data: ReportData) -> bytes:
        """Generate JSON report.

        Args:
            report_data: Data to include in the report

        Returns:
            JSON content as bytes
        """
        report_dict = self.build_report(report_data)
        json_str = json.dumps(report_dict, indent=self.indent, ensure_ascii=False)
        return json_str.encode("utf-8")

    def build_report(self, report_data: ReportData) -> Dict[str, Any]:
        """Build the JSON report structure.

        Schema::

            {
              "score": 7.4, "grade": "A", "label": "...",
              "points": {"earned": .., "max": ..},
              "checks": {"passed": .., "total": ..},
              "sections": {"<name>": {"earned", "max", "pct"}},
              "findings": [{"id", "label", "section", "found", "weight",
                            "detail", "matched_path", "matches"}],
              "tools": [...]   # only when tool scores were requested
            }
        """
        score = report_data.score
        report = {
            "score": score.normalized,
            "grade": score.grade,
            "label": score.label,
            "points": {"earned": score.earned_points, "max": score.max_points},
            "checks": {"passed": score.found_count, "total": score.total_checks},
            "sections": {
                name: {"earned": sec.earned, "max": sec.max, "pct": sec.percentage}
                for name, sec in score.sections.items()
            },
            "findings": [
                {
                    "id": f.id,
                    "label": f.label,
                    "section": f.section,
                    "found": f.found,
                    "weight": f.weight,
                    "detail": f.detail,
                    "matched_path": f.matched_path,
                    "matches": list(f.matches) if f.matches else None,
                }
                for f in report_data.findings
            ],
        }

        if report_data.tool_scores is not None:
            report["tools"] = self.build_tools(report_data.tool_scores)

        if self.include_metadata:
            report["metadata"] = {
                "project_name": report_data.project_name,
                "project_path": report_data.project_path,
                "generated_at": report_data.generated_at.isoformat(),
                "files_scanned": report_data.scan_result.files_scanned,
                "dirs_scanned": report_data.scan_result.dirs_scanned,
                "scan_duration_ms": report_data.scan_result.scan_duration_ms,
                **report_data.metadata,
            }

        return report

    @staticmethod
    def build_tools(tool_scores: List[ToolScore]) -> List[Dict[str, Any]]:
        """Build the per-tool section."""
        return [t.to_dict() for t in tool_scores]

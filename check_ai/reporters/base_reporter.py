"""Base Reporter Module - Abstract base class for report generators."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.checks import Finding
from ..core.profiles import ToolScore
from ..core.scanner import ScanResult
from ..core.scorer import Score


@dataclass
class ReportData:
    """Data structure containing all information for a report."""
    project_name: str
    project_path: str
    scan_result: ScanResult
    score: Score
    tool_scores: Optional[List[ToolScore]] = None
    generated_at: datetime = field(default_factory=datetime.now)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def findings(self) -> List[Finding]:
        return self.scan_result.findings


class BaseReporter(ABC):
    """Abstract base class for report generators."""

    def __init__(self, output_dir: Optional[str] = None):
        """Initialize the reporter.

        Args:
            output_dir: Directory to save reports (default: current directory)
        """
        self.output_dir = Path(output_dir) if output_dir else Path.cwd()

    @property
    @abstractmethod
    def format(self) -> str:
        """Report format identifier (e.g., 'json', 'badge')."""
        pass

    @property
    @abstractmethod
    def extension(self) -> str:
        """File extension for the report format."""
        pass

    @abstractmethod
    def generate(self, report_data: ReportData) -> bytes:
        """Generate the report content.

        Args:
            report_data: Data to include in the report

        Returns:
            Report content as bytes
        """
        pass

    def render(self, report_data: ReportData) -> str:
        """Generate the report as text."""
        return self.generate(report_data).decode("utf-8")

    def generate_filename(
        self,
        project_name: str,
        timestamp: Optional[datetime] = None,
    ) -> str:
        """Generate a filename for the report.

        Args:
            project_name: Name of the project
            timestamp: Timestamp for the report (default: now)

        Returns:
            Generated filename
        """
        ts = timestamp or datetime.now()
        ts_str = ts.strftime("%Y%m%d_%H%M%S")
        safe_name = "".join(c if c.isalnum() else "_" for c in project_name)
        return f"check_ai_{safe_name}_{ts_str}.{self.extension}"

    def save(
        self,
        report_data: ReportData,
        filename: Optional[str] = None,
    ) -> str:
        """Generate and save the report to a file.

        Args:
            report_data: Data to include in the report
            filename: Custom filename (default: auto-generated)

        Returns:
            Path to the saved report
        """
        content = self.generate(report_data)

        if not filename:
            filename = self.generate_filename(
                report_data.project_name,
                report_data.generated_at,
            )

        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / filename

        with open(output_path, "wb") as f:
            f.write(content)

        return str(output_path)

"""Report generation module for check-ai."""

from .base_reporter import BaseReporter, ReportData
from .json_reporter import JSONReporter
from .badge import BadgeReporter, badge_markdown
from .console_reporter import ConsoleReporter

__all__ = [
    "BaseReporter",
    "ReportData",
    "JSONReporter",
    "BadgeReporter",
    "badge_markdown",
    "ConsoleReporter",
]

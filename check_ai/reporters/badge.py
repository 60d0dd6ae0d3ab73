"""Badge Reporter Module - shields.io Markdown badge for a README."""

from urllib.parse import quote

from ..core.scorer import Score
from .base_reporter import BaseReporter, ReportData

BADGE_LABEL = "AI Ready"
BADGE_LINK = "https://github.com/f/check-ai"

BADGE_COLORS = {
    "green": "brightgreen",
    "yellow": "yellow",
    "red": "red",
}


def _encode(text: str) -> str:
    return quote(text, safe="!~*'()")


def badge_url(score: Score) -> str:
    """Build the shields.io static badge URL of a score."""
    message = f"{score.grade} {score.normalized}/10"
    color = BADGE_COLORS.get(score.color, "red")
    return f"https://img.shields.io/badge/{_encode(BADGE_LABEL)}-{_encode(message)}-{color}"


def badge_markdown(score: Score) -> str:
    """Build the Markdown image link of a score badge."""
    return f"[![{BADGE_LABEL}]({badge_url(score)})]({BADGE_LINK})"


class BadgeReporter(BaseReporter):
    """Generate a Markdown badge."""

    @property
    def format(self) -> str:
        return "badge"

    @property
    def extension(self) -> str:
        return "md"

    def generate(self, report_data: ReportData) -> bytes:
        return (badge_markdown(report_data.score) + "\n").encode("utf-8")

"""Console Reporter Module - Rich terminal rendering of audit results."""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.checks import Finding
from ..core.profiles import ToolScore
from ..core.scorer import Score, SectionScore, get_recommendations
from .base_reporter import ReportData

SECTION_ICONS = {
    "Repo Hygiene": "🧹",
    "Grounding Docs": "📄",
    "Testing": "🧪",
    "Agent Configs": "🤖",
    "AI Context": "🔒",
    "Prompts & Skills": "🧩",
    "MCP": "🔌",
    "AI Deps": "📦",
    "CLIO": "💻",
}

MAX_LISTED_MATCHES = 5


def ratio_color(ratio: float) -> str:
    """Get color for a 0-1 completion ratio."""
    if ratio >= 0.7:
        return "green"
    elif ratio >= 0.4:
        return "yellow"
    else:
        return "red"


def progress_bar(earned: float, max_value: float, width: int = 20) -> Text:
    """Render a filled/empty block bar."""
    ratio = earned / max_value if max_value > 0 else 0
    filled = int(ratio * width + 0.5)
    bar = Text("█" * filled, style=ratio_color(ratio))
    bar.append("░" * (width - filled), style="dim")
    return bar


class ConsoleReporter:
    """Prints sections, recommendations, the final grade and tool scores."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        """Initialize the console reporter.

        Args:
            console: Rich console to print to
            verbose: Also list low-impact recommendations and tool details
        """
        self.console = console or Console()
        self.verbose = verbose

    def display(self, report_data: ReportData) -> None:
        """Print the full report."""
        score = report_data.score

        for section in score.sections.values():
            if section.items:
                self.display_section(section)

        self.display_recommendations(report_data.findings)

        if score.normalized < 1:
            self.console.print("  [bold cyan]Quick start:[/bold cyan]")
            self.console.print("  [cyan]$[/cyan] touch AGENTS.md  [dim]# universal agent instructions[/dim]")
            self.console.print("  [cyan]$[/cyan] mkdir -p .cursor/rules .windsurf/workflows .claude")
            self.console.print()

        self.display_score(score)

        if report_data.tool_scores is not None:
            self.display_tools(report_data.tool_scores)

    def display_section(self, section: SectionScore) -> None:
        """Print one section header and its findings."""
        icon = SECTION_ICONS.get(section.name, "📦")
        ratio = section.earned / section.max if section.max > 0 else 0
        color = ratio_color(ratio)

        header = Text(f"  {icon} ")
        header.append(section.name, style="bold")
        header.append("  ")
        header.append_text(progress_bar(section.earned, section.max, 15))
        header.append(f"  {section.percentage}%", style=color)
        header.append(f" ({section.earned}/{section.max})", style="dim")
        self.console.print(header)

        for finding in section.items:
            self.console.print(self._finding_line(finding))
        self.console.print()

    def _finding_line(self, finding: Finding) -> Text:
        if not finding.found:
            return Text(f"     ✘  {finding.label}", style="dim")

        line = Text("     ")
        line.append("✔", style="green")
        line.append(f"  {finding.label}")
        if finding.detail:
            line.append(f" {finding.detail}", style="bright_black")
        if finding.matched_path:
            line.append(f" → {finding.matched_path}", style="bright_black")
        if finding.matches:
            listed = ", ".join(finding.matches[:MAX_LISTED_MATCHES])
            extra = len(finding.matches) - MAX_LISTED_MATCHES
            if extra > 0:
                listed += f" +{extra} more"
            line.append(f" → {listed}", style="bright_black")
        return line

    def display_recommendations(self, findings: List[Finding]) -> None:
        """Print missing checks grouped by impact."""
        recommendations = get_recommendations(findings, include_nice_to_have=self.verbose)
        critical = recommendations["critical"]
        important = recommendations["important"]
        nice = recommendations.get("nice", [])

        if not critical and not important:
            return

        self.console.print("  [dim]" + "─" * 50 + "[/dim]")
        self.console.print("  [bold]Recommendations[/bold]")
        self.console.print()

        if critical:
            self.console.print("  [bold red]  Critical (high impact)[/bold red]")
            for f in critical:
                self.console.print(f"    [red]●[/red] [bold]{f.label}[/bold]")
                self.console.print(f"      [dim]{f.description}[/dim]")
                self._print_hint(f)
            self.console.print()

        if important:
            self.console.print("  [bold yellow]  Important[/bold yellow]")
            for f in important:
                self.console.print(f"    [yellow]●[/yellow] [bold]{f.label}[/bold] [dim]- {f.description}[/dim]")
                self._print_hint(f)
            self.console.print()

        if nice:
            self.console.print("  [bold blue]  Nice to have[/bold blue]")
            for f in nice:
                self.console.print(f"    [blue]●[/blue] {f.label} [dim]- {f.description}[/dim]")
            self.console.print()

    def _print_hint(self, finding: Finding) -> None:
        if finding.check.hint:
            self.console.print(f"      [cyan]$[/cyan] {escape(finding.check.hint)}", highlight=False)

    def display_score(self, score: Score) -> None:
        """Print the final grade panel."""
        body = Text()
        body.append(f" {score.grade} ", style=f"bold reverse {score.color}")
        body.append(f"  {score.label}\n\n", style=f"bold {score.color}")
        body.append_text(progress_bar(score.normalized, 10, 40))
        body.append(f"  {score.normalized}", style="bold")
        body.append("/10\n", style="dim")
        body.append(
            f"{score.found_count} of {score.total_checks} checks passed · "
            f"{score.earned_points}/{score.max_points} pts",
            style="dim",
        )

        self.console.print(Panel.fit(body, title="AI Readiness", border_style=score.color))
        self.console.print()

    def display_tools(self, tool_scores: List[ToolScore]) -> None:
        """Print the per-tool readiness table."""
        if not tool_scores:
            self.console.print("  [dim]No AI tool configuration detected.[/dim]")
            self.console.print()
            return

        table = Table(title="Tool Readiness")
        table.add_column("Tool", style="bold")
        table.add_column("Grade", justify="center")
        table.add_column("Score", justify="right")
        table.add_column("Required", justify="right")
        table.add_column("Valuable", justify="right")

        for tool in tool_scores:
            table.add_row(
                f"{tool.profile.icon} {tool.name}".strip(),
                f"[{tool.color}]{tool.grade}[/{tool.color}]",
                f"{tool.normalized}/10 ({tool.percentage}%)",
                f"{tool.required_passed}/{tool.required_total}",
                f"{tool.valuable_passed}/{tool.valuable_total}",
            )

        self.console.print(table)

        if self.verbose:
            for tool in tool_scores:
                missing = [s for s in tool.required_status if not s.found]
                for status in missing:
                    self.console.print(f"  [red]✘[/red] {tool.name}: missing required [bold]{status.label}[/bold]")
        self.console.print()

"""Main CLI Module - Command-line interface for check-ai."""

import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .. import __version__
from ..core.profiles import ProfileConfigError, ProfileResolver, ToolScore
from ..core.registry import AuditLoadError
from ..core.scanner import ScanEvent, ScanResult, Scanner
from ..core.scorer import Score, Scorer
from ..core.walker import DEFAULT_MAX_DEPTH, DeepTreeWalker
from ..logging_config import setup_logging
from ..reporters.badge import BadgeReporter
from ..reporters.base_reporter import ReportData
from ..reporters.console_reporter import ConsoleReporter
from ..reporters.json_reporter import JSONReporter

logger = logging.getLogger(__name__)

console = Console()
error_console = Console(stderr=True)

# Scores below this make the command exit 1, for CI gating
FAILING_SCORE = 3.0

LOAD_ERRORS = (AuditLoadError, ProfileConfigError)


def is_interactive(disabled: bool = False) -> bool:
    """Whether animated progress should be shown."""
    if disabled or os.environ.get("CI"):
        return False
    return sys.stdout.isatty()


def run_scan(
    target_path: Path,
    max_depth: int = DEFAULT_MAX_DEPTH,
    interactive: bool = False,
) -> Tuple[ScanResult, Score]:
    """Scan a directory and score the findings.

    Args:
        target_path: Repository root
        max_depth: Deepest directory level walked for deep-scan checks
        interactive: Show a spinner while scanning

    Returns:
        Tuple of (scan result, score)
    """
    scanner = Scanner(walker=DeepTreeWalker(max_depth=max_depth))

    if not interactive:
        result = scanner.scan(target_path)
        return result, Scorer().score(result.findings)

    repo_name = target_path.name
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(f"Auditing {repo_name} …", total=None)

        def on_progress(event: ScanEvent) -> None:
            if event.phase == "deep-scan":
                progress.update(task, description="Deep scanning file tree …")
            elif event.phase == "deep-scan-done":
                progress.update(
                    task,
                    description=(
                        f"Scanned {event.files_scanned:,} files in "
                        f"{event.dirs_scanned:,} dirs, analyzing …"
                    ),
                )
            elif event.phase == "checking" and event.check is not None:
                progress.update(
                    task,
                    description=f"Checking {event.current}/{event.total}: {event.check.label}",
                )

        result = scanner.scan(target_path, progress_callback=on_progress)

    console.print(f"  [green]✔[/green] Scanned {repo_name}, {len(result.findings)} checks complete")
    return result, Scorer().score(result.findings)


def resolve_tools(
    result: ScanResult,
    tool_keys: Tuple[str, ...],
) -> List[ToolScore]:
    """Score tool profiles, either the detected ones or those requested.

    Args:
        result: Scan result
        tool_keys: Explicitly requested profile keys (empty for auto-detect)

    Returns:
        Tool scores in profile or request order
    """
    resolver = ProfileResolver()

    known_ids = [f.id for f in result.findings]
    for key, ids in resolver.unknown_check_ids(known_ids).items():
        logger.warning("Tool profile '%s' references unknown checks: %s", key, ", ".join(ids))

    if tool_keys:
        for key in tool_keys:
            if resolver.get(key) is None:
                logger.warning("Unknown tool profile '%s' (known: %s)", key, ", ".join(resolver.keys))
        return resolver.score_tools(result.findings, tool_keys)
    return resolver.score_all_tools(result.findings)


def _report_data(target_path: Path, result: ScanResult, score: Score,
                 tool_scores: Optional[List[ToolScore]] = None) -> ReportData:
    return ReportData(
        project_name=target_path.name,
        project_path=str(target_path),
        scan_result=result,
        score=score,
        tool_scores=tool_scores,
        metadata={"check_ai_version": __version__},
    )


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="check-ai")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              default=None, help="Log level (default: $CHECK_AI_LOG_LEVEL or WARNING)")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]):
    """check-ai - Audit a repository for AI-readiness.

    Without a command, scans the current directory.
    """
    ctx.ensure_object(dict)
    setup_logging(log_level)

    if ctx.invoked_subcommand is None:
        ctx.invoke(scan)


@cli.command("scan")
@click.argument("path", type=click.Path(exists=True, file_okay=False), default=".")
@click.option("--json", "as_json", is_flag=True, help="Output results as JSON")
@click.option("--tools", "-t", "show_tools", is_flag=True, help="Show per-tool readiness scores")
@click.option("--tool", "tool_keys", multiple=True, metavar="KEY",
              help="Score only this tool profile (repeatable, implies --tools)")
@click.option("--verbose", "-v", is_flag=True, help="Show all recommendations, including low-priority")
@click.option("--no-interactive", "--ci", "no_interactive", is_flag=True,
              help="Disable animated output (auto-detected in CI and pipes)")
@click.option("--max-depth", type=click.IntRange(min=0), default=DEFAULT_MAX_DEPTH, show_default=True,
              help="Deepest directory level searched by deep-scan checks")
@click.option("--output", "-o", type=click.Path(file_okay=False), default=None,
              help="Also save the JSON report (with scan metadata) to this directory")
@click.pass_context
def scan(
    ctx: click.Context,
    path: str = ".",
    as_json: bool = False,
    show_tools: bool = False,
    tool_keys: tuple = (),
    verbose: bool = False,
    no_interactive: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
    output: Optional[str] = None,
):
    """Scan a repository for AI-readiness.

    PATH is the directory to scan (default: current directory).
    """
    target_path = Path(path).resolve()
    interactive = is_interactive(no_interactive or as_json)

    if not as_json and not interactive:
        console.print(f"\n  Auditing [cyan]{target_path.name}[/cyan] …\n")

    try:
        result, score = run_scan(target_path, max_depth=max_depth, interactive=interactive)
        tool_scores = None
        if show_tools or tool_keys:
            tool_scores = resolve_tools(result, tuple(tool_keys))
    except LOAD_ERRORS as e:
        error_console.print(f"[red]Error: {escape(str(e))}[/red]")
        ctx.exit(2)

    report_data = _report_data(target_path, result, score, tool_scores)

    if as_json:
        click.echo(JSONReporter().render(report_data))
    else:
        console.print()
        ConsoleReporter(console=console, verbose=verbose).display(report_data)

    if output:
        report_path = JSONReporter(output_dir=output, include_metadata=True).save(report_data)
        logger.info("Saved JSON report to %s", report_path)
        if not as_json:
            console.print(f"  Report saved: [cyan]{escape(report_path)}[/cyan]\n")

    if score.normalized < FAILING_SCORE:
        ctx.exit(1)


@cli.command("badge")
@click.argument("path", type=click.Path(exists=True, file_okay=False), default=".")
@click.pass_context
def badge(ctx: click.Context, path: str):
    """Print a shields.io Markdown badge for the repository score."""
    target_path = Path(path).resolve()

    try:
        result, score = run_scan(target_path)
    except LOAD_ERRORS as e:
        error_console.print(f"[red]Error: {escape(str(e))}[/red]")
        ctx.exit(2)

    click.echo(BadgeReporter().render(_report_data(target_path, result, score)), nl=False)

    if score.normalized < FAILING_SCORE:
        ctx.exit(1)


@cli.command("profiles")
@click.pass_context
def profiles(ctx: click.Context):
    """List the tool profiles used by --tools."""
    try:
        resolver = ProfileResolver()
    except ProfileConfigError as e:
        error_console.print(f"[red]Error: {escape(str(e))}[/red]")
        ctx.exit(2)

    console.print(Panel.fit(
        "[bold blue]Tool Profiles[/bold blue]\n"
        "Required checks count 2 points, valuable checks 1 point",
        border_style="blue",
    ))

    table = Table()
    table.add_column("Key", style="cyan")
    table.add_column("Tool", style="bold")
    table.add_column("Description")
    table.add_column("Required", justify="right")
    table.add_column("Valuable", justify="right")

    for key in resolver.keys:
        profile = resolver.get(key)
        table.add_row(
            key,
            f"{profile.icon} {profile.name}".strip(),
            profile.description,
            str(len(profile.applicable_required)),
            str(len(profile.applicable_valuable)),
        )

    console.print(table)


def main():
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()

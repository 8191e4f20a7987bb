"""
Run Command - configure the analysis graph for a build file and execute it.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from bugsweep.build.application.session import BuildSession
from bugsweep.build.domain.enums import TaskState
from bugsweep.build.infrastructure.build_file import load_build_file
from bugsweep.shared.domain.exceptions import BugsweepError
from bugsweep.shared.infrastructure.config import settings

console = Console()

_STATE_STYLES = {
    TaskState.SUCCEEDED: "green",
    TaskState.FAILED: "bold red",
    TaskState.SKIPPED: "yellow",
}


def run(
    build_file: Path = typer.Argument(..., help="YAML build description"),
    html: Optional[bool] = typer.Option(None, "--html/--no-html", help="Render HTML reports (default from config)"),
    json_output: Optional[Path] = typer.Option(None, "--json", help="Write collected violations as JSON"),
    keep_going: bool = typer.Option(False, "--continue", help="Keep running tasks unaffected by a failure"),
):
    """
    Analyse every variant of a build and collect violations

    Example:
        bugsweep run build.yaml
        bugsweep run build.yaml --no-html --json violations.json
    """
    try:
        description = load_build_file(build_file)
        session = BuildSession.from_description(description, settings, html_report_enabled=html)
        result = asyncio.run(session.run_async(continue_on_failure=keep_going))
    except BugsweepError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    tasks_table = Table(title="Tasks", show_lines=False)
    tasks_table.add_column("Task", style="cyan")
    tasks_table.add_column("State")
    tasks_table.add_column("Duration", justify="right")
    tasks_table.add_column("Error", style="dim")
    for outcome in result.outcomes:
        style = _STATE_STYLES.get(outcome.state, "")
        tasks_table.add_row(
            outcome.task,
            f"[{style}]{outcome.state.name}[/{style}]" if style else outcome.state.name,
            f"{outcome.duration:.2f}s",
            outcome.error or "",
        )
    console.print(tasks_table)

    summary = Table(title="Violations")
    summary.add_column("Tool", style="cyan")
    summary.add_column("Errors", justify="right", style="red")
    summary.add_column("Warnings", justify="right", style="yellow")
    summary.add_column("Reports", style="dim")
    for tally in session.violations.summaries():
        summary.add_row(
            tally.tool_name,
            str(tally.errors),
            str(tally.warnings),
            "\n".join(str(r) for r in tally.reports),
        )
    console.print(summary)

    if json_output is not None:
        json_output.parent.mkdir(parents=True, exist_ok=True)
        json_output.write_text(json.dumps(session.violations.to_json(), indent=2), encoding="utf-8")
        console.print(f"[dim]Violations written to {json_output}[/dim]")

    if not result.succeeded:
        console.print(f"[red]Build failed:[/red] {', '.join(result.failed_tasks) or 'tasks skipped'}")
        raise typer.Exit(1)

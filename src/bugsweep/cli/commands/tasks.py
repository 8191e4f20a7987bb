"""
Tasks Command - show the configured task graph without running it.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from bugsweep.build.application.session import BuildSession
from bugsweep.build.infrastructure.build_file import load_build_file
from bugsweep.shared.domain.exceptions import BugsweepError
from bugsweep.shared.infrastructure.config import settings

console = Console()


def tasks(
    build_file: Path = typer.Argument(..., help="YAML build description"),
    html: Optional[bool] = typer.Option(None, "--html/--no-html", help="Render HTML reports (default from config)"),
):
    """
    List tasks in execution order with their dependencies

    Example:
        bugsweep tasks build.yaml
    """
    try:
        description = load_build_file(build_file)
        session = BuildSession.from_description(description, settings, html_report_enabled=html)
        plan = session.graph.execution_plan([session.evaluate])
    except BugsweepError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    table = Table(title=f"Tasks ({len(plan)})")
    table.add_column("Task", style="cyan")
    table.add_column("Group", style="dim")
    table.add_column("Depends on")
    for task in plan:
        table.add_row(task.name, task.group or "", ", ".join(task.dependencies))
    console.print(table)

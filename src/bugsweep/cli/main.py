"""
bugsweep CLI
Main entry point for the command-line interface

Usage:
    bugsweep run build.yaml        # Analyse all variants and collect violations
    bugsweep tasks build.yaml      # Show the configured task graph
    bugsweep version               # Show version information
"""

import typer
from rich.console import Console
from rich.panel import Panel

from bugsweep import __version__
from bugsweep.cli.commands import run, tasks
from bugsweep.shared.infrastructure.logging import configure_logging

app = typer.Typer(
    name="bugsweep",
    help="bugsweep - per-variant SpotBugs orchestration with aggregated violations",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()

app.command(name="run")(run.run)
app.command(name="tasks")(tasks.tasks)


@app.callback()
def setup():
    """Configure logging before any command runs."""
    configure_logging()


@app.command()
def version():
    """Show bugsweep version information"""
    console.print(Panel.fit(
        "[bold cyan]bugsweep[/bold cyan]\n"
        f"[dim]Version:[/dim] {__version__}\n",
        title="About bugsweep",
        border_style="cyan",
    ))


def main():
    """Main entry point"""
    app()


if __name__ == "__main__":
    main()

"""
HTML report generation.

The HTML report is rendered from the analysis XML by SpotBugs' own
printer, run on the tool's runtime classpath (rule descriptions live
there).
"""

import os
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from bugsweep.build.application.task_graph import Task
from bugsweep.shared.domain.exceptions import ConfigurationError, ReportError, TaskExecutionError
from bugsweep.shared.infrastructure.execution.command_executor import CommandExecutor
from bugsweep.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class HtmlReportRenderer(Protocol):
    """Renders an XML analysis report to HTML."""

    async def render_async(self, xml_report: Path, html_report: Path, classpath: Sequence[Path]) -> None:
        ...


class SpotBugsHtmlRenderer:
    """Runs ``edu.umd.cs.findbugs.PrintingBugReporter -html`` and captures stdout as the HTML file."""

    MAIN_CLASS = "edu.umd.cs.findbugs.PrintingBugReporter"

    def __init__(
        self,
        java_executable: str = "java",
        executor: Optional[CommandExecutor] = None,
        timeout: Optional[float] = None,
    ):
        self.java_executable = java_executable
        self.executor = executor or CommandExecutor()
        self.timeout = timeout

    def build_command(self, xml_report: Path, classpath: Sequence[Path]) -> List[str]:
        return [
            self.java_executable,
            "-cp",
            os.pathsep.join(str(entry) for entry in classpath),
            self.MAIN_CLASS,
            "-html",
            str(xml_report),
        ]

    async def render_async(self, xml_report: Path, html_report: Path, classpath: Sequence[Path]) -> None:
        if not classpath:
            raise ConfigurationError("SpotBugs classpath is empty; cannot render HTML report")

        command = self.build_command(xml_report, classpath)
        try:
            result = await self.executor.run_async(command, timeout=self.timeout, stdout_path=html_report)
        except OSError as e:
            raise TaskExecutionError(f"Cannot start '{self.java_executable}': {e}") from e

        if not result.is_success:
            raise TaskExecutionError(
                f"HTML rendering failed with exit code {result.exit_code}",
                context={"report": str(xml_report), "stderr": result.stderr[-2000:]},
            )


class GenerateHtmlReportTask(Task):
    """Renders the XML report of one analysis task."""

    group = "verification"

    def __init__(
        self,
        name: str,
        xml_report: Path,
        html_report: Path,
        renderer: HtmlReportRenderer,
        classpath: Sequence[Path] = (),
    ):
        super().__init__(name, f"Generate HTML report from {Path(xml_report).name}")
        self.xml_report = Path(xml_report)
        self.html_report = Path(html_report)
        self.renderer = renderer
        self.classpath: List[Path] = list(classpath)

    async def execute_async(self) -> None:
        if not self.xml_report.is_file():
            raise ReportError(f"Report not found: {self.xml_report}", context={"task": self.name})

        self.html_report.parent.mkdir(parents=True, exist_ok=True)
        await self.renderer.render_async(self.xml_report, self.html_report, self.classpath)
        logger.info("html_report_generated", task=self.name, report=str(self.html_report))

"""
SpotBugs analysis task.

Holds everything one variant's analysis needs. The set of classes is a
Provider bound at configuration time and resolved when the task runs,
after compilation has written the output directories.
"""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import List

from bugsweep.analysis.artifacts import ArtifactSet
from bugsweep.analysis.source_filter import SourceFilter
from bugsweep.analysis.spotbugs.runner import AnalysisRequest, SpotBugsRunner
from bugsweep.build.application.task_graph import Task
from bugsweep.reports.parser import write_empty_report
from bugsweep.shared.domain.exceptions import TaskExecutionError
from bugsweep.shared.domain.provider import Provider
from bugsweep.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ToolReports:
    """Report outputs of the tool itself."""

    xml_destination: Path
    xml_enabled: bool = True
    html_enabled: bool = False


class SpotBugsTask(Task):
    """Runs SpotBugs over the classes compiled from one variant's filtered sources."""

    group = "verification"

    def __init__(self, name: str, runner: SpotBugsRunner, xml_report: Path, variant_name: str = ""):
        super().__init__(name)
        self.runner = runner
        self.variant_name = variant_name
        self.source_dirs: List[Path] = []
        self.source_filter = SourceFilter()
        self.classpath: List[Path] = []
        self.aux_classpath: List[Path] = []
        self.extra_args: List[str] = []
        self.classes: Provider[ArtifactSet] = Provider(ArtifactSet.empty)
        self.reports = ToolReports(xml_destination=Path(xml_report))
        self.ignore_failures = True

    @property
    def tool_classpath(self) -> List[Path]:
        return list(self.runner.tool_classpath)

    def matching_sources(self) -> List[Path]:
        """Declared sources after the source filter."""
        return self.source_filter.apply(self.source_dirs)

    async def execute_async(self) -> None:
        xml_report = self.reports.xml_destination
        artifacts = await asyncio.to_thread(lambda: self.classes.get().files())

        if not artifacts:
            write_empty_report(xml_report)
            logger.info("analysis_skipped_no_classes", task=self.name, report=str(xml_report))
            return

        # A stale report must not pass for this run's output.
        xml_report.unlink(missing_ok=True)

        request = AnalysisRequest(
            classes=tuple(artifacts),
            xml_report=xml_report,
            classpath=tuple(self.classpath),
            aux_classpath=tuple(self.aux_classpath),
            source_dirs=tuple(d for d in self.source_dirs if d.is_dir()),
            extra_args=tuple(self.extra_args),
        )
        result = await self.runner.analyze_async(request)

        if not xml_report.is_file():
            raise TaskExecutionError(
                f"SpotBugs produced no report (exit code {result.exit_code})",
                context={"task": self.name, "stderr": result.stderr[-2000:]},
            )
        if not result.is_success and not self.ignore_failures:
            raise TaskExecutionError(
                f"SpotBugs exited with code {result.exit_code}",
                context={"task": self.name},
            )
        logger.info("analysis_completed", task=self.name, classes=len(artifacts), report=str(xml_report))

"""
Violation collection.

Parses the XML report of one analysis task and appends its violations
to the shared sink. A missing or malformed report fails the task.
"""

import asyncio
import dataclasses
from pathlib import Path
from typing import List
from xml.etree import ElementTree as ET

from bugsweep.build.application.task_graph import Task
from bugsweep.reports.models import ReportArtifacts
from bugsweep.reports.parser import parse_spotbugs_report
from bugsweep.shared.domain.exceptions import ReportError
from bugsweep.shared.infrastructure.error_handler import async_error_handler
from bugsweep.shared.infrastructure.logging import get_logger
from bugsweep.violations.models import Violation
from bugsweep.violations.sink import ViolationSink

logger = get_logger(__name__)


@async_error_handler(
    error_map={ET.ParseError: ReportError, OSError: ReportError},
    context_keys=["xml_report"],
)
async def read_violations(xml_report: Path) -> List[Violation]:
    """Parse a report off the event loop."""
    return await asyncio.to_thread(parse_spotbugs_report, xml_report)


class CollectViolationsTask(Task):
    """Feeds one analysis report into the violation sink."""

    group = "verification"

    def __init__(
        self,
        name: str,
        reports: ReportArtifacts,
        violations: ViolationSink,
        tool_name: str,
        variant_name: str = "",
        analysis_task: str = "",
    ):
        super().__init__(name, f"Collect {tool_name} violations for {variant_name or analysis_task}")
        self.reports = reports
        self.violations = violations
        self.tool_name = tool_name
        self.variant_name = variant_name
        self.analysis_task = analysis_task

    @property
    def xml_report(self) -> Path:
        return self.reports.xml_report_path

    async def execute_async(self) -> None:
        parsed = await read_violations(xml_report=self.xml_report)
        attributed = [
            dataclasses.replace(v, tool=self.tool_name, variant=self.variant_name, task=self.analysis_task)
            for v in parsed
        ]
        tally = self.violations.add_violations(self.tool_name, attributed, report=self.reports.preferred)
        logger.info(
            "violations_collected",
            task=self.name,
            variant=self.variant_name,
            count=len(attributed),
            tool_errors=tally.errors,
            tool_warnings=tally.warnings,
        )

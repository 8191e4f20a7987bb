"""Final fan-in task reading the violation sink after every collection task."""

from typing import List, Optional

from bugsweep.build.application.task_graph import Task
from bugsweep.shared.infrastructure.logging import get_logger
from bugsweep.violations.models import ToolViolations
from bugsweep.violations.sink import ViolationSink

logger = get_logger(__name__)


class EvaluateViolationsTask(Task):
    """
    Summarises the sink once all collection tasks have run.

    Pass/fail policy belongs to whoever consumes ``summary``; this task
    only reports totals.
    """

    group = "verification"

    def __init__(self, name: str = "evaluateViolations", violations: Optional[ViolationSink] = None):
        super().__init__(name, "Summarise violations collected by every analysis task")
        self.violations = violations if violations is not None else ViolationSink()
        self.summary: List[ToolViolations] = []

    async def execute_async(self) -> None:
        self.summary = self.violations.summaries()
        for tally in self.summary:
            logger.info(
                "violations_summary",
                tool=tally.tool_name,
                errors=tally.errors,
                warnings=tally.warnings,
                reports=[str(r) for r in tally.reports],
            )
        if not self.summary:
            logger.info("violations_summary", tools=0)

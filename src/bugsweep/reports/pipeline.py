"""
Report pipeline.

Wires, for one analysis task, the optional HTML rendering task and the
mandatory violation-collection task:

    analysis -> generate<Task>HtmlReport -> collect<Task>Violations   (HTML on)
    analysis -> collect<Task>Violations                               (HTML off)
"""

from bugsweep.analysis.spotbugs.task import SpotBugsTask
from bugsweep.build.application.task_graph import TaskGraph, task_name_for
from bugsweep.reports.collector import CollectViolationsTask
from bugsweep.reports.html import GenerateHtmlReportTask, HtmlReportRenderer
from bugsweep.reports.models import ReportArtifacts
from bugsweep.shared.infrastructure.logging import get_logger
from bugsweep.violations.sink import ViolationSink

logger = get_logger(__name__)


def html_task_name(analysis_task_name: str) -> str:
    return task_name_for("generate", analysis_task_name, "HtmlReport")


def collect_task_name(analysis_task_name: str) -> str:
    return task_name_for("collect", analysis_task_name, "Violations")


class ReportPipeline:
    """Creates report tasks downstream of analysis tasks."""

    def __init__(self, graph: TaskGraph, renderer: HtmlReportRenderer, tool_name: str = "spotbugs"):
        self.graph = graph
        self.renderer = renderer
        self.tool_name = tool_name

    def wire(self, analysis_task: SpotBugsTask, html_enabled: bool, sink: ViolationSink) -> CollectViolationsTask:
        """
        Register the report tasks for ``analysis_task``.

        Returns:
            The collection task, for the caller to hang the evaluation task on
        """
        artifacts = ReportArtifacts.for_xml(analysis_task.reports.xml_destination, html_enabled)
        upstream = analysis_task

        if html_enabled:
            upstream = self.graph.create(
                html_task_name(analysis_task.name),
                GenerateHtmlReportTask,
                lambda task: task.depends_on(analysis_task),
                xml_report=artifacts.xml_report_path,
                html_report=artifacts.html_report_path,
                renderer=self.renderer,
                classpath=analysis_task.tool_classpath,
            )

        collect = self.graph.create(
            collect_task_name(analysis_task.name),
            CollectViolationsTask,
            lambda task: task.depends_on(upstream),
            reports=artifacts,
            violations=sink,
            tool_name=self.tool_name,
            variant_name=analysis_task.variant_name,
            analysis_task=analysis_task.name,
        )

        logger.debug(
            "report_pipeline_wired",
            analysis_task=analysis_task.name,
            html_enabled=html_enabled,
            collect_task=collect.name,
            depends_on=upstream.name,
        )
        return collect

"""SpotBugs configurator."""

from pathlib import Path
from typing import Optional, Sequence

from bugsweep.analysis.configurator import CodeQualityConfigurator
from bugsweep.analysis.source_filter import SourceFilter
from bugsweep.analysis.spotbugs.factory import AnalysisTaskFactory
from bugsweep.analysis.spotbugs.runner import SpotBugsRunner
from bugsweep.analysis.spotbugs.task import SpotBugsTask
from bugsweep.build.application.task_graph import Task, TaskGraph
from bugsweep.build.application.variant_filter import VariantFilter
from bugsweep.build.domain.models import Variant
from bugsweep.build.infrastructure.platform_sdk import PlatformSdk
from bugsweep.reports.collector import CollectViolationsTask
from bugsweep.reports.html import HtmlReportRenderer, SpotBugsHtmlRenderer
from bugsweep.reports.pipeline import ReportPipeline
from bugsweep.shared.infrastructure.config import Settings
from bugsweep.shared.infrastructure.execution.command_executor import CommandExecutor
from bugsweep.violations.sink import ViolationSink


class SpotBugsConfigurator(CodeQualityConfigurator):
    """
    Adds SpotBugs to the graph.

    Per variant: ``spotbugs<Variant>`` -> ``generateSpotbugs<Variant>HtmlReport``
    (when ``html_report_enabled``) -> ``collectSpotbugs<Variant>Violations``
    -> evaluation task.
    """

    def __init__(
        self,
        graph: TaskGraph,
        violations: ViolationSink,
        evaluate_violations: Task,
        runner: SpotBugsRunner,
        renderer: HtmlReportRenderer,
        reports_dir: Path,
        source_filter: Optional[SourceFilter] = None,
        platform_sdk: Optional[PlatformSdk] = None,
        variant_filter: Optional[VariantFilter] = None,
        html_report_enabled: bool = True,
        extra_args: Sequence[str] = (),
    ):
        super().__init__(graph, violations, evaluate_violations, variant_filter)
        # Read when report tasks are wired, so it can change until configure_all runs.
        self.html_report_enabled = html_report_enabled
        self.task_factory = AnalysisTaskFactory(
            graph,
            runner,
            reports_dir,
            source_filter=source_filter,
            platform_sdk=platform_sdk,
            tool_name=self.tool_name,
            extra_args=extra_args,
        )
        self.report_pipeline = ReportPipeline(graph, renderer, tool_name=self.tool_name)

    @classmethod
    def from_settings(
        cls,
        graph: TaskGraph,
        violations: ViolationSink,
        evaluate_violations: Task,
        settings: Settings,
        project_root: Path,
        **kwargs,
    ) -> "SpotBugsConfigurator":
        """Build runner and renderer from application settings."""
        executor = CommandExecutor(default_timeout=settings.command_timeout)
        runner = SpotBugsRunner(
            tool_classpath=settings.spotbugs_classpath_paths,
            java_executable=settings.java_executable,
            executor=executor,
        )
        renderer = SpotBugsHtmlRenderer(java_executable=settings.java_executable, executor=executor)
        kwargs.setdefault("html_report_enabled", settings.html_report_enabled)
        return cls(
            graph,
            violations,
            evaluate_violations,
            runner=runner,
            renderer=renderer,
            reports_dir=Path(project_root) / settings.reports_dir,
            **kwargs,
        )

    @property
    def tool_name(self) -> str:
        return "spotbugs"

    def create_tool_task(self, variant: Variant) -> SpotBugsTask:
        return self.task_factory.create_task(variant)

    def create_collect_violations(self, tool_task: SpotBugsTask) -> CollectViolationsTask:
        return self.report_pipeline.wire(tool_task, self.html_report_enabled, self.violations)

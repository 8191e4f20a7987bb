"""
Build session.

Assembles the graph for one build description: compile tasks, the
shared violation sink, the evaluation task and the SpotBugs
configurator. Nothing runs until ``run_async``.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from bugsweep.analysis.spotbugs.configurator import SpotBugsConfigurator
from bugsweep.build.application.scheduler import BuildResult, TaskScheduler
from bugsweep.build.application.task_graph import TaskGraph
from bugsweep.build.infrastructure.build_file import BuildDescription
from bugsweep.shared.infrastructure.config import Settings
from bugsweep.shared.infrastructure.execution.command_executor import CommandExecutor
from bugsweep.violations.evaluation import EvaluateViolationsTask
from bugsweep.violations.sink import ViolationSink


@dataclass
class BuildSession:
    graph: TaskGraph
    violations: ViolationSink
    evaluate: EvaluateViolationsTask
    spotbugs: SpotBugsConfigurator
    settings: Settings

    @classmethod
    def from_description(
        cls,
        description: BuildDescription,
        settings: Settings,
        html_report_enabled: Optional[bool] = None,
    ) -> "BuildSession":
        graph = TaskGraph()
        violations = ViolationSink()
        evaluate = graph.register(EvaluateViolationsTask(violations=violations))

        description.register_compile_tasks(graph, CommandExecutor(default_timeout=settings.command_timeout))

        overrides = {}
        if description.model.reports_dir:
            overrides["reports_dir"] = description.model.reports_dir
        if description.model.spotbugs.classpath:
            overrides["spotbugs_classpath"] = [str(p) for p in description.spotbugs_classpath]
        effective = settings.model_copy(update=overrides) if overrides else settings

        if html_report_enabled is None:
            html_report_enabled = description.model.spotbugs.html_report_enabled
        if html_report_enabled is None:
            html_report_enabled = effective.html_report_enabled

        spotbugs = SpotBugsConfigurator.from_settings(
            graph,
            violations,
            evaluate,
            effective,
            description.project_root,
            source_filter=description.source_filter,
            platform_sdk=description.platform_sdk,
            variant_filter=description.variant_filter,
            html_report_enabled=html_report_enabled,
            extra_args=description.model.spotbugs.extra_args,
        )
        spotbugs.configure_all(description.variants, description.test_variants, description.unit_test_variants)
        return cls(graph=graph, violations=violations, evaluate=evaluate, spotbugs=spotbugs, settings=effective)

    @property
    def reports_dir(self) -> Path:
        return self.spotbugs.task_factory.reports_dir

    async def run_async(self, continue_on_failure: bool = False) -> BuildResult:
        scheduler = TaskScheduler(
            self.graph,
            parallel_limit=self.settings.parallel_limit,
            continue_on_failure=continue_on_failure,
        )
        return await scheduler.run_async([self.evaluate])

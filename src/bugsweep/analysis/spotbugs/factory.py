"""
Analysis task factory.

Creates the SpotBugs task of a variant and binds its inputs:

- declared sources and the source filter
- compile classpath, plus the platform base library for platform variants
- a deferred class selection: filtered sources -> include patterns ->
  matching artifacts in the variant's output directories
- an ordering dependency on the variant's compile task
"""

from pathlib import Path
from typing import List, Optional, Sequence

from bugsweep.analysis.artifacts import ArtifactSet, select_artifacts
from bugsweep.analysis.patterns import DEFAULT_SOURCE_SUFFIX, resolve_include_patterns
from bugsweep.analysis.source_filter import SourceFilter
from bugsweep.analysis.spotbugs.runner import SpotBugsRunner
from bugsweep.analysis.spotbugs.task import SpotBugsTask
from bugsweep.build.application.task_graph import TaskGraph, task_name_for
from bugsweep.build.domain.models import Variant
from bugsweep.build.infrastructure.platform_sdk import PlatformSdk
from bugsweep.shared.domain.exceptions import ConfigurationError
from bugsweep.shared.domain.provider import Provider
from bugsweep.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class AnalysisTaskFactory:
    """Registers one SpotBugs task per variant."""

    def __init__(
        self,
        graph: TaskGraph,
        runner: SpotBugsRunner,
        reports_dir: Path,
        source_filter: Optional[SourceFilter] = None,
        platform_sdk: Optional[PlatformSdk] = None,
        tool_name: str = "spotbugs",
        source_suffix: str = DEFAULT_SOURCE_SUFFIX,
        extra_args: Sequence[str] = (),
    ):
        self.graph = graph
        self.runner = runner
        self.reports_dir = Path(reports_dir)
        self.source_filter = source_filter or SourceFilter()
        self.platform_sdk = platform_sdk
        self.tool_name = tool_name
        self.source_suffix = source_suffix
        self.extra_args = list(extra_args)

    def task_name_for(self, variant: Variant) -> str:
        return task_name_for(self.tool_name, variant.name)

    def xml_report_for(self, task_name: str) -> Path:
        return self.reports_dir / f"{task_name}Report.xml"

    def create_task(self, variant: Variant) -> SpotBugsTask:
        """
        Register and configure the analysis task of ``variant``.

        Calling this twice for the same variant is a configuration error;
        the coordinator's state guard keeps that from happening.

        Raises:
            DuplicateTaskError: If the derived task name is taken.
            ConfigurationError: If a platform variant's base library cannot be resolved.
        """
        name = self.task_name_for(variant)
        aux_classpath = self._aux_classpath_for(variant)

        def configure(task: SpotBugsTask) -> None:
            task.description = f"Run SpotBugs analysis for {variant.name} classes"
            task.source_dirs = list(variant.source_dirs)
            task.source_filter = self.source_filter
            task.classpath = list(variant.classpath)
            task.aux_classpath = aux_classpath
            task.extra_args = list(self.extra_args)
            task.classes = Provider(lambda: self._select_classes(task, variant))
            task.reports.xml_enabled = True
            task.reports.html_enabled = False
            task.depends_on(variant.compile_task)

        task = self.graph.create(
            name,
            SpotBugsTask,
            configure,
            runner=self.runner,
            xml_report=self.xml_report_for(name),
            variant_name=variant.name,
        )
        logger.info(
            "analysis_task_registered",
            task=name,
            variant=variant.name,
            kind=variant.kind.value,
            compile_task=variant.compile_task,
        )
        return task

    def _aux_classpath_for(self, variant: Variant) -> List[Path]:
        if not variant.requires_platform_library:
            return []
        if self.platform_sdk is None:
            raise ConfigurationError(
                f"Variant '{variant.name}' needs the platform base library but no platform SDK is configured",
                context={"variant": variant.name},
            )
        return [self.platform_sdk.base_library()]

    def _select_classes(self, task: SpotBugsTask, variant: Variant) -> ArtifactSet:
        source_dirs = list(task.source_dirs)
        if variant.only_existing_source_dirs:
            source_dirs = [d for d in source_dirs if d.exists()]

        sources = [f for f in task.matching_sources() if f.name.endswith(self.source_suffix)]
        includes = resolve_include_patterns(sources, source_dirs, self.source_suffix)
        artifacts = select_artifacts(variant.output_dirs, includes)
        logger.debug(
            "analysis_classes_selected",
            task=task.name,
            sources=len(sources),
            patterns=len(includes),
        )
        return artifacts

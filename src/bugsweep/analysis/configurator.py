"""
Code quality configurator base.

A configurator adds one analysis tool to a task graph. For every variant
it creates the tool task and its report tasks, and hangs the resulting
collection task on the shared evaluation task. The host may ask for
configuration several times (once per variant grouping); only the first
request does any work.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from bugsweep.build.application.task_graph import Task, TaskGraph
from bugsweep.build.application.variant_filter import VariantFilter
from bugsweep.build.domain.enums import ConfigurationState
from bugsweep.build.domain.models import Variant
from bugsweep.shared.infrastructure.logging import get_logger
from bugsweep.violations.sink import ViolationSink

logger = get_logger(__name__)


class CodeQualityConfigurator(ABC):
    """Per-tool wiring of analysis, report and collection tasks."""

    def __init__(
        self,
        graph: TaskGraph,
        violations: ViolationSink,
        evaluate_violations: Task,
        variant_filter: Optional[VariantFilter] = None,
    ):
        self.graph = graph
        self.violations = violations
        self.evaluate_violations = evaluate_violations
        self.variant_filter = variant_filter or VariantFilter()
        self.state = ConfigurationState.UNCONFIGURED

    @property
    @abstractmethod
    def tool_name(self) -> str:
        ...

    @abstractmethod
    def create_tool_task(self, variant: Variant) -> Task:
        """Register the analysis task of ``variant``."""

    @abstractmethod
    def create_collect_violations(self, tool_task: Task) -> Task:
        """Register report tasks for ``tool_task`` and return its collection task."""

    def configure_all(self, variants: Iterable[Variant], *additional_groups: Iterable[Variant]) -> bool:
        """
        Configure every variant of every group, once per configurator.

        Args:
            variants: Main variants, always configured
            additional_groups: Further groupings (test variants, unit-test
                variants), narrowed by the variant filter and then handled
                through the same per-variant path

        Returns:
            True if this call configured the graph, False if it was a no-op
        """
        if self.state is not ConfigurationState.UNCONFIGURED:
            logger.debug("configuration_skipped", tool=self.tool_name, state=self.state.value)
            return False

        self.state = ConfigurationState.CONFIGURING
        selected = list(variants)
        for group in additional_groups:
            selected.extend(self.variant_filter.filter(group))
        for variant in selected:
            self.configure_variant(variant)
        configured = len(selected)
        self.state = ConfigurationState.CONFIGURED

        logger.info("tool_configured", tool=self.tool_name, variants=configured)
        return True

    def configure_variant(self, variant: Variant) -> Task:
        tool_task = self.create_tool_task(variant)
        collect = self.create_collect_violations(tool_task)
        self.evaluate_violations.depends_on(collect)
        return collect

"""
Task scheduler.

Executes a task graph with asyncio. Independent tasks run concurrently,
bounded by a semaphore; a task starts only after every dependency
succeeded. The dependency graph is the only synchronization mechanism.
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union

from bugsweep.build.application.task_graph import Task, TaskGraph
from bugsweep.build.domain.enums import TaskState
from bugsweep.shared.domain.base_model import BaseDomainModel
from bugsweep.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass
class TaskOutcome(BaseDomainModel):
    """Execution record of one task."""

    task: str
    state: TaskState
    duration: float = 0.0
    error: Optional[str] = None


@dataclass
class BuildResult(BaseDomainModel):
    """Outcomes of a scheduler run, in execution-plan order."""

    outcomes: List[TaskOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return all(o.state is TaskState.SUCCEEDED for o in self.outcomes)

    @property
    def failed_tasks(self) -> List[str]:
        return [o.task for o in self.outcomes if o.state is TaskState.FAILED]

    @property
    def skipped_tasks(self) -> List[str]:
        return [o.task for o in self.outcomes if o.state is TaskState.SKIPPED]

    def outcome_for(self, task_name: str) -> Optional[TaskOutcome]:
        for outcome in self.outcomes:
            if outcome.task == task_name:
                return outcome
        return None


class TaskScheduler:
    """
    Runs the execution plan of a task graph.

    Args:
        graph: Graph to execute
        parallel_limit: Max tasks whose actions run at the same time
        continue_on_failure: Keep starting tasks that do not depend on a
            failed task (otherwise the first failure stops new work)
    """

    def __init__(self, graph: TaskGraph, parallel_limit: int = 4, continue_on_failure: bool = False):
        self.graph = graph
        self.parallel_limit = parallel_limit
        self.continue_on_failure = continue_on_failure

    def run(self, targets: Optional[Iterable[Union[Task, str]]] = None) -> BuildResult:
        """Synchronous entry point."""
        return asyncio.run(self.run_async(targets))

    async def run_async(self, targets: Optional[Iterable[Union[Task, str]]] = None) -> BuildResult:
        plan = self.graph.execution_plan(targets)
        semaphore = asyncio.Semaphore(self.parallel_limit)
        runners: Dict[str, asyncio.Task] = {}
        stopped = False

        logger.info("build_started", tasks=len(plan), parallel_limit=self.parallel_limit)

        async def run_task(task: Task) -> TaskOutcome:
            nonlocal stopped
            upstream = await asyncio.gather(*(runners[name] for name in task.dependencies))
            blocked = [o.task for o in upstream if o.state is not TaskState.SUCCEEDED]
            if blocked or stopped:
                task.state = TaskState.SKIPPED
                logger.info("task_skipped", task=task.name, blocked_by=blocked)
                return TaskOutcome(task=task.name, state=TaskState.SKIPPED)

            async with semaphore:
                if stopped:
                    task.state = TaskState.SKIPPED
                    return TaskOutcome(task=task.name, state=TaskState.SKIPPED)
                task.state = TaskState.RUNNING
                logger.debug("task_started", task=task.name)
                start = time.perf_counter()
                try:
                    await task.execute_async()
                except Exception as e:
                    duration = time.perf_counter() - start
                    task.state = TaskState.FAILED
                    if not self.continue_on_failure:
                        stopped = True
                    logger.error(
                        "task_failed",
                        task=task.name,
                        error=str(e),
                        error_type=type(e).__name__,
                        duration=round(duration, 3),
                    )
                    return TaskOutcome(task=task.name, state=TaskState.FAILED, duration=duration, error=str(e))

            duration = time.perf_counter() - start
            task.state = TaskState.SUCCEEDED
            logger.debug("task_succeeded", task=task.name, duration=round(duration, 3))
            return TaskOutcome(task=task.name, state=TaskState.SUCCEEDED, duration=duration)

        # Plan order guarantees every dependency runner exists before its dependents.
        for task in plan:
            runners[task.name] = asyncio.create_task(run_task(task), name=task.name)

        outcomes = list(await asyncio.gather(*runners.values()))
        result = BuildResult(outcomes=outcomes)
        logger.info(
            "build_finished",
            succeeded=result.succeeded,
            failed=result.failed_tasks,
            skipped=len(result.skipped_tasks),
        )
        return result

"""Generic build tasks: external commands and placeholders for pre-built outputs."""

from pathlib import Path
from typing import List, Optional, Sequence

from bugsweep.build.application.task_graph import Task
from bugsweep.shared.domain.exceptions import TaskExecutionError
from bugsweep.shared.infrastructure.execution.command_executor import CommandExecutor
from bugsweep.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class NoOpTask(Task):
    """Task with no action, e.g. a compile step whose outputs already exist."""

    async def execute_async(self) -> None:
        logger.debug("task_up_to_date", task=self.name)


class CommandTask(Task):
    """Runs an external command; a non-zero exit fails the task."""

    group = "build"

    def __init__(
        self,
        name: str,
        command: Sequence[str] = (),
        cwd: Optional[Path] = None,
        executor: Optional[CommandExecutor] = None,
        timeout: Optional[float] = None,
        description: str = "",
    ):
        super().__init__(name, description)
        self.command: List[str] = list(command)
        self.cwd = cwd
        self.executor = executor or CommandExecutor()
        self.timeout = timeout

    async def execute_async(self) -> None:
        if not self.command:
            raise TaskExecutionError(f"Task '{self.name}' has no command configured")
        try:
            result = await self.executor.run_async(self.command, cwd=self.cwd, timeout=self.timeout)
        except OSError as e:
            raise TaskExecutionError(f"Cannot start '{self.command[0]}': {e}", context={"task": self.name}) from e
        if not result.is_success:
            raise TaskExecutionError(
                f"Command failed with exit code {result.exit_code}: {result.command}",
                context={"task": self.name, "stderr": result.stderr[-2000:]},
            )

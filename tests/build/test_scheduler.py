"""
Tests for TaskScheduler execution semantics.
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from bugsweep.build.application.scheduler import TaskScheduler
from bugsweep.build.application.task_graph import Task, TaskGraph
from bugsweep.build.application.tasks import CommandTask
from bugsweep.build.domain.enums import TaskState
from bugsweep.shared.domain.exceptions import TaskExecutionError, TaskGraphError


class RecordingTask(Task):
    """Appends its name to a shared log; optionally fails."""

    def __init__(self, name, log, fail=False, delay=0.0):
        super().__init__(name)
        self.log = log
        self.fail = fail
        self.delay = delay

    async def execute_async(self):
        if self.delay:
            await asyncio.sleep(self.delay)
        self.log.append(self.name)
        if self.fail:
            raise RuntimeError(f"{self.name} broke")


class TestTaskScheduler:

    @pytest.mark.asyncio
    async def test_runs_dependencies_first(self):
        log = []
        graph = TaskGraph()
        graph.register(RecordingTask("evaluate", log).depends_on("collect"))
        graph.register(RecordingTask("collect", log).depends_on("analyse"))
        graph.register(RecordingTask("analyse", log, delay=0.01).depends_on("compile"))
        graph.register(RecordingTask("compile", log))

        result = await TaskScheduler(graph).run_async(["evaluate"])

        assert log == ["compile", "analyse", "collect", "evaluate"]
        assert result.succeeded
        assert all(graph[name].state is TaskState.SUCCEEDED for name in log)

    @pytest.mark.asyncio
    async def test_failure_skips_dependents(self):
        log = []
        graph = TaskGraph()
        graph.register(RecordingTask("compile", log, fail=True))
        graph.register(RecordingTask("analyse", log).depends_on("compile"))

        result = await TaskScheduler(graph).run_async()

        assert not result.succeeded
        assert result.failed_tasks == ["compile"]
        assert result.skipped_tasks == ["analyse"]
        assert result.outcome_for("compile").error == "compile broke"
        assert graph["analyse"].state is TaskState.SKIPPED

    @pytest.mark.asyncio
    async def test_continue_on_failure_runs_independent_branches(self):
        log = []
        graph = TaskGraph()
        graph.register(RecordingTask("broken", log, fail=True))
        graph.register(RecordingTask("slow", log, delay=0.05))
        graph.register(RecordingTask("after_slow", log).depends_on("slow"))

        result = await TaskScheduler(graph, parallel_limit=2, continue_on_failure=True).run_async()

        assert "after_slow" in log
        assert result.failed_tasks == ["broken"]
        assert result.outcome_for("after_slow").state is TaskState.SUCCEEDED

    @pytest.mark.asyncio
    async def test_first_failure_stops_new_work(self):
        log = []
        graph = TaskGraph()
        graph.register(RecordingTask("broken", log, fail=True))
        graph.register(RecordingTask("slow", log, delay=0.05))
        graph.register(RecordingTask("after_slow", log).depends_on("slow"))

        result = await TaskScheduler(graph, parallel_limit=2).run_async()

        assert "after_slow" not in log
        assert result.outcome_for("after_slow").state is TaskState.SKIPPED

    @pytest.mark.asyncio
    async def test_parallel_limit_bounds_concurrency(self):
        running = 0
        peak = 0

        class Probe(Task):
            async def execute_async(self):
                nonlocal running, peak
                running += 1
                peak = max(peak, running)
                await asyncio.sleep(0.01)
                running -= 1

        graph = TaskGraph()
        for i in range(6):
            graph.register(Probe(f"probe{i}"))

        result = await TaskScheduler(graph, parallel_limit=2).run_async()

        assert result.succeeded
        assert peak == 2

    @pytest.mark.asyncio
    async def test_cycle_raises_before_running(self):
        log = []
        graph = TaskGraph()
        graph.register(RecordingTask("a", log).depends_on("b"))
        graph.register(RecordingTask("b", log).depends_on("a"))

        with pytest.raises(TaskGraphError):
            await TaskScheduler(graph).run_async()
        assert log == []

    def test_sync_entry_point(self):
        log = []
        graph = TaskGraph()
        graph.register(RecordingTask("only", log))

        assert TaskScheduler(graph).run().succeeded
        assert log == ["only"]


class TestCommandTask:

    @pytest.mark.asyncio
    async def test_empty_command_fails(self):
        with pytest.raises(TaskExecutionError):
            await CommandTask("compileJava").execute_async()

    @pytest.mark.asyncio
    async def test_non_zero_exit_fails(self):
        executor = Mock()
        executor.run_async = AsyncMock(
            return_value=Mock(is_success=False, exit_code=2, command="javac", stderr="error")
        )
        task = CommandTask("compileJava", command=["javac"], executor=executor)

        with pytest.raises(TaskExecutionError, match="exit code 2"):
            await task.execute_async()

    @pytest.mark.asyncio
    async def test_missing_executable_fails(self):
        executor = Mock()
        executor.run_async = AsyncMock(side_effect=FileNotFoundError("no such file"))
        task = CommandTask("compileJava", command=["javac"], executor=executor)

        with pytest.raises(TaskExecutionError, match="Cannot start"):
            await task.execute_async()

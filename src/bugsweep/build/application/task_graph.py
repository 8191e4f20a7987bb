"""
Task graph.

Named task registry with dependency edges. Tasks are registered once;
dependencies are declared by task or by name and resolved lazily, so a
task may depend on something registered later in graph construction.
"""

from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Type, TypeVar, Union

from bugsweep.build.domain.enums import TaskState
from bugsweep.shared.domain.exceptions import DuplicateTaskError, TaskGraphError
from bugsweep.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound="Task")


def capitalize(value: str) -> str:
    """Upper-case the first character only (``debugUnitTest`` -> ``DebugUnitTest``)."""
    return value[:1].upper() + value[1:]


def task_name_for(verb: str, target: str, suffix: str = "") -> str:
    """
    Derive a camel-cased task name.

    Examples:
        >>> task_name_for("spotbugs", "debug")
        'spotbugsDebug'
        >>> task_name_for("collect", "spotbugsDebug", "Violations")
        'collectSpotbugsDebugViolations'
    """
    return f"{verb}{capitalize(target)}{suffix}"


class Task:
    """Unit of work in the build graph."""

    group: Optional[str] = None

    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.description = description
        self.state = TaskState.PENDING
        self._dependencies: List[str] = []

    @property
    def dependencies(self) -> Tuple[str, ...]:
        return tuple(self._dependencies)

    def depends_on(self, *tasks: Union["Task", str]) -> "Task":
        """Declare that this task must not run before ``tasks`` succeeded."""
        for dependency in tasks:
            name = dependency.name if isinstance(dependency, Task) else str(dependency)
            if name == self.name:
                raise TaskGraphError(f"Task '{self.name}' cannot depend on itself")
            if name not in self._dependencies:
                self._dependencies.append(name)
        return self

    async def execute_async(self) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, state={self.state.name})"


class TaskGraph:
    """Registry of uniquely named tasks."""

    def __init__(self) -> None:
        self._tasks: Dict[str, Task] = {}

    def register(self, task: T) -> T:
        """
        Add a task to the graph.

        Raises:
            DuplicateTaskError: If a task with the same name exists.
        """
        self._ensure_available(task.name)
        self._tasks[task.name] = task
        logger.debug("task_registered", task=task.name, type=type(task).__name__)
        return task

    def create(
        self,
        name: str,
        task_type: Type[T],
        configure: Optional[Callable[[T], None]] = None,
        **kwargs,
    ) -> T:
        """
        Construct, configure and register a task in one step.

        The name is checked before construction so a duplicate never runs
        ``configure``.
        """
        self._ensure_available(name)
        task = task_type(name, **kwargs)
        if configure is not None:
            configure(task)
        return self.register(task)

    def get(self, name: str) -> Optional[Task]:
        return self._tasks.get(name)

    def __getitem__(self, name: str) -> Task:
        try:
            return self._tasks[name]
        except KeyError:
            raise TaskGraphError(f"Task '{name}' not found") from None

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)

    def names(self) -> List[str]:
        return list(self._tasks)

    def dependencies_of(self, task: Union[Task, str]) -> List[Task]:
        """Resolve the direct dependencies of a task."""
        owner = self[task] if isinstance(task, str) else task
        resolved = []
        for name in owner.dependencies:
            if name not in self._tasks:
                raise TaskGraphError(
                    f"Task '{owner.name}' depends on unknown task '{name}'",
                    context={"task": owner.name, "dependency": name},
                )
            resolved.append(self._tasks[name])
        return resolved

    def execution_plan(self, targets: Optional[Iterable[Union[Task, str]]] = None) -> List[Task]:
        """
        Topologically order ``targets`` and everything they depend on.

        With no targets every registered task is planned. Dependencies
        always precede their dependents; otherwise registration order is kept.

        Raises:
            TaskGraphError: On unknown dependencies or cycles.
        """
        roots = list(self._tasks.values()) if targets is None else [
            self[t] if isinstance(t, str) else t for t in targets
        ]

        ordered: List[Task] = []
        done: set = set()
        visiting: List[str] = []

        def visit(task: Task) -> None:
            if task.name in done:
                return
            if task.name in visiting:
                cycle = visiting[visiting.index(task.name):] + [task.name]
                raise TaskGraphError(f"Dependency cycle: {' -> '.join(cycle)}", context={"cycle": cycle})
            visiting.append(task.name)
            for dependency in self.dependencies_of(task):
                visit(dependency)
            visiting.pop()
            done.add(task.name)
            ordered.append(task)

        for root in roots:
            visit(root)
        return ordered

    def _ensure_available(self, name: str) -> None:
        if name in self._tasks:
            raise DuplicateTaskError(f"Task '{name}' is already registered", context={"task": name})

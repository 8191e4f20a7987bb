"""
Domain exceptions for bugsweep.

All application errors inherit from BugsweepError. Configuration-time
errors fail fast while the task graph is being built; execution-time
errors surface as task failures to the scheduler.
"""


class BugsweepError(Exception):
    """Base class for all bugsweep exceptions."""

    def __init__(self, message: str, context: dict = None):
        super().__init__(message)
        self.context = context or {}


class ConfigurationError(BugsweepError):
    """Raised when build or tool configuration is invalid or unresolvable."""

    pass


class DuplicateTaskError(BugsweepError):
    """Raised when a task name is registered twice in the same graph."""

    pass


class TaskGraphError(BugsweepError):
    """Raised for unknown dependencies or dependency cycles."""

    pass


class TaskExecutionError(BugsweepError):
    """Raised when a task action fails (external process, renderer)."""

    pass


class ReportError(BugsweepError):
    """Raised when a report is missing, unreadable or malformed."""

    pass

"""
SpotBugs runner.

Builds and runs the SpotBugs text-UI command line. Output of the tool
is captured and only logged at debug level.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from bugsweep.shared.domain.exceptions import ConfigurationError, TaskExecutionError
from bugsweep.shared.infrastructure.execution.command_executor import CommandExecutor, CommandResult
from bugsweep.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnalysisRequest:
    """Inputs of one SpotBugs run."""

    classes: Tuple[Path, ...]
    xml_report: Path
    classpath: Tuple[Path, ...] = field(default_factory=tuple)
    aux_classpath: Tuple[Path, ...] = field(default_factory=tuple)
    source_dirs: Tuple[Path, ...] = field(default_factory=tuple)
    extra_args: Tuple[str, ...] = field(default_factory=tuple)


class SpotBugsRunner:
    """Runs ``edu.umd.cs.findbugs.FindBugs2`` on the Java launcher."""

    MAIN_CLASS = "edu.umd.cs.findbugs.FindBugs2"

    def __init__(
        self,
        tool_classpath: Sequence[Path] = (),
        java_executable: str = "java",
        executor: Optional[CommandExecutor] = None,
        timeout: Optional[float] = None,
    ):
        self.tool_classpath: List[Path] = [Path(p) for p in tool_classpath]
        self.java_executable = java_executable
        self.executor = executor or CommandExecutor()
        self.timeout = timeout

    def build_command(self, request: AnalysisRequest) -> List[str]:
        """
        Assemble the command line.

        The compile classpath and the auxiliary entries (platform base
        library) are both passed through ``-auxclasspath``: SpotBugs needs
        them to resolve types, but must not report on them.
        """
        command = [
            self.java_executable,
            "-cp",
            os.pathsep.join(str(p) for p in self.tool_classpath),
            self.MAIN_CLASS,
            "-xml:withMessages",
            "-output",
            str(request.xml_report),
        ]
        aux = [*request.classpath, *request.aux_classpath]
        if aux:
            command += ["-auxclasspath", os.pathsep.join(str(p) for p in aux)]
        if request.source_dirs:
            command += ["-sourcepath", os.pathsep.join(str(p) for p in request.source_dirs)]
        command += list(request.extra_args)
        command += [str(p) for p in request.classes]
        return command

    async def analyze_async(self, request: AnalysisRequest) -> CommandResult:
        if not self.tool_classpath:
            raise ConfigurationError("SpotBugs classpath is empty (set BUGSWEEP_SPOTBUGS_CLASSPATH)")

        request.xml_report.parent.mkdir(parents=True, exist_ok=True)
        command = self.build_command(request)
        try:
            result = await self.executor.run_async(command, timeout=self.timeout)
        except OSError as e:
            raise TaskExecutionError(f"Cannot start '{self.java_executable}': {e}") from e

        logger.debug(
            "spotbugs_output",
            exit_code=result.exit_code,
            stdout=result.stdout[-2000:],
            stderr=result.stderr[-2000:],
        )
        return result

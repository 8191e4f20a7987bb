"""
Command Executor Service.

Runs external tools (the Java launcher for SpotBugs and its HTML printer)
asynchronously. Handles timeouts, output capturing and logging.
"""

import asyncio
import contextlib
import os
import signal
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from bugsweep.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CommandResult:
    """Result of a command execution."""
    command: str
    exit_code: int
    stdout: str
    stderr: str
    duration: float
    is_timeout: bool = False

    @property
    def is_success(self) -> bool:
        """Check if command succeeded."""
        return self.exit_code == 0 and not self.is_timeout


class CommandExecutor:
    """
    Async subprocess wrapper.

    Output is always captured; callers decide what to surface. Commands
    are passed as argument lists, never through a shell.
    """

    def __init__(self, default_timeout: float = 600.0):
        self.default_timeout = default_timeout

    async def run_async(
        self,
        command: Sequence[str],
        cwd: str | Path | None = None,
        env: dict[str, str] | None = None,
        timeout: float | None = None,
        stdout_path: Optional[Path] = None,
    ) -> CommandResult:
        """
        Execute a command asynchronously.

        Args:
            command: Command argument list
            cwd: Working directory
            env: Environment variables (merged over os.environ)
            timeout: Execution timeout in seconds
            stdout_path: When set, stdout is written to this file instead of
                being returned

        Returns:
            CommandResult object
        """
        start_time = time.perf_counter()
        timeout_val = timeout if timeout is not None else self.default_timeout
        cmd_args = [str(part) for part in command]
        cmd_str = " ".join(cmd_args)

        run_env = os.environ.copy()
        if env:
            run_env.update(env)

        logger.debug("executing_command", command=cmd_str, cwd=str(cwd) if cwd else "cwd", timeout=timeout_val)

        process = await asyncio.create_subprocess_exec(
            *cmd_args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
            env=run_env,
            start_new_session=True,  # own process group, killed as a whole on timeout
        )

        try:
            stdout_data, stderr_data = await asyncio.wait_for(process.communicate(), timeout=timeout_val)
        except asyncio.TimeoutError:
            logger.warning("command_timeout", command=cmd_str, timeout=timeout_val)
            with contextlib.suppress(ProcessLookupError):
                os.killpg(os.getpgid(process.pid), signal.SIGTERM)
            await process.wait()
            return CommandResult(
                command=cmd_str,
                exit_code=-1,
                stdout="",
                stderr="Command timed out",
                duration=time.perf_counter() - start_time,
                is_timeout=True,
            )

        duration = time.perf_counter() - start_time
        stdout_str = stdout_data.decode("utf-8", errors="replace")
        stderr_str = stderr_data.decode("utf-8", errors="replace")

        if stdout_path is not None:
            stdout_path.parent.mkdir(parents=True, exist_ok=True)
            stdout_path.write_text(stdout_str, encoding="utf-8")
            stdout_str = ""

        if process.returncode != 0:
            logger.warning(
                "command_failed",
                command=cmd_str,
                exit_code=process.returncode,
                stderr_snippet=stderr_str[:200],
            )
        else:
            logger.debug("command_success", command=cmd_str, duration=duration)

        return CommandResult(
            command=cmd_str,
            exit_code=process.returncode,
            stdout=stdout_str,
            stderr=stderr_str,
            duration=duration,
        )

"""
Subprocess boundary - runs an assembled command line and collects its output.

The builder only depends on the ``Executor`` protocol; ``ShellExecutor`` is
the production implementation and tests inject fakes.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from core.constants import CommandConstants, ErrorMessages
from core.exceptions import CommandExecutionError
from core.utils.decorators import log_duration

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """Outcome of one subprocess invocation"""

    error: Optional[Exception]
    stdout: str
    stderr: str
    returncode: Optional[int] = None

    @property
    def success(self) -> bool:
        return self.error is None


class Executor(Protocol):
    """Anything that can run a shell command line asynchronously"""

    async def __call__(self, command_line: str) -> ExecutionResult: ...


def _decode(data: Optional[bytes]) -> str:
    if not data:
        return ""
    return data.decode(CommandConstants.OUTPUT_ENCODING, errors="replace")


class ShellExecutor:
    """Run command lines through the system shell with asyncio"""

    def __init__(self, cwd: Optional[str] = None):
        self.cwd = cwd

    @log_duration
    async def __call__(self, command_line: str) -> ExecutionResult:
        logger.debug(f"Spawning: {command_line}")
        try:
            process = await asyncio.create_subprocess_shell(
                command_line,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self.cwd,
            )
            raw_stdout, raw_stderr = await process.communicate()
        except OSError as e:
            logger.error(f"Failed to spawn '{command_line}': {e}")
            error = CommandExecutionError(
                command_line, message=ErrorMessages.SPAWN_FAILED.format(error=e)
            )
            return ExecutionResult(error=error, stdout="", stderr="")

        stdout = _decode(raw_stdout)
        stderr = _decode(raw_stderr)

        error = None
        if process.returncode != 0:
            error = CommandExecutionError(command_line, process.returncode, stderr)

        return ExecutionResult(
            error=error, stdout=stdout, stderr=stderr, returncode=process.returncode
        )

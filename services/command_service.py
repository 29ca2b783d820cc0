"""
Command Service - Business logic for building and running commands.

This service turns declarative request payloads into Command objects,
executes them and records every run in the command history.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from core.command_history import CommandHistory
from core.constants import CommandConstants
from core.executor import ExecutionResult, Executor, ShellExecutor
from core.utils.decorators import timer
from magick.command import Command

logger = logging.getLogger(__name__)


class CommandService:
    """
    Service for command operations.

    Combines the command builder with the configured program, the
    subprocess executor and history tracking.
    """

    def __init__(
        self,
        history: CommandHistory,
        command: str = CommandConstants.DEFAULT_COMMAND,
        executor: Optional[Executor] = None,
    ):
        """
        Initialize command service.

        Args:
            history: Command history instance
            command: Default program to invoke
            executor: Subprocess runner shared by all commands
        """
        self.history = history
        self.command = command
        self.executor = executor or ShellExecutor()

    def build(self, args: List[Any], command: Optional[str] = None) -> Command:
        """
        Build a command from a declarative option list.

        Raises:
            UnknownOption: For option names not in the registry
            UnsupportedArgumentType: For unsupported list items
            UnrecognizedGeometryOption: For malformed geometry mappings
        """
        return Command(args, command=command or self.command, executor=self.executor)

    async def run(
        self,
        args: List[Any],
        command: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Tuple[str, Command, ExecutionResult, int]:
        """
        Build, execute and record a command.

        Returns:
            Tuple of (run_id, command, execution_result, processing_time_ms)
        """
        cmd = self.build(args, command)

        with timer() as t:
            result = await cmd.execute()
        processing_time_ms = t["ms"]

        run_id = self.history.add_run(
            command_line=cmd.command_line,
            processing_time_ms=processing_time_ms,
            error=result.error,
            stdout=result.stdout,
            stderr=result.stderr,
            returncode=result.returncode,
            metadata=metadata,
        )
        logger.info(f"Run {run_id} finished in {processing_time_ms} ms")

        return run_id, cmd, result, processing_time_ms

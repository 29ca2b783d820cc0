"""
Command builder - accumulates argument tokens through chained option calls
and runs the assembled command line.

Example:
    >>> cmd = (
    ...     Command()
    ...     .add("image.png")
    ...     .auto_orient()
    ...     .thumbnail({"width": 128, "height": 128, "onlyShrink": True})
    ...     .add("out.png")
    ... )
    >>> cmd.command_line
    "convert image.png -auto-orient -thumbnail '128x128>' out.png"
"""

import asyncio
import logging
import threading
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from core.constants import CommandConstants
from core.enums import CommandEvent, CommandState
from core.events import EventEmitter
from core.exceptions import UnsupportedArgumentType
from core.executor import ExecutionResult, Executor, ShellExecutor
from magick.options import OPTIONS, get_option
from magick.tokens import ArgumentToken, join_tokens, reset_flag

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[Exception], str, str], Any]


class CallbackSink:
    """Deliver the result to a caller-supplied continuation"""

    def __init__(self, callback: Callback):
        self.callback = callback

    def deliver(self, result: ExecutionResult):
        self.callback(result.error, result.stdout, result.stderr)


class EventSink:
    """Publish the result as done plus run_error or run_success"""

    def __init__(self, emitter: EventEmitter):
        self.emitter = emitter

    def deliver(self, result: ExecutionResult):
        self.emitter.emit(CommandEvent.DONE, result.error, result.stdout, result.stderr)
        if result.error is not None:
            self.emitter.emit(CommandEvent.RUN_ERROR, result.error)
        else:
            self.emitter.emit(CommandEvent.RUN_SUCCESS, result.stdout)


class Command(EventEmitter):
    """
    Chainable ImageMagick command.

    Any registered option is available as a method (``cmd.resize(...)``)
    that appends its tokens and returns the same instance.
    """

    def __init__(
        self,
        args: Optional[Iterable[Any]] = None,
        callback: Optional[Callback] = None,
        command: str = CommandConstants.DEFAULT_COMMAND,
        executor: Optional[Executor] = None,
    ):
        """
        Initialize Command

        Args:
            args: Declarative option list. Items are mappings
                ``{name: argument}``, bare option names, or booleans
                (accepted, no tokens)
            callback: Completion callback ``(error, stdout, stderr)``. When
                given, the command is started right after ``args`` are applied
                and the callback fires once the process exits
            command: Program to invoke
            executor: Subprocess runner, defaults to ``ShellExecutor``
        """
        super().__init__()
        self.command = command
        self.executor: Executor = executor or ShellExecutor()
        self.tokens: List[ArgumentToken] = []
        self.task: Optional[asyncio.Task] = None
        self.thread: Optional[threading.Thread] = None
        self._executed = False
        self._sink = CallbackSink(callback) if callback is not None else EventSink(self)

        if args:
            self.apply(*args)

        if callback is not None:
            self.run()

    def __getattr__(self, name: str):
        # Only reached for attributes that are not defined on the instance
        if name.startswith("_"):
            raise AttributeError(name)
        option = get_option(name)

        def call(*values):
            return self.option(option.name, *values)

        call.__name__ = option.name
        return call

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(OPTIONS))

    def __repr__(self):
        return f"Command({self.command_line!r}, state={self.state.value})"

    # ------------------------------------------------------------------
    # Accumulation
    # ------------------------------------------------------------------

    @property
    def state(self) -> CommandState:
        if self._executed:
            return CommandState.EXECUTED
        if self.tokens:
            return CommandState.ACCUMULATING
        return CommandState.IDLE

    def option(self, name: str, *values: Any) -> "Command":
        """
        Append the tokens of option name rendered with values.

        A single boolean value selects the reset form.

        Raises:
            UnknownOption: If name is not registered
        """
        if len(values) == 1 and isinstance(values[0], bool):
            return self.reset(name)

        tokens = get_option(name)(*values)
        self.tokens.extend(tokens)
        logger.debug(f"Appended {name}: {join_tokens(tokens)}")
        return self

    def reset(self, name: str) -> "Command":
        """Append the +flag reset form of option name"""
        tokens = get_option(name)()
        if tokens:
            tokens = [[reset_flag(tokens[0][0])]]
        self.tokens.extend(tokens)
        logger.debug(f"Appended reset {name}: {join_tokens(tokens)}")
        return self

    def apply(self, *items: Any) -> "Command":
        """
        Apply declarative option list items in order.

        Raises:
            UnknownOption: For option names not in the registry
            UnsupportedArgumentType: For items that are not a mapping,
                string or boolean
        """
        for item in items:
            if isinstance(item, bool):
                continue
            if isinstance(item, Mapping):
                for name, value in item.items():
                    if value is None:
                        self.option(name)
                    elif isinstance(value, (list, tuple)):
                        self.option(name, *value)
                    else:
                        self.option(name, value)
            elif isinstance(item, str):
                self.option(item)
            else:
                raise UnsupportedArgumentType(item)
        return self

    @property
    def args(self) -> str:
        """Accumulated arguments joined with single spaces"""
        return join_tokens(self.tokens)

    @property
    def command_line(self) -> str:
        args = self.args
        if not args:
            return self.command
        return f"{self.command}{CommandConstants.TOKEN_SEPARATOR}{args}"

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def execute(self, command_line: Optional[str] = None) -> ExecutionResult:
        """
        Run the command line and deliver the result to the callback or
        as events.

        Args:
            command_line: Line to run, defaults to the current ``command_line``

        Returns:
            The execution result
        """
        command_line = command_line or self.command_line
        logger.info(f"Executing: {command_line}")
        self._executed = True

        result = await self.executor(command_line)
        if result.error is not None:
            logger.warning(f"Command failed: {result.error}")
        else:
            logger.info(f"Command succeeded: {self.command}")

        self._sink.deliver(result)
        return result

    def run(self, callback: Optional[Callback] = None) -> Union[asyncio.Task, threading.Thread]:
        """
        Start the command and return without waiting for it.

        Inside a running event loop the execution is scheduled as a task.
        Outside a loop it runs on a worker thread with its own event loop.
        The result reaches the callback or the events once the process exits.

        Args:
            callback: Completion callback; switches the instance from
                events to callback delivery

        Returns:
            The scheduled task (awaitable) or the started thread (joinable)
        """
        if callback is not None:
            self._sink = CallbackSink(callback)
        self._executed = True
        command_line = self.command_line

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.thread = threading.Thread(
                target=self._run_in_thread, args=(command_line,), name=f"magick-run-{id(self):x}"
            )
            self.thread.start()
            return self.thread

        self.task = loop.create_task(self.execute(command_line))
        self.task.add_done_callback(self._log_task_failure)
        return self.task

    def run_sync(self, callback: Optional[Callback] = None) -> ExecutionResult:
        """
        Execute the command and block until the result has been delivered.

        Must not be called from inside a running event loop; await
        ``execute()`` there instead.
        """
        if callback is not None:
            self._sink = CallbackSink(callback)
        return asyncio.run(self.execute())

    def _run_in_thread(self, command_line: str):
        try:
            asyncio.run(self.execute(command_line))
        except Exception as e:
            logger.error(f"Run of '{command_line}' failed: {e}", exc_info=True)

    def _log_task_failure(self, task: asyncio.Task):
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Run of '{self.command_line}' failed: {error}", exc_info=error)

"""
Exception hierarchy for Magick Flow.

Build-time errors (geometry parsing, option lookup, argument list resolution)
are raised synchronously from the builder call that caused them. Subprocess
failures are never raised by ``Command.run``; they are delivered as the
``error`` value of the completion callback or events.
"""

from typing import Any, Iterable, Optional

from core.constants import ErrorMessages


class MagickError(Exception):
    """Base class for all Magick Flow errors"""


class UnrecognizedGeometryOption(MagickError, ValueError):
    """Raised when a geometry mapping matches none of the known shapes"""

    def __init__(self, keys: Iterable[str]):
        self.keys = [str(key) for key in keys]
        super().__init__(f"`{','.join(self.keys)}` is not an accepted option")


class UnknownOption(MagickError, AttributeError):
    """Raised when an option name is not in the registry"""

    def __init__(self, name: str):
        super().__init__(f"No such option `{name}`")
        # AttributeError.__init__ resets name on 3.10+
        self.name = name


class UnsupportedArgumentType(MagickError, TypeError):
    """Raised when a declarative argument list holds an item of unsupported type"""

    def __init__(self, argument: Any):
        self.argument = argument
        super().__init__(
            f"Unsupported argument type `{type(argument).__name__}` of argument `{argument}`"
        )


class CommandExecutionError(MagickError):
    """
    Subprocess failure (non-zero exit or spawn failure).

    Delivered through the completion channel, not raised.
    """

    def __init__(
        self,
        command: str,
        returncode: Optional[int] = None,
        stderr: str = "",
        message: Optional[str] = None,
    ):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        if message is None:
            message = ErrorMessages.EXECUTION_FAILED.format(returncode=returncode, command=command)
            if stderr:
                message = f"{message}\n{stderr.strip()}"
        super().__init__(message)

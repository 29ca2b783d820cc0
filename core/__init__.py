"""
Core modules for Magick Flow
"""

from .command_history import CommandHistory, CommandRecord
from .events import EventEmitter
from .executor import ExecutionResult, Executor, ShellExecutor

__all__ = [
    "CommandHistory",
    "CommandRecord",
    "EventEmitter",
    "ExecutionResult",
    "Executor",
    "ShellExecutor",
]

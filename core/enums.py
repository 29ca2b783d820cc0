"""
Centralized enums for Magick Flow.
"""

from enum import Enum


class OptionKind(str, Enum):
    """How an option renders its value into argument tokens"""

    FLAG = "flag"
    VALUE = "value"
    QUOTED = "quoted"
    GEOMETRY = "geometry"
    UNSHARP = "unsharp"
    DEFINE = "define"
    PASSTHROUGH = "passthrough"


class CommandState(str, Enum):
    """Lifecycle of a Command instance"""

    IDLE = "idle"
    ACCUMULATING = "accumulating"
    EXECUTED = "executed"


class CommandEvent(str, Enum):
    """Events emitted by a Command without a completion callback"""

    DONE = "done"
    RUN_ERROR = "run_error"
    RUN_SUCCESS = "run_success"


class RunResult(str, Enum):
    """Outcome stored in the execution history"""

    SUCCESS = "SUCCESS"
    ERROR = "ERROR"

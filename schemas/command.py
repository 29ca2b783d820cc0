"""
Command API models.

This module contains models for command operations:
- Build/run requests
- Assembled command line and run responses
- Option registry listing
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

# One declarative item: {"resize": {...}}, "strip" or a boolean placeholder
CommandItem = Union[bool, str, Dict[str, Any]]


class CommandRequest(BaseModel):
    """Request to build or run a command"""

    args: List[CommandItem] = Field(
        default_factory=list, description="Declarative option list applied in order"
    )
    command: Optional[str] = Field(
        default=None, description="Program to invoke (defaults to configured command)"
    )
    metadata: Dict[str, Any] = Field(default_factory=dict)


class CommandLineResponse(BaseModel):
    """Assembled command line"""

    command: str
    args: str
    command_line: str
    tokens: List[List[str]]


class CommandRunResponse(BaseModel):
    """Result of running a command"""

    success: bool
    run_id: str
    command_line: str
    stdout: str
    stderr: str
    error: Optional[str] = None
    returncode: Optional[int] = None
    processing_time_ms: int


class OptionInfo(BaseModel):
    """Registry entry"""

    name: str
    flag: str
    kind: str


class CommandRecordResponse(BaseModel):
    """One entry of the execution history"""

    id: str
    timestamp: datetime
    command_line: str
    result: str
    returncode: Optional[int] = None
    processing_time_ms: int
    stdout: str = ""
    stderr: str = ""
    error: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class HistoryResponse(BaseModel):
    """Recent runs plus statistics"""

    runs: List[CommandRecordResponse]
    statistics: Dict[str, Any]


class HistoryExport(BaseModel):
    """Serialized history, as produced by export and accepted by import"""

    runs: List[CommandRecordResponse]
    statistics: Dict[str, Any] = Field(default_factory=dict)

"""
Schemas Package

This package contains all Pydantic schemas for data validation and serialization,
organized by domain:

- geometry: typed geometry and unsharp parameters accepted by the formatters
- command: build/run requests and responses, history records
- system: status and debug settings
"""

from .command import (
    CommandItem,
    CommandLineResponse,
    CommandRecordResponse,
    CommandRequest,
    CommandRunResponse,
    HistoryExport,
    HistoryResponse,
    OptionInfo,
)
from .geometry import GeometrySpec, UnsharpSpec
from .system import DebugSettings, SystemStatus

__all__ = [
    # Geometry models
    "GeometrySpec",
    "UnsharpSpec",
    # Command models
    "CommandItem",
    "CommandRequest",
    "CommandLineResponse",
    "CommandRunResponse",
    "CommandRecordResponse",
    "HistoryResponse",
    "HistoryExport",
    "OptionInfo",
    # System models
    "SystemStatus",
    "DebugSettings",
]

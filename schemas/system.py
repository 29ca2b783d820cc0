"""
System API models.
"""

from typing import Dict

from pydantic import BaseModel


class SystemStatus(BaseModel):
    """Process status"""

    status: str
    uptime: float
    memory_usage: Dict[str, float]
    command: str
    command_available: bool
    history_usage: int


class DebugSettings(BaseModel):
    """Debug mode state"""

    enabled: bool
    verbose_logging: bool

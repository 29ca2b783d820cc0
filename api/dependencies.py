"""
Shared FastAPI dependencies for the Magick Flow API.
"""

import logging

from fastapi import Depends, HTTPException, Request

from core.command_history import CommandHistory
from services.command_service import CommandService

logger = logging.getLogger(__name__)


class Managers:
    """Container for all manager instances."""

    def __init__(self, command_history: CommandHistory, command_service: CommandService):
        self.command_history = command_history
        self.command_service = command_service


def get_managers(request: Request) -> Managers:
    """
    Get all manager instances from app state.

    Raises:
        HTTPException: If managers not initialized
    """
    try:
        return Managers(
            command_history=request.app.state.command_history,
            command_service=request.app.state.command_service,
        )
    except AttributeError as e:
        logger.error(f"Managers not initialized in app state: {e}")
        raise HTTPException(
            status_code=500, detail="Internal server error: Managers not initialized"
        )


def get_command_history(managers: Managers = Depends(get_managers)) -> CommandHistory:
    """Get CommandHistory instance."""
    return managers.command_history


def get_command_service(managers: Managers = Depends(get_managers)) -> CommandService:
    """Get CommandService instance."""
    return managers.command_service

"""
Command API Router - Build and run ImageMagick commands
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from api.dependencies import get_command_service
from api.exceptions import safe_endpoint
from magick.options import list_options
from schemas import CommandLineResponse, CommandRequest, CommandRunResponse, OptionInfo

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/build")
@safe_endpoint
async def build_command(
    request: CommandRequest, command_service=Depends(get_command_service)
) -> CommandLineResponse:
    """Assemble a command line without running it"""
    cmd = command_service.build(request.args, request.command)

    return CommandLineResponse(
        command=cmd.command,
        args=cmd.args,
        command_line=cmd.command_line,
        tokens=cmd.tokens,
    )


@router.post("/run")
@safe_endpoint
async def run_command(
    request: CommandRequest, command_service=Depends(get_command_service)
) -> CommandRunResponse:
    """Assemble and execute a command, recording it in history"""
    run_id, cmd, result, processing_time_ms = await command_service.run(
        request.args, request.command, request.metadata
    )

    return CommandRunResponse(
        success=result.success,
        run_id=run_id,
        command_line=cmd.command_line,
        stdout=result.stdout,
        stderr=result.stderr,
        error=str(result.error) if result.error is not None else None,
        returncode=result.returncode,
        processing_time_ms=processing_time_ms,
    )


@router.get("/options")
async def get_options() -> List[OptionInfo]:
    """List registered options"""
    return [OptionInfo(**info) for info in list_options()]

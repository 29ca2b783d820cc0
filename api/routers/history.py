"""
History API Router - Command execution history
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_command_history
from api.exceptions import RunNotFoundException, safe_endpoint
from core.constants import APIConstants
from core.enums import RunResult
from core.utils.enum_converter import enum_to_string, parse_enum
from schemas import CommandRecordResponse, HistoryExport, HistoryResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/recent")
@safe_endpoint
async def get_recent_history(
    limit: int = Query(APIConstants.DEFAULT_LIMIT, ge=APIConstants.MIN_LIMIT, le=APIConstants.MAX_LIMIT),
    result_filter: Optional[str] = Query(None, pattern="(?i)^(SUCCESS|ERROR)$"),
    command_history=Depends(get_command_history),
) -> HistoryResponse:
    """Get recent runs"""
    result = parse_enum(result_filter, RunResult, None, normalize=True)
    records = command_history.get_recent(limit, enum_to_string(result))

    runs = [CommandRecordResponse(**r.to_dict()) for r in records]

    return HistoryResponse(runs=runs, statistics=command_history.get_statistics())


@router.post("/clear")
@safe_endpoint
async def clear_history(command_history=Depends(get_command_history)) -> dict:
    """Clear all history"""
    command_history.clear()

    return {"success": True, "message": "History cleared"}


@router.get("/statistics")
@safe_endpoint
async def get_statistics(command_history=Depends(get_command_history)) -> dict:
    """Get detailed statistics"""
    return command_history.get_statistics()


@router.get("/export")
@safe_endpoint
async def export_history(command_history=Depends(get_command_history)) -> HistoryExport:
    """Export all runs with statistics"""
    return HistoryExport(**command_history.export_to_dict())


@router.post("/import")
@safe_endpoint
async def import_history(
    payload: HistoryExport, command_history=Depends(get_command_history)
) -> dict:
    """Replace the history with previously exported runs"""
    command_history.import_from_dict(payload.model_dump(mode="json"))
    logger.info(f"History replaced with {len(payload.runs)} imported runs")

    return {"success": True, "imported": len(payload.runs)}


@router.get("/analysis/failures")
@safe_endpoint
async def get_failure_analysis(command_history=Depends(get_command_history)) -> dict:
    """Group failed runs by program and exit code"""
    return command_history.get_failure_analysis()


@router.get("/{run_id}")
@safe_endpoint
async def get_run(run_id: str, command_history=Depends(get_command_history)) -> CommandRecordResponse:
    """Get specific run details"""
    record = command_history.get_run(run_id)
    if record is None:
        raise RunNotFoundException(run_id)

    return CommandRecordResponse(**record.to_dict())

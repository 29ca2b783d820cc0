"""
Exception handling for the HTTP API.

Build-time builder errors become 400 responses; anything unexpected inside
an endpoint is logged and reported as 500.
"""

import functools
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from core.exceptions import (
    MagickError,
    UnknownOption,
    UnrecognizedGeometryOption,
    UnsupportedArgumentType,
)

logger = logging.getLogger(__name__)

BAD_REQUEST_ERRORS = (UnrecognizedGeometryOption, UnknownOption, UnsupportedArgumentType)


class RunNotFoundException(HTTPException):
    """Raised when a run id is not in the history"""

    def __init__(self, run_id: str):
        super().__init__(status_code=404, detail=f"Run {run_id} not found")


def safe_endpoint(func):
    """
    Wrap an async endpoint so unexpected exceptions become HTTP 500.

    HTTPException and MagickError pass through to their registered handlers.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (HTTPException, MagickError):
            raise
        except Exception as e:
            logger.error(f"Error in {func.__name__}: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail=str(e))

    return wrapper


async def magick_error_handler(request: Request, exc: MagickError) -> JSONResponse:
    status_code = 400 if isinstance(exc, BAD_REQUEST_ERRORS) else 500
    logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


def register_exception_handlers(app: FastAPI):
    """Register Magick Flow exception handlers on app"""
    app.add_exception_handler(MagickError, magick_error_handler)

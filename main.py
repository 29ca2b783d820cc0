"""
Magick Flow - Main FastAPI Application
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Add parent directory to path
sys.path.append(str(Path(__file__).parent))

from api.exceptions import register_exception_handlers  # noqa: E402
from api.routers import command, history, system  # noqa: E402
from config import get_settings  # noqa: E402
from core.command_history import CommandHistory  # noqa: E402
from core.constants import SystemConstants  # noqa: E402
from core.executor import ShellExecutor  # noqa: E402
from services.command_service import CommandService  # noqa: E402

# Get configuration
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.system.log_level),
    format=SystemConstants.LOG_FORMAT,
)
logger = logging.getLogger(__name__)

# Suppress watchfiles debug messages
logging.getLogger("watchfiles").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    logger.info("Starting Magick Flow server...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.system.debug}")

    command_history = CommandHistory(max_size=settings.history.buffer_size)
    command_service = CommandService(
        history=command_history,
        command=settings.magick.command,
        executor=ShellExecutor(cwd=settings.magick.cwd or None),
    )

    logger.info(f"Using command: {settings.magick.command}")

    # Store managers in app state for access by routers
    app.state.command_history = command_history
    app.state.command_service = command_service
    app.state.config = settings.to_dict()
    app.state.debug = settings.system.debug

    yield

    logger.info("Shutting down Magick Flow server...")
    command_history.clear()
    logger.info("Server shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Magick Flow",
    description="Chainable ImageMagick command builder and runner",
    version="1.0.0",
    lifespan=lifespan,
)

if settings.api.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(command.router, prefix="/api/command", tags=["Command"])
app.include_router(history.router, prefix="/api/history", tags=["History"])
app.include_router(system.router, prefix="/api/system", tags=["System"])


# Root endpoint
@app.get("/")
async def root():
    return {
        "name": "Magick Flow",
        "status": "running",
        "version": "1.0.0",
        "endpoints": {
            "command": "/api/command",
            "history": "/api/history",
            "system": "/api/system",
            "docs": "/docs",
        },
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "command_service": getattr(app.state, "command_service", None) is not None,
            "command_history": getattr(app.state, "command_history", None) is not None,
        },
    }


# Error handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": f"Internal server error: {str(exc)}"})


if __name__ == "__main__":
    server_config = uvicorn.Config(
        "main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.system.debug,
        log_level=settings.system.log_level.lower(),
        loop="asyncio",
    )
    server = uvicorn.Server(server_config)

    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    finally:
        logger.info("Server exiting...")

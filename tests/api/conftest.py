"""
Pytest configuration for API integration tests
"""

import pytest
from fastapi.testclient import TestClient

from core.command_history import CommandHistory
from services.command_service import CommandService


@pytest.fixture(scope="function")
def executor(success_executor):
    """Executor used by the app under test (override per test module)"""
    return success_executor


@pytest.fixture(scope="function")
def client(executor):
    """
    Create a test client with properly initialized app state.
    Each test gets a fresh client to avoid state contamination.
    """
    from main import app

    command_history = CommandHistory(max_size=100)
    command_service = CommandService(history=command_history, executor=executor)

    app.state.command_history = command_history
    app.state.command_service = command_service
    app.state.config = {"system": {"debug": False}}

    # No context manager, so the lifespan handler does not replace the state
    test_client = TestClient(app, raise_server_exceptions=False)

    yield test_client

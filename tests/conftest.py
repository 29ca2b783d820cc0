"""
Pytest configuration and fixtures for Magick Flow tests
"""

import pytest

from core.command_history import CommandHistory
from core.exceptions import CommandExecutionError
from core.executor import ExecutionResult
from services.command_service import CommandService


class FakeExecutor:
    """Executor double that records command lines and returns a canned result"""

    def __init__(self, result: ExecutionResult):
        self.result = result
        self.calls = []

    async def __call__(self, command_line: str) -> ExecutionResult:
        self.calls.append(command_line)
        return self.result


@pytest.fixture
def success_executor():
    """Executor that always succeeds"""
    return FakeExecutor(ExecutionResult(error=None, stdout="ok", stderr="", returncode=0))


@pytest.fixture
def failing_executor():
    """Executor that always fails with exit code 1"""
    error = CommandExecutionError("convert broken.png", 1, "convert: unable to open image")
    return FakeExecutor(
        ExecutionResult(
            error=error, stdout="", stderr="convert: unable to open image", returncode=1
        )
    )


@pytest.fixture
def command_history():
    """Create CommandHistory instance for testing"""
    return CommandHistory(max_size=100)


@pytest.fixture
def command_service(command_history, success_executor):
    """Create CommandService with a succeeding executor"""
    return CommandService(history=command_history, executor=success_executor)


@pytest.fixture
def thumbnail_args():
    """Declarative option list for a typical thumbnail command"""
    return [
        {"define": {"jpeg": {"size": {"width": 256, "height": 256}}}},
        {"add": "image.png"},
        "auto_orient",
        {"thumbnail": {"width": 128, "height": 128, "onlyShrink": True}},
        {"add": "out.png"},
    ]

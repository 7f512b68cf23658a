"""Tests for error handling middleware."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastmcp.exceptions import ToolError

from ssm_beam.errors import RemoteExecutionError, StagingError
from ssm_beam.middleware.errors import ErrorHandlingMiddleware, transfer_failure


def tool_error_from(cause: Exception) -> ToolError:
    error = ToolError(str(cause))
    error.__cause__ = cause
    return error


@pytest.fixture
def mock_context() -> MagicMock:
    """Create a mock middleware context."""
    context = MagicMock()
    context.method = "tools/call"
    context.message = MagicMock()
    context.message.name = "beam"
    return context


@pytest.mark.asyncio
async def test_passes_through_success(mock_context: MagicMock) -> None:
    middleware = ErrorHandlingMiddleware()

    result = await middleware.on_message(mock_context, AsyncMock(return_value="ok"))

    assert result == "ok"
    assert middleware.get_error_stats() == {}


@pytest.mark.asyncio
async def test_remote_failure_logged_with_command_id(mock_context: MagicMock) -> None:
    mock_logger = MagicMock()
    middleware = ErrorHandlingMiddleware(logger=mock_logger, include_traceback=True)
    cause = RemoteExecutionError("cmd-42", "Failed", "access denied")

    with pytest.raises(ToolError):
        await middleware.on_message(
            mock_context, AsyncMock(side_effect=tool_error_from(cause))
        )

    mock_logger.error.assert_called_once_with(
        "Transfer failed in %s: %s (command %s): %s",
        "tools/call",
        "RemoteExecutionError",
        "cmd-42",
        cause,
    )
    assert middleware.get_error_stats() == {"RemoteExecutionError": 1}


@pytest.mark.asyncio
async def test_staging_failure_has_no_command(mock_context: MagicMock) -> None:
    mock_logger = MagicMock()
    middleware = ErrorHandlingMiddleware(logger=mock_logger)
    cause = StagingError("s3://b/k", RuntimeError("AccessDenied"))

    with pytest.raises(ToolError):
        await middleware.on_message(
            mock_context, AsyncMock(side_effect=tool_error_from(cause))
        )

    fmt, _, kind, message = mock_logger.error.call_args.args
    assert fmt == "Transfer failed in %s: %s: %s"
    assert kind == "StagingError"
    assert str(message) == "Failed to upload file to S3: AccessDenied"


@pytest.mark.asyncio
async def test_unexpected_error_logged_with_traceback(mock_context: MagicMock) -> None:
    mock_logger = MagicMock()
    middleware = ErrorHandlingMiddleware(logger=mock_logger, include_traceback=True)
    error = tool_error_from(RuntimeError("throttled"))

    with pytest.raises(ToolError):
        await middleware.on_message(mock_context, AsyncMock(side_effect=error))

    args = mock_logger.error.call_args.args
    assert args[0].startswith("Unexpected error in")
    assert args[2] == "RuntimeError"
    assert "Traceback" in args[4]


@pytest.mark.asyncio
async def test_tracks_and_resets_stats(mock_context: MagicMock) -> None:
    middleware = ErrorHandlingMiddleware(logger=MagicMock())
    errors = [
        ValueError("a"),
        tool_error_from(RemoteExecutionError("c1", "Cancelled", "")),
        tool_error_from(RemoteExecutionError("c2", "Failed", "x")),
    ]

    for error in errors:
        with pytest.raises(type(error)):
            await middleware.on_message(mock_context, AsyncMock(side_effect=error))

    assert middleware.get_error_stats() == {"ValueError": 1, "RemoteExecutionError": 2}

    middleware.reset_stats()
    assert middleware.get_error_stats() == {}


def test_transfer_failure_unwraps_tool_error() -> None:
    cause = StagingError("s3://b/k", OSError("down"))

    assert transfer_failure(tool_error_from(cause)) is cause
    assert transfer_failure(cause) is cause
    assert transfer_failure(ToolError("plain")) is None

"""End-to-end tests for the transfer orchestrator with fake AWS adapters."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ssm_beam.dependencies import Dependencies
from ssm_beam.errors import DispatchError, LocalFileError, RemoteExecutionError
from ssm_beam.models import CommandInvocation, CommandStatus
from ssm_beam.services.orchestrator import transfer_file


@pytest.mark.asyncio
async def test_transfer_succeeds_on_first_poll(
    artifact: Path, deps: Dependencies, runner: MagicMock, store: MagicMock
) -> None:
    """Stage, dispatch and one Success poll yield a TransferResult."""
    runner.get_invocation.return_value = CommandInvocation(
        "Success", stdout="File transferred successfully to /opt/app.tar.gz"
    )

    result = await transfer_file(
        str(artifact), "/opt/app.tar.gz", "i-0abc", "s3://deploy-artifacts", deps=deps
    )

    put_bucket, put_key, _ = store.put_object.call_args[0]
    assert result.locator == f"s3://{put_bucket}/{put_key}"
    assert result.outcome.status is CommandStatus.SUCCESS
    assert result.command_id == "cmd-0001"
    assert result.remote_path == "/opt/app.tar.gz"
    assert "transferred successfully" in result.output

    sent_commands = runner.send_shell_script.call_args[0][1]
    assert any(result.locator in c for c in sent_commands)
    runner.get_invocation.assert_called_once_with("cmd-0001", "i-0abc")


@pytest.mark.asyncio
async def test_local_file_error_stops_before_dispatch(
    tmp_path: Path, deps: Dependencies, runner: MagicMock, store: MagicMock
) -> None:
    with pytest.raises(LocalFileError):
        await transfer_file(
            str(tmp_path / "missing.bin"), "/opt/x", "i-0abc", "bucket", deps=deps
        )

    store.put_object.assert_not_called()
    runner.send_shell_script.assert_not_called()


@pytest.mark.asyncio
async def test_missing_command_id_never_polls(
    artifact: Path, deps: Dependencies, runner: MagicMock
) -> None:
    """Dispatch failure aborts before the poller runs."""
    runner.send_shell_script.return_value = None

    with pytest.raises(DispatchError):
        await transfer_file(str(artifact), "/opt/x", "i-0abc", "bucket", deps=deps)

    runner.get_invocation.assert_not_called()


@pytest.mark.asyncio
async def test_remote_failure_propagates_unmodified(
    artifact: Path, deps: Dependencies, runner: MagicMock, store: MagicMock
) -> None:
    """The poller's error reaches the caller as-is; the staged copy stays."""
    runner.get_invocation.return_value = CommandInvocation(
        "Failed", stderr="fatal error: An error occurred (403)"
    )

    with pytest.raises(RemoteExecutionError) as exc_info:
        await transfer_file(str(artifact), "/opt/x", "i-0abc", "bucket", deps=deps)

    assert str(exc_info.value) == "SSM command failed: fatal error: An error occurred (403)"
    store.put_object.assert_called_once()
    store.delete_object.assert_not_called()


@pytest.mark.asyncio
async def test_poll_budget_comes_from_settings(
    artifact: Path, deps: Dependencies, runner: MagicMock
) -> None:
    runner.get_invocation.side_effect = [
        CommandInvocation("Pending"),
        CommandInvocation("Success"),
    ]
    sleep = AsyncMock()

    await transfer_file(
        str(artifact), "/opt/x", "i-0abc", "bucket", deps=deps, sleep=sleep
    )

    sleep.assert_awaited_once_with(deps.settings.delay_ms / 1000)


@pytest.mark.asyncio
async def test_progress_is_grouped_per_stage(
    artifact: Path, deps: Dependencies, runner: MagicMock, observer
) -> None:
    runner.get_invocation.return_value = CommandInvocation("Success")

    await transfer_file(str(artifact), "/opt/x", "i-0abc", "bucket", deps=deps)

    groups = [(kind, msg) for kind, msg in observer.events if kind in ("group", "endgroup")]
    assert groups == [
        ("group", "Uploading file to S3"),
        ("endgroup", ""),
        ("group", "Transferring file to EC2 instance via SSM"),
        ("endgroup", ""),
    ]


@pytest.mark.asyncio
async def test_group_closed_when_stage_fails(
    tmp_path: Path, deps: Dependencies, observer
) -> None:
    with pytest.raises(LocalFileError):
        await transfer_file(str(tmp_path), "/opt/x", "i-0abc", "bucket", deps=deps)

    assert observer.events[-1] == ("endgroup", "")


@pytest.mark.asyncio
async def test_default_dependencies_use_region(artifact: Path) -> None:
    """Without deps, adapters are built for the requested region."""
    fake_deps = MagicMock()
    fake_deps.settings.key_prefix = "p"
    fake_deps.settings.max_attempts = 1
    fake_deps.settings.delay_ms = 1
    fake_deps.runner.send_shell_script.return_value = "cmd-9"
    fake_deps.runner.get_invocation.return_value = CommandInvocation("Success")

    with patch(
        "ssm_beam.services.orchestrator.Dependencies.create", return_value=fake_deps
    ) as create:
        result = await transfer_file(
            str(artifact), "/opt/x", "i-0abc", "bucket", region="eu-west-1"
        )

    create.assert_called_once_with(region="eu-west-1")
    assert result.command_id == "cmd-9"


@pytest.mark.asyncio
async def test_missing_file_checked_before_default_dependencies(
    tmp_path: Path,
) -> None:
    """Without deps, a bad source fails before any AWS client is built."""
    with patch("ssm_beam.services.orchestrator.Dependencies.create") as create:
        with pytest.raises(LocalFileError):
            await transfer_file(str(tmp_path / "gone.bin"), "/opt/x", "i-0abc", "bucket")

    create.assert_not_called()

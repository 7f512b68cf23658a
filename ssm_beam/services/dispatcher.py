"""Remote command dispatcher: tell the instance to pull the staged object."""

import asyncio
from typing import TYPE_CHECKING

from ssm_beam.errors import DispatchError
from ssm_beam.models import DispatchedCommand, StagedObject
from ssm_beam.utils.progress import LoggingObserver
from ssm_beam.utils.shell import quote_path

if TYPE_CHECKING:
    from ssm_beam.protocols import CommandRunner, TransferObserver


def build_transfer_commands(locator: str, remote_path: str) -> list[str]:
    """Build the shell script that pulls a staged object onto the instance.

    The directory is created before the copy, and `set -e` makes a failed
    copy end the script with a non-zero exit so SSM reports Failed.

    Args:
        locator: s3:// URI of the staged object
        remote_path: Destination path on the instance

    Returns:
        Ordered list of shell command lines
    """
    destination = quote_path(remote_path)
    return [
        "set -e",
        f'mkdir -p "$(dirname {destination})"',
        f"aws s3 cp {quote_path(locator)} {destination}",
        f"echo {quote_path(f'File transferred successfully to {remote_path}')}",
    ]


async def dispatch_command(
    instance_id: str,
    staged: StagedObject,
    remote_path: str,
    region: str | None = None,
    *,
    runner: "CommandRunner | None" = None,
    observer: "TransferObserver | None" = None,
) -> DispatchedCommand:
    """Submit the pull script to exactly one instance.

    Args:
        instance_id: Target instance id
        staged: Staged object to retrieve
        remote_path: Destination path on the instance
        region: Optional AWS region for the default SSM runner
        runner: CommandRunner to submit through (default: SsmCommandRunner)
        observer: Progress observer (default: LoggingObserver)

    Returns:
        DispatchedCommand carrying the service-assigned command id

    Raises:
        DispatchError: If the default runner cannot be built, submission
            fails, or no command id is returned
    """
    observer = observer or LoggingObserver()

    commands = build_transfer_commands(staged.locator, remote_path)
    observer.info(
        f"Executing SSM command on instance {instance_id} "
        f"to download file from {staged.locator}"
    )

    try:
        if runner is None:
            from ssm_beam.services.aws import SsmCommandRunner

            runner = SsmCommandRunner.for_region(region)
        command_id = await asyncio.to_thread(
            runner.send_shell_script, instance_id, commands
        )
    except Exception as e:
        raise DispatchError(f"Failed to send SSM command to {instance_id}: {e}") from e

    if not command_id:
        raise DispatchError("SSM command was sent but no CommandId was returned")

    observer.info(f"SSM Command sent with ID: {command_id}")
    return DispatchedCommand(command_id=command_id, instance_id=instance_id)

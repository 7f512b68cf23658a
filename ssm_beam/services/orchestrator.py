"""Transfer orchestrator: stage -> dispatch -> poll."""

from ssm_beam.dependencies import Dependencies
from ssm_beam.models import TransferResult
from ssm_beam.services.dispatcher import dispatch_command
from ssm_beam.services.poller import Sleep, wait_for_command
from ssm_beam.services.stager import check_local_file, stage_file


async def transfer_file(
    local_path: str,
    remote_path: str,
    instance_id: str,
    bucket: str,
    region: str | None = None,
    *,
    deps: Dependencies | None = None,
    sleep: Sleep | None = None,
) -> TransferResult:
    """Move one local file onto an instance through an S3 hand-off.

    Stages are strictly sequential; the first failure aborts the rest and
    propagates unmodified. The staged object is left in the bucket.

    Args:
        local_path: File to transfer
        remote_path: Destination path on the instance
        instance_id: Target instance id
        bucket: Intermediate bucket, bare or as s3:// URI
        region: Optional AWS region (used when deps is not given)
        deps: Store, runner, observer and poll budget
        sleep: Override for the poll pause (tests)

    Returns:
        TransferResult once the remote copy reports Success

    Raises:
        LocalFileError, StagingError, DispatchError, RemoteExecutionError,
        UnexpectedStatusError, CommandTimeoutError
    """
    if deps is None:
        check_local_file(local_path)
        deps = Dependencies.create(region=region)

    settings = deps.settings
    observer = deps.observer

    observer.start_group("Uploading file to S3")
    try:
        staged = await stage_file(
            local_path,
            bucket,
            region,
            store=deps.store,
            observer=observer,
            key_prefix=settings.key_prefix,
        )
    finally:
        observer.end_group()

    observer.start_group("Transferring file to EC2 instance via SSM")
    try:
        command = await dispatch_command(
            instance_id,
            staged,
            remote_path,
            region,
            runner=deps.runner,
            observer=observer,
        )

        poll_kwargs = {"sleep": sleep} if sleep is not None else {}
        outcome = await wait_for_command(
            command.command_id,
            command.instance_id,
            runner=deps.runner,
            max_attempts=settings.max_attempts,
            delay_ms=settings.delay_ms,
            observer=observer,
            **poll_kwargs,
        )
    finally:
        observer.end_group()

    return TransferResult(staged=staged, outcome=outcome, remote_path=remote_path)

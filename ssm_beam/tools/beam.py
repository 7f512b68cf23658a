"""Beam tool: transfer a local file to an EC2 instance via S3 and SSM."""

import dataclasses
import logging

from fastmcp.exceptions import ToolError

from ssm_beam.config import Settings
from ssm_beam.dependencies import Dependencies
from ssm_beam.errors import BeamError
from ssm_beam.models import TransferResult
from ssm_beam.services import check_local_file, transfer_file
from ssm_beam.utils.progress import LoggingObserver

logger = logging.getLogger(__name__)


def _format_result(result: TransferResult, instance: str) -> str:
    lines = [
        f"Transferred {result.locator} -> {instance}:{result.remote_path}",
        f"Command ID: {result.command_id}",
    ]
    if result.output.strip():
        lines.append(result.output.strip())
    return "\n".join(lines)


async def beam(
    local_path: str,
    remote_path: str,
    instance: str,
    bucket: str,
    region: str | None = None,
) -> str:
    """Beam a local file onto an EC2 instance through an S3 bucket.

    The file is uploaded to the intermediate bucket, then the instance is
    told via SSM Run Command to copy it down with the AWS CLI. Returns once
    the remote copy has been confirmed.

    Args:
        local_path: File on the machine running this server.
        remote_path: Destination path on the instance.
        instance: EC2 instance id (e.g. i-1234567890abcdef0).
        bucket: Intermediate S3 bucket, "name" or "s3://name".
        region: Optional AWS region (default: SSM_BEAM_REGION, then the
            AWS credential chain).

    Examples:
        beam("dist/app.tar.gz", "/opt/app/app.tar.gz", "i-0abc12345678def90",
             "s3://deploy-artifacts")

    Returns:
        Locator, command id and remote output of the completed transfer.

    Raises:
        ToolError: If the transfer fails at any stage.
    """
    settings = Settings.from_env()
    settings = dataclasses.replace(
        settings,
        local_path=local_path,
        remote_path=remote_path,
        instance=instance,
        intermediate_s3=bucket,
        region=region or settings.region,
    )

    try:
        inputs = settings.require_inputs()
        check_local_file(inputs.local_path)
        deps = Dependencies.create(
            settings, region=inputs.region, observer=LoggingObserver(logger)
        )
        result = await transfer_file(
            inputs.local_path,
            inputs.remote_path,
            inputs.instance,
            inputs.intermediate_s3,
            inputs.region,
            deps=deps,
        )
    except BeamError as e:
        raise ToolError(str(e)) from e
    except Exception as e:
        raise ToolError(f"Transfer failed: {e}") from e

    return _format_result(result, inputs.instance)

"""boto3 adapters for S3 and SSM Run Command."""

import logging
from typing import TYPE_CHECKING, Any

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import ClientError

from ssm_beam.errors import InvocationNotVisibleError
from ssm_beam.models import CommandInvocation

if TYPE_CHECKING:
    from ssm_beam.config import Settings

logger = logging.getLogger(__name__)

SHELL_DOCUMENT = "AWS-RunShellScript"
INVOCATION_NOT_VISIBLE_CODE = "InvocationDoesNotExist"


def create_client(
    service: str,
    region: str | None = None,
    settings: "Settings | None" = None,
) -> Any:
    """Create a boto3 client with bounded timeouts.

    Credentials and, when region is None, the region come from the default
    boto3 resolution chain.

    Args:
        service: boto3 service name ("s3" or "ssm")
        region: Optional AWS region
        settings: Optional settings supplying connect/read timeouts

    Returns:
        boto3 client
    """
    config = BotoConfig(
        connect_timeout=settings.connect_timeout if settings else 5,
        read_timeout=settings.read_timeout if settings else 60,
        retries={"max_attempts": 3, "mode": "standard"},
    )
    kwargs: dict[str, Any] = {"config": config}
    if region:
        kwargs["region_name"] = region

    logger.debug("Creating %s client (region=%s)", service, region or "default")
    return boto3.client(service, **kwargs)


class S3BlobStore:
    """BlobStore backed by S3 PutObject."""

    def __init__(self, client: Any) -> None:
        self.client = client

    @classmethod
    def for_region(
        cls, region: str | None = None, settings: "Settings | None" = None
    ) -> "S3BlobStore":
        return cls(create_client("s3", region, settings))

    def put_object(self, bucket: str, key: str, body: bytes) -> None:
        self.client.put_object(Bucket=bucket, Key=key, Body=body)


class SsmCommandRunner:
    """CommandRunner backed by SSM SendCommand / GetCommandInvocation."""

    def __init__(self, client: Any) -> None:
        self.client = client

    @classmethod
    def for_region(
        cls, region: str | None = None, settings: "Settings | None" = None
    ) -> "SsmCommandRunner":
        return cls(create_client("ssm", region, settings))

    def send_shell_script(self, instance_id: str, commands: list[str]) -> str | None:
        """Send commands to one instance via the AWS-RunShellScript document.

        Returns:
            CommandId from the response, or None if absent
        """
        response = self.client.send_command(
            InstanceIds=[instance_id],
            DocumentName=SHELL_DOCUMENT,
            Parameters={"commands": commands},
        )
        command = response.get("Command") or {}
        return command.get("CommandId") or None

    def get_invocation(self, command_id: str, instance_id: str) -> CommandInvocation:
        """Fetch the invocation status for a command on one instance.

        Raises:
            InvocationNotVisibleError: If SSM has not propagated the command yet
            ClientError: For any other service error
        """
        try:
            response = self.client.get_command_invocation(
                CommandId=command_id,
                InstanceId=instance_id,
            )
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code == INVOCATION_NOT_VISIBLE_CODE:
                raise InvocationNotVisibleError(command_id, instance_id) from e
            raise

        return CommandInvocation(
            status=response.get("Status"),
            stdout=response.get("StandardOutputContent") or "",
            stderr=response.get("StandardErrorContent") or "",
        )

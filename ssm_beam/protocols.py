"""Protocol interfaces for dependency inversion.

The transfer services depend on these interfaces rather than on boto3
directly, so tests can pass plain fakes or MagicMock objects.

Usage Example:

    from ssm_beam.protocols import BlobStore

    class MemoryStore:
        def __init__(self):
            self.objects = {}

        def put_object(self, bucket, key, body):
            self.objects[(bucket, key)] = body

    staged = await stage_file("dist/app.tar.gz", "s3://artifacts",
                              store=MemoryStore())
"""

from typing import Protocol, runtime_checkable

from ssm_beam.models import CommandInvocation


@runtime_checkable
class BlobStore(Protocol):
    """Protocol for the intermediate object store.

    A single request/response with no retry logic of its own.
    """

    def put_object(self, bucket: str, key: str, body: bytes) -> None:
        """Write body under (bucket, key).

        Raises:
            Exception: Any failure (network, permission, quota)
        """
        ...


@runtime_checkable
class CommandRunner(Protocol):
    """Protocol for the remote command execution service."""

    def send_shell_script(self, instance_id: str, commands: list[str]) -> str | None:
        """Submit an ordered list of shell commands to one instance.

        Returns:
            Command identifier assigned by the service, or None if the
            response carried none.
        """
        ...

    def get_invocation(self, command_id: str, instance_id: str) -> CommandInvocation:
        """Query the status of a submitted command.

        Raises:
            InvocationNotVisibleError: If the invocation has not propagated yet
        """
        ...


@runtime_checkable
class TransferObserver(Protocol):
    """Protocol for progress reporting."""

    def info(self, message: str) -> None:
        ...

    def warning(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def start_group(self, title: str) -> None:
        ...

    def end_group(self) -> None:
        ...

"""Exception hierarchy for SSM Beam transfers.

Every failure is reduced to one human-readable message at the outer
boundary (CLI exit status or MCP tool response).
"""


class BeamError(Exception):
    """Base class for all transfer failures."""

    pass


class ConfigurationError(BeamError):
    """Required input missing or invalid."""

    pass


class LocalFileError(BeamError):
    """Source file is missing or not a regular file."""

    def __init__(self, path: str, cause: object):
        """Initialize local file error.

        Args:
            path: Local path that could not be used
            cause: Underlying exception or reason text
        """
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot access local file: {path}. {cause}")


class StagingError(BeamError):
    """Blob store put failed."""

    def __init__(self, locator: str, original_error: Exception):
        """Initialize staging error.

        Args:
            locator: s3:// URI the upload was aimed at
            original_error: Exception raised by the put call
        """
        self.locator = locator
        self.original_error = original_error
        super().__init__(f"Failed to upload file to S3: {original_error}")


class DispatchError(BeamError):
    """Remote command submission failed or returned no command id."""

    pass


class InvocationNotVisibleError(BeamError):
    """Command invocation has not propagated to the status endpoint yet."""

    def __init__(self, command_id: str, instance_id: str):
        self.command_id = command_id
        self.instance_id = instance_id
        super().__init__(
            f"Invocation of command {command_id} on {instance_id} not yet available"
        )


class RemoteExecutionError(BeamError):
    """Remote script finished as Failed or Cancelled."""

    def __init__(self, command_id: str, status: str, stderr: str):
        """Initialize remote execution error.

        Args:
            command_id: Command identifier assigned by SSM
            status: Terminal status value ("Failed" or "Cancelled")
            stderr: Captured standard error, or the no-output marker
        """
        self.command_id = command_id
        self.status = status
        self.stderr = stderr
        super().__init__(f"SSM command {status.lower()}: {stderr}")


class UnexpectedStatusError(BeamError):
    """Status query returned a value outside the known set."""

    def __init__(self, status: object):
        self.status = status
        super().__init__(f"Unexpected SSM command status: {status}")


class CommandTimeoutError(BeamError, TimeoutError):
    """Attempt budget exhausted while the command was still running."""

    def __init__(self, command_id: str, budget_seconds: float):
        """Initialize command timeout error.

        Args:
            command_id: Command identifier that never reached a terminal state
            budget_seconds: max_attempts * delay_ms / 1000
        """
        self.command_id = command_id
        self.budget_seconds = budget_seconds
        super().__init__(
            f"SSM command did not complete within {budget_seconds:g} seconds"
        )

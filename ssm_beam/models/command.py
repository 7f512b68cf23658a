"""Remote command data models."""

from dataclasses import dataclass
from enum import Enum

from ssm_beam.errors import UnexpectedStatusError


class CommandStatus(Enum):
    """Invocation status reported by SSM Run Command."""

    PENDING = "Pending"
    DELAYED = "Delayed"
    IN_PROGRESS = "InProgress"
    SUCCESS = "Success"
    FAILED = "Failed"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, value: str | None) -> "CommandStatus":
        """Match a raw status string case-insensitively.

        Raises:
            UnexpectedStatusError: If value is not a known status.
        """
        if value:
            normalized = value.strip().lower()
            for status in cls:
                if status.value.lower() == normalized:
                    return status
        raise UnexpectedStatusError(value)

    @property
    def is_failure(self) -> bool:
        return self in (CommandStatus.FAILED, CommandStatus.CANCELLED)


@dataclass(frozen=True)
class DispatchedCommand:
    """Command accepted by SSM for one instance."""

    command_id: str
    instance_id: str


@dataclass(frozen=True)
class CommandInvocation:
    """Raw status query response."""

    status: str | None
    stdout: str = ""
    stderr: str = ""


@dataclass(frozen=True)
class CommandOutcome:
    """Terminal successful result of a remote command."""

    command_id: str
    status: CommandStatus
    output: str = ""

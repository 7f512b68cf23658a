"""Transfer request and result models."""

from dataclasses import dataclass

from ssm_beam.models.command import CommandOutcome
from ssm_beam.models.staged import StagedObject


@dataclass(frozen=True)
class TransferInputs:
    """Validated invocation parameters for one transfer."""

    local_path: str
    remote_path: str
    instance: str
    intermediate_s3: str
    region: str | None = None


@dataclass(frozen=True)
class TransferResult:
    """Outcome of a complete transfer, tagged with its staged object."""

    staged: StagedObject
    outcome: CommandOutcome
    remote_path: str

    @property
    def locator(self) -> str:
        return self.staged.locator

    @property
    def command_id(self) -> str:
        return self.outcome.command_id

    @property
    def output(self) -> str:
        return self.outcome.output

"""Services for SSM Beam."""

from ssm_beam.services.dispatcher import build_transfer_commands, dispatch_command
from ssm_beam.services.orchestrator import transfer_file
from ssm_beam.services.poller import wait_for_command
from ssm_beam.services.stager import check_local_file, stage_file

__all__ = [
    "build_transfer_commands",
    "check_local_file",
    "dispatch_command",
    "stage_file",
    "transfer_file",
    "wait_for_command",
]

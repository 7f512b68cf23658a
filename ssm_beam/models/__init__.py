"""Data models for SSM Beam."""

from ssm_beam.models.command import (
    CommandInvocation,
    CommandOutcome,
    CommandStatus,
    DispatchedCommand,
)
from ssm_beam.models.staged import StagedObject
from ssm_beam.models.transfer import TransferInputs, TransferResult

__all__ = [
    "CommandInvocation",
    "CommandOutcome",
    "CommandStatus",
    "DispatchedCommand",
    "StagedObject",
    "TransferInputs",
    "TransferResult",
]

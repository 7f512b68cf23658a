"""Utilities for SSM Beam."""

from ssm_beam.utils.console import ColorfulFormatter, TransferFormatter, configure_logging
from ssm_beam.utils.keys import DEFAULT_KEY_PREFIX, staging_key
from ssm_beam.utils.progress import (
    GitHubActionsObserver,
    LoggingObserver,
    default_observer,
    running_in_github_actions,
)
from ssm_beam.utils.shell import quote_path
from ssm_beam.utils.validation import (
    normalize_bucket,
    validate_instance_id,
    validate_remote_path,
)

__all__ = [
    "ColorfulFormatter",
    "configure_logging",
    "DEFAULT_KEY_PREFIX",
    "default_observer",
    "GitHubActionsObserver",
    "LoggingObserver",
    "normalize_bucket",
    "quote_path",
    "running_in_github_actions",
    "staging_key",
    "TransferFormatter",
    "validate_instance_id",
    "validate_remote_path",
]

"""Dependency injection container for SSM Beam.

Bundles settings, the AWS adapters and the progress observer so the
orchestrator, CLI and MCP tool share one way of wiring a transfer.
"""

from dataclasses import dataclass

from ssm_beam.config import Settings
from ssm_beam.protocols import BlobStore, CommandRunner, TransferObserver
from ssm_beam.utils.progress import default_observer


@dataclass
class Dependencies:
    """Container for SSM Beam dependencies.

    Example:
        deps = Dependencies.create(region="eu-west-1")
        result = await transfer_file(..., deps=deps)
    """

    settings: Settings
    store: BlobStore
    runner: CommandRunner
    observer: TransferObserver

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        region: str | None = None,
        observer: TransferObserver | None = None,
    ) -> "Dependencies":
        """Create dependencies backed by real boto3 clients.

        Args:
            settings: Settings to use (default: Settings.from_env())
            region: AWS region override (default: settings.region)
            observer: Progress observer (default: picked from environment)

        Returns:
            Initialized Dependencies instance
        """
        from ssm_beam.services.aws import S3BlobStore, SsmCommandRunner

        settings = settings or Settings.from_env()
        region = region or settings.region
        return cls(
            settings=settings,
            store=S3BlobStore.for_region(region, settings),
            runner=SsmCommandRunner.for_region(region, settings),
            observer=observer or default_observer(),
        )

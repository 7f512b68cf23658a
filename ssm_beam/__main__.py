"""Entry point for SSM Beam.

`ssm-beam` runs one transfer from environment inputs and exits non-zero on
failure. `ssm-beam serve` runs the MCP server instead.
"""

import asyncio
import logging
import sys

from ssm_beam.config import Settings
from ssm_beam.dependencies import Dependencies
from ssm_beam.errors import BeamError
from ssm_beam.protocols import TransferObserver
from ssm_beam.services import check_local_file, transfer_file
from ssm_beam.utils.console import configure_logging
from ssm_beam.utils.progress import default_observer

logger = logging.getLogger(__name__)


def _report_inputs(observer: TransferObserver, settings: Settings) -> None:
    observer.info(f"Local path: {settings.local_path}")
    observer.info(f"Remote path: {settings.remote_path}")
    observer.info(f"Instance ID: {settings.instance}")
    observer.info(f"S3 bucket: {settings.intermediate_s3}")
    if settings.region:
        observer.info(f"AWS Region: {settings.region}")


async def run_transfer(
    settings: Settings,
    observer: TransferObserver | None = None,
    deps: Dependencies | None = None,
) -> int:
    """Run one transfer and map the outcome to an exit status.

    Returns:
        0 on confirmed success, 1 on any failure
    """
    observer = observer or (deps.observer if deps else default_observer())

    try:
        observer.info("Starting file transfer to EC2 instance via S3 and SSM")
        inputs = settings.require_inputs()
        _report_inputs(observer, settings)

        # Reject a bad source before any AWS client is built
        check_local_file(inputs.local_path)
        deps = deps or Dependencies.create(
            settings, region=inputs.region, observer=observer
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
        observer.error(str(e))
        return 1
    except Exception as e:
        observer.error(f"An unknown error occurred: {e}")
        logger.debug("Unhandled transfer failure", exc_info=True)
        return 1

    observer.info(f"File placed at {result.remote_path} on {inputs.instance}")
    observer.info("File transfer completed successfully!")
    return 0


def run_server(settings: Settings | None = None) -> None:
    """Run the MCP server with configured transport."""
    from ssm_beam.server import create_server

    settings = settings or Settings.from_env()
    server = create_server(settings)

    if settings.transport == "stdio":
        logger.info("Starting SSM Beam server (transport=stdio)")
        server.run(transport="stdio")
    else:
        logger.info(
            "Starting SSM Beam server (transport=http, host=%s, port=%d)",
            settings.http_host,
            settings.http_port,
        )
        server.run(
            transport="http",
            host=settings.http_host,
            port=settings.http_port,
        )


def main(argv: list[str] | None = None) -> int:
    """Console script entry point."""
    args = sys.argv[1:] if argv is None else argv
    settings = Settings.from_env()
    configure_logging(settings.log_level, settings.log_colors)

    if args and args[0] == "serve":
        run_server(settings)
        return 0
    if args:
        logger.error("Unknown command: %s (expected no arguments or 'serve')", args[0])
        return 2

    return asyncio.run(run_transfer(settings))


if __name__ == "__main__":
    sys.exit(main())

"""SSM Beam FastMCP server.

Thin wrapper exposing the transfer as an MCP tool. All business logic lives
in services/.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from ssm_beam.config import Settings
from ssm_beam.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from ssm_beam.tools import beam

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Log startup and shutdown of the server."""
    settings = Settings.from_env()
    logger.info(
        "SSM Beam server starting up (region=%s, poll budget=%gs)",
        settings.region or "default",
        settings.poll_budget_seconds,
    )
    try:
        yield {"region": settings.region}
    finally:
        logger.info("SSM Beam server shutting down")


def configure_middleware(server: FastMCP, settings: Settings) -> None:
    """Add middleware in order (first added = innermost).

    Environment variables:
        SSM_BEAM_SLOW_THRESHOLD_MS: Threshold for slow request warnings
        SSM_BEAM_INCLUDE_TRACEBACK: Include tracebacks in error logs
    """
    server.add_middleware(
        ErrorHandlingMiddleware(include_traceback=settings.include_traceback)
    )
    server.add_middleware(
        LoggingMiddleware(slow_threshold_ms=float(settings.slow_threshold_ms))
    )


def create_server(settings: Settings | None = None) -> FastMCP:
    """Create and configure the MCP server.

    Returns:
        Configured FastMCP server instance
    """
    settings = settings or Settings.from_env()
    server = FastMCP("ssm_beam", lifespan=app_lifespan)

    configure_middleware(server, settings)

    server.tool()(beam)

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server

"""SSM Beam MCP middleware components."""

from ssm_beam.middleware.base import BeamMiddleware
from ssm_beam.middleware.errors import ErrorHandlingMiddleware
from ssm_beam.middleware.logging import LoggingMiddleware

__all__ = [
    "BeamMiddleware",
    "ErrorHandlingMiddleware",
    "LoggingMiddleware",
]

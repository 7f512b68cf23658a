"""Error handling middleware for failed transfers."""

import logging
import traceback
from collections import Counter
from typing import Any

from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import MiddlewareContext

from ssm_beam.errors import BeamError
from ssm_beam.middleware.base import BeamMiddleware


def transfer_failure(error: BaseException) -> BeamError | None:
    """Return the BeamError behind a tool failure, if there is one.

    The beam tool raises ToolError chained from the BeamError that stopped
    the transfer.
    """
    if isinstance(error, BeamError):
        return error
    if isinstance(error, ToolError) and isinstance(error.__cause__, BeamError):
        return error.__cause__
    return None


class ErrorHandlingMiddleware(BeamMiddleware):
    """Log and count failures raised while handling MCP requests.

    Transfer failures are logged as one line naming the failing stage and,
    once the command was dispatched, its SSM command id. Anything else is
    treated as a defect and logged with a traceback when enabled. The
    exception is always re-raised so FastMCP returns an error result.

    Example:
        >>> middleware = ErrorHandlingMiddleware(include_traceback=True)
        >>> server.add_middleware(middleware)
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
    ) -> None:
        super().__init__(logger=logger)
        self.include_traceback = include_traceback
        self._failures: Counter[str] = Counter()

    def get_error_stats(self) -> dict[str, int]:
        """Failure counts keyed by the BeamError subclass or exception type."""
        return dict(self._failures)

    def reset_stats(self) -> None:
        self._failures.clear()

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        try:
            return await call_next(context)
        except Exception as e:
            failure = transfer_failure(e)
            if failure is not None:
                self._log_transfer_failure(context.method, failure)
            else:
                self._log_defect(context.method, e)
            raise

    def _log_transfer_failure(self, method: str | None, failure: BeamError) -> None:
        kind = type(failure).__name__
        self._failures[kind] += 1

        command_id = getattr(failure, "command_id", None)
        if command_id:
            self.logger.error(
                "Transfer failed in %s: %s (command %s): %s",
                method,
                kind,
                command_id,
                failure,
            )
        else:
            self.logger.error("Transfer failed in %s: %s: %s", method, kind, failure)

    def _log_defect(self, method: str | None, error: Exception) -> None:
        # ToolError without a BeamError cause wraps an unexpected exception
        cause = error.__cause__ if isinstance(error, ToolError) else None
        kind = type(cause or error).__name__
        self._failures[kind] += 1

        if self.include_traceback:
            self.logger.error(
                "Unexpected error in %s: %s: %s\n%s",
                method,
                kind,
                error,
                traceback.format_exc(),
            )
        else:
            self.logger.error("Unexpected error in %s: %s: %s", method, kind, error)

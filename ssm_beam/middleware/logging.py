"""Logging middleware that traces beam tool calls."""

import logging
import re
import time
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from ssm_beam.middleware.base import BeamMiddleware
from ssm_beam.middleware.errors import transfer_failure

LOCATOR_PATTERN = re.compile(r"(s3://\S+)")
COMMAND_ID_PATTERN = re.compile(r"Command ID: (\S+)")


def describe_request(args: dict[str, Any] | None) -> str:
    """Render beam arguments as `local -> instance:remote via bucket`."""
    args = args or {}
    local_path = args.get("local_path", "?")
    instance = args.get("instance", "?")
    remote_path = args.get("remote_path", "?")
    line = f"{local_path} -> {instance}:{remote_path}"
    if args.get("bucket"):
        line = f"{line} via {args['bucket']}"
    if args.get("region"):
        line = f"{line} ({args['region']})"
    return line


def result_text(result: Any) -> str:
    """Extract the text a tool returned, whatever FastMCP wrapped it in."""
    if isinstance(result, str):
        return result
    content = getattr(result, "content", None)
    if isinstance(content, (list, tuple)):
        return "\n".join(
            item.text for item in content if isinstance(getattr(item, "text", None), str)
        )
    return ""


def describe_result(result: Any) -> str:
    """Summarize a transfer result as its staged locator and command id."""
    text = result_text(result)
    locator = LOCATOR_PATTERN.search(text)
    command = COMMAND_ID_PATTERN.search(text)
    if not locator and not command:
        return "no transfer summary"
    parts = []
    if locator:
        parts.append(locator.group(1))
    if command:
        parts.append(f"command {command.group(1)}")
    return " ".join(parts)


class LoggingMiddleware(BeamMiddleware):
    """Log each transfer request with its route, outcome and duration.

    A transfer spends most of its time in the poller, so the slow threshold
    is usually crossed; SLOW calls are logged at WARNING.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        slow_threshold_ms: float = 1000.0,
    ) -> None:
        super().__init__(logger=logger)
        self.slow_threshold_ms = slow_threshold_ms

    def _is_slow(self, duration_ms: float) -> bool:
        return duration_ms >= self.slow_threshold_ms

    def _timing(self, duration_ms: float) -> str:
        marker = " SLOW!" if self._is_slow(duration_ms) else ""
        return f"{duration_ms:.1f}ms{marker}"

    async def on_call_tool(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        tool_name = getattr(context.message, "name", "unknown")
        request = describe_request(getattr(context.message, "arguments", None))
        self.logger.info(">>> %s: %s", tool_name, request)

        start = time.perf_counter()
        try:
            result = await call_next(context)
        except Exception as e:
            duration_ms = (time.perf_counter() - start) * 1000
            failure = transfer_failure(e)
            self.logger.error(
                "!!! %s: %s failed at %s [%s]",
                tool_name,
                request,
                type(failure or e).__name__,
                self._timing(duration_ms),
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        self.logger.log(
            logging.WARNING if self._is_slow(duration_ms) else logging.INFO,
            "<<< %s: %s [%s]",
            tool_name,
            describe_result(result),
            self._timing(duration_ms),
        )
        return result

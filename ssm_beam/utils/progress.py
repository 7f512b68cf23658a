"""Progress observers.

Services report progress through a TransferObserver instead of calling the
logging module directly. LoggingObserver is the default; under GitHub Actions
the CLI swaps in GitHubActionsObserver so steps fold into log groups.
"""

import logging
import os
import sys
from typing import TextIO

logger = logging.getLogger(__name__)


class LoggingObserver:
    """Forward progress to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("ssm_beam.transfer")
        self._groups: list[str] = []

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def start_group(self, title: str) -> None:
        self._groups.append(title)
        self.logger.info("==> %s", title)

    def end_group(self) -> None:
        if self._groups:
            self.logger.info("<== %s", self._groups.pop())


class GitHubActionsObserver(LoggingObserver):
    """Emit GitHub Actions workflow commands alongside log records.

    Plain progress lines go to the logger only; groups, warnings and errors
    are also written as workflow commands so the runner can render them.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        stream: TextIO | None = None,
    ) -> None:
        super().__init__(logger=logger)
        self.stream = stream or sys.stdout

    def _command(self, name: str, message: str = "") -> None:
        # Workflow commands are line based; escape per the runner's rules
        escaped = (
            message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        )
        self.stream.write(f"::{name}::{escaped}\n")
        self.stream.flush()

    def warning(self, message: str) -> None:
        super().warning(message)
        self._command("warning", message)

    def error(self, message: str) -> None:
        super().error(message)
        self._command("error", message)

    def start_group(self, title: str) -> None:
        self._command("group", title)
        super().start_group(title)

    def end_group(self) -> None:
        super().end_group()
        self._command("endgroup")


def running_in_github_actions() -> bool:
    """Check whether we are executing inside a GitHub Actions runner."""
    return os.getenv("GITHUB_ACTIONS", "").lower() == "true"


def default_observer() -> LoggingObserver:
    """Pick the observer that fits the current environment."""
    if running_in_github_actions():
        logger.debug("GitHub Actions runner detected; using workflow commands")
        return GitHubActionsObserver()
    return LoggingObserver()

"""Colorful console logging formatter and package logging setup."""

import logging
import re
import sys
from datetime import datetime, timezone

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

# Component colors for logger names
COMPONENT_COLORS = {
    "ssm_beam.services.poller": COLORS["bright_magenta"],
    "ssm_beam.services": COLORS["bright_blue"],
    "ssm_beam.server": COLORS["bright_cyan"],
    "ssm_beam.tools": COLORS["bright_cyan"],
    "ssm_beam.middleware": COLORS["yellow"],
    "ssm_beam.config": COLORS["green"],
    "default": COLORS["white"],
}

# Third-party loggers that drown out transfer progress at DEBUG
NOISY_LOGGERS = [
    "boto3",
    "botocore",
    "s3transfer",
    "urllib3",
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "httpx",
    "httpcore",
    "fastmcp",
    "starlette",
    "anyio",
]

S3_URI_PATTERN = re.compile(r"(s3://[^\s]+)")
INSTANCE_PATTERN = re.compile(r"\b((?:i|mi)-[0-9a-f]{8,17})\b")
COMMAND_ID_PATTERN = re.compile(
    r"\b([0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})\b"
)
ATTEMPT_PATTERN = re.compile(r"(Attempt \d+/\d+)")
DURATION_PATTERN = re.compile(r"(\d+\.?\d*ms)")


class ColorfulFormatter(logging.Formatter):
    """Colorful log formatter with UTC timestamps and component highlighting."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _colorize(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if not self.use_colors:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def _get_component_color(self, name: str) -> str:
        for prefix, color in COMPONENT_COLORS.items():
            if prefix != "default" and name.startswith(prefix):
                return color
        return COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return f"{dt.strftime('%H:%M:%S')}.{int(record.msecs):03d}Z"

    def _format_level(self, record: logging.LogRecord) -> str:
        level = record.levelname
        color = LEVEL_COLORS.get(level, COLORS["white"])
        return self._colorize(f"{level:<8}", color)

    def _format_component(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith("ssm_beam."):
            name = name[len("ssm_beam."):]
        color = self._get_component_color(record.name)
        return self._colorize(f"{name:<20}", color)

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors and a UTC timestamp."""
        timestamp = self._colorize(self._format_timestamp(record), COLORS["dim"])
        level = self._format_level(record)
        component = self._format_component(record)
        sep = self._colorize("|", COLORS["dim"])
        message = self._highlight_message(record.getMessage())

        line = f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line

    def _highlight_message(self, message: str) -> str:
        """Highlight locators, ids, attempts and durations."""
        if not self.use_colors:
            return message

        if "s3://" in message:
            message = S3_URI_PATTERN.sub(
                f"{COLORS['bright_blue']}\\1{COLORS['reset']}", message
            )

        message = INSTANCE_PATTERN.sub(
            f"{COLORS['bright_magenta']}\\1{COLORS['reset']}", message
        )
        message = COMMAND_ID_PATTERN.sub(
            f"{COLORS['cyan']}\\1{COLORS['reset']}", message
        )

        if "Attempt" in message:
            message = ATTEMPT_PATTERN.sub(
                f"{COLORS['bright_yellow']}\\1{COLORS['reset']}", message
            )

        if "ms" in message:
            message = DURATION_PATTERN.sub(
                f"{COLORS['bright_yellow']}\\1{COLORS['reset']}", message
            )

        return message


class TransferFormatter(ColorfulFormatter):
    """Formatter with leading indicators for transfer milestones."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)

        if not self.use_colors:
            return base

        message = record.getMessage().lower()

        if message.startswith("==>") or "starting" in message:
            return f"{COLORS['bright_green']}>>>{COLORS['reset']} {base}"
        elif message.startswith("<=="):
            return f"{COLORS['bright_black']}<<<{COLORS['reset']} {base}"
        elif "error" in message or "failed" in message or "cancelled" in message:
            return f"{COLORS['bright_red']}!!{COLORS['reset']}  {base}"
        elif "warning" in message or "slow" in message:
            return f"{COLORS['bright_yellow']}!{COLORS['reset']}   {base}"
        elif "completed" in message or "successfully" in message:
            return f"{COLORS['bright_green']}OK{COLORS['reset']}  {base}"
        elif "attempt" in message:
            return f"{COLORS['bright_magenta']}~{COLORS['reset']}   {base}"

        return f"    {base}"


def configure_logging(level: str = "INFO", use_colors: bool = True) -> None:
    """Configure the ssm_beam package logger.

    Idempotent: a handler is only attached the first time.

    Args:
        level: Log level name for the package logger
        use_colors: Whether to emit ANSI colors (forced off when not a TTY)
    """
    if not sys.stderr.isatty():
        use_colors = False

    package_logger = logging.getLogger("ssm_beam")
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(TransferFormatter(use_colors=use_colors))
        package_logger.addHandler(handler)
        package_logger.propagate = False

    for noisy_logger in NOISY_LOGGERS:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

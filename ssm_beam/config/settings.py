"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field

from ssm_beam.errors import ConfigurationError
from ssm_beam.models import TransferInputs
from ssm_beam.utils.keys import DEFAULT_KEY_PREFIX
from ssm_beam.utils.validation import validate_instance_id, validate_remote_path

logger = logging.getLogger(__name__)

# Input name -> primary environment key. GitHub Actions exposes step inputs
# as INPUT_<NAME> with hyphens kept, e.g. INPUT_LOCAL-PATH.
TRANSFER_INPUTS = {
    "local-path": "SSM_BEAM_LOCAL_PATH",
    "remote-path": "SSM_BEAM_REMOTE_PATH",
    "instance": "SSM_BEAM_INSTANCE",
    "intermediate-s3": "SSM_BEAM_INTERMEDIATE_S3",
    "region": "SSM_BEAM_REGION",
}


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Transfer inputs
    local_path: str | None = field(default=None)
    remote_path: str | None = field(default=None)
    instance: str | None = field(default=None)
    intermediate_s3: str | None = field(default=None)
    region: str | None = field(default=None)

    # Polling budget
    max_attempts: int = field(default=60)
    delay_ms: int = field(default=2000)

    # Staging
    key_prefix: str = field(default=DEFAULT_KEY_PREFIX)

    # AWS client timeouts (seconds)
    connect_timeout: int = field(default=5)
    read_timeout: int = field(default=60)

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)
    slow_threshold_ms: int = field(default=1000)
    include_traceback: bool = field(default=False)

    # MCP server transport
    transport: str = field(default="http")
    http_host: str = field(default="127.0.0.1")
    http_port: int = field(default=8000)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables.

        Transfer inputs accept SSM_BEAM_* (preferred) or the GitHub Actions
        INPUT_* form; SSM_BEAM_* takes precedence if both are set.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            local_path=cls._get_input("local-path"),
            remote_path=cls._get_input("remote-path"),
            instance=cls._get_input("instance"),
            intermediate_s3=cls._get_input("intermediate-s3"),
            region=cls._get_input("region"),
            max_attempts=cls._get_positive_int("SSM_BEAM_MAX_ATTEMPTS", 60),
            delay_ms=cls._get_positive_int("SSM_BEAM_POLL_DELAY_MS", 2000),
            key_prefix=os.getenv("SSM_BEAM_KEY_PREFIX", "").strip() or DEFAULT_KEY_PREFIX,
            connect_timeout=cls._get_positive_int("SSM_BEAM_CONNECT_TIMEOUT", 5),
            read_timeout=cls._get_positive_int("SSM_BEAM_READ_TIMEOUT", 60),
            log_level=os.getenv("SSM_BEAM_LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("SSM_BEAM_LOG_COLORS", True),
            slow_threshold_ms=cls._get_int("SSM_BEAM_SLOW_THRESHOLD_MS", 1000),
            include_traceback=cls._get_bool("SSM_BEAM_INCLUDE_TRACEBACK", False),
            transport=cls._get_transport(),
            http_host=os.getenv("SSM_BEAM_HTTP_HOST", "127.0.0.1"),
            http_port=cls._get_int("SSM_BEAM_HTTP_PORT", 8000),
        )

    def require_inputs(self) -> TransferInputs:
        """Validate that every required transfer input is present.

        Returns:
            TransferInputs ready for the orchestrator

        Raises:
            ConfigurationError: If an input is missing or malformed
        """
        values = {
            "local-path": self.local_path,
            "remote-path": self.remote_path,
            "instance": self.instance,
            "intermediate-s3": self.intermediate_s3,
        }
        for name, value in values.items():
            if not value:
                raise ConfigurationError(f"Input required and not supplied: {name}")

        try:
            instance = validate_instance_id(self.instance)  # type: ignore[arg-type]
            remote_path = validate_remote_path(self.remote_path)  # type: ignore[arg-type]
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        return TransferInputs(
            local_path=self.local_path,  # type: ignore[arg-type]
            remote_path=remote_path,
            instance=instance,
            intermediate_s3=self.intermediate_s3,  # type: ignore[arg-type]
            region=self.region or None,
        )

    @property
    def poll_budget_seconds(self) -> float:
        """Total time the poller may wait for a terminal status."""
        return self.max_attempts * self.delay_ms / 1000

    @staticmethod
    def _get_input(name: str) -> str | None:
        """Get a transfer input with GitHub Actions fallback.

        Args:
            name: Input name as declared by the action (e.g. "local-path")

        Returns:
            Stripped value, or None if unset or blank
        """
        value = os.getenv(TRANSFER_INPUTS[name])
        if value is None or not value.strip():
            value = os.getenv(f"INPUT_{name.upper()}")
        if value is None:
            return None
        return value.strip() or None

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

    @classmethod
    def _get_positive_int(cls, key: str, default: int) -> int:
        value = cls._get_int(key, default)
        if value <= 0:
            logger.warning(
                "%s must be > 0, got %d. Using default: %d", key, value, default
            )
            return default
        return value

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_transport() -> str:
        """Get transport from environment with validation.

        Returns:
            Transport type ("http" or "stdio")
        """
        transport = os.getenv("SSM_BEAM_TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            return transport
        return "http"

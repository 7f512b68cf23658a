"""Shared fixtures for SSM Beam tests."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from ssm_beam.config import Settings
from ssm_beam.dependencies import Dependencies


class RecordingObserver:
    """TransferObserver that keeps every event for assertions."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.events.append(("info", message))

    def warning(self, message: str) -> None:
        self.events.append(("warning", message))

    def error(self, message: str) -> None:
        self.events.append(("error", message))

    def start_group(self, title: str) -> None:
        self.events.append(("group", title))

    def end_group(self) -> None:
        self.events.append(("endgroup", ""))

    def messages(self, kind: str = "info") -> list[str]:
        return [message for k, message in self.events if k == kind]


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def artifact(tmp_path: Path) -> Path:
    """A small local build artifact."""
    path = tmp_path / "dist" / "app.tar.gz"
    path.parent.mkdir()
    path.write_bytes(b"artifact-bytes")
    return path


@pytest.fixture
def store() -> MagicMock:
    """Blob store fake; put_object succeeds by default."""
    return MagicMock()


@pytest.fixture
def runner() -> MagicMock:
    """Command runner fake returning a fixed command id."""
    fake = MagicMock()
    fake.send_shell_script.return_value = "cmd-0001"
    return fake


@pytest.fixture
def no_sleep() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def deps(
    store: MagicMock, runner: MagicMock, observer: RecordingObserver
) -> Dependencies:
    settings = Settings(max_attempts=5, delay_ms=10)
    return Dependencies(
        settings=settings, store=store, runner=runner, observer=observer
    )

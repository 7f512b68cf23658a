"""Tests for log formatting and logger setup."""

import logging

import pytest

from ssm_beam.utils.console import (
    NOISY_LOGGERS,
    ColorfulFormatter,
    TransferFormatter,
    configure_logging,
)


def make_record(message: str, name: str = "ssm_beam.services.poller") -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestColorfulFormatter:
    def test_plain_output_without_colors(self) -> None:
        formatter = ColorfulFormatter(use_colors=False)

        line = formatter.format(make_record("Attempt 2/60: Command status is Pending"))

        assert "\033[" not in line
        assert "INFO" in line
        assert "services.poller" in line
        assert line.endswith("Attempt 2/60: Command status is Pending")

    def test_highlights_locator(self) -> None:
        formatter = ColorfulFormatter(use_colors=True)

        line = formatter.format(make_record("Uploading a.txt to s3://bucket/key"))

        assert "\033[" in line
        assert "s3://bucket/key" in line

    def test_transfer_formatter_marks_completion(self) -> None:
        formatter = TransferFormatter(use_colors=True)

        line = formatter.format(make_record("SSM command completed successfully"))

        assert "OK" in line


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def reset_package_logger(self):
        package_logger = logging.getLogger("ssm_beam")
        saved = list(package_logger.handlers)
        package_logger.handlers.clear()
        yield
        package_logger.handlers[:] = saved
        package_logger.propagate = True
        package_logger.setLevel(logging.NOTSET)

    def test_attaches_single_handler(self) -> None:
        configure_logging("DEBUG")
        configure_logging("DEBUG")

        package_logger = logging.getLogger("ssm_beam")
        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.DEBUG
        assert package_logger.propagate is False

    def test_quiets_noisy_loggers(self) -> None:
        configure_logging()

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

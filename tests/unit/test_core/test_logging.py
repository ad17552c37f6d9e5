"""Tests for logging setup and the logging observer."""

import logging
from pathlib import Path

import pytest
from rich.logging import RichHandler

from flake_junit.checks.models import CheckOutcome, CheckStatus
from flake_junit.core.config.settings import LoggingSettings
from flake_junit.core.logger.logger import get_logger, setup_logging
from flake_junit.core.observer import LoggingObserver


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Test setup_logging."""

    def test_rich_handler(self, restore_root_logger) -> None:
        """Test that Rich is used by default."""
        setup_logging(LoggingSettings(level="DEBUG", use_rich=True))

        assert restore_root_logger.level == logging.DEBUG
        assert any(isinstance(h, RichHandler) for h in restore_root_logger.handlers)

    def test_plain_handler_and_file(self, restore_root_logger, temp_dir: Path) -> None:
        """Test the plain handler and the optional log file."""
        log_file = temp_dir / "logs" / "flake-junit.log"
        setup_logging(LoggingSettings(level="WARNING", use_rich=False, file=log_file))

        get_logger("flake_junit.test").warning("written to file")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert not any(isinstance(h, RichHandler) for h in restore_root_logger.handlers)
        assert "written to file" in log_file.read_text()

    def test_get_logger_is_cached(self) -> None:
        """Test that the same logger is returned for a name."""
        assert get_logger("flake_junit.a") is get_logger("flake_junit.a")


class TestLoggingObserver:
    """Test LoggingObserver."""

    def test_outcomes_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that successes log at INFO and failures at ERROR."""
        observer = LoggingObserver()
        caplog.set_level(logging.DEBUG, logger="flake_junit")

        observer.on_invocation_start(["nix", "flake", "show", "--json"])
        observer.on_invocation_end(["nix", "flake", "show", "--json"], 0, 0.25)
        observer.on_outcome_recorded(
            CheckOutcome(key="fmt", name="fmt", status=CheckStatus.SUCCESS, duration_seconds=1.0)
        )
        observer.on_outcome_recorded(
            CheckOutcome(
                key="lint",
                name="lint",
                status=CheckStatus.FAILURE,
                duration_seconds=1.0,
                log_output="boom",
            )
        )

        messages = [(r.levelno, r.getMessage()) for r in caplog.records]
        assert (logging.DEBUG, "Running `nix flake show --json`") in messages
        assert (logging.INFO, "fmt ran successfully") in messages
        assert (logging.ERROR, "lint failed") in messages

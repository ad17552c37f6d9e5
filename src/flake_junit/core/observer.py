"""Run observers.

The nix client and the check runner report their progress to an observer
instead of configuring instrumentation themselves. ``LoggingObserver`` is the
default and writes everything to the project logger.
"""

from typing import TYPE_CHECKING, Protocol

from flake_junit.core.logger.logger import get_logger

if TYPE_CHECKING:
    from flake_junit.checks.models import CheckOutcome

logger = get_logger(__name__)


class RunObserver(Protocol):
    """Hooks called at the extension points of a run."""

    def on_invocation_start(self, command: list[str]) -> None:
        """Called before an external process is spawned."""
        ...

    def on_invocation_end(
        self,
        command: list[str],
        return_code: int | None,
        duration_seconds: float,
    ) -> None:
        """Called after an external process exited (or failed to start)."""
        ...

    def on_outcome_recorded(self, outcome: "CheckOutcome") -> None:
        """Called once per check after its outcome is classified."""
        ...


class LoggingObserver:
    """Observer that logs every event."""

    def on_invocation_start(self, command: list[str]) -> None:
        logger.debug(f"Running `{' '.join(command)}`")

    def on_invocation_end(
        self,
        command: list[str],
        return_code: int | None,
        duration_seconds: float,
    ) -> None:
        logger.debug(
            f"`{' '.join(command)}` exited with {return_code} after {duration_seconds:.3f}s"
        )

    def on_outcome_recorded(self, outcome: "CheckOutcome") -> None:
        if outcome.succeeded:
            logger.info(f"{outcome.key} ran successfully")
        else:
            logger.error(f"{outcome.key} failed")

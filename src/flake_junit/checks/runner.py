"""Check runner.

Builds every check in two phases. The dry-run probe resolves the check to a
derivation; if that fails the flake itself is broken and the error aborts the
run. The real build is then timed, and a failure there is recorded as a
failed check together with the build log, so one broken check never stops
the others from being reported.
"""

import time
from collections.abc import Iterable

from flake_junit.checks.models import CheckOutcome, CheckStatus, CheckTarget
from flake_junit.core.exceptions.errors import (
    FlakeJunitError,
    LogRetrievalError,
    OutputParseError,
)
from flake_junit.core.logger.logger import get_logger
from flake_junit.core.observer import LoggingObserver, RunObserver
from flake_junit.nix.client import NixClient
from flake_junit.nix.models import BuildMode

logger = get_logger(__name__)

EMPTY_LOG_PLACEHOLDER = "nix log returned no output for {drv_path}"


class CheckRunner:
    """Runs flake checks one after another."""

    def __init__(
        self,
        client: NixClient,
        system: str,
        extra_options: list[str] | None = None,
        observer: RunObserver | None = None,
    ):
        """Initialize the runner.

        Args:
            client: Nix client used for every invocation.
            system: Current system, part of every check installable.
            extra_options: Options forwarded to every ``nix build``.
            observer: Receives an event per recorded outcome.
        """
        self.client = client
        self.system = system
        self.extra_options = list(extra_options or [])
        self.observer: RunObserver = observer or LoggingObserver()

    async def execute(self, target: CheckTarget) -> CheckOutcome:
        """Build one check and classify the result.

        Args:
            target: The check to build.

        Returns:
            The outcome of the real build.

        Raises:
            FlakeJunitError: If the dry-run probe fails.
        """
        installable = target.installable(self.system)

        probe = await self.client.build(installable, BuildMode.DRY_RUN, self.extra_options)
        if not probe:
            raise OutputParseError(
                f"`nix build {installable} --dry-run` reported no derivations",
            )
        # Only the first derivation is used, even when nix reports several.
        drv_path = probe[0].drv_path
        logger.info(f"Running {installable!r} -> {drv_path}")

        start = time.monotonic()
        build_error: FlakeJunitError | None
        try:
            await self.client.build(installable, BuildMode.REAL, self.extra_options)
        except FlakeJunitError as e:
            build_error = e
        else:
            build_error = None
        duration = time.monotonic() - start

        if build_error is None:
            outcome = CheckOutcome(
                key=target.key,
                name=target.name,
                status=CheckStatus.SUCCESS,
                duration_seconds=duration,
                drv_path=drv_path,
            )
        else:
            logger.debug(f"Build of {installable} failed: {build_error.message}")
            outcome = CheckOutcome(
                key=target.key,
                name=target.name,
                status=CheckStatus.FAILURE,
                duration_seconds=duration,
                log_output=await self._fetch_log(drv_path),
                drv_path=drv_path,
            )

        self.observer.on_outcome_recorded(outcome)
        return outcome

    async def _fetch_log(self, drv_path: str) -> str:
        """Fetch the build log, turning any failure into the log text itself."""
        try:
            log_output = await self.client.log(drv_path)
        except FlakeJunitError as e:
            error = LogRetrievalError(f"nix-log call failed: {e}", drv_path=drv_path)
            logger.warning(error.message)
            return error.message

        if not log_output:
            return EMPTY_LOG_PLACEHOLDER.format(drv_path=drv_path)
        return log_output

    async def run_all(self, targets: Iterable[CheckTarget]) -> list[CheckOutcome]:
        """Run checks sequentially in the given order.

        Args:
            targets: Checks to run.

        Returns:
            One outcome per check, in the same order.
        """
        outcomes: list[CheckOutcome] = []
        for target in targets:
            outcomes.append(await self.execute(target))
        return outcomes

"""Run-checks workflow: discover, build, report."""

from pathlib import Path

from flake_junit.checks.discovery import discover_checks
from flake_junit.checks.models import RunSummary
from flake_junit.checks.runner import CheckRunner
from flake_junit.core.logger.logger import get_logger
from flake_junit.core.observer import RunObserver
from flake_junit.nix.client import NixClient
from flake_junit.report.junit import synthesize_report, write_report

logger = get_logger(__name__)


async def run_checks(
    client: NixClient,
    output_path: Path,
    extra_options: list[str] | None = None,
    observer: RunObserver | None = None,
) -> RunSummary:
    """Build every check of the flake and write a JUnit report.

    The report is written only after every check has run. Any fatal error
    (discovery, platform resolution, a dry-run probe) propagates before the
    output file is touched.

    Args:
        client: Nix client.
        output_path: Where the JUnit XML report is written.
        extra_options: Options forwarded to every ``nix build``.
        observer: Receives outcome events; defaults to logging.

    Returns:
        Summary of the run.
    """
    document = await client.show()
    logger.debug(f"Got checks structure: {document}")

    system = await client.current_system()
    logger.debug(f"Got current system: {system!r}")

    targets = discover_checks(document, system)

    runner = CheckRunner(client, system, extra_options=extra_options, observer=observer)
    outcomes = await runner.run_all(targets.values())

    write_report(synthesize_report(outcomes), output_path)
    logger.info(f"Wrote report for {len(outcomes)} check(s) to {output_path}")

    return RunSummary(system=system, outcomes=outcomes, output_path=output_path)

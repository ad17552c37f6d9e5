"""Main CLI entry point for flake-junit."""

import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from flake_junit.checks.workflow import run_checks
from flake_junit.cli.display import show_error, show_run_summary
from flake_junit.core.config.settings import Settings, get_settings
from flake_junit.core.exceptions.errors import FlakeJunitError
from flake_junit.core.logger.logger import get_logger, setup_logging
from flake_junit.nix.client import NixClient

logger = get_logger(__name__)

# Options that would change the shape of `nix build` output the runner parses.
FORBIDDEN_NIX_OPTIONS = ("--json", "--dry-run")


def validate_nix_options(options: tuple[str, ...] | list[str]) -> list[str]:
    """Reject passthrough options that conflict with the built-in build flags.

    Args:
        options: Options to append to every ``nix build``.

    Returns:
        The options, unchanged.

    Raises:
        click.BadParameter: If a forbidden option is present.
    """
    for option in options:
        for forbidden in FORBIDDEN_NIX_OPTIONS:
            if option == forbidden or option.startswith(f"{forbidden}="):
                raise click.BadParameter(
                    f"'{option}' cannot be passed through: flake-junit already "
                    f"controls {', '.join(FORBIDDEN_NIX_OPTIONS)} for nix build",
                    param_hint="NIX_OPTIONS",
                )
    return list(options)


def build_nix_options(max_jobs: int | None, options: list[str]) -> list[str]:
    """Options forwarded to every ``nix build``, in order."""
    extra: list[str] = []
    if max_jobs is not None:
        extra.extend(["--max-jobs", str(max_jobs)])
    extra.extend(options)
    return extra


@click.group(invoke_without_command=True)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def main(ctx: click.Context, version: bool) -> None:
    """flake-junit - run nix flake checks and report them as JUnit XML."""
    if version:
        from flake_junit import __version__

        click.echo(f"flake-junit version {__version__}")
        return

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command(
    "run-checks",
    context_settings={"ignore_unknown_options": True},
)
@click.option(
    "--output-path",
    "-o",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="The path where the JUnit report should be written to",
)
@click.option(
    "--max-jobs",
    type=click.IntRange(min=1),
    default=None,
    help="The number of --max-jobs to pass to nix",
)
@click.option("--nix-binary", default=None, help="nix executable to run")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML configuration file",
)
@click.argument("nix_options", nargs=-1, type=click.UNPROCESSED)
def run_checks_command(
    output_path: Path,
    max_jobs: int | None,
    nix_binary: str | None,
    config_path: Path | None,
    nix_options: tuple[str, ...],
) -> None:
    """Build every flake check for the current system and write a JUnit report.

    Extra NIX_OPTIONS are appended to every nix build invocation.

    Example:
        flake-junit run-checks --output-path report.xml -- --keep-going
    """
    options = validate_nix_options(nix_options)

    try:
        if config_path is not None:
            settings = Settings.from_yaml(config_path)
        else:
            settings = get_settings()
    except (FlakeJunitError, ValidationError) as e:
        show_error("Invalid Configuration", str(e))
        sys.exit(1)

    setup_logging(settings.logging)

    extra_options = build_nix_options(max_jobs or settings.nix.max_jobs, options)
    client = NixClient(nix_path=nix_binary or settings.nix.binary)
    logger.debug(f"Running checks with nix options {extra_options}")

    try:
        summary = asyncio.run(run_checks(client, output_path, extra_options))
    except FlakeJunitError as e:
        logger.debug("Run aborted", exc_info=True)
        show_error("Run Failed", str(e))
        sys.exit(1)

    show_run_summary(summary)


if __name__ == "__main__":
    main()

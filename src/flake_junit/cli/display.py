"""Display components for CLI using Rich."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from flake_junit.checks.models import RunSummary
from flake_junit.core.logger.logger import get_console

console = Console()


def show_success(title: str, message: str) -> None:
    """Display a success message."""
    console.print()
    console.print(
        Panel(
            f"[bold green]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="green",
        )
    )


def show_warning(title: str, message: str) -> None:
    """Display a warning message."""
    console.print()
    console.print(
        Panel(
            f"[bold yellow]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="yellow",
        )
    )


def show_error(title: str, message: str) -> None:
    """Display an error message on stderr."""
    err_console = get_console()
    err_console.print()
    err_console.print(
        Panel(
            f"[bold red]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="red",
        )
    )


def show_run_summary(summary: RunSummary) -> None:
    """Display one row per check and the totals of a run.

    Args:
        summary: Result of the run.
    """
    console.print()
    table = Table(title=f"[bold]Checks for {escape(summary.system)}[/]")
    table.add_column("Check", style="cyan")
    table.add_column("Derivation", style="white")
    table.add_column("Result")
    table.add_column("Time", justify="right")

    for outcome in summary.outcomes:
        result = "[green]passed[/]" if outcome.succeeded else "[red]failed[/]"
        table.add_row(
            escape(outcome.key),
            escape(outcome.name),
            result,
            f"{outcome.duration_seconds:.1f}s",
        )

    console.print(table)

    message = (
        f"{summary.passed} passed, {summary.failed} failed "
        f"in {summary.duration_seconds:.1f}s\n"
        f"Report written to {summary.output_path}"
    )
    if summary.failed:
        show_warning("Checks Failed", message)
    else:
        show_success("Checks Passed", message)

"""
Root Typer application for the ``upkeep`` command.

A single command with no arguments: run every registered job concurrently,
print one line per failed job as soon as it is observed, then a summary.
The exit status is 1 if any job failed.

Usage::

    upkeep              # run all jobs
    upkeep --version
"""

from __future__ import annotations

import typer
from rich.console import Console

from upkeep.core.logging import configure_logging
from upkeep.jobs.config import UpkeepConfig
from upkeep.jobs.engine import Engine, JobOutcome
from upkeep.jobs.registry import DEFAULT_JOBS

app = typer.Typer(
    name="upkeep",
    help="upkeep: run every package-manager upgrade at once.",
    add_completion=False,
)
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("upkeep")
        except PackageNotFoundError:
            from upkeep import __version__ as v
        typer.echo(f"upkeep {v}")
        raise typer.Exit()


def _print_failure(outcome: JobOutcome) -> None:
    if outcome.ok:
        return
    console.print(
        f"error: {outcome.job}: {outcome.error}",
        style="bold red",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


@app.command()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Upgrade Homebrew, macOS, pip, Rust and Neovim plugins concurrently."""
    config = UpkeepConfig.from_env()
    configure_logging(
        level=config.log_level,
        json_format=config.json_logs,
        service=config.service,
    )

    report = Engine().run(DEFAULT_JOBS, on_outcome=_print_failure)

    style = "green" if report.ok else "yellow"
    console.print(report.summary, style=style, highlight=False, soft_wrap=True)

    if not report.ok:
        raise typer.Exit(code=report.exit_code)

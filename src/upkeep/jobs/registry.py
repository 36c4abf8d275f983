"""Job registry for upkeep.

An immutable, ordered registry of upgrade jobs. Each ``JobSpec`` names one
upgrade target and holds the zero-argument body that drives its
package-manager commands.

Key Concepts:
    JobSpec: Frozen dataclass of name, description and run. ``run()`` performs
        the job's steps in order and returns ``Ok(status)`` or ``Err(cause)``.
    DEFAULT_JOBS: Ordered tuple of every registered job. Order has no effect
        on execution (jobs are independent) but keeps logging and reporting
        deterministic.
    JOBS: Registry dict mapping name → JobSpec.
    CARGO_EXCLUDED: Crates the cargo job never reinstalls.

Architecture Decisions:
    - Frozen dataclasses (not Pydantic): Jobs are build-time constants,
      not user input.
    - Case-insensitive lookup: ``get_job("Brew")`` works.
    - Job bodies return Results: a failing step stops the job without
      raising, so the engine never has to catch expected failures.

Tags:
    jobs, registry, specs, package-managers
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from upkeep.core.result import Result
from upkeep.jobs.discovery import derive_package_list
from upkeep.jobs.process import capture, run, run_steps


@dataclass(frozen=True)
class JobSpec:
    """Specification for one upgrade job."""

    name: str
    """Short name (e.g., 'brew'). Unique within a registry."""

    description: str
    """One-line human description."""

    run: Callable[[], Result[int]]
    """Job body. Steps run sequentially; the first failure ends the job."""


# ---------------------------------------------------------------------------
# Job bodies
# ---------------------------------------------------------------------------

CARGO_EXCLUDED: frozenset[str] = frozenset({"cargo-update", "rust-analyzer"})


def brew_upgrade() -> Result[int]:
    """Refresh, upgrade, and clean up Homebrew packages."""
    return run_steps(
        ["brew", "update"],
        ["brew", "upgrade"],
        ["brew", "cleanup"],
    )


def macos_update() -> Result[int]:
    # -i install updates, -a install *all* updates
    return run("sudo", "softwareupdate", "-ia")


def pip_upgrade() -> Result[int]:
    """Upgrade pip itself first, then setuptools and wheel."""
    return run_steps(
        ["python3", "-m", "pip", "install", "--upgrade", "pip"],
        ["python3", "-m", "pip", "install", "--upgrade", "setuptools", "wheel"],
    )


def rustup_update() -> Result[int]:
    return run_steps(
        ["rustup", "self", "update"],
        ["rustup", "update"],
    )


def cargo_upgrade(excluded: frozenset[str] = CARGO_EXCLUDED) -> Result[int]:
    """Reinstall every crate ``cargo install --list`` reports, minus exclusions.

    A failed listing ends the job before any install is attempted. An empty
    package list still issues ``cargo install`` with no crate arguments.
    """
    return (
        capture("cargo", "install", "--list")
        .map(lambda output: derive_package_list(output, excluded))
        .and_then(lambda packages: run("cargo", "install", *packages))
    )


def nvim_plug_update() -> Result[int]:
    return run("nvim", "--headless", "+PlugUpgrade", "+PlugUpdate", "+qa")


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

DEFAULT_JOBS: tuple[JobSpec, ...] = (
    JobSpec("brew", "Homebrew: update, upgrade, cleanup", brew_upgrade),
    JobSpec("macos", "macOS software updates", macos_update),
    JobSpec("pip", "pip, setuptools and wheel", pip_upgrade),
    JobSpec("rustup", "rustup and installed Rust toolchains", rustup_update),
    JobSpec("cargo", "Crates installed with cargo install", cargo_upgrade),
    JobSpec("nvim", "Neovim plugins via vim-plug", nvim_plug_update),
)

JOBS: dict[str, JobSpec] = {job.name: job for job in DEFAULT_JOBS}


def get_job(name: str) -> JobSpec:
    """Look up a registered job by name (case-insensitive)."""
    key = name.lower()
    if key not in JOBS:
        available = ", ".join(sorted(JOBS))
        raise KeyError(f"Unknown job: {name!r}. Available: {available}")
    return JOBS[key]

"""Process invocation boundary for upkeep jobs.

Thin wrappers over :func:`subprocess.run` that turn a collaborator's fate
into a ``Result``. Collaborators are resolved on ``PATH``; their output
streams are inherited from the parent so package-manager progress shows up
on the terminal, except in :func:`capture`, which keeps stdout for parsing.

Key Concepts:
    run(): argv → ``Ok(0)`` | ``Err(NonZeroExitError)`` | ``Err(LaunchError)``.
    capture(): Same, but returns stdout text on success.
    run_steps(): Sequential steps, each awaited before the next. The first
        failing step short-circuits the rest.

Tags:
    subprocess, process, collaborator, result
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence

from upkeep.core.errors import LaunchError, NonZeroExitError
from upkeep.core.logging import get_logger
from upkeep.core.result import Err, Ok, Result

logger = get_logger(__name__)


def run(command: str, *args: str) -> Result[int]:
    """Run a collaborator to completion and observe only its exit status."""
    argv = [command, *args]
    logger.debug("process_started", argv=argv)
    try:
        proc = subprocess.run(argv, check=False)
    except OSError as e:
        return Err(LaunchError(argv, e))

    if proc.returncode != 0:
        return Err(NonZeroExitError(argv, proc.returncode))
    return Ok(proc.returncode)


def capture(command: str, *args: str) -> Result[str]:
    """Run a collaborator and return its standard output as text."""
    argv = [command, *args]
    logger.debug("process_started", argv=argv, capture=True)
    try:
        proc = subprocess.run(
            argv,
            check=False,
            stdout=subprocess.PIPE,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as e:
        return Err(LaunchError(argv, e))

    if proc.returncode != 0:
        return Err(NonZeroExitError(argv, proc.returncode))
    return Ok(proc.stdout)


def run_steps(*commands: Sequence[str]) -> Result[int]:
    """Run each argv in order, stopping at the first failure."""
    result: Result[int] = Ok(0)
    for argv in commands:
        result = result.and_then(lambda _, argv=argv: run(*argv))
        if result.is_err():
            break
    return result

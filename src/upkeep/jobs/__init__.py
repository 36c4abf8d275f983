"""upkeep.jobs — upgrade jobs and the engine that runs them concurrently.

Key Concepts:
    JobSpec: Frozen dataclass for one upgrade job (name, description, body).
    DEFAULT_JOBS: The registered jobs, in stable order.
    Engine: Runs jobs in parallel worker threads, returns a ``Report``.
    derive_package_list(): Turns a listing collaborator's output into the
        argument list of a follow-up command.

Related Modules:
    - :mod:`upkeep.jobs.registry` — Job registry
    - :mod:`upkeep.jobs.engine` — Execution engine and Report
    - :mod:`upkeep.jobs.process` — Subprocess boundary
    - :mod:`upkeep.jobs.discovery` — Package discovery
    - :mod:`upkeep.jobs.config` — Entry-point configuration

Example:
    >>> from upkeep.jobs import Engine, JobSpec
    >>> from upkeep.core.result import Ok
    >>> report = Engine().run([JobSpec("noop", "does nothing", lambda: Ok(0))])
    >>> report.ok
    True
"""

from __future__ import annotations

from upkeep.jobs.config import UpkeepConfig
from upkeep.jobs.discovery import derive_package_list, leading_token
from upkeep.jobs.engine import Engine, JobOutcome, Report
from upkeep.jobs.registry import CARGO_EXCLUDED, DEFAULT_JOBS, JOBS, JobSpec, get_job

__all__ = [
    "CARGO_EXCLUDED",
    "DEFAULT_JOBS",
    "Engine",
    "JOBS",
    "JobOutcome",
    "JobSpec",
    "Report",
    "UpkeepConfig",
    "derive_package_list",
    "get_job",
    "leading_token",
]

"""Concurrent execution engine for upkeep jobs.

Runs every job in its own worker thread and collects exactly one outcome
per job into a ``Report``.

Key Concepts:
    Engine.run(): Jobs → ``Report``. One worker per job, all started
        together. Outcomes are collected in completion order until every
        job has reported; a slow job is always awaited.
    JobOutcome: One job's terminal result, either ``Ok(status)`` or
        ``Err(cause)``, plus timing.
    Report: All outcomes of one run, with derived ``failed``, ``ok`` and
        ``exit_code`` views.

Architecture Decisions:
    - ThreadPoolExecutor sized to the job count: workers block on their own
      subprocesses only, so every job runs in parallel.
    - Futures are the result channel: each worker publishes by returning
      from its future, and the engine thread is the sole consumer via
      ``as_completed``.
    - Worker isolation: a job body that raises is converted to
      ``Err(JobCrashedError)`` inside its worker. It never reaches the
      collection loop or sibling jobs.
    - A future that still holds an exception means the worker could not
      publish its outcome. That is an engine bug and raises ``EngineError``.
    - No timeout and no cancellation: once started, a job runs to its
      natural completion.

Related Modules:
    - :mod:`upkeep.jobs.registry` — JobSpec and the default jobs
    - :mod:`upkeep.cli.app` — Consumes the Report

Tags:
    engine, concurrency, thread-pool, fan-out, outcomes, report
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from upkeep.core.errors import EngineError, JobCrashedError, UpkeepError
from upkeep.core.logging import LogContext, get_logger
from upkeep.core.result import Err, Ok, Result, partition_results
from upkeep.jobs.registry import JobSpec

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Outcome / Report
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class JobOutcome:
    """Terminal result of one job."""

    job: str
    result: Result[int]
    started_at: datetime
    finished_at: datetime

    @property
    def ok(self) -> bool:
        return self.result.is_ok()

    @property
    def error(self) -> Exception | None:
        return self.result.error if isinstance(self.result, Err) else None

    @property
    def duration_seconds(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        return {
            "job": self.job,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat(),
            "duration_seconds": self.duration_seconds,
            **self.result.to_dict(),
        }


@dataclass(frozen=True)
class Report:
    """All outcomes of one engine run, in completion order."""

    outcomes: tuple[JobOutcome, ...]
    started_at: datetime
    finished_at: datetime

    def __len__(self) -> int:
        return len(self.outcomes)

    def __iter__(self) -> Iterator[JobOutcome]:
        return iter(self.outcomes)

    @property
    def succeeded(self) -> list[JobOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[JobOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def errors(self) -> list[Exception]:
        _, errors = partition_results([o.result for o in self.outcomes])
        return errors

    @property
    def ok(self) -> bool:
        """True when no job failed. An empty run is ok."""
        return not self.failed

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    @property
    def duration_seconds(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()

    @property
    def summary(self) -> str:
        return (
            f"{len(self.succeeded)}/{len(self)} jobs succeeded "
            f"in {self.duration_seconds:.1f}s"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat(),
            "duration_seconds": self.duration_seconds,
            "ok": self.ok,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


def _execute(job: JobSpec) -> JobOutcome:
    """Worker body: run one job to completion and wrap its result."""
    with LogContext(job=job.name):
        started_at = _utcnow()
        logger.info("job_started")

        try:
            result = job.run()
        except Exception as e:
            logger.exception("job_crashed")
            result = Err(JobCrashedError(f"job raised {type(e).__name__}: {e}", cause=e))
        else:
            if not isinstance(result, (Ok, Err)):
                result = Err(JobCrashedError(
                    f"job returned {type(result).__name__}, expected a Result"
                ))

        finished_at = _utcnow()
        if isinstance(result, Err):
            if isinstance(result.error, UpkeepError):
                result.error.with_context(job=job.name)
            logger.warning("job_failed", error=str(result.error))
        else:
            logger.info("job_succeeded", status=result.value)

    return JobOutcome(
        job=job.name,
        result=result,
        started_at=started_at,
        finished_at=finished_at,
    )


class Engine:
    """Runs independent jobs concurrently and reports every outcome.

    The engine holds no state between runs; one instance can be reused.

    Example::

        from upkeep.jobs import DEFAULT_JOBS, Engine

        report = Engine().run(DEFAULT_JOBS)
        for outcome in report.failed:
            print(outcome.job, outcome.error)
    """

    def __init__(self, *, thread_name_prefix: str = "upkeep-job") -> None:
        self.thread_name_prefix = thread_name_prefix

    def run(
        self,
        jobs: Sequence[JobSpec],
        on_outcome: Callable[[JobOutcome], None] | None = None,
    ) -> Report:
        """Run every job in parallel and wait for all of them.

        Args:
            jobs: Jobs to run; any length, including zero.
            on_outcome: Called on the calling thread for each outcome as
                it arrives, in completion order.

        Returns:
            Report with exactly ``len(jobs)`` outcomes.

        Raises:
            EngineError: If a worker could not publish its outcome.
        """
        jobs = tuple(jobs)
        started_at = _utcnow()
        logger.info("engine_started", jobs=[job.name for job in jobs])

        outcomes: list[JobOutcome] = []
        if jobs:
            with ThreadPoolExecutor(
                max_workers=len(jobs),
                thread_name_prefix=self.thread_name_prefix,
            ) as pool:
                futures = {pool.submit(_execute, job): job for job in jobs}
                for future in as_completed(futures):
                    exc = future.exception()
                    if exc is not None:
                        job = futures[future]
                        raise EngineError(
                            f"worker for job {job.name!r} did not publish an outcome",
                            cause=exc,
                        ).with_context(job=job.name)
                    outcome = future.result()
                    outcomes.append(outcome)
                    if on_outcome is not None:
                        on_outcome(outcome)

        if len(outcomes) != len(jobs):
            raise EngineError(
                f"collected {len(outcomes)} outcomes for {len(jobs)} jobs"
            )

        report = Report(
            outcomes=tuple(outcomes),
            started_at=started_at,
            finished_at=_utcnow(),
        )
        logger.info(
            "engine_finished",
            succeeded=len(report.succeeded),
            failed=len(report.failed),
            duration_seconds=round(report.duration_seconds, 3),
        )
        return report

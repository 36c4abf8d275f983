"""Tests for upkeep.jobs.engine."""

from __future__ import annotations

import threading
import time

import pytest

from upkeep.core.errors import EngineError, JobCrashedError, LaunchError, NonZeroExitError
from upkeep.core.result import Ok
from upkeep.jobs.engine import Engine, JobOutcome, Report
from upkeep.jobs.process import run
from upkeep.jobs.registry import JobSpec


class _Escape(BaseException):
    """Raised by a job to bypass the worker's own error handling."""


class TestEngineRun:
    @pytest.mark.parametrize("count", [0, 1, 2, 7])
    def test_one_outcome_per_job(self, make_job, count):
        jobs = [make_job(f"job-{i}", returncode=i % 2) for i in range(count)]

        report = Engine().run(jobs)

        assert len(report) == count
        assert sorted(o.job for o in report) == sorted(j.name for j in jobs)

    def test_empty_report_is_ok(self):
        report = Engine().run([])
        assert report.ok
        assert report.exit_code == 0
        assert report.outcomes == ()

    def test_success_and_failure(self, make_job):
        report = Engine().run([make_job("good"), make_job("bad", returncode=2)])

        assert [o.job for o in report.succeeded] == ["good"]
        (failed,) = report.failed
        assert failed.job == "bad"
        assert isinstance(failed.error, NonZeroExitError)
        assert failed.error.returncode == 2
        assert not report.ok
        assert report.exit_code == 1

    def test_runs_in_parallel(self, make_job):
        delays = [0.3, 0.4, 0.5]
        jobs = [make_job(f"sleep-{d}", delay=d) for d in delays]

        start = time.monotonic()
        report = Engine().run(jobs)
        elapsed = time.monotonic() - start

        assert len(report) == 3
        assert elapsed >= max(delays)
        assert elapsed < sum(delays) - 0.2

    def test_each_job_gets_its_own_thread(self):
        barrier = threading.Barrier(3, timeout=5)

        def body():
            # Deadlocks (then times out) unless all three run concurrently.
            barrier.wait()
            return Ok(threading.get_ident())

        jobs = [JobSpec(f"j{i}", "barrier", body) for i in range(3)]
        report = Engine().run(jobs)

        assert report.ok
        assert len({o.result.value for o in report}) == 3

    def test_slow_job_is_awaited(self, make_job):
        report = Engine().run([make_job("fast"), make_job("slow", delay=0.3)])

        assert len(report) == 2
        assert [o.job for o in report] == ["fast", "slow"]

    def test_on_outcome_called_in_completion_order(self, make_job):
        seen: list[str] = []

        Engine().run(
            [make_job("slow", delay=0.3), make_job("fast")],
            on_outcome=lambda outcome: seen.append(outcome.job),
        )

        assert seen == ["fast", "slow"]

    def test_launch_failure_does_not_affect_siblings(self, make_job):
        missing = JobSpec("missing", "binary not on PATH", lambda: run("upkeep-test-no-such-binary"))

        report = Engine().run([missing, make_job("sibling", delay=0.2)])

        by_job = {o.job: o for o in report}
        assert isinstance(by_job["missing"].error, LaunchError)
        assert by_job["sibling"].ok

    def test_raising_job_becomes_failure(self, make_job):
        def body():
            raise RuntimeError("kaboom")

        report = Engine().run([JobSpec("crashy", "raises", body), make_job("fine")])

        by_job = {o.job: o for o in report}
        error = by_job["crashy"].error
        assert isinstance(error, JobCrashedError)
        assert isinstance(error.cause, RuntimeError)
        assert "kaboom" in str(error)
        assert by_job["fine"].ok

    def test_non_result_return_becomes_failure(self):
        report = Engine().run([JobSpec("sloppy", "returns an int", lambda: 0)])

        (outcome,) = report
        assert isinstance(outcome.error, JobCrashedError)

    def test_failure_tagged_with_job_name(self, make_job):
        (outcome,) = Engine().run([make_job("tagged", returncode=1)])
        assert outcome.error.context.job == "tagged"

    def test_unpublished_outcome_is_fatal(self, make_job):
        def body():
            raise _Escape()

        with pytest.raises(EngineError, match="did not publish") as exc_info:
            Engine().run([JobSpec("escape", "bypasses the worker", body), make_job("ok")])

        assert isinstance(exc_info.value.cause, _Escape)
        assert exc_info.value.context.job == "escape"

    def test_runs_are_independent(self, make_job):
        jobs = [make_job("a"), make_job("b", returncode=1)]
        engine = Engine()

        first = engine.run(jobs)
        second = engine.run(jobs)

        assert len(first) == len(second) == 2
        assert first is not second
        assert first.outcomes is not second.outcomes
        assert [o.job for o in first.failed] == [o.job for o in second.failed] == ["b"]


class TestReport:
    def test_summary_and_dict(self, make_job):
        report = Engine().run([make_job("good"), make_job("bad", returncode=1)])

        assert report.summary.startswith("1/2 jobs succeeded in ")
        d = report.to_dict()
        assert d["ok"] is False
        assert {o["job"] for o in d["outcomes"]} == {"good", "bad"}
        assert len(report.errors) == 1

    def test_outcome_timing(self, make_job):
        (outcome,) = Engine().run([make_job("sleepy", delay=0.1)])

        assert isinstance(outcome, JobOutcome)
        assert outcome.finished_at >= outcome.started_at
        assert outcome.duration_seconds >= 0.1
        assert outcome.to_dict()["ok"] is True

    def test_report_is_iterable(self, make_job):
        report = Engine().run([make_job("x")])
        assert isinstance(report, Report)
        assert [o.job for o in report] == ["x"]

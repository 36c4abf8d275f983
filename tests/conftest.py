"""
Shared pytest fixtures for upkeep tests.

Provides:
- src/ on sys.path so the package imports without installation
- Quiet structured logging and a clean log context per test
- Small factories for fake jobs
"""

import sys
import time
from pathlib import Path
from typing import Callable, Generator

import pytest

# Ensure upkeep package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from upkeep.core.errors import NonZeroExitError
from upkeep.core.logging import clear_context, configure_logging
from upkeep.core.result import Err, Ok
from upkeep.jobs.registry import JobSpec


@pytest.fixture(autouse=True)
def quiet_logging() -> Generator[None, None, None]:
    """Only warnings and above, as JSON, with no leftover context."""
    configure_logging(level="WARNING", json_format=True, service="upkeep-test")
    clear_context()
    yield
    clear_context()


@pytest.fixture
def make_job() -> Callable[..., JobSpec]:
    """
    Build a fake job that optionally sleeps, then succeeds or fails.

        job = make_job("slow", delay=0.2)
        job = make_job("broken", returncode=2)
    """

    def _make(name: str, *, delay: float = 0.0, returncode: int = 0) -> JobSpec:
        def body():
            if delay:
                time.sleep(delay)
            if returncode:
                return Err(NonZeroExitError([name], returncode))
            return Ok(0)

        return JobSpec(name=name, description=f"fake {name}", run=body)

    return _make

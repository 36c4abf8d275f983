"""
upkeep.core - Primitives shared by the engine, the jobs, and the CLI.

- errors: Typed error hierarchy (LaunchError, NonZeroExitError, ...)
- result: Ok/Err envelope used by every job step
- logging: structlog configuration
"""

from upkeep.core.errors import (
    EngineError,
    ErrorCategory,
    ErrorContext,
    JobCrashedError,
    JobError,
    LaunchError,
    NonZeroExitError,
    UpkeepError,
)
from upkeep.core.result import Err, Ok, Result, partition_results

__all__ = [
    "EngineError",
    "Err",
    "ErrorCategory",
    "ErrorContext",
    "JobCrashedError",
    "JobError",
    "LaunchError",
    "NonZeroExitError",
    "Ok",
    "Result",
    "UpkeepError",
    "partition_results",
]

"""
Structured error types for upkeep.

Every failure a job can produce is a typed ``UpkeepError`` carrying a
category, structured context, and the chained underlying exception. Job
bodies never raise these for expected failures; they return them inside an
``Err`` (see :mod:`upkeep.core.result`) so one failing job cannot abort its
siblings.

Manifesto:
    - **Typed hierarchy:** Launch failures, non-zero exits, and crashed job
      bodies are distinct types, not strings
    - **Rich context:** Errors carry the job and command for logging
    - **Error chaining:** The original ``OSError`` is preserved as ``cause``

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                      UpkeepError                          │
        │              (category, context, cause)                   │
        ├──────────────────────────────────────────────────────────┤
        │                                                          │
        │  JobError (JOB)                     EngineError          │
        │     │                               (INTERNAL, fatal)    │
        │  LaunchError       (PROCESS)                             │
        │  NonZeroExitError  (PROCESS)                             │
        │  JobCrashedError   (INTERNAL)                            │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> err = NonZeroExitError(["brew", "upgrade"], 1)
    >>> err.returncode
    1
    >>> str(err)
    "'brew upgrade' exited with status 1"

Tags:
    error-handling, exception-hierarchy, error-context, upkeep
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and log routing."""

    JOB = "JOB"  # A job failed on its own terms
    PROCESS = "PROCESS"  # External collaborator could not start or failed
    INTERNAL = "INTERNAL"  # Bugs, unexpected state


@dataclass
class ErrorContext:
    """Structured metadata attached to an error.

    Attributes:
        job: Name of the job where the error occurred
        command: Command line that was being run
        metadata: Additional key-value pairs
    """

    job: str | None = None
    command: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        for key in ["job", "command"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class UpkeepError(Exception):
    """
    Base exception for all upkeep errors.

    Subclasses set ``default_category`` so callers rarely pass one.

    Examples:
        >>> error = UpkeepError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(job="brew").context.job
        'brew'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> UpkeepError:
        """
        Add context to this error (fluent API).

        Usage:
            return Err(LaunchError("brew", exc).with_context(job="brew"))
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


def format_command(command: Sequence[str]) -> str:
    """Render an argv list as a single display string."""
    return " ".join(command)


# =============================================================================
# JOB ERRORS (job-local, reported as that job's Failure)
# =============================================================================


class JobError(UpkeepError):
    """A failure local to one job. Never aborts sibling jobs."""

    default_category = ErrorCategory.JOB


class LaunchError(JobError):
    """The collaborator process could not be started.

    Typically the binary is missing from ``PATH`` or is not executable.
    The underlying ``OSError`` is kept as ``cause``.
    """

    default_category = ErrorCategory.PROCESS

    def __init__(self, command: Sequence[str], cause: OSError, **kwargs: Any):
        self.command = list(command)
        rendered = format_command(self.command)
        super().__init__(f"could not launch {rendered!r}: {cause}", cause=cause, **kwargs)
        self.context.command = rendered


class NonZeroExitError(JobError):
    """The collaborator ran but terminated with a failure status."""

    default_category = ErrorCategory.PROCESS

    def __init__(self, command: Sequence[str], returncode: int, **kwargs: Any):
        self.command = list(command)
        self.returncode = returncode
        rendered = format_command(self.command)
        super().__init__(f"{rendered!r} exited with status {returncode}", **kwargs)
        self.context.command = rendered


class JobCrashedError(JobError):
    """The job body raised instead of returning a result."""

    default_category = ErrorCategory.INTERNAL


# =============================================================================
# ENGINE ERRORS (fatal)
# =============================================================================


class EngineError(UpkeepError):
    """A worker's outcome could not be published to the engine.

    This signals a bug in the engine itself rather than a job failure and
    is raised out of ``Engine.run``.
    """

    default_category = ErrorCategory.INTERNAL


__all__ = [
    "EngineError",
    "ErrorCategory",
    "ErrorContext",
    "JobCrashedError",
    "JobError",
    "LaunchError",
    "NonZeroExitError",
    "UpkeepError",
    "format_command",
]

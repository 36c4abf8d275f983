"""Runtime configuration for the upkeep entry point.

Only the CLI reads this model; the engine and the jobs take no
configuration. Every field can be overridden from ``UPKEEP_*`` environment
variables via ``from_env()``.

Override precedence: kwargs > env vars > field defaults.

Example::

    config = UpkeepConfig.from_env()
    configure_logging(level=config.log_level, json_format=config.json_logs)
"""

from __future__ import annotations

import os
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class UpkeepConfig(BaseModel):
    """Logging and presentation settings for one upkeep invocation."""

    log_level: LogLevel = Field(
        default="WARNING",
        description="Minimum structlog level written to stderr",
    )
    json_logs: bool | None = Field(
        default=None,
        description="JSON log lines (True), console (False), or auto-detect from tty (None)",
    )
    service: str = Field(
        default="upkeep",
        description="Service name attached to every log record",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @classmethod
    def from_env(cls, **overrides: Any) -> UpkeepConfig:
        """Create config from UPKEEP_* environment variables."""
        env_map = {
            "log_level": "UPKEEP_LOG_LEVEL",
            "json_logs": "UPKEEP_JSON_LOGS",
            "service": "UPKEEP_SERVICE",
        }
        values: dict[str, Any] = {}
        for field_name, env_var in env_map.items():
            env_val = os.environ.get(env_var)
            if env_val is not None:
                if field_name == "json_logs":
                    values[field_name] = env_val.lower() in ("true", "1", "yes")
                else:
                    values[field_name] = env_val
        values.update(overrides)
        return cls(**values)

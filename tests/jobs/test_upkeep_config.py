"""Tests for UpkeepConfig."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from upkeep.jobs.config import UpkeepConfig


class TestUpkeepConfig:
    def test_defaults(self):
        config = UpkeepConfig()
        assert config.log_level == "WARNING"
        assert config.json_logs is None
        assert config.service == "upkeep"

    def test_level_normalised(self):
        assert UpkeepConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_level(self):
        with pytest.raises(ValidationError):
            UpkeepConfig(log_level="LOUD")

    @patch.dict(os.environ, {}, clear=True)
    def test_from_env_without_vars(self):
        assert UpkeepConfig.from_env() == UpkeepConfig()

    @patch.dict(
        os.environ,
        {"UPKEEP_LOG_LEVEL": "info", "UPKEEP_JSON_LOGS": "yes", "UPKEEP_SERVICE": "nightly"},
    )
    def test_from_env(self):
        config = UpkeepConfig.from_env()
        assert config.log_level == "INFO"
        assert config.json_logs is True
        assert config.service == "nightly"

    @patch.dict(os.environ, {"UPKEEP_JSON_LOGS": "0"})
    def test_from_env_false_flag(self):
        assert UpkeepConfig.from_env().json_logs is False

    @patch.dict(os.environ, {"UPKEEP_LOG_LEVEL": "ERROR"})
    def test_overrides_beat_env(self):
        assert UpkeepConfig.from_env(log_level="DEBUG").log_level == "DEBUG"

"""
Test suite for configuration settings.

System role: Verification of environment mapping and validation
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from draftsmith.configs.base import BaseSettings
from draftsmith.configs.compiler import CompilerSettings
from draftsmith.configs.settings import Settings


class TestBaseSettings:
    def test_reads_app_prefixed_variables(self, monkeypatch):
        # Arrange
        monkeypatch.setenv("DRAFTSMITH_ENVIRONMENT", "production")
        monkeypatch.setenv("DRAFTSMITH_LOG_LEVEL", "debug")
        monkeypatch.setenv("DRAFTSMITH_CORS_ORIGINS", '["https://app.example.com"]')

        # Act
        settings = BaseSettings()

        # Assert
        assert settings.environment == "production"
        assert settings.log_level == "DEBUG"
        assert settings.cors_origins == ["https://app.example.com"]

    def test_unknown_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            BaseSettings(log_level="chatty")

    def test_unknown_environment_rejected(self):
        with pytest.raises(PydanticValidationError):
            BaseSettings(environment="qa")

    def test_aggregate_exposes_concern_settings(self, monkeypatch):
        monkeypatch.setenv("COMPILER_DEBOUNCE_SECONDS", "0.5")

        settings = Settings()

        assert settings.compiler.debounce_seconds == 0.5
        assert settings.port == 8000


class TestCompilerSettings:
    @pytest.mark.parametrize("value", [0, 1])
    def test_auto_repairs_accepts_zero_or_one(self, value):
        assert CompilerSettings(max_auto_repairs=value).max_auto_repairs == value

    def test_more_than_one_auto_repair_rejected(self):
        with pytest.raises(PydanticValidationError):
            CompilerSettings(max_auto_repairs=2)

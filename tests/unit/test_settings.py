"""
Unit tests for configuration loading.
"""

import pytest

from gps_gateway.config.settings import Settings, get_settings
from gps_gateway.core.keys import KeyLayout

ENV_VARS = (
    "BUCKET_NAME",
    "AWS_REGION",
    "PORT",
    "HOST",
    "STORAGE_MOCK_MODE",
    "KEY_PREFIX",
    "KEY_DATASET",
    "KEY_ENVIRONMENT",
    "KEY_FILENAME",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    def test_defaults_match_original_deployment(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.bucket_name == "srihari03"
        assert settings.aws_region == "ap-south-1"
        assert settings.port == 8090
        assert settings.storage_mock_mode is False
        assert settings.key_layout == KeyLayout()

    def test_environment_overrides(self, clean_env, monkeypatch):
        monkeypatch.setenv("BUCKET_NAME", "other-bucket")
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("STORAGE_MOCK_MODE", "true")
        monkeypatch.setenv("KEY_ENVIRONMENT", "prod")

        settings = Settings(_env_file=None)

        assert settings.bucket_name == "other-bucket"
        assert settings.port == 9000
        assert settings.storage_mock_mode is True
        assert settings.key_layout.environment == "prod"

    def test_invalid_port_fails_fast(self, clean_env, monkeypatch):
        monkeypatch.setenv("PORT", "not-a-port")
        with pytest.raises(ValueError):
            Settings(_env_file=None)

    def test_complete_config_has_no_missing_fields(self, clean_env):
        assert Settings(_env_file=None).validate_required_fields() == []

    def test_missing_bucket_and_region_reported(self, clean_env):
        settings = Settings(_env_file=None, bucket_name="", aws_region="")

        assert settings.validate_required_fields() == ["BUCKET_NAME", "AWS_REGION"]

    def test_region_not_required_in_mock_mode(self, clean_env):
        settings = Settings(_env_file=None, aws_region="", storage_mock_mode=True)

        assert settings.validate_required_fields() == []

    def test_empty_key_segment_reported(self, clean_env):
        settings = Settings(_env_file=None, key_filename="")

        assert settings.validate_required_fields() == ["KEY_FILENAME"]

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()

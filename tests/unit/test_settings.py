"""
Unit tests for configuration resolution.

Each setting reads its environment variable when set to a non-empty value
and falls back to a fixed default otherwise.
"""

import pytest
from pydantic import ValidationError

from upload_service.config.settings import Settings

ENV_VARS = ["AWS_REGION", "S3_BUCKET", "S3_KEY_PATH", "PORT", "S3_ENDPOINT_URL", "STORAGE_MOCK_MODE"]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:

    def test_defaults_when_environment_unset(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.aws_region == "us-east-1"
        assert settings.s3_bucket == "my-bucket"
        assert settings.s3_key_path == "uploads/"
        assert settings.port == "8080"
        assert settings.s3_endpoint_url is None
        assert settings.storage_mock_mode is False

    def test_environment_overrides_defaults(self, clean_env):
        clean_env.setenv("AWS_REGION", "eu-west-1")
        clean_env.setenv("S3_BUCKET", "team-files")
        clean_env.setenv("S3_KEY_PATH", "incoming/")
        clean_env.setenv("PORT", "9090")

        settings = Settings(_env_file=None)

        assert settings.aws_region == "eu-west-1"
        assert settings.s3_bucket == "team-files"
        assert settings.s3_key_path == "incoming/"
        assert settings.port == "9090"
        assert settings.port_number == 9090

    def test_empty_values_fall_back_to_defaults(self, clean_env):
        for name in ["AWS_REGION", "S3_BUCKET", "S3_KEY_PATH", "PORT"]:
            clean_env.setenv(name, "")

        settings = Settings(_env_file=None)

        assert settings.aws_region == "us-east-1"
        assert settings.s3_bucket == "my-bucket"
        assert settings.s3_key_path == "uploads/"
        assert settings.port == "8080"

    def test_settings_are_immutable(self, clean_env):
        settings = Settings(_env_file=None)

        with pytest.raises(ValidationError):
            settings.s3_key_path = "elsewhere/"

"""Unit tests for environment-driven settings."""

import pytest

from filetransfer.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Test settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SFTP_CHANNEL_OPEN_TIMEOUT", raising=False)
        monkeypatch.delenv("SFTP_PORT", raising=False)

        settings = Settings(_env_file=None)

        assert settings.SFTP_PORT == 22
        assert settings.SFTP_CHANNEL_OPEN_TIMEOUT == 15.0
        assert settings.SFTP_ALLOW_UNKNOWN_HOSTS is False
        assert settings.LOG_LEVEL == "INFO"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SFTP_HOST", "files.example.org")
        monkeypatch.setenv("SFTP_PORT", "2022")
        monkeypatch.setenv("SFTP_CHANNEL_OPEN_TIMEOUT", "2.5")
        monkeypatch.setenv("SFTP_ALLOW_UNKNOWN_HOSTS", "true")

        settings = Settings(_env_file=None)

        assert settings.SFTP_HOST == "files.example.org"
        assert settings.SFTP_PORT == 2022
        assert settings.SFTP_CHANNEL_OPEN_TIMEOUT == 2.5
        assert settings.SFTP_ALLOW_UNKNOWN_HOSTS is True

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("SFTP_USERNAME=etl\nLOG_JSON=false\n")

        settings = Settings(_env_file=str(env_file))

        assert settings.SFTP_USERNAME == "etl"
        assert settings.LOG_JSON is False

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

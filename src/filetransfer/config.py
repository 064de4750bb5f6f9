"""Session configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables.

    Environment Variables:
        SFTP_HOST: SFTP server hostname
        SFTP_PORT: SFTP server port (default 22)
        SFTP_USERNAME: Login user
        SFTP_PASSWORD: Password (ignored when SFTP_PRIVATE_KEY is set)
        SFTP_PRIVATE_KEY: Private key content (PEM/OpenSSH text)
        SFTP_PRIVATE_KEY_PASSPHRASE: Passphrase for SFTP_PRIVATE_KEY
        SFTP_CONNECT_TIMEOUT: TCP connect timeout in seconds (default 10)
        SFTP_CHANNEL_OPEN_TIMEOUT: SFTP channel open timeout in seconds (default 15)
        SFTP_ALLOW_UNKNOWN_HOSTS: Accept host keys missing from known_hosts (default False)
        SFTP_KNOWN_HOSTS_FILE: Extra known_hosts file
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON log lines (default True)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # SFTP connection
    SFTP_HOST: str = "localhost"
    SFTP_PORT: int = 22
    SFTP_USERNAME: str = ""
    SFTP_PASSWORD: Optional[str] = None
    SFTP_PRIVATE_KEY: Optional[str] = None
    SFTP_PRIVATE_KEY_PASSPHRASE: Optional[str] = None

    # Timeouts (seconds)
    SFTP_CONNECT_TIMEOUT: float = 10.0
    SFTP_CHANNEL_OPEN_TIMEOUT: float = 15.0

    # Host key verification
    SFTP_ALLOW_UNKNOWN_HOSTS: bool = False
    SFTP_KNOWN_HOSTS_FILE: Optional[str] = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()

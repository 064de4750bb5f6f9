"""SFTP session factory - builds connected SftpSession instances.

This module supports:
- Password and key-based authentication (RSA, ECDSA, Ed25519)
- Host key verification against system and custom known_hosts files
- Connect and channel-open timeouts
"""

import logging
from dataclasses import dataclass
from io import StringIO
from typing import Optional

import paramiko

from ...config import Settings
from .errors import SFTPError
from .session import DEFAULT_CHANNEL_OPEN_TIMEOUT, SftpSession

logger = logging.getLogger(__name__)

_KEY_CLASSES = (paramiko.RSAKey, paramiko.ECDSAKey, paramiko.Ed25519Key)


@dataclass
class SFTPConfig:
    """SFTP connection configuration.

    Attributes:
        host: SFTP server hostname
        username: Username for authentication
        port: SFTP server port (default 22)
        password: Password for authentication (used when no private_key is set)
        private_key: Private key content (PEM/OpenSSH text) for authentication
        private_key_passphrase: Passphrase protecting private_key
        connect_timeout: TCP connect timeout in seconds
        channel_open_timeout: SFTP channel open timeout in seconds
        allow_unknown_hosts: Accept and remember host keys not in known_hosts
        known_hosts_file: Extra known_hosts file loaded after the system one
    """
    host: str
    username: str
    port: int = 22
    password: Optional[str] = None
    private_key: Optional[str] = None
    private_key_passphrase: Optional[str] = None
    connect_timeout: float = 10.0
    channel_open_timeout: float = DEFAULT_CHANNEL_OPEN_TIMEOUT
    allow_unknown_hosts: bool = False
    known_hosts_file: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "SFTPConfig":
        """Build configuration from SFTP_* environment settings."""
        return cls(
            host=settings.SFTP_HOST,
            username=settings.SFTP_USERNAME,
            port=settings.SFTP_PORT,
            password=settings.SFTP_PASSWORD,
            private_key=settings.SFTP_PRIVATE_KEY,
            private_key_passphrase=settings.SFTP_PRIVATE_KEY_PASSPHRASE,
            connect_timeout=settings.SFTP_CONNECT_TIMEOUT,
            channel_open_timeout=settings.SFTP_CHANNEL_OPEN_TIMEOUT,
            allow_unknown_hosts=settings.SFTP_ALLOW_UNKNOWN_HOSTS,
            known_hosts_file=settings.SFTP_KNOWN_HOSTS_FILE,
        )


class SftpSessionFactory:
    """Creates connected SFTP sessions from a configuration.

    Example:
        factory = SftpSessionFactory(SFTPConfig(
            host="sftp.example.com",
            username="integration",
            password="secret",
        ))

        with factory.get_session() as session:
            session.write(io.BytesIO(payload), "/inbound/order.json")
    """

    def __init__(self, config: SFTPConfig):
        self.config = config

    def get_session(self) -> SftpSession:
        """Open an SSH connection and return a connected session.

        The returned session owns the SSH client and closes it on ``close()``.

        Raises:
            SFTPError: If authentication, host key verification, or connection fails
        """
        ssh_client = paramiko.SSHClient()
        try:
            self._configure_host_keys(ssh_client)
            connect_kwargs = self._connect_kwargs()

            host_port = f"{self.config.host}:{self.config.port}"
            logger.info(f"Connecting to SFTP server {host_port}", extra={"host_port": host_port})
            ssh_client.connect(**connect_kwargs)
            sftp_client = ssh_client.open_sftp()
        except paramiko.AuthenticationException as e:
            ssh_client.close()
            raise SFTPError(f"Authentication failed: {e}") from e
        except paramiko.SSHException as e:
            ssh_client.close()
            raise SFTPError(f"SSH connection failed: {e}") from e
        except SFTPError:
            ssh_client.close()
            raise
        except IOError as e:
            ssh_client.close()
            raise SFTPError(f"Failed to connect to SFTP server: {e}") from e

        session = SftpSession(
            sftp_client,
            channel_open_timeout=self.config.channel_open_timeout,
            ssh_client=ssh_client,
        )
        session.connect()
        logger.info("SFTP session established")
        return session

    def _configure_host_keys(self, ssh_client: paramiko.SSHClient) -> None:
        ssh_client.load_system_host_keys()
        if self.config.known_hosts_file:
            ssh_client.load_host_keys(self.config.known_hosts_file)
        if self.config.allow_unknown_hosts:
            ssh_client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        else:
            ssh_client.set_missing_host_key_policy(paramiko.RejectPolicy())

    def _connect_kwargs(self) -> dict:
        connect_kwargs = {
            "hostname": self.config.host,
            "port": self.config.port,
            "username": self.config.username,
            "timeout": self.config.connect_timeout,
            "look_for_keys": False,
            "allow_agent": False,
        }

        if self.config.private_key:
            connect_kwargs["pkey"] = self._load_private_key()
        elif self.config.password:
            connect_kwargs["password"] = self.config.password
        else:
            raise SFTPError("Either password or private_key must be provided")

        return connect_kwargs

    def _load_private_key(self) -> paramiko.PKey:
        """Parse the configured private key, trying each supported key type."""
        for key_class in _KEY_CLASSES:
            try:
                return key_class.from_private_key(
                    StringIO(self.config.private_key),
                    password=self.config.private_key_passphrase,
                )
            except paramiko.PasswordRequiredException as e:
                raise SFTPError("Private key is encrypted and no passphrase was given") from e
            except paramiko.SSHException:
                continue
        raise SFTPError("Unsupported or invalid private key")

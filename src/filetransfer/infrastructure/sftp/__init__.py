"""SFTP infrastructure module - Session adapter over paramiko."""

from .errors import SFTPError
from .factory import SFTPConfig, SftpSessionFactory
from .session import SftpSession

__all__ = ["SFTPError", "SFTPConfig", "SftpSessionFactory", "SftpSession"]

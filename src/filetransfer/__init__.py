"""Remote file-transfer sessions backed by SFTP."""

from .domain.session.ports import Session, SessionError
from .domain.session.models import DirEntry
from .infrastructure.sftp import SftpSession, SftpSessionFactory, SFTPConfig, SFTPError

__all__ = [
    "Session",
    "SessionError",
    "DirEntry",
    "SftpSession",
    "SftpSessionFactory",
    "SFTPConfig",
    "SFTPError",
]

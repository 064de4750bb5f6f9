"""Pytest fixtures for SFTP session testing.

Provides reusable test fixtures for:
- A mocked paramiko SFTP client with an open channel and live transport
- SFTP attribute builders for files and directories

Usage:
    def test_remove(sftp_session, sftp_client):
        assert sftp_session.remove("/data/a.txt") is True
        sftp_client.remove.assert_called_once_with("/data/a.txt")
"""

import stat
from unittest.mock import MagicMock, Mock

import paramiko
import pytest

from filetransfer.infrastructure.sftp.session import SftpSession


def make_attributes(filename: str, is_dir: bool = False, size: int = 0) -> paramiko.SFTPAttributes:
    """Build SFTP attributes as paramiko returns them from lstat/listdir_attr."""
    attributes = paramiko.SFTPAttributes()
    attributes.filename = filename
    attributes.st_mode = (stat.S_IFDIR | 0o755) if is_dir else (stat.S_IFREG | 0o644)
    attributes.st_size = size
    return attributes


@pytest.fixture
def transport():
    """Mock SSH transport connected to sftp.example.com:22."""
    transport = Mock(spec=paramiko.Transport)
    transport.is_active.return_value = True
    transport.getpeername.return_value = ("sftp.example.com", 22)
    return transport


@pytest.fixture
def channel(transport):
    """Mock open SFTP channel bound to the transport."""
    channel = Mock(spec=paramiko.Channel)
    channel.closed = False
    channel.get_transport.return_value = transport
    return channel


@pytest.fixture
def sftp_client(channel):
    """Mock paramiko SFTP client over an open channel."""
    client = MagicMock(spec=paramiko.SFTPClient)
    client.get_channel.return_value = channel
    return client


@pytest.fixture
def sftp_session(sftp_client):
    """SftpSession wrapping the mocked client."""
    return SftpSession(sftp_client, channel_open_timeout=5.0)


@pytest.fixture
def attributes():
    """Factory fixture building SFTP attributes."""
    return make_attributes

"""SFTP Session adapter over a paramiko SFTP client.

This module exposes an already-connected ``paramiko.SFTPClient`` through the
generic Session port. All protocol work is delegated to paramiko; the adapter
adds:
- Wildcard listing (``dir/*.csv``) filtered by shell-style pattern matching
- ENOENT-to-False translation for existence checks
- A per-session lock serializing write and append streams
- Channel (re)open with a configurable timeout
"""

import errno
import fnmatch
import logging
import posixpath
import shutil
import stat
import threading
from typing import BinaryIO, Iterator, List, Optional

import paramiko

from ...domain.session.models import DirEntry
from ...domain.session.ports import Session
from .errors import SFTPError

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL_OPEN_TIMEOUT = 15.0


class SftpSession(Session[DirEntry]):
    """Session implementation wrapping a paramiko SFTP client.

    Example:
        transport = ssh_client.get_transport()
        session = SftpSession(paramiko.SFTPClient.from_transport(transport))
        try:
            session.write(io.BytesIO(b"payload"), "/inbound/order.json")
            entries = session.list("/inbound/*.json")
        finally:
            session.close()
    """

    def __init__(
        self,
        sftp_client: paramiko.SFTPClient,
        channel_open_timeout: float = DEFAULT_CHANNEL_OPEN_TIMEOUT,
        ssh_client: Optional[paramiko.SSHClient] = None,
    ):
        """Initialize session around a connected client.

        Args:
            sftp_client: Connected paramiko SFTP client
            channel_open_timeout: Seconds to wait when (re)opening the SFTP channel
            ssh_client: Optional SSH client owned by this session, closed with it

        Raises:
            ValueError: If sftp_client is None
        """
        if sftp_client is None:
            raise ValueError("'sftp_client' must not be None")
        self._sftp_client = sftp_client
        self._ssh_client = ssh_client
        self.channel_open_timeout = channel_open_timeout
        self._write_lock = threading.Lock()

    def remove(self, path: str) -> bool:
        self._sftp_client.remove(path)
        logger.debug(f"Removed file: {path}")
        return True

    def list(self, path: str) -> List[DirEntry]:
        return list(self.iter_entries(path))

    def list_names(self, path: str) -> List[str]:
        return [entry.filename for entry in self.iter_entries(path)]

    def iter_entries(self, path: str) -> Iterator[DirEntry]:
        """Yield directory entries for a path, directory or wildcard pattern.

        Leading and trailing slashes are trimmed before the path is split into
        directory and filename. A filename containing ``*`` lists the parent
        directory filtered by the pattern; any other filename is lstat-ed and
        returned alone unless it is a directory, which is listed in full.

        Args:
            path: Remote directory, file, or ``dir/pattern``

        Yields:
            DirEntry for each matching entry
        """
        remote_path = path.strip("/")
        remote_dir = remote_path
        remote_file = None
        last_index = remote_path.rfind("/")
        if last_index > 0:
            remote_dir = remote_path[:last_index]
            remote_file = remote_path[last_index + 1:]
        is_pattern = remote_file is not None and "*" in remote_file

        if remote_file is not None and not is_pattern:
            attributes = self._sftp_client.lstat(path)
            if not _is_directory(attributes):
                yield DirEntry(remote_file, path, attributes)
                return
            remote_dir = remote_path

        logger.debug(f"Listing directory: {remote_dir}")
        for attributes in self._sftp_client.listdir_attr(remote_dir):
            if is_pattern and not _simple_match(remote_file, attributes.filename):
                continue
            yield DirEntry(
                attributes.filename,
                posixpath.join(remote_dir, attributes.filename),
                attributes,
            )

    def read(self, source: str, output_stream: BinaryIO) -> None:
        """Copy a remote file into ``output_stream``.

        The remote stream is closed when the copy ends. ``output_stream`` is
        left open and remains owned by the caller.
        """
        with self._sftp_client.open(source, "rb") as remote_file:
            shutil.copyfileobj(remote_file, output_stream)

    def read_raw(self, source: str) -> BinaryIO:
        return self._sftp_client.open(source, "rb")

    def finalize_raw(self) -> bool:
        return True

    def write(self, input_stream: BinaryIO, destination: str) -> None:
        self._copy_to_remote(input_stream, destination, "wb")

    def append(self, input_stream: BinaryIO, destination: str) -> None:
        self._copy_to_remote(input_stream, destination, "ab")

    def _copy_to_remote(self, input_stream: BinaryIO, destination: str, mode: str) -> None:
        """Copy a local stream into a remote file while holding the write lock."""
        with self._write_lock:
            logger.debug(f"Writing to remote file: {destination} (mode={mode})")
            with self._sftp_client.open(destination, mode) as remote_file:
                shutil.copyfileobj(input_stream, remote_file)

    def rename(self, path_from: str, path_to: str) -> None:
        # posix-rename@openssh.com replaces an existing target
        self._sftp_client.posix_rename(path_from, path_to)
        logger.debug(f"Renamed {path_from} -> {path_to}")

    def mkdir(self, directory: str) -> bool:
        self._sftp_client.mkdir(directory)
        logger.debug(f"Created directory: {directory}")
        return True

    def rmdir(self, directory: str) -> bool:
        self._sftp_client.rmdir(directory)
        logger.debug(f"Removed directory: {directory}")
        return True

    def exists(self, path: str) -> bool:
        """Check whether a remote path exists using lstat.

        Args:
            path: Remote path

        Returns:
            bool: False if the server reports no such file

        Raises:
            SFTPError: If lstat fails for any other reason
        """
        try:
            self._sftp_client.lstat(path)
            return True
        except IOError as e:
            if e.errno == errno.ENOENT:
                return False
            logger.warning(f"lstat failed for {path}: {e}", extra={"path": path})
            raise SFTPError(f"Cannot check 'lstat' for path {path}: {e}") from e
        except paramiko.SSHException as e:
            raise SFTPError(f"Cannot check 'lstat' for path {path}: {e}") from e

    def close(self) -> None:
        """Close the SFTP client and any SSH client owned by this session.

        Raises:
            SFTPError: If the client fails to close
        """
        error = None
        try:
            self._sftp_client.close()
        except (IOError, paramiko.SSHException) as e:
            error = e
        if self._ssh_client is not None:
            try:
                self._ssh_client.close()
            except (IOError, paramiko.SSHException) as e:
                error = error or e
        if error is not None:
            raise SFTPError(f"Failed to close an SFTP client: {error}") from error
        logger.info("SFTP session closed")

    def is_open(self) -> bool:
        channel = self._sftp_client.get_channel()
        return channel is not None and not channel.closed

    def connect(self) -> None:
        """Open the SFTP channel if it is not open.

        A new SFTP subsystem channel is opened on the existing SSH transport,
        waiting at most ``channel_open_timeout`` seconds, and the session is
        rebound to the resulting client.

        Raises:
            SFTPError: If the channel cannot be opened; the session is closed
        """
        if self.is_open():
            return
        try:
            transport = self._transport()
            if transport is None or not transport.is_active():
                raise paramiko.SSHException("SSH transport is not active")
            channel = transport.open_session(timeout=self.channel_open_timeout)
            channel.invoke_subsystem("sftp")
            self._sftp_client = paramiko.SFTPClient(channel)
            host_port = self.get_host_port()
            logger.info(f"SFTP channel opened to {host_port}", extra={"host_port": host_port})
        except (IOError, paramiko.SSHException) as e:
            logger.warning(f"Failed to open SFTP channel: {e}")
            self.close()
            raise SFTPError(f"Failed to connect an SFTP client: {e}") from e

    def get_client_instance(self) -> paramiko.SFTPClient:
        return self._sftp_client

    def get_host_port(self) -> str:
        transport = self._transport()
        if transport is None:
            raise SFTPError("SFTP client has no SSH transport")
        host, port = transport.getpeername()[:2]
        return f"{host}:{port}"

    def test(self) -> bool:
        return self.is_open() and self._do_test()

    def _do_test(self) -> bool:
        try:
            self._sftp_client.normalize(".")
            return True
        except Exception as e:
            logger.debug(f"SFTP connectivity test failed: {e}")
            return False

    def _transport(self) -> Optional[paramiko.Transport]:
        channel = self._sftp_client.get_channel()
        if channel is not None:
            return channel.get_transport()
        if self._ssh_client is not None:
            return self._ssh_client.get_transport()
        return None


def _simple_match(pattern: str, filename: str) -> bool:
    """Match a filename where only ``*`` is a wildcard."""
    literal = "".join(f"[{char}]" if char in "?[" else char for char in pattern)
    return fnmatch.fnmatchcase(filename, literal)


def _is_directory(attributes: paramiko.SFTPAttributes) -> bool:
    return attributes.st_mode is not None and stat.S_ISDIR(attributes.st_mode)

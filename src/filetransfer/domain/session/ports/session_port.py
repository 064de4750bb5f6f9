"""Session Port - Domain interface for remote file-transfer endpoints.

This port defines the contract a file-transfer framework uses to talk to a
connected remote endpoint, independent of the underlying protocol.
Adapters implement it on top of a concrete client library (SFTP, FTP, ...).

Architecture: Hexagonal - Port interface in domain layer
"""

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Generic, List, TypeVar

F = TypeVar("F")


class SessionError(Exception):
    """Base exception for session operations."""
    pass


class Session(ABC, Generic[F]):
    """Port interface for a connected remote file-transfer endpoint.

    ``F`` is the directory-entry type the adapter returns from ``list``.

    Key Design Principles:
    - A session wraps exactly one client object supplied by the adapter's library
    - Protocol I/O failures propagate as the library raises them
    - Failures the session cannot express as a result surface as SessionError

    Example Usage:
        with factory.get_session() as session:
            if not session.exists("inbound/orders.csv"):
                session.write(io.BytesIO(payload), "inbound/orders.csv")

            for name in session.list_names("inbound/*.csv"):
                ...
    """

    @abstractmethod
    def remove(self, path: str) -> bool:
        """Remove a remote file.

        Args:
            path: Remote file path

        Returns:
            bool: True when the file was removed
        """
        pass

    @abstractmethod
    def list(self, path: str) -> List[F]:
        """List directory entries for a path.

        The last path component may be a wildcard pattern (e.g. ``*.csv``),
        in which case only matching entries of the parent directory are
        returned. A path naming a regular file yields a single entry.

        Args:
            path: Remote directory, file, or pattern

        Returns:
            List of directory entries
        """
        pass

    @abstractmethod
    def list_names(self, path: str) -> List[str]:
        """List entry filenames for a path (same rules as ``list``)."""
        pass

    @abstractmethod
    def read(self, source: str, output_stream: BinaryIO) -> None:
        """Copy the contents of a remote file into ``output_stream``.

        The output stream is written to but not closed.
        """
        pass

    @abstractmethod
    def read_raw(self, source: str) -> BinaryIO:
        """Open a remote file for streaming reads.

        The caller closes the returned stream and then calls ``finalize_raw``.
        """
        pass

    @abstractmethod
    def finalize_raw(self) -> bool:
        """Complete a ``read_raw`` operation.

        Returns:
            bool: True when the raw read was finalized
        """
        pass

    @abstractmethod
    def write(self, input_stream: BinaryIO, destination: str) -> None:
        """Create or truncate ``destination`` with the bytes of ``input_stream``."""
        pass

    @abstractmethod
    def append(self, input_stream: BinaryIO, destination: str) -> None:
        """Append the bytes of ``input_stream`` to ``destination``, creating it if needed."""
        pass

    @abstractmethod
    def rename(self, path_from: str, path_to: str) -> None:
        """Rename a remote file, replacing ``path_to`` if it exists."""
        pass

    @abstractmethod
    def mkdir(self, directory: str) -> bool:
        pass

    @abstractmethod
    def rmdir(self, directory: str) -> bool:
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check whether a remote path exists.

        Returns:
            bool: False if the remote reports no such file

        Raises:
            SessionError: If the check itself fails
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the underlying client.

        Raises:
            SessionError: If the client cannot be closed cleanly
        """
        pass

    @abstractmethod
    def is_open(self) -> bool:
        pass

    @abstractmethod
    def test(self) -> bool:
        """Probe connectivity.

        Returns:
            bool: True if the session is open and a round trip to the
            remote succeeds
        """
        pass

    @abstractmethod
    def get_client_instance(self) -> Any:
        """Return the wrapped library client."""
        pass

    @abstractmethod
    def get_host_port(self) -> str:
        """Return the remote endpoint as ``host:port``."""
        pass

    def __enter__(self):
        """Context manager entry - returns the session."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - auto-close."""
        self.close()
        return False

"""SFTP adapter exceptions."""

from ...domain.session.ports import SessionError


class SFTPError(SessionError):
    """Raised when an SFTP session operation fails unexpectedly.

    The originating paramiko or I/O exception is available as ``__cause__``.
    """
    pass

"""Session domain - protocol-independent remote file access."""

from .models import DirEntry
from .ports import Session, SessionError

__all__ = ["DirEntry", "Session", "SessionError"]

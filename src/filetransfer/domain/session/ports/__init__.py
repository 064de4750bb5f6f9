"""Session port interfaces."""

from .session_port import Session, SessionError

__all__ = ["Session", "SessionError"]

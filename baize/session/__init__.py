"""
Session Module - Hosts frames for remote scorers.

A session is one hosted frame:
- Created when a scorer opens it
- Holds the Frame behind a lock
- Destroyed when ended or idle too long

Sessions are EPHEMERAL: nothing is written to disk.
"""

from .manager import SessionManager, Session

__all__ = [
    "SessionManager",
    "Session",
]

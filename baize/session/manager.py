"""
Session Manager - Hosts frames for remote scorers.

LIFECYCLE:
1. Scorer opens a session -> a fresh Frame is created (in-memory only)
2. Scorer sends pots, fouls, end-of-turn and coin tosses
3. Scorer resets the frame to play another, or ends the session
4. Ended or stale sessions are dropped; nothing is persisted

CONCURRENCY:
- A Frame assumes one caller at a time
- Each session owns one lock; every read or transition holds it
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import threading
import time
import uuid

from ..engine_core import Frame, PlayerId

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """
    One hosted frame.

    Use `with session.lock:` around anything that touches session.frame.
    """
    session_id: str
    frame: Frame
    created_at: float
    last_active_at: float = 0.0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def touch(self):
        self.last_active_at = time.time()


class SessionManager:
    """
    Manages frame sessions.

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}
        self._registry_lock = threading.Lock()

    def create_session(
        self,
        player_names: dict[PlayerId, str] | None = None,
    ) -> Session:
        """
        Create a new session with a fresh frame.

        Args:
            player_names: Optional display names for P1 and P2

        Returns:
            New Session
        """
        frame = Frame()
        for player, name in (player_names or {}).items():
            frame.set_player_name(player, name)

        now = time.time()
        session = Session(
            session_id=str(uuid.uuid4()),
            frame=frame,
            created_at=now,
            last_active_at=now,
        )
        with self._registry_lock:
            self._sessions[session.session_id] = session
        logger.info("Session %s created", session.session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        with self._registry_lock:
            return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Remove a session. Returns False if it did not exist."""
        with self._registry_lock:
            session = self._sessions.pop(session_id, None)
        if session:
            logger.info("Session %s ended", session_id)
        return session is not None

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        with self._registry_lock:
            return list(self._sessions)

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Drop sessions idle for longer than max_age_seconds.

        Returns the number removed.
        """
        current_time = time.time()
        with self._registry_lock:
            to_remove = [
                sid for sid, session in self._sessions.items()
                if current_time - session.last_active_at > max_age_seconds
            ]
            for sid in to_remove:
                del self._sessions[sid]
        if to_remove:
            logger.info("Removed %d stale session(s)", len(to_remove))
        return len(to_remove)

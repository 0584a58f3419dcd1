"""Server-side login sessions."""

import logging
import secrets
import threading
import time
from dataclasses import dataclass

from playgate.users import Identity, UserDirectory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    session_id: str
    user_id: str
    # kept so an expiry policy can be added later
    created_at: float


class SessionManager:
    """In-memory session store. Sessions lost on restart (user re-logs in).

    Writes are serialized with a lock; reads are plain dict lookups.
    """

    def __init__(self, directory: UserDirectory) -> None:
        self._directory = directory
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(self, identity: Identity) -> str:
        """Store a new session for ``identity`` and return its opaque id."""
        session_id = secrets.token_urlsafe(32)
        session = Session(
            session_id=session_id,
            user_id=identity.user_id,
            created_at=time.time(),
        )
        with self._lock:
            self._sessions[session_id] = session
        logger.debug("Session created for user %s", identity.user_id)
        return session_id

    def validate(self, session_id: str | None) -> Identity | None:
        """Return the Identity bound to the session, or None if it isn't valid."""
        if not session_id:
            return None
        session = self._sessions.get(session_id)
        if session is None:
            return None
        identity = self._directory.lookup(session.user_id)
        if identity is None:
            logger.warning(
                "Session references unknown user %s, treating as logged out",
                session.user_id,
            )
            return None
        return identity

    def invalidate(self, session_id: str) -> None:
        """Remove a session. Unknown ids are ignored."""
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is not None:
            logger.debug("Session invalidated for user %s", removed.user_id)

    def get(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def __len__(self) -> int:
        return len(self._sessions)

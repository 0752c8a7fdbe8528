"""In-memory store of typing sessions for the HTTP API, with idle expiry.

WHY: A remote client (an editor plugin, a web page) that wants live
keyboard behaviour needs a session that survives between requests: the
buffered word and the enabled flag must carry over from one key to the
next. An in-memory store is enough since sessions are process-memory-only
and meaningless after a restart.

HOW: Two components work together:
  SessionRecord — dataclass holding an InputSession and its timestamps
  SessionStore  — thread-safe dict-based store with create/get/list/delete
                  and idle-TTL cleanup

RULES:
- All store mutations are protected by threading.Lock
- The store lock is never held while an InputSession takes its own lock
- get_session() counts as use and bumps last_used_at
- Sessions idle for longer than the TTL are removed by cleanup_expired()
- Session IDs are UUID4 hex strings generated at creation time
- create_session() raises ValueError when the store is full
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional

from bengali_keyboard.config import MAX_SESSIONS, SESSION_TTL_SECONDS
from bengali_keyboard.core.session import InputSession

logger = logging.getLogger(__name__)


@dataclass
class SessionRecord:
    """A stored InputSession and its bookkeeping.

    RULES:
    - id: UUID4 hex string, immutable after creation
    - session: the live InputSession (guards its own state)
    - created_at / last_used_at: epoch timestamps
    """

    id: str
    session: InputSession
    created_at: float
    last_used_at: float


class SessionStore:
    """Thread-safe in-memory store for typing sessions.

    WHY: Concurrent requests may create, use, and delete sessions while the
    periodic cleanup task runs. A centralized store with locking prevents
    races on the dict itself.

    HOW: Records are kept in a plain dict keyed by ID. The store lock only
    guards the dict and timestamps; key handling happens afterwards on the
    session, which has its own lock.
    """

    def __init__(
        self,
        ttl_seconds: int = SESSION_TTL_SECONDS,
        max_sessions: int = MAX_SESSIONS,
    ) -> None:
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = threading.Lock()
        self._ttl_seconds = ttl_seconds
        self.max_sessions = max_sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create_session(self, enabled: bool = False) -> SessionRecord:
        """Create and store a new session.

        Raises:
            ValueError: The store already holds max_sessions sessions.
        """
        with self._lock:
            if len(self._sessions) >= self.max_sessions:
                raise ValueError(
                    "Maximum number of sessions ({}) reached".format(self.max_sessions)
                )

            now = time.time()
            record = SessionRecord(
                id=uuid.uuid4().hex,
                session=InputSession(enabled=enabled),
                created_at=now,
                last_used_at=now,
            )
            self._sessions[record.id] = record

        logger.info("Created session %s (enabled=%s)", record.id, enabled)
        return record

    def get_session(self, session_id: str) -> Optional[SessionRecord]:
        """Return the record for ``session_id`` and mark it used, or None."""
        with self._lock:
            record = self._sessions.get(session_id)
            if record is not None:
                record.last_used_at = time.time()
            return record

    def list_sessions(self) -> List[SessionRecord]:
        """Snapshot of all records, oldest first."""
        with self._lock:
            return sorted(self._sessions.values(), key=lambda r: r.created_at)

    def delete_session(self, session_id: str) -> bool:
        """Remove a session. Returns True if it existed."""
        with self._lock:
            record = self._sessions.pop(session_id, None)

        if record is None:
            return False

        logger.info("Deleted session %s", session_id)
        return True

    def cleanup_expired(self) -> int:
        """Remove sessions idle for longer than the TTL.

        RULES:
        - Idle time is measured from last_used_at
        - Returns the count of removed sessions
        """
        now = time.time()
        expired: List[SessionRecord] = []

        with self._lock:
            for session_id, record in list(self._sessions.items()):
                if now - record.last_used_at > self._ttl_seconds:
                    expired.append(self._sessions.pop(session_id))

        for record in expired:
            logger.info(
                "Expired session %s (idle %.0fs)", record.id, now - record.last_used_at
            )

        return len(expired)

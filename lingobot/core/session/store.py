"""In-memory session store keyed by chat id."""

import logging
import threading
from typing import Optional

from .models import ChatId, Session

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Thread-safe map of chat id to Session.

    Sessions are created lazily on first contact and never evicted.
    Lookups and inserts happen under one lock, so concurrent callers
    asking for the same new chat always get the same Session object.
    Each chat also gets its own lock that callers may hold while mutating
    the session.
    """

    def __init__(self):
        """Initialize an empty store."""
        self._sessions: dict[ChatId, Session] = {}
        self._chat_locks: dict[ChatId, threading.Lock] = {}
        self._lock = threading.Lock()

    def get_or_create(self, chat_id: ChatId) -> Session:
        """
        Get the chat's session, creating it on first contact.

        Args:
            chat_id: Transport chat identifier

        Returns:
            The one Session for this chat
        """
        with self._lock:
            session = self._sessions.get(chat_id)
            if session is None:
                session = Session(chat_id=chat_id)
                self._sessions[chat_id] = session
                self._chat_locks[chat_id] = threading.Lock()
                logger.debug(f"Session created: {chat_id}")
            return session

    def get(self, chat_id: ChatId) -> Optional[Session]:
        """Get session by chat id without creating one."""
        with self._lock:
            return self._sessions.get(chat_id)

    def lock_for(self, chat_id: ChatId) -> threading.Lock:
        """Get the per-chat lock, creating the session if needed."""
        self.get_or_create(chat_id)
        with self._lock:
            return self._chat_locks[chat_id]

    def chat_ids(self) -> list[ChatId]:
        """Snapshot of known chat ids."""
        with self._lock:
            return list(self._sessions)

    def __contains__(self, chat_id: object) -> bool:
        with self._lock:
            return chat_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

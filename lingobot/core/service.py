"""
Chat Service.

Process-root orchestrator shared by the Telegram bot and the HTTP API.
Owns the session store and the conversation engine.

Flow:
1. Get or create the chat's session
2. Take the chat's lock (when serialization is enabled)
3. Run the conversation engine
4. Stamp session metadata
5. Return the reply
"""

import logging
import time
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Optional

from lingobot.config import settings
from lingobot.core.quiz.content import QuestionBank, get_question_bank
from lingobot.core.quiz.engine import ConversationEngine, ReplyPlan
from lingobot.core.session.models import ChatId, Session
from lingobot.core.session.state import ConversationState, Language
from lingobot.core.session.store import SessionStore

logger = logging.getLogger(__name__)


@dataclass
class ChatResult:
    """Outcome of one processed message."""

    chat_id: ChatId
    reply: ReplyPlan
    state: ConversationState
    language: Language
    score: int
    processing_time_ms: Optional[float] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "chat_id": self.chat_id,
            "reply": self.reply.text,
            "keyboard": [list(row) for row in self.reply.keyboard]
            if self.reply.keyboard
            else None,
            "state": self.state.value,
            "language": self.language.value,
            "score": self.score,
            "processing_time_ms": self.processing_time_ms,
        }


class ChatService:
    """
    Pairs the session store with the conversation engine.

    Inject a store/engine for tests; ``get_chat_service()`` builds the
    process-wide instance from settings.
    """

    def __init__(
        self,
        store: Optional[SessionStore] = None,
        engine: Optional[ConversationEngine] = None,
        question_bank: Optional[QuestionBank] = None,
        serialize: Optional[bool] = None,
    ):
        """Initialize service.

        Args:
            store: Session store (new empty store if not provided)
            engine: Conversation engine (built from question_bank if not provided)
            question_bank: Content for a default engine (singleton if not provided)
            serialize: Hold the per-chat lock while handling a message
                (settings.serialize_chat_messages if not provided)
        """
        self.store = store if store is not None else SessionStore()
        if engine is None:
            engine = ConversationEngine(question_bank or get_question_bank())
        self.engine = engine
        self.serialize = (
            settings.serialize_chat_messages if serialize is None else serialize
        )

    async def process(self, chat_id: ChatId, text: str) -> ChatResult:
        """
        Handle one inbound text message.

        Args:
            chat_id: Transport chat identifier
            text: Message text

        Returns:
            ChatResult with the reply and the session's new state
        """
        start_time = time.perf_counter()

        session = self.store.get_or_create(chat_id)
        lock = self.store.lock_for(chat_id) if self.serialize else nullcontext()

        with lock:
            previous_state = session.state
            session, reply = self.engine.handle(session, text)
            session.touch()
            result = ChatResult(
                chat_id=chat_id,
                reply=reply,
                state=session.state,
                language=session.language,
                score=session.score,
            )

        result.processing_time_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            f"Chat {chat_id}: {previous_state.value} -> {result.state.value} "
            f"(score={result.score}, {result.processing_time_ms:.2f}ms)"
        )
        return result

    def get_session(self, chat_id: ChatId) -> Optional[Session]:
        """Get a chat's session without creating one."""
        return self.store.get(chat_id)

    async def reset_session(self, chat_id: ChatId) -> Optional[Session]:
        """
        Reset a known chat's session to its initial state.

        Returns:
            The reset Session, or None if the chat was never seen
        """
        session = self.store.get(chat_id)
        if session is None:
            return None

        lock = self.store.lock_for(chat_id) if self.serialize else nullcontext()
        with lock:
            session.reset()

        logger.info(f"Chat {chat_id} session reset")
        return session


# Singleton
_service: Optional[ChatService] = None


def get_chat_service() -> ChatService:
    """Get singleton ChatService."""
    global _service
    if _service is None:
        _service = ChatService()
    return _service

"""
Session data model.

One Session per chat, created on first contact and mutated in place by
the conversation engine for the rest of the process lifetime.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Union

from .state import (
    AwaitingAnswer,
    ConversationState,
    Idle,
    Language,
    Step,
)

ChatId = Union[int, str]


def _utcnow() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


@dataclass
class Session:
    """
    Per-chat quiz progress.

    The pending question and its expected answer live on the
    ``AwaitingAnswer`` step, so ``current_answer`` is empty whenever no
    question is pending.
    """

    chat_id: ChatId
    step: Step = field(default_factory=Idle)
    language: Language = Language.NONE
    user_name: str = ""
    score: int = 0

    # Metadata
    message_count: int = 0
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def state(self) -> ConversationState:
        """Tag of the current step."""
        return self.step.state

    @property
    def current_answer(self) -> str:
        """Expected answer for the pending question, or ''."""
        if isinstance(self.step, AwaitingAnswer):
            return self.step.answer
        return ""

    @property
    def current_question(self) -> str:
        """Text of the pending question, or ''."""
        if isinstance(self.step, AwaitingAnswer):
            return self.step.question
        return ""

    def reset(self) -> None:
        """Return to the initial state. Keeps chat_id and created_at."""
        self.step = Idle()
        self.language = Language.NONE
        self.user_name = ""
        self.score = 0

    def touch(self) -> None:
        """Record that a message was handled."""
        self.message_count += 1
        self.updated_at = _utcnow()

    def to_dict(self) -> dict:
        """Convert to a JSON-safe dictionary."""
        return {
            "chat_id": self.chat_id,
            "state": self.state.value,
            "language": self.language.value,
            "user_name": self.user_name,
            "score": self.score,
            "current_question": self.current_question or None,
            "message_count": self.message_count,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

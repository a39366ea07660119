"""
Session management for the quiz bot.

Sessions are kept in memory for the lifetime of the process.
"""

from .models import ChatId, Session
from .state import (
    AwaitingAnswer,
    AwaitingName,
    Category,
    ChooseCategory,
    ConversationState,
    Idle,
    Introduction,
    Language,
    Step,
)
from .store import SessionStore

__all__ = [
    # Models
    "ChatId",
    "Session",
    # States
    "ConversationState",
    "Language",
    "Category",
    "Step",
    "Idle",
    "AwaitingName",
    "Introduction",
    "ChooseCategory",
    "AwaitingAnswer",
    # Store
    "SessionStore",
]

"""Quiz conversation states.

Each state is its own frozen dataclass so that only ``AwaitingAnswer``
carries a pending question. ``Step`` is the union of all of them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ConversationState(str, Enum):
    """State tags reported to transports and the API."""

    NONE = "none"
    AWAITING_NAME = "awaiting_name"
    INTRODUCTION = "introduction"
    CHOOSE_CATEGORY = "choose_category"
    AWAITING_ANSWER = "awaiting_answer"


class Language(str, Enum):
    """Languages the quiz can teach."""

    NONE = "none"
    ENGLISH = "english"
    SPANISH = "spanish"


class Category(str, Enum):
    """Exercise categories offered in the menu."""

    GRAMMAR = "grammar"
    VOCABULARY = "vocabulary"
    IDIOMS = "idioms"
    PHRASAL_VERBS = "phrasal verbs"
    CONVERSATION_PRACTICE = "conversation practice"
    READING = "reading"
    WRITING = "writing"

    @property
    def label(self) -> str:
        """Button label shown in the category menu."""
        return CATEGORY_LABELS[self]


CATEGORY_LABELS: dict[Category, str] = {
    Category.GRAMMAR: "📚 Grammar",
    Category.VOCABULARY: "📖 Vocabulary",
    Category.IDIOMS: "💬 Idioms",
    Category.PHRASAL_VERBS: "🗣 Phrasal Verbs",
    Category.CONVERSATION_PRACTICE: "🗨 Conversation Practice",
    Category.READING: "👀 Reading",
    Category.WRITING: "✍ Writing",
}


@dataclass(frozen=True)
class Idle:
    """Fresh or reset chat; waiting for a language choice."""

    state = ConversationState.NONE


@dataclass(frozen=True)
class AwaitingName:
    """Language chosen, waiting for the user's name."""

    state = ConversationState.AWAITING_NAME


@dataclass(frozen=True)
class Introduction:
    """Name captured, waiting for the user to talk about themselves."""

    state = ConversationState.INTRODUCTION


@dataclass(frozen=True)
class ChooseCategory:
    """Category menu shown, waiting for a selection."""

    state = ConversationState.CHOOSE_CATEGORY


@dataclass(frozen=True)
class AwaitingAnswer:
    """A question was asked; ``answer`` is what counts as correct."""

    category: Category
    question: str
    answer: str

    state = ConversationState.AWAITING_ANSWER

    def __post_init__(self) -> None:
        if not self.answer:
            raise ValueError("AwaitingAnswer requires a non-empty answer")


Step = Union[Idle, AwaitingName, Introduction, ChooseCategory, AwaitingAnswer]

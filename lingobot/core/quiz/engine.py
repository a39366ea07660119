"""
Conversation Engine.

Drives the scripted quiz: language choice, name, introduction, category
menu, question, graded answer, and back to the menu. Pure logic over a
Session; transports deliver the returned ReplyPlan.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from lingobot.core.quiz.content import CONTENT_LANGUAGES, QuestionBank
from lingobot.core.quiz.keyboards import CATEGORY_KEYBOARD, LANGUAGE_KEYBOARD, Keyboard
from lingobot.core.quiz.prompts import GREETING, render
from lingobot.core.session.models import Session
from lingobot.core.session.state import (
    AwaitingAnswer,
    AwaitingName,
    Category,
    ChooseCategory,
    Introduction,
    Language,
)

logger = logging.getLogger(__name__)

START_COMMANDS = {"/start", "/reset"}
RESET_KEYWORDS = {"reset", "сброс", "reiniciar"}

# Leading emoji / punctuation on button labels ("📚 grammar" -> "grammar")
_DECORATION = re.compile(r"^[^\w/]+")

_CATEGORY_BY_NAME: dict[str, Category] = {
    category.value: category for category in Category
}


@dataclass(frozen=True)
class ReplyPlan:
    """What to send back: text and an optional reply keyboard."""

    text: str
    keyboard: Optional[Keyboard] = None


def normalize(raw_text: str) -> str:
    """Trim and case-fold user input."""
    return raw_text.strip().casefold()


def strip_decoration(text: str) -> str:
    """Drop leading emoji and punctuation from a normalized label."""
    return _DECORATION.sub("", text).strip()


def parse_category(text: str) -> Optional[Category]:
    """Map normalized input to a Category, accepting labels with or without emoji."""
    return _CATEGORY_BY_NAME.get(strip_decoration(text))


def is_reset(text: str) -> bool:
    """Check for /start, /reset or a reset keyword (normalized input)."""
    if text.startswith("/"):
        # "/start@SomeBot" in group chats
        return text.split("@", 1)[0] in START_COMMANDS
    return strip_decoration(text) in RESET_KEYWORDS


class ConversationEngine:
    """
    State machine for the language quiz.

    Evaluation order, first match wins:
    1. /start or reset keyword -> reset, language menu
    2. "english" or "1" anywhere in the text -> English, ask name
    3. "spanish" or "2" anywhere in the text -> Spanish, ask name
    4. Per-state handling (name, introduction, category, answer)
    5. Anything else -> "unknown command"

    Rules 2 and 3 apply in every state.
    """

    def __init__(self, question_bank: QuestionBank):
        """Initialize engine.

        Args:
            question_bank: Content used for category questions
        """
        self._bank = question_bank

    def handle(self, session: Session, raw_text: str) -> tuple[Session, ReplyPlan]:
        """Apply one inbound message to the session.

        Args:
            session: Chat session, mutated in place
            raw_text: Message text as received

        Returns:
            (session, reply to send)
        """
        text = normalize(raw_text)

        if is_reset(text):
            return session, self._reset(session)

        if "english" in text or "1" in text:
            return session, self._choose_language(session, Language.ENGLISH)

        if "spanish" in text or "2" in text:
            return session, self._choose_language(session, Language.SPANISH)

        step = session.step

        if isinstance(step, AwaitingName):
            return session, self._capture_name(session, text)

        if isinstance(step, Introduction) or (
            isinstance(step, ChooseCategory) and "introduce" in text
        ):
            return session, self._finish_introduction(session)

        if isinstance(step, ChooseCategory):
            return session, self._select_category(session, text)

        if isinstance(step, AwaitingAnswer):
            return session, self._grade_answer(session, step, text)

        return session, ReplyPlan(render(session.language, "unknown_command"))

    # === Transitions ===

    def _reset(self, session: Session) -> ReplyPlan:
        session.reset()
        logger.debug(f"Session {session.chat_id} reset")
        return ReplyPlan(GREETING, LANGUAGE_KEYBOARD)

    def _choose_language(self, session: Session, language: Language) -> ReplyPlan:
        session.language = language
        session.step = AwaitingName()
        return ReplyPlan(render(language, "ask_name"))

    def _capture_name(self, session: Session, text: str) -> ReplyPlan:
        session.user_name = text
        session.step = Introduction()
        return ReplyPlan(render(session.language, "welcome", name=session.user_name))

    def _finish_introduction(self, session: Session) -> ReplyPlan:
        session.step = ChooseCategory()
        return self._with_menu(session, render(session.language, "introduction_done"))

    def _select_category(self, session: Session, text: str) -> ReplyPlan:
        category = parse_category(text)
        if category is None:
            return self._with_menu(session, render(session.language, "unknown_category"))

        question = self._bank.get(self._content_language(session), category)
        session.step = AwaitingAnswer(
            category=category,
            question=question.question,
            answer=question.answer,
        )
        logger.debug(f"Session {session.chat_id} asked {category.value}")
        return ReplyPlan(question.question)

    def _grade_answer(
        self,
        session: Session,
        step: AwaitingAnswer,
        text: str,
    ) -> ReplyPlan:
        if text == step.answer.casefold():
            session.score += 1
            verdict = render(session.language, "correct", score=session.score)
        else:
            verdict = render(session.language, "incorrect", answer=step.answer)

        session.step = ChooseCategory()
        return self._with_menu(session, verdict)

    # === Helpers ===

    def _with_menu(self, session: Session, text: str) -> ReplyPlan:
        """Append the category menu prompt and keyboard to a reply."""
        menu = render(session.language, "menu")
        return ReplyPlan(f"{text}\n\n{menu}", CATEGORY_KEYBOARD)

    @staticmethod
    def _content_language(session: Session) -> Language:
        if session.language in CONTENT_LANGUAGES:
            return session.language
        return Language.ENGLISH

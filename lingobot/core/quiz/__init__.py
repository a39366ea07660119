"""
Quiz Module

Provides the conversation engine, the question bank and the canned
reply keyboards.

Usage:
    from lingobot.core.quiz import ConversationEngine, QuestionBank

    engine = ConversationEngine(QuestionBank.load())
    session, reply = engine.handle(session, "/start")
    print(reply.text)
    print(reply.keyboard)
"""

from lingobot.core.quiz.content import (
    Question,
    QuestionBank,
    QuestionBankError,
    get_question_bank,
)
from lingobot.core.quiz.engine import ConversationEngine, ReplyPlan
from lingobot.core.quiz.keyboards import (
    CATEGORY_KEYBOARD,
    LANGUAGE_KEYBOARD,
    Keyboard,
)

__all__ = [
    # Content
    "Question",
    "QuestionBank",
    "QuestionBankError",
    "get_question_bank",
    # Engine
    "ConversationEngine",
    "ReplyPlan",
    # Keyboards
    "Keyboard",
    "LANGUAGE_KEYBOARD",
    "CATEGORY_KEYBOARD",
]

"""Canned reply keyboards, as rows of button labels."""

from lingobot.core.session.state import Category

Keyboard = tuple[tuple[str, ...], ...]

RESET_LABEL = "🔄 Reset"

LANGUAGE_KEYBOARD: Keyboard = (
    ("1. English", "2. Spanish"),
    (RESET_LABEL,),
)

CATEGORY_KEYBOARD: Keyboard = (
    (Category.GRAMMAR.label, Category.VOCABULARY.label),
    (Category.IDIOMS.label, Category.PHRASAL_VERBS.label),
    (
        Category.CONVERSATION_PRACTICE.label,
        Category.READING.label,
        Category.WRITING.label,
    ),
    (RESET_LABEL,),
)

"""
Question Bank.

Loads the quiz content table (language x category -> question/answer)
from JSON at startup. The table is read-only afterwards.

File format:
    {
      "english": {
        "grammar": {"question": "What is the past tense of 'go'?", "answer": "went"},
        ...
      },
      "spanish": {...}
    }
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lingobot.config import settings
from lingobot.core.session.state import Category, Language

logger = logging.getLogger(__name__)

DEFAULT_QUESTION_BANK_PATH = (
    Path(__file__).resolve().parents[2] / "content" / "question_bank.json"
)

# Languages that carry content (Language.NONE never does)
CONTENT_LANGUAGES = (Language.ENGLISH, Language.SPANISH)


class QuestionBankError(ValueError):
    """Raised when the question bank file is missing, malformed or incomplete."""


class Question(BaseModel):
    """One quiz question and the answer that counts as correct."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)


class QuestionBank:
    """
    Immutable lookup of (language, category) -> Question.

    Every content language must define every category; construction
    fails otherwise, so lookups never miss at runtime.

    Usage:
        bank = QuestionBank.load()
        q = bank.get(Language.ENGLISH, Category.GRAMMAR)
        q.question  # "What is the past tense of 'go'?"
    """

    def __init__(self, entries: Mapping[tuple[Language, Category], Question]):
        missing = [
            f"{language.value}/{category.value}"
            for language in CONTENT_LANGUAGES
            for category in Category
            if (language, category) not in entries
        ]
        if missing:
            raise QuestionBankError(f"Question bank is missing: {', '.join(missing)}")

        self._entries = MappingProxyType(dict(entries))

    @classmethod
    def from_dict(cls, data: Mapping) -> "QuestionBank":
        """
        Build from the nested JSON structure.

        Args:
            data: {language: {category: {"question": ..., "answer": ...}}}

        Raises:
            QuestionBankError: Unknown language/category or invalid entry
        """
        if not isinstance(data, Mapping):
            raise QuestionBankError("Question bank must be a JSON object")

        entries: dict[tuple[Language, Category], Question] = {}
        for language_key, categories in data.items():
            try:
                language = Language(language_key)
            except ValueError:
                raise QuestionBankError(f"Unknown language: {language_key!r}")
            if language not in CONTENT_LANGUAGES:
                raise QuestionBankError(f"Language {language_key!r} cannot carry content")
            if not isinstance(categories, Mapping):
                raise QuestionBankError(f"Entries for {language_key!r} must be an object")

            for category_key, raw in categories.items():
                try:
                    category = Category(category_key)
                except ValueError:
                    raise QuestionBankError(
                        f"Unknown category {category_key!r} for {language_key!r}"
                    )
                try:
                    entries[(language, category)] = Question.model_validate(raw)
                except ValidationError as e:
                    raise QuestionBankError(
                        f"Invalid entry {language_key}/{category_key}: {e}"
                    ) from e

        return cls(entries)

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "QuestionBank":
        """
        Load from a JSON file.

        Args:
            path: JSON file path (bundled content if not provided)

        Raises:
            QuestionBankError: File unreadable or content invalid
        """
        path = Path(path) if path else DEFAULT_QUESTION_BANK_PATH
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise QuestionBankError(f"Cannot read question bank {path}: {e}") from e

        bank = cls.from_dict(data)
        logger.info(f"Question bank loaded from {path} ({len(bank)} questions)")
        return bank

    def get(self, language: Language, category: Category) -> Question:
        """Get the question for a language and category."""
        try:
            return self._entries[(language, category)]
        except KeyError:
            raise QuestionBankError(
                f"No question for {language.value}/{category.value}"
            ) from None

    def __len__(self) -> int:
        return len(self._entries)


# Singleton
_bank: Optional[QuestionBank] = None


def get_question_bank() -> QuestionBank:
    """Get singleton QuestionBank, loaded from settings on first use."""
    global _bank
    if _bank is None:
        _bank = QuestionBank.load(settings.question_bank_path or None)
    return _bank

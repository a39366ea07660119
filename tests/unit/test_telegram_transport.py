"""Tests for the Telegram transport."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram import Chat, Message, ReplyKeyboardMarkup, Update
from telegram.ext import Application, MessageHandler

from lingobot.core.quiz.content import QuestionBank
from lingobot.core.quiz.keyboards import CATEGORY_KEYBOARD, LANGUAGE_KEYBOARD
from lingobot.core.service import ChatService
from lingobot.core.session.store import SessionStore
from lingobot.transport.telegram import (
    ALLOWED_UPDATES,
    SERVICE_KEY,
    build_application,
    handle_error,
    handle_text_message,
    to_markup,
)

# Syntactically valid token; never used for network calls
FAKE_TOKEN = "123456:ABC-DEF1234ghIkl-zyx57W2v1u123ew11"


@pytest.fixture
def service():
    """Fresh service per test."""
    return ChatService(
        store=SessionStore(),
        question_bank=QuestionBank.load(),
        serialize=True,
    )


@pytest.fixture
def context(service):
    """Handler context carrying the service."""
    ctx = MagicMock()
    ctx.bot_data = {SERVICE_KEY: service}
    return ctx


def make_update(text, chat_id=555):
    """Build a fake update with a text message."""
    message = MagicMock()
    message.text = text
    message.chat_id = chat_id
    message.reply_text = AsyncMock()

    update = MagicMock()
    update.effective_message = message
    return update


class TestMarkup:
    """Test keyboard rendering."""

    def test_no_keyboard(self):
        """Test plain replies carry no markup."""
        assert to_markup(None) is None

    def test_language_keyboard(self):
        """Test the language keyboard renders with resize."""
        markup = to_markup(LANGUAGE_KEYBOARD)

        assert isinstance(markup, ReplyKeyboardMarkup)
        assert markup.resize_keyboard is True
        labels = [[button.text for button in row] for row in markup.keyboard]
        assert labels == [["1. English", "2. Spanish"], ["🔄 Reset"]]

    def test_category_keyboard_rows(self):
        """Test the category keyboard keeps its row layout."""
        markup = to_markup(CATEGORY_KEYBOARD)

        assert [len(row) for row in markup.keyboard] == [2, 2, 3, 1]


class TestHandleTextMessage:
    """Test the message handler."""

    @pytest.mark.asyncio
    async def test_start_replies_with_language_keyboard(self, context, service):
        """Test /start is routed through the quiz and gets a keyboard."""
        update = make_update("/start")

        await handle_text_message(update, context)

        update.effective_message.reply_text.assert_awaited_once()
        args, kwargs = update.effective_message.reply_text.call_args
        assert "English and Spanish" in args[0]
        assert isinstance(kwargs["reply_markup"], ReplyKeyboardMarkup)
        assert service.get_session(555) is not None

    @pytest.mark.asyncio
    async def test_plain_reply_has_no_markup(self, context):
        """Test replies without keyboard send reply_markup=None."""
        update = make_update("english")

        await handle_text_message(update, context)

        _, kwargs = update.effective_message.reply_text.call_args
        assert kwargs["reply_markup"] is None

    @pytest.mark.asyncio
    async def test_message_without_text_is_ignored(self, context, service):
        """Test non-text messages are dropped."""
        update = make_update(None)

        await handle_text_message(update, context)

        update.effective_message.reply_text.assert_not_awaited()
        assert len(service.store) == 0

    @pytest.mark.asyncio
    async def test_update_without_message_is_ignored(self, context, service):
        """Test updates with no message are dropped."""
        update = MagicMock()
        update.effective_message = None

        await handle_text_message(update, context)

        assert len(service.store) == 0

    @pytest.mark.asyncio
    async def test_full_scenario(self, context, service):
        """Test the English scenario through the handler."""
        for text in ["/start", "english", "Alice", "I like hiking", "📚 Grammar", "went"]:
            await handle_text_message(make_update(text), context)

        session = service.get_session(555)
        assert session.score == 1
        assert session.state.value == "choose_category"

    @pytest.mark.asyncio
    async def test_error_handler_logs(self, caplog):
        """Test the error handler logs the exception."""
        context = MagicMock()
        context.error = RuntimeError("boom")

        with caplog.at_level("ERROR", logger="lingobot.transport.telegram"):
            await handle_error(None, context)

        assert "Telegram update failed" in caplog.text


class TestBuildApplication:
    """Test application wiring."""

    def test_registers_handlers(self, service):
        """Test the text handler and service are installed."""
        application = build_application(FAKE_TOKEN, service)

        assert isinstance(application, Application)
        assert application.bot_data[SERVICE_KEY] is service
        handlers = application.handlers[0]
        assert len(handlers) == 1
        assert isinstance(handlers[0], MessageHandler)
        assert application.error_handlers


def make_message(text, chat_id=555):
    """Build a real Telegram message object."""
    return Message(
        message_id=1,
        date=datetime.now(timezone.utc),
        chat=Chat(id=chat_id, type=Chat.PRIVATE),
        text=text,
    )


class TestUpdateFilter:
    """Test which updates reach the quiz."""

    @pytest.fixture
    def handler(self, service):
        """The registered text handler."""
        return build_application(FAKE_TOKEN, service).handlers[0][0]

    def test_new_message_is_handled(self, handler):
        """Test a new text message matches."""
        update = Update(update_id=1, message=make_message("went"))

        assert handler.check_update(update)

    def test_edited_message_is_ignored(self, handler):
        """Test an edited message does not re-enter the quiz."""
        update = Update(update_id=2, edited_message=make_message("went"))

        assert not handler.check_update(update)

    def test_channel_post_is_ignored(self, handler):
        """Test channel posts do not reach the quiz."""
        update = Update(update_id=3, channel_post=make_message("1", chat_id=-100))

        assert not handler.check_update(update)

    def test_polling_requests_only_messages(self):
        """Test polling asks Telegram for new messages only."""
        assert ALLOWED_UPDATES == [Update.MESSAGE]

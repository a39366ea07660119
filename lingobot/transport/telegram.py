"""
Telegram transport.

Feeds text messages from python-telegram-bot into the ChatService and
sends the reply back, rendering reply keyboards as ReplyKeyboardMarkup.
"""

import logging
from typing import Optional

from telegram import ReplyKeyboardMarkup, Update
from telegram.ext import Application, ContextTypes, MessageHandler, filters

from lingobot.core.quiz.keyboards import Keyboard
from lingobot.core.service import ChatService, get_chat_service

logger = logging.getLogger(__name__)

SERVICE_KEY = "chat_service"

# Only new messages drive the quiz; edits and channel posts are ignored
ALLOWED_UPDATES = [Update.MESSAGE]
TEXT_MESSAGES = filters.UpdateType.MESSAGE & filters.TEXT


def to_markup(keyboard: Optional[Keyboard]) -> Optional[ReplyKeyboardMarkup]:
    """Render a canned keyboard for Telegram."""
    if keyboard is None:
        return None
    return ReplyKeyboardMarkup([list(row) for row in keyboard], resize_keyboard=True)


async def handle_text_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Route a text message (commands included) through the quiz."""
    message = update.effective_message
    if message is None or not message.text:
        return

    service: ChatService = context.bot_data[SERVICE_KEY]
    result = await service.process(message.chat_id, message.text)

    await message.reply_text(result.reply.text, reply_markup=to_markup(result.reply.keyboard))


async def handle_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log errors raised by handlers or the polling loop."""
    logger.error(f"Telegram update failed: {update!r}", exc_info=context.error)


def build_application(token: str, service: Optional[ChatService] = None) -> Application:
    """
    Build the Telegram application.

    Args:
        token: Bot API token
        service: Chat service (singleton if not provided)

    Returns:
        Application ready for run_polling()
    """
    application = Application.builder().token(token).build()
    application.bot_data[SERVICE_KEY] = service or get_chat_service()

    application.add_handler(MessageHandler(TEXT_MESSAGES, handle_text_message))
    application.add_error_handler(handle_error)

    return application

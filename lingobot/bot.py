"""
Telegram bot entry point.

Usage:
    TELEGRAM_BOT_TOKEN=... python -m lingobot.bot
"""

import logging
import sys

from lingobot.config import settings
from lingobot.core.quiz.content import QuestionBankError
from lingobot.core.service import get_chat_service
from lingobot.infra.logging_setup import setup_logging
from lingobot.transport.telegram import ALLOWED_UPDATES, build_application

logger = logging.getLogger(__name__)


def main() -> None:
    """Start long polling until interrupted."""
    setup_logging()

    if not settings.telegram_bot_token:
        logger.error("TELEGRAM_BOT_TOKEN is not set; cannot start the bot")
        sys.exit(1)

    try:
        service = get_chat_service()
    except QuestionBankError as e:
        logger.error(f"Cannot start: {e}")
        sys.exit(1)

    application = build_application(settings.telegram_bot_token, service)

    logger.info(f"Starting {settings.app_name} bot in {settings.app_env} mode")
    application.run_polling(
        poll_interval=settings.telegram_poll_interval,
        allowed_updates=ALLOWED_UPDATES,
    )
    logger.info("Bot stopped")


if __name__ == "__main__":
    main()

"""
Configuration Management

Uses Pydantic BaseSettings to load configuration from environment variables.
All settings can be overridden via .env file or environment variables.

Environment Variables:
    TELEGRAM_BOT_TOKEN: Bot API token issued by @BotFather
    QUESTION_BANK_PATH: Alternate JSON file with quiz content (optional)
    SERIALIZE_CHAT_MESSAGES: Process one message per chat at a time (default: True)
    APP_ENV: Environment name (development/staging/production)
    DEBUG: Enable debug mode (default: False)
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Telegram
    telegram_bot_token: str = ""
    """Bot API token.

    Required to start the polling bot (`python -m lingobot.bot`).
    The HTTP API runs without it.
    """

    telegram_poll_interval: float = 0.0
    """Seconds to wait between getUpdates calls when long polling."""

    # Quiz content
    question_bank_path: str = ""
    """Path to a JSON question bank.

    Empty means the bundled `lingobot/content/question_bank.json`.
    The file must cover every language/category pair or startup fails.
    """

    # Conversation handling
    serialize_chat_messages: bool = True
    """Handle at most one message per chat at a time.

    When False, two messages for the same chat may run concurrently and
    the last writer wins.
    """

    # Application Environment
    app_env: Literal["development", "staging", "production"] = "development"
    """Current application environment.

    Options:
    - development: Local development, verbose logging, error details exposed
    - staging: Pre-production testing environment
    - production: Live environment, internal errors hidden from API clients
    """

    debug: bool = False
    """Enable debug mode (DEBUG logging, per-message transition logs)."""

    # Application Configuration
    app_name: str = "lingobot"
    """Application name."""

    host: str = "0.0.0.0"
    """Host to bind the HTTP server."""

    port: int = 8000
    """Port to bind the HTTP server."""

    # CORS Configuration
    cors_origins: str = "http://localhost:3000"
    """Comma-separated list of allowed CORS origins."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env == "development"

    @property
    def cors_origins_list(self) -> list[str]:
        """Split cors_origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached settings instance

    Example:
        >>> from lingobot.config import get_settings
        >>> settings = get_settings()
        >>> settings.app_name
        'lingobot'
    """
    return Settings()


# Module-level settings instance for easy imports
settings = get_settings()

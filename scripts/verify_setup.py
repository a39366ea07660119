#!/usr/bin/env python3
"""
Setup Verification Script

Validates configuration, quiz content and the Telegram token before
running the bot.

Usage:
    python scripts/verify_setup.py
"""

import asyncio
import os
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Load environment variables
from dotenv import load_dotenv
load_dotenv()


def print_header(title: str) -> None:
    """Print section header."""
    print(f"\n{'='*60}")
    print(f" {title}")
    print(f"{'='*60}")


def print_result(name: str, success: bool, message: str = "") -> None:
    """Print check result."""
    status = "[PASS]" if success else "[FAIL]"
    color = "\033[92m" if success else "\033[91m"
    reset = "\033[0m"
    msg = f" - {message}" if message else ""
    print(f"  {color}{status}{reset} {name}{msg}")


def check_env_file() -> bool:
    """Check if .env file exists."""
    env_path = project_root / ".env"
    exists = env_path.exists()
    if not exists:
        print_result(".env file", False, "Not found (environment variables only)")
    else:
        print_result(".env file", True, "Found")
    return exists


def check_token() -> bool:
    """Check the Telegram token is set."""
    token = os.getenv("TELEGRAM_BOT_TOKEN", "")
    if not token:
        print_result("TELEGRAM_BOT_TOKEN", False, "Not set - required for the bot")
        return False

    masked = f"{token[:6]}...{token[-4:]}" if len(token) > 12 else "***"
    print_result("TELEGRAM_BOT_TOKEN", True, f"Set ({masked})")
    return True


def check_optional_vars() -> None:
    """Show optional environment variables."""
    optional = [
        ("APP_ENV", "development"),
        ("DEBUG", "false"),
        ("PORT", "8000"),
        ("QUESTION_BANK_PATH", "(bundled)"),
        ("SERIALIZE_CHAT_MESSAGES", "true"),
    ]

    for var, default in optional:
        value = os.getenv(var, default)
        print_result(var, True, f"{value}")


def check_question_bank() -> bool:
    """Verify quiz content loads and is complete."""
    try:
        from lingobot.core.quiz.content import QuestionBank, QuestionBankError

        path = os.getenv("QUESTION_BANK_PATH") or None
        bank = QuestionBank.load(path)
        print_result("Question bank", True, f"{len(bank)} questions")
        return True

    except QuestionBankError as e:
        print_result("Question bank", False, str(e)[:80])
        return False


async def check_telegram() -> bool:
    """Verify the token with getMe."""
    token = os.getenv("TELEGRAM_BOT_TOKEN", "")

    try:
        from telegram import Bot
        from telegram.error import InvalidToken, TelegramError

        async with Bot(token) as bot:
            me = await bot.get_me()

        print_result("Telegram API", True, f"Authenticated as @{me.username}")
        return True

    except InvalidToken:
        print_result("Telegram API", False, "Invalid token")
        return False
    except TelegramError as e:
        print_result("Telegram API", False, str(e)[:50])
        return False


def check_dependencies() -> bool:
    """Check if required Python packages are installed."""
    required_packages = [
        "fastapi",
        "uvicorn",
        "pydantic",
        "pydantic_settings",
        "telegram",
    ]

    missing = []
    for package in required_packages:
        try:
            __import__(package)
        except ImportError:
            missing.append(package)

    if missing:
        print_result("Python packages", False, f"Missing: {', '.join(missing)}")
        return False
    else:
        print_result("Python packages", True, "All required packages installed")
        return True


async def main():
    """Run all verification checks."""
    print("\n" + "="*60)
    print(" Lingobot - Setup Verification")
    print("="*60)

    critical_failed = False

    print_header("Environment File")
    check_env_file()

    print_header("Python Dependencies")
    if not check_dependencies():
        critical_failed = True

    print_header("Required Environment Variables")
    token_ok = check_token()
    if not token_ok:
        critical_failed = True

    print_header("Optional Environment Variables")
    check_optional_vars()

    print_header("Quiz Content")
    if not check_question_bank():
        critical_failed = True

    print_header("Service Connections")
    if token_ok:
        if not await check_telegram():
            critical_failed = True
    else:
        print_result("Telegram API", False, "Skipped - TELEGRAM_BOT_TOKEN not set")

    print_header("Summary")

    if critical_failed:
        print("\n  \033[91mCRITICAL: Some checks failed.\033[0m")
        print("  Please fix the issues above before running the bot.")
        if not token_ok:
            print("\n  Quick fix:")
            print("  1. Create a bot with @BotFather on Telegram")
            print("     Add to .env: TELEGRAM_BOT_TOKEN=123456:ABC...")
        print()
        return 1

    print("\n  \033[92mAll checks passed!\033[0m")
    print("  Start the bot with:")
    print("    python -m lingobot.bot")
    print("  Or the HTTP API with:")
    print("    uvicorn lingobot.main:app --reload")
    print()
    return 0


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)

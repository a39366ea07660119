"""Lingobot: a scripted English/Spanish quiz bot for Telegram."""

__version__ = "1.0.0"

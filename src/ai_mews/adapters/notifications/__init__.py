"""Notification adapters."""

from ai_mews.adapters.notifications.telegram_notifier import TelegramNotifier, format_digest

__all__ = ["TelegramNotifier", "format_digest"]

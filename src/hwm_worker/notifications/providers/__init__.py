"""Notification delivery channels."""

from .base import NotificationProvider
from .email import EmailProvider
from .telegram import TelegramProvider

__all__ = ["NotificationProvider", "EmailProvider", "TelegramProvider"]

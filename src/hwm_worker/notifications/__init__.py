"""System notifications.

Turns failures anywhere in the worker into classified alerts and delivers
them over the configured channels.

Main components:
- AlertPipeline: Entry point used by callers to report errors
- ErrorClassifier: Maps error kinds to CRITICAL / ERROR / WARNING
- Notification: Immutable alert value object
- MessageFormatter: Renders notifications for a channel
- Notifier: Resolves providers and contains delivery failures
- TelegramProvider, EmailProvider: Delivery channels
"""

from .alerts import AlertContext, AlertOutcome, AlertPipeline
from .classifier import DEFAULT_RULES, ErrorClassifier
from .exceptions import (
    InvalidLevel,
    InvalidProviderSelector,
    NotificationError,
    UnknownProvider,
    UnsupportedFormat,
)
from .formatter import ChannelFormat, MessageFormatter, escape_markdown
from .notification import Notification, Severity
from .notifier import PROVIDER_MAP, Notifier, ProviderName, ProviderSelector
from .providers import EmailProvider, NotificationProvider, TelegramProvider

__all__ = [
    # Facade
    "AlertContext",
    "AlertOutcome",
    "AlertPipeline",
    # Classification
    "DEFAULT_RULES",
    "ErrorClassifier",
    # Value objects and rendering
    "Notification",
    "Severity",
    "ChannelFormat",
    "MessageFormatter",
    "escape_markdown",
    # Dispatch
    "PROVIDER_MAP",
    "Notifier",
    "ProviderName",
    "ProviderSelector",
    "NotificationProvider",
    "EmailProvider",
    "TelegramProvider",
    # Exceptions
    "NotificationError",
    "InvalidLevel",
    "InvalidProviderSelector",
    "UnknownProvider",
    "UnsupportedFormat",
]

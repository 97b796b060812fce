"""
Exceptions raised by the notification system.

These signal programming or configuration mistakes (bad level, unknown
channel). Delivery failures are never raised to callers.
"""


class NotificationError(Exception):
    """Base class for notification errors."""
    pass


class InvalidLevel(NotificationError, ValueError):
    """Raised when a notification is built with an unknown severity."""
    pass


class UnsupportedFormat(NotificationError, ValueError):
    """Raised when a message is rendered for an unknown channel format."""
    pass


class UnknownProvider(NotificationError, ValueError):
    """Raised when a provider name is not registered."""
    pass


class InvalidProviderSelector(NotificationError, ValueError):
    """Raised when a provider selector is neither a name nor a provider."""
    pass

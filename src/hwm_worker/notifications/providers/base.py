"""Interface for notification delivery channels."""

from abc import ABC, abstractmethod

from ..notification import Notification


class NotificationProvider(ABC):
    """A transport that can deliver notifications.

    ``enabled`` must be answerable from configuration alone, without any
    network traffic, so the notifier can skip unconfigured channels cheaply.
    ``deliver`` performs the transport call and may raise on failure.
    """

    name: str = "provider"

    @abstractmethod
    def enabled(self) -> bool:
        """Return True when the provider is configured for delivery."""
        pass

    @abstractmethod
    async def deliver(self, notification: Notification) -> None:
        """Send ``notification`` over this channel."""
        pass

"""Email delivery placeholder.

Reserved for a future daily digest. It reports itself as disabled, so the
notifier never reaches ``deliver``.
"""

from ..notification import Notification
from .base import NotificationProvider


class EmailProvider(NotificationProvider):
    name = "Email"

    @classmethod
    def from_settings(cls, settings, **kwargs) -> "EmailProvider":
        return cls()

    def enabled(self) -> bool:
        return False

    async def deliver(self, notification: Notification) -> None:
        raise NotImplementedError("Email provider not implemented. Reserved for daily digest.")

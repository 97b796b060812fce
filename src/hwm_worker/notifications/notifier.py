"""Best-effort notification dispatch.

The notifier picks a provider, skips it when it is not configured and
delivers through it otherwise. Delivery problems are logged and swallowed:
an alert that cannot be sent must never break the code that reported it.
"""

from enum import Enum
from typing import Dict, Optional, Type, Union

from hwm_worker.config.logger import logger as root_logger
from hwm_worker.config.settings import Settings
from .exceptions import InvalidProviderSelector, UnknownProvider
from .notification import Notification
from .providers import EmailProvider, NotificationProvider, TelegramProvider


class ProviderName(Enum):
    TELEGRAM = "telegram"
    EMAIL = "email"


PROVIDER_MAP: Dict[ProviderName, Type[NotificationProvider]] = {
    ProviderName.TELEGRAM: TelegramProvider,
    ProviderName.EMAIL: EmailProvider,
}

ProviderSelector = Union[ProviderName, str, NotificationProvider]


class Notifier:
    """Deliver notifications through named or explicit providers."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        providers: Optional[Dict[ProviderName, NotificationProvider]] = None,
        logger=None,
    ):
        """Initialize the notifier.

        Args:
            settings: Source of provider configuration. Defaults to empty settings,
                which leaves every provider disabled.
            providers: Pre-built providers keyed by name. Names missing here are
                built from ``settings`` on first use.
            logger: Optional structlog logger.
        """
        self.settings = settings or Settings()
        self._providers: Dict[ProviderName, NotificationProvider] = dict(providers or {})
        self.logger = logger or root_logger.bind(component="notifier")

    def resolve_provider(self, selector: ProviderSelector) -> NotificationProvider:
        """Turn a selector into a provider instance.

        Raises:
            UnknownProvider: ``selector`` is a name that is not registered.
            InvalidProviderSelector: ``selector`` is neither a name nor a provider.
        """
        if isinstance(selector, NotificationProvider):
            return selector

        if isinstance(selector, ProviderName):
            name = selector
        elif isinstance(selector, str):
            try:
                name = ProviderName(selector.lower())
            except ValueError:
                available = ", ".join(n.value for n in PROVIDER_MAP)
                raise UnknownProvider(
                    f"Unknown provider: {selector}. Available: {available}"
                ) from None
        else:
            raise InvalidProviderSelector(
                f"Invalid provider: {selector!r}. Must be a provider name or a NotificationProvider."
            )

        if name not in self._providers:
            self._providers[name] = PROVIDER_MAP[name].from_settings(self.settings)
        return self._providers[name]

    async def dispatch(self, notification: Notification, provider: ProviderSelector) -> bool:
        """Send ``notification`` through ``provider``.

        Returns:
            True when the provider accepted the notification, False when it was
            skipped or delivery failed.

        Raises:
            UnknownProvider: See ``resolve_provider``.
            InvalidProviderSelector: See ``resolve_provider``.
        """
        resolved = self.resolve_provider(provider)

        if not resolved.enabled():
            self.logger.warning(
                "provider_disabled",
                provider=resolved.name,
                detail=f"{resolved.name} is not enabled, skipping notification",
            )
            return False

        try:
            await resolved.deliver(notification)
        except Exception as e:
            self.logger.error(
                "notification_delivery_failed",
                provider=resolved.name,
                level=notification.level.value,
                title=notification.title,
                error=f"{resolved.name} failed: {e}",
            )
            return False

        return True

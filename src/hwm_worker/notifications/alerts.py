"""Single entry point for reporting failures.

``AlertPipeline.report`` classifies an error, turns it into a Notification,
dispatches it and tells the caller whether to keep going. The pipeline itself
never exits the process or re-raises; that decision belongs to the caller.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from hwm_worker.config.logger import logger as root_logger
from hwm_worker.config.settings import DEFAULT_SOURCE, Settings
from .classifier import ErrorClassifier
from .notification import Notification, Severity
from .notifier import Notifier, ProviderName, ProviderSelector


class AlertOutcome(Enum):
    """What the caller should do after an error has been reported."""
    CONTINUE = "continue"
    TERMINATE = "terminate"

    @property
    def is_fatal(self) -> bool:
        return self is AlertOutcome.TERMINATE


@dataclass(frozen=True)
class AlertContext:
    """Optional details attached to every alert from one caller."""
    worker_name: Optional[str] = None
    actor_id: Optional[str] = None


class AlertPipeline:
    """Classify, build and dispatch alerts."""

    def __init__(
        self,
        notifier: Notifier,
        classifier: Optional[ErrorClassifier] = None,
        default_provider: ProviderSelector = ProviderName.TELEGRAM,
        source: str = DEFAULT_SOURCE,
        logger=None,
    ):
        self.notifier = notifier
        self.classifier = classifier or ErrorClassifier()
        self.default_provider = default_provider
        self.source = source
        self.logger = logger or root_logger.bind(component="alert_pipeline")

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "AlertPipeline":
        return cls(Notifier(settings), source=settings.notification_source, **kwargs)

    async def report(
        self,
        error: BaseException,
        provider: Optional[ProviderSelector] = None,
        context: Optional[AlertContext] = None,
    ) -> AlertOutcome:
        """Report ``error`` and return what the caller should do next.

        The notification is dispatched before this coroutine returns, so a
        caller that terminates on ``AlertOutcome.TERMINATE`` does not lose it.
        """
        context = context or AlertContext()
        severity = self.classifier.classify(error)
        title = error.__class__.__name__

        self.logger.log(
            _LOG_LEVELS[severity],
            "error_reported",
            severity=severity.value,
            error_type=title,
            error=str(error),
            worker_name=context.worker_name,
            actor_id=context.actor_id,
        )

        notification = Notification(
            level=severity,
            title=title,
            message=str(error) or title,
            source=self.source,
            worker_name=context.worker_name,
            actor_id=context.actor_id,
            error=error,
        )
        await self.notifier.dispatch(notification, provider or self.default_provider)

        if severity is Severity.CRITICAL:
            return AlertOutcome.TERMINATE
        return AlertOutcome.CONTINUE

    async def notify(
        self,
        level: Severity,
        title: str,
        message: str,
        provider: Optional[ProviderSelector] = None,
        context: Optional[AlertContext] = None,
        error: Optional[BaseException] = None,
        source: Optional[str] = None,
        occurred_at: Optional[datetime] = None,
    ) -> bool:
        """Send an ad-hoc notification at an explicit level."""
        context = context or AlertContext()
        notification = Notification(
            level=level,
            title=title,
            message=message,
            source=source or self.source,
            worker_name=context.worker_name,
            actor_id=context.actor_id,
            error=error,
            occurred_at=occurred_at,
        )
        return await self.notifier.dispatch(notification, provider or self.default_provider)

    async def critical(self, title: str, message: str, **kwargs) -> bool:
        return await self.notify(Severity.CRITICAL, title, message, **kwargs)

    async def error(self, title: str, message: str, **kwargs) -> bool:
        return await self.notify(Severity.ERROR, title, message, **kwargs)

    async def warning(self, title: str, message: str, **kwargs) -> bool:
        return await self.notify(Severity.WARNING, title, message, **kwargs)


_LOG_LEVELS = {
    Severity.CRITICAL: logging.CRITICAL,
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
}

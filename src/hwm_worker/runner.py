"""Run one worker cycle under alert supervision.

A cycle is any coroutine the surrounding application supplies (log in,
apply for a job, ...). Errors it raises are reported through the alert
pipeline. A CRITICAL error ends the process with status 1 once the alert has
been dispatched; anything else lets the next cycle run, unless the guard is
told to propagate errors, which is how development mode surfaces them.
"""

from typing import Any, Awaitable, Callable, Optional

from hwm_worker.config.logger import logger as root_logger
from hwm_worker.config.settings import Settings
from hwm_worker.notifications import AlertContext, AlertOutcome, AlertPipeline, ProviderSelector

EXIT_FAILURE = 1


class WorkerGuard:
    """Report failures of a worker cycle and decide whether to stop."""

    def __init__(
        self,
        pipeline: AlertPipeline,
        context: Optional[AlertContext] = None,
        provider: Optional[ProviderSelector] = None,
        propagate_unclassified: bool = False,
        logger=None,
    ):
        self.pipeline = pipeline
        self.context = context or AlertContext()
        self.provider = provider
        self.propagate_unclassified = propagate_unclassified
        self.logger = logger or root_logger.bind(component="worker_guard")

    @classmethod
    def from_settings(cls, pipeline: AlertPipeline, settings: Settings, **kwargs) -> "WorkerGuard":
        return cls(pipeline, propagate_unclassified=settings.propagate_unclassified, **kwargs)

    async def run(self, cycle: Callable[[], Awaitable[Any]]) -> Any:
        """Await ``cycle()`` and handle whatever it raises.

        Returns:
            The cycle's result, or None when a non-fatal error was reported.

        Raises:
            SystemExit: The error was classified CRITICAL.
            Exception: The original error, when ``propagate_unclassified`` is set.
        """
        try:
            return await cycle()
        except Exception as e:
            outcome = await self.pipeline.report(e, provider=self.provider, context=self.context)

            if outcome is AlertOutcome.TERMINATE:
                self.logger.critical(
                    "worker_terminating",
                    error_type=e.__class__.__name__,
                    worker_name=self.context.worker_name,
                )
                raise SystemExit(EXIT_FAILURE) from e

            if self.propagate_unclassified:
                raise

            self.logger.info(
                "worker_cycle_failed",
                error_type=e.__class__.__name__,
                worker_name=self.context.worker_name,
            )
            return None

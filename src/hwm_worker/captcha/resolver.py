"""Captcha resolution workflow.

Solving is done by people on the service side, so the resolver submits the
image, waits, and polls. A job that is still not ready gets exactly one more
chance after a longer wait. Every other failure is terminal and reaches the
caller unchanged.
"""

import asyncio

from hwm_worker.config.logger import logger as root_logger
from hwm_worker.config.settings import Settings
from .exceptions import NotReadyYet
from .interfaces import CaptchaJob, ICaptchaService, JobStatus

FIRST_POLL_DELAY = 20
RETRY_POLL_DELAY = 30


class CaptchaResolver:
    """Submit a captcha and poll for its answer with a single bounded retry."""

    def __init__(
        self,
        client: ICaptchaService,
        first_delay: float = FIRST_POLL_DELAY,
        retry_delay: float = RETRY_POLL_DELAY,
        logger=None,
    ):
        """Initialize the resolver.

        Args:
            client: Service client performing the raw submit/poll calls.
            first_delay: Seconds between submission and the first poll.
            retry_delay: Seconds before the retry poll.
            logger: Optional structlog logger.
        """
        self.client = client
        self.first_delay = first_delay
        self.retry_delay = retry_delay
        self.logger = logger or root_logger.bind(component="captcha_resolver")

    @classmethod
    def from_settings(cls, client: ICaptchaService, settings: Settings, **kwargs) -> "CaptchaResolver":
        return cls(
            client,
            first_delay=settings.captcha_first_delay,
            retry_delay=settings.captcha_retry_delay,
            **kwargs,
        )

    async def resolve(self, payload: str) -> str:
        """Solve one captcha.

        Args:
            payload: Base64 encoded captcha image.

        Returns:
            The solved text.

        Raises:
            NotReadyYet: Both polls came back before the job was solved.
            InsufficientBalance: The service account is out of funds.
            ServiceRejected: The service refused the job.
        """
        job = CaptchaJob(payload=payload)

        try:
            job.external_id = await self.client.submit(payload)
        except Exception:
            job.status = JobStatus.FAILED
            raise
        job.status = JobStatus.SUBMITTED

        await asyncio.sleep(self.first_delay)

        try:
            return await self._poll(job)
        except NotReadyYet as e:
            self.logger.info(
                "captcha_not_ready_retrying",
                error=e.__class__.__name__,
                external_id=job.external_id,
                delay=self.retry_delay,
            )

        await asyncio.sleep(self.retry_delay)
        return await self._poll(job)

    async def _poll(self, job: CaptchaJob) -> str:
        try:
            job.solved_text = await self.client.poll(job.external_id)
        except NotReadyYet:
            job.status = JobStatus.NOT_READY
            raise
        except Exception:
            job.status = JobStatus.FAILED
            raise

        job.status = JobStatus.READY
        return job.solved_text

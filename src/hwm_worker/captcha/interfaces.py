"""Interfaces for the captcha system.

This module defines the contract every captcha service client must follow,
plus the job record the resolver keeps while a captcha is being solved.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class JobStatus(Enum):
    """Lifecycle of a single captcha solving attempt."""
    SUBMITTED = "submitted"  # Accepted by the service, id assigned
    READY = "ready"          # Solved text received
    NOT_READY = "not_ready"  # Polled before the service finished
    FAILED = "failed"        # Terminal failure


@dataclass
class CaptchaJob:
    """A single captcha solving attempt.

    Created by the resolver for one ``resolve`` call and dropped once the
    call returns or raises. Never persisted.

    Attributes:
        payload: Base64 encoded captcha image.
        external_id: Job id issued by the service, empty until submitted.
        status: Current lifecycle state.
        solved_text: The answer, empty until the job is ready.
    """
    payload: str
    external_id: str = ""
    status: JobStatus = JobStatus.SUBMITTED
    solved_text: str = ""


class ICaptchaService(ABC):
    """Interface for captcha solving service clients.

    Implementations perform exactly one network call per method and map the
    wire response to a value or a typed exception. Retrying is left to the
    caller.
    """

    @abstractmethod
    async def submit(self, payload: str) -> str:
        """Send an encoded captcha image for solving.

        Args:
            payload: Base64 encoded image.

        Returns:
            The job id issued by the service.

        Raises:
            InsufficientBalance: The account has no funds left.
            ServiceRejected: The service refused the request.
        """
        pass

    @abstractmethod
    async def poll(self, external_id: str) -> str:
        """Fetch the answer for a previously submitted job.

        Args:
            external_id: Job id returned by ``submit``.

        Returns:
            The solved captcha text.

        Raises:
            NotReadyYet: The job has not been solved yet.
        """
        pass

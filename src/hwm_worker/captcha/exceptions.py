"""
Exceptions raised by the captcha solving system.
"""

from typing import Any, Dict, Optional


class CaptchaError(Exception):
    """Base class for captcha related errors."""
    pass


class InsufficientBalance(CaptchaError):
    """Raised when the solving service account has no funds left.

    The message is the service's own ``error_text``. Retrying cannot help,
    so callers treat this as fatal.
    """
    pass


class ServiceRejected(CaptchaError):
    """Raised when the solving service refuses a request.

    Attributes:
        response: The decoded response body, kept for diagnostics.
    """

    def __init__(self, response: Optional[Dict[str, Any]] = None, message: Optional[str] = None):
        self.response = response or {}
        super().__init__(message or repr(self.response))


class NotReadyYet(CaptchaError):
    """Raised by a poll when the job has not been solved yet."""

    def __init__(self, response: Optional[Dict[str, Any]] = None):
        self.response = response or {}
        super().__init__(self.response.get("request", "CAPCHA_NOT_READY"))


class CaptchaEmpty(CaptchaError):
    """Raised when there is no captcha image to solve."""
    pass

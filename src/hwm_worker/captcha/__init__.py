"""Captcha handling module.

This module solves image captchas through a human-powered solving service.

Main components:
- RuCaptchaClient: One-call-per-method adapter for the in.php/res.php API
- CaptchaResolver: Submit, wait, poll, and retry once while the job is not ready
- CaptchaPipeline: Download and encode a captcha image before resolving it
- ICaptchaService: Base interface for service clients
"""

# Typed failures surfaced to callers
from .exceptions import CaptchaEmpty, CaptchaError, InsufficientBalance, NotReadyYet, ServiceRejected

# Base interface and job record
from .interfaces import CaptchaJob, ICaptchaService, JobStatus

# Service client and workflows
from .client import RuCaptchaClient
from .pipeline import CaptchaPipeline, encode_image
from .resolver import CaptchaResolver

# Public API exports
__all__ = [
    # Exceptions
    "CaptchaError",
    "CaptchaEmpty",
    "InsufficientBalance",
    "NotReadyYet",
    "ServiceRejected",
    # Interface and job record
    "CaptchaJob",
    "ICaptchaService",
    "JobStatus",
    # Client and workflows
    "RuCaptchaClient",
    "CaptchaResolver",
    "CaptchaPipeline",
    "encode_image",
]

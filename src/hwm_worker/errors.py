"""
Failures raised by the worker's game automation steps.

The browser automation itself lives outside this package. These classes give
it a shared vocabulary so the alert pipeline can classify what went wrong.
"""


class WorkerError(Exception):
    """Base class for worker automation errors."""
    pass


class InvalidCredentials(WorkerError):
    """Raised when the game rejects the login."""
    pass


class WorkApplicationFailed(WorkerError):
    """Raised when a job application could not be submitted."""
    pass


class AutomationTargetBroken(WorkerError):
    """Raised when a page element exists but no longer means what we expect."""
    pass


class TargetNotFound(WorkerError):
    """Raised when the item or action to click is missing from the page."""
    pass


class NoAvailableWork(WorkerError):
    """Raised when there is no job to apply for right now."""
    pass
